"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class PricingServiceError(DomainException):
    """Pricing service returned an error or is unavailable"""

    pass


class InvalidPricingConfigError(DomainException):
    """Pricing payload is malformed or breaks a fee invariant"""

    pass
