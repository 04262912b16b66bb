"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from tidy_pricing.config import settings
from tidy_pricing.domain.models import ResolvedPricing
from tidy_pricing.domain.resolver import PricingConfigResolver
from tidy_pricing.infrastructure.clients.pricing_service import PricingServiceClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_pricing_client() -> PricingServiceClient:
    """Provide pricing service client instance"""
    return PricingServiceClient()


def get_resolver(client: PricingServiceClient = Depends(get_pricing_client)) -> PricingConfigResolver:
    """Provide a resolver bound to the pricing service client"""
    return PricingConfigResolver(client)


async def get_resolved_pricing(resolver: PricingConfigResolver = Depends(get_resolver)) -> ResolvedPricing:
    """Resolve a fresh pricing snapshot for the current request"""
    return await resolver.resolve()


def get_legacy_fee_fallback() -> bool:
    return settings.legacy_falsy_fee_fallback
