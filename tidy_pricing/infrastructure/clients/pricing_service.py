"""Pricing service HTTP client for fetching the active pricing configuration"""

import httpx
from typing import Any, Dict, Optional
from tidy_pricing.domain.exceptions import PricingServiceError
from tidy_pricing.config import settings
from tidy_pricing.infrastructure.observability.metrics import pricing_service_latency_histogram


class PricingServiceClient:
    """Client for the external pricing configuration endpoint"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.pricing_service_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.path = settings.pricing_current_path
        self.transport = transport

    async def get_current_pricing(self) -> Optional[Dict[str, Any]]:
        """
        Fetch the active pricing payload.

        Accepts either ``{"source": ..., "pricing": {...}}`` or a bare pricing
        object. Returns None when the service answers with an empty body or an
        empty pricing object.

        Raises:
            PricingServiceError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with pricing_service_latency_histogram.time():
                    response = await client.get(f"{self.base_url}{self.path}")
                response.raise_for_status()

                if not response.content:
                    return None
                data = response.json()

            except httpx.TimeoutException as e:
                raise PricingServiceError(f"Pricing service timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise PricingServiceError(f"Pricing service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise PricingServiceError(f"Pricing service unreachable: {e}") from e
            except ValueError as e:
                raise PricingServiceError(f"Invalid pricing data from service: {e}") from e

        if data is None:
            return None
        if not isinstance(data, dict):
            raise PricingServiceError("Invalid pricing data from service: expected an object")

        pricing = data["pricing"] if "pricing" in data else data
        if pricing is not None and not isinstance(pricing, dict):
            raise PricingServiceError("Invalid pricing data from service: pricing must be an object")
        return pricing or None
