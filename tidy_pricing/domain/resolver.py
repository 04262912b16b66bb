"""Pricing configuration resolver - remote config with static fallback"""

import time
from typing import Any, Dict, Optional, Protocol

from tidy_pricing.domain.defaults import DEFAULT_PRICING
from tidy_pricing.domain.models import PricingConfig, ResolvedPricing
from tidy_pricing.domain.pricing_config import pricing_from_payload
from tidy_pricing.infrastructure.observability.logging import log_pricing_resolution
from tidy_pricing.infrastructure.observability.metrics import record_resolution

SOURCE_DATABASE = "database"
SOURCE_CONFIG = "config"


class PricingFetcher(Protocol):
    async def get_current_pricing(self) -> Optional[Dict[str, Any]]: ...


class PricingConfigResolver:
    """
    Resolve the active pricing snapshot.

    Each call fetches once; there is no caching and no retry. A failed, empty
    or invalid fetch falls back to ``fallback`` with source "config" and the
    error recorded on the result. resolve() never raises.
    """

    def __init__(self, fetcher: PricingFetcher, fallback: PricingConfig = DEFAULT_PRICING):
        self.fetcher = fetcher
        self.fallback = fallback

    async def resolve(self) -> ResolvedPricing:
        start_time = time.time()
        error: Optional[str] = None

        try:
            payload = await self.fetcher.get_current_pricing()
            if payload:
                result = ResolvedPricing(
                    pricing=pricing_from_payload(payload, defaults=self.fallback),
                    source=SOURCE_DATABASE,
                )
            else:
                result = ResolvedPricing(pricing=self.fallback, source=SOURCE_CONFIG)
        except Exception as e:
            error = str(e)
            result = ResolvedPricing(pricing=self.fallback, source=SOURCE_CONFIG, error=error)

        duration_ms = (time.time() - start_time) * 1000
        record_resolution(result.source, failed=result.source == SOURCE_CONFIG)
        log_pricing_resolution(result.source, error, duration_ms)

        return result
