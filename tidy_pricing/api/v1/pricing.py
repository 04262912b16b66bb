"""GET /v1/pricing/current - Resolve the active pricing configuration"""

from fastapi import APIRouter, Depends

from tidy_pricing.api.v1.schemas import PricingResponse
from tidy_pricing.api.dependencies import get_resolved_pricing
from tidy_pricing.domain.models import ResolvedPricing
from tidy_pricing.domain.pricing_config import pricing_to_payload

router = APIRouter()


@router.get("/pricing/current", response_model=PricingResponse)
def get_current_pricing(resolved: ResolvedPricing = Depends(get_resolved_pricing)):
    """
    Return the pricing snapshot callers should use.

    Never fails: when the pricing service is down the static defaults are
    returned with source "config" and the fetch error attached.
    """
    return PricingResponse(
        source=resolved.source,
        pricing=pricing_to_payload(resolved.pricing),
        error=resolved.error,
    )
