"""POST /v1/settlements/* - Provider payout endpoints"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from tidy_pricing.api.v1.schemas import (
    ShareRequest,
    ShareResponse,
    TeamEarningsRequest,
    TeamEarningsResponse,
)
from tidy_pricing.api.dependencies import get_legacy_fee_fallback, get_resolved_pricing
from tidy_pricing.domain.models import ResolvedPricing, RoomAssignment, SettlementInput
from tidy_pricing.domain.settlement import (
    compute_platform_fee,
    compute_provider_share,
    select_fee_fraction,
    split_team_earnings,
)
from tidy_pricing.utils.numbers import format_currency

router = APIRouter()


@router.post("/settlements/share", response_model=ShareResponse)
def provider_share(
    request_body: ShareRequest,
    resolved: ResolvedPricing = Depends(get_resolved_pricing),
    legacy_fallback: bool = Depends(get_legacy_fee_fallback),
):
    """Per-provider payout and platform fee for a job price"""
    settlement = SettlementInput(
        gross_price=request_body.gross_price,
        num_providers=request_body.num_providers,
        provider_role=request_body.provider_role,
    )
    share = compute_provider_share(resolved.pricing, settlement, legacy_falsy_fallback=legacy_fallback)

    return ShareResponse(
        provider_share=share,
        provider_share_formatted=format_currency(share),
        platform_fee=compute_platform_fee(resolved.pricing, settlement, legacy_falsy_fallback=legacy_fallback),
        fee_percent=select_fee_fraction(resolved.pricing, settlement.provider_role, legacy_fallback),
        pricing_source=resolved.source,
    )


@router.post("/settlements/team", response_model=TeamEarningsResponse)
def team_earnings(
    request_body: TeamEarningsRequest,
    resolved: ResolvedPricing = Depends(get_resolved_pricing),
    legacy_fallback: bool = Depends(get_legacy_fee_fallback),
):
    """Earnings breakdown for each cleaner on a multi-cleaner job (cents)"""
    assignments = None
    if request_body.room_assignments:
        assignments = [
            RoomAssignment(cleaner_id=a.cleaner_id, estimated_minutes=a.estimated_minutes)
            for a in request_body.room_assignments
        ]

    breakdown = split_team_earnings(
        resolved.pricing,
        request_body.total_price_cents,
        request_body.cleaner_count,
        room_assignments=assignments,
        legacy_falsy_fallback=legacy_fallback,
    )
    return TeamEarningsResponse(**asdict(breakdown))
