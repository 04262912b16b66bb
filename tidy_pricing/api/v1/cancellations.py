"""POST /v1/cancellations/* - Cancellation outcome endpoints"""

from fastapi import APIRouter, Depends, Request

from tidy_pricing.api.v1.schemas import (
    CancellationRequest,
    CancellationResponse,
    CleanerCancellationRequest,
    CleanerCancellationResponse,
)
from tidy_pricing.api.dependencies import get_legacy_fee_fallback, get_request_id, get_resolved_pricing
from tidy_pricing.domain.cancellation import evaluate, evaluate_cleaner_cancellation
from tidy_pricing.domain.models import CancellationContext, CleanerCancellationContext, ResolvedPricing
from tidy_pricing.infrastructure.observability.logging import log_cancellation_evaluation
from tidy_pricing.infrastructure.observability.metrics import record_cancellation

router = APIRouter()


@router.post("/cancellations/evaluate", response_model=CancellationResponse)
def evaluate_homeowner_cancellation(
    request_body: CancellationRequest,
    request: Request,
    resolved: ResolvedPricing = Depends(get_resolved_pricing),
    legacy_fallback: bool = Depends(get_legacy_fee_fallback),
):
    """
    Preview refund, cleaner payout and fees for a homeowner cancellation.

    Nothing is committed here; the booking flow cancels and moves money.
    """
    ctx = CancellationContext(
        price=request_body.price,
        original_price=request_body.original_price,
        days_until_appointment=request_body.days_until_appointment,
        has_cleaner_assigned=request_body.has_cleaner_assigned,
        discount_applied=request_body.discount_applied,
        incentive_cleaner_percent=request_body.incentive_cleaner_percent,
    )
    outcome = evaluate(resolved.pricing, ctx, legacy_falsy_fallback=legacy_fallback)

    record_cancellation(outcome.is_within_penalty_window)
    log_cancellation_evaluation(
        get_request_id(request),
        outcome.is_within_penalty_window,
        outcome.estimated_refund,
        outcome.cleaner_payout,
        outcome.will_charge_cancellation_fee,
    )

    return CancellationResponse(
        is_within_penalty_window=outcome.is_within_penalty_window,
        estimated_refund=outcome.estimated_refund,
        cleaner_payout=outcome.cleaner_payout,
        refund_percent=outcome.refund_percent,
        platform_keeps=outcome.platform_keeps,
        warning_message=outcome.warning_message,
        will_charge_cancellation_fee=outcome.will_charge_cancellation_fee,
        cancellation_fee=outcome.cancellation_fee,
    )


@router.post("/cancellations/cleaner", response_model=CleanerCancellationResponse)
def evaluate_cleaner(
    request_body: CleanerCancellationRequest,
    resolved: ResolvedPricing = Depends(get_resolved_pricing),
):
    """Preview penalties for a cleaner dropping an assigned job"""
    outcome = evaluate_cleaner_cancellation(
        resolved.pricing,
        CleanerCancellationContext(
            days_until_appointment=request_body.days_until_appointment,
            recent_penalties=request_body.recent_penalties,
        ),
    )
    return CleanerCancellationResponse(
        is_within_penalty_window=outcome.is_within_penalty_window,
        will_result_in_freeze=outcome.will_result_in_freeze,
        remaining_before_freeze=outcome.remaining_before_freeze,
        warning_message=outcome.warning_message,
    )
