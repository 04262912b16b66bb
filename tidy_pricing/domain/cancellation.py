"""Cancellation policy engine - refunds, payouts and penalties for cancelled jobs"""

import math
from typing import List, Optional

from tidy_pricing.domain.models import (
    CancellationContext,
    CancellationOutcome,
    CleanerCancellationContext,
    CleanerCancellationOutcome,
    PricingConfig,
    ProviderRole,
)
from tidy_pricing.domain.settlement import select_fee_fraction
from tidy_pricing.utils.numbers import coerce_float, format_currency

# A cleaner's account is frozen on reaching this many recent penalties
FREEZE_PENALTY_THRESHOLD = 3


def _homeowner_warning(
    within_penalty_window: bool,
    has_cleaner_assigned: bool,
    days_until: int,
    refund_percent: float,
    refund: str,
    cleaner_payout: str,
    will_charge_fee: bool,
    cancellation_fee: float,
    discount_applied: bool,
) -> str:
    parts: List[str] = []

    if within_penalty_window:
        if discount_applied:
            parts.append(
                f"You are cancelling within {days_until} day(s) of your appointment, inside the penalty window, "
                "and a discount was applied to this booking."
            )
        else:
            parts.append(
                f"You are cancelling within {days_until} day(s) of your appointment, inside the penalty window."
            )
        parts.append(f"You will receive a {refund_percent:g}% refund of ${refund}.")
        parts.append(f"Your cleaner will receive ${cleaner_payout}.")
    else:
        if has_cleaner_assigned:
            parts.append("You are outside the penalty window and can cancel without penalty.")
        else:
            parts.append("No cleaner is assigned yet, so you can cancel without penalty.")
        parts.append(f"You will receive a full refund of ${refund}.")
        parts.append(f"Your cleaner will receive ${cleaner_payout}.")

    if will_charge_fee:
        parts.append(f"A ${format_currency(cancellation_fee)} cancellation fee will be charged to your card on file.")

    return " ".join(parts)


def evaluate(
    config: PricingConfig,
    ctx: CancellationContext,
    legacy_falsy_fallback: bool = False,
) -> CancellationOutcome:
    """
    Work out what a homeowner cancellation refunds and pays out.

    Decision table:
    - No cleaner assigned, or more than homeowner_penalty_days away:
      full refund, cleaner gets nothing.
    - Inside the penalty window, no discount:
      refund = price * refund_percentage
      cleaner = price * (1 - refund_percentage) * (1 - platform fee)
    - Inside the penalty window, discount applied:
      refund = price_paid * incentive_refund_percent
      cleaner = original_price * incentive_cleaner_percent
    The platform keeps what is left: price - refund - cleaner. It is reported
    for every in-window cancellation, not only discounted ones, and is None
    outside the window. In the discount case it can go negative when the
    incentive is subsidised; the raw value is kept on the outcome and the
    display string is clamped at zero.

    A cancellation fee is charged separately whenever a cleaner is assigned and
    the job is within cancellation.window_days, even outside the penalty window.

    Fractional days until the appointment round up, so 3.5 days counts as 4.
    """
    policy = config.cancellation
    price = coerce_float(ctx.price)
    days_until = math.ceil(coerce_float(ctx.days_until_appointment))
    assigned = bool(ctx.has_cleaner_assigned)

    within_penalty_window = assigned and days_until <= policy.homeowner_penalty_days
    will_charge_fee = assigned and days_until <= policy.window_days

    raw_platform_keeps: Optional[float] = None
    if not within_penalty_window:
        refund_fraction = 1.0
        raw_refund = price
        raw_cleaner_payout = 0.0
    elif ctx.discount_applied:
        original_price = coerce_float(ctx.original_price, price)
        cleaner_fraction = (
            ctx.incentive_cleaner_percent
            if ctx.incentive_cleaner_percent is not None
            else policy.incentive_cleaner_percent
        )
        refund_fraction = policy.incentive_refund_percent
        raw_refund = price * refund_fraction
        raw_cleaner_payout = original_price * cleaner_fraction
        raw_platform_keeps = price - raw_refund - raw_cleaner_payout
    else:
        fee_fraction = select_fee_fraction(config, ProviderRole.MARKETPLACE_CLEANER, legacy_falsy_fallback)
        refund_fraction = policy.refund_percentage
        raw_refund = price * refund_fraction
        raw_cleaner_payout = price * (1 - refund_fraction) * (1 - fee_fraction)
        raw_platform_keeps = price - raw_refund - raw_cleaner_payout

    refund_percent = refund_fraction * 100
    estimated_refund = format_currency(raw_refund)
    cleaner_payout = format_currency(raw_cleaner_payout)

    return CancellationOutcome(
        is_within_penalty_window=within_penalty_window,
        estimated_refund=estimated_refund,
        cleaner_payout=cleaner_payout,
        refund_percent=refund_percent,
        platform_keeps=format_currency(raw_platform_keeps) if raw_platform_keeps is not None else None,
        warning_message=_homeowner_warning(
            within_penalty_window=within_penalty_window,
            has_cleaner_assigned=assigned,
            days_until=days_until,
            refund_percent=refund_percent,
            refund=estimated_refund,
            cleaner_payout=cleaner_payout,
            will_charge_fee=will_charge_fee,
            cancellation_fee=policy.fee,
            discount_applied=bool(ctx.discount_applied),
        ),
        will_charge_cancellation_fee=will_charge_fee,
        cancellation_fee=policy.fee,
        raw_refund=raw_refund,
        raw_cleaner_payout=raw_cleaner_payout,
        raw_platform_keeps=raw_platform_keeps,
    )


def evaluate_cleaner_cancellation(
    config: PricingConfig,
    ctx: CleanerCancellationContext,
) -> CleanerCancellationOutcome:
    """
    Penalty consequences when the cleaner drops an assigned job.

    Inside cleaner_penalty_days the cancellation earns a 1-star review; the
    account freezes once recent penalties, including this one, reach
    FREEZE_PENALTY_THRESHOLD.

    remaining_before_freeze always counts as if this cancellation were a
    penalty: FREEZE_PENALTY_THRESHOLD - 1 - recent_penalties, floored at 0.
    """
    days_until = math.ceil(coerce_float(ctx.days_until_appointment))
    recent = max(0, int(ctx.recent_penalties))
    within_penalty_window = days_until <= config.cancellation.cleaner_penalty_days

    after_this = recent + 1
    remaining = max(0, FREEZE_PENALTY_THRESHOLD - after_this)

    if not within_penalty_window:
        return CleanerCancellationOutcome(
            is_within_penalty_window=False,
            will_result_in_freeze=False,
            remaining_before_freeze=remaining,
            warning_message=(
                f"This appointment is more than {config.cancellation.cleaner_penalty_days} days away. "
                "You can cancel without penalty."
            ),
        )

    will_freeze = after_this >= FREEZE_PENALTY_THRESHOLD

    message = (
        f"Cancelling within {config.cancellation.cleaner_penalty_days} days of the appointment "
        "will add an automatic 1-star rating to your profile."
    )
    if will_freeze:
        message += " This cancellation WILL FREEZE YOUR ACCOUNT."
    else:
        noun = "penalty" if remaining == 1 else "penalties"
        message += f" {remaining} more {noun} before your account is frozen."

    return CleanerCancellationOutcome(
        is_within_penalty_window=True,
        will_result_in_freeze=will_freeze,
        remaining_before_freeze=remaining,
        warning_message=message,
    )
