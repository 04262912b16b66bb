"""Settlement - splitting a job's price between platform fee and providers"""

from collections import OrderedDict
from typing import List, Optional, Sequence

from tidy_pricing.domain.defaults import DEFAULT_FEE_FRACTION
from tidy_pricing.domain.models import (
    CleanerEarning,
    HomeAttributes,
    PartialPayment,
    PricingConfig,
    ProviderRole,
    RoomAssignment,
    SettlementInput,
    TeamEarnings,
)
from tidy_pricing.utils.numbers import coerce_float, coerce_int, round_half_up


def _fallback(fraction: Optional[float], legacy_falsy_fallback: bool) -> float:
    """
    Apply the 10% default to a missing fee fraction.

    An explicit 0 is a real 0% fee. With ``legacy_falsy_fallback`` an explicit
    0 is treated as missing too, reproducing the numbers older clients showed.
    """
    if fraction is None:
        return DEFAULT_FEE_FRACTION
    if legacy_falsy_fallback and not fraction:
        return DEFAULT_FEE_FRACTION
    return fraction


def select_fee_fraction(
    config: PricingConfig,
    role: ProviderRole,
    legacy_falsy_fallback: bool = False,
) -> float:
    """
    Pick the platform fee tier for who is doing the job.

    Raises:
        ValueError: ``role`` is not a ProviderRole value
    """
    role = ProviderRole(role)
    platform = config.platform
    if role is ProviderRole.BUSINESS_EMPLOYEE:
        fraction = platform.business_owner_fee_percent
    elif role is ProviderRole.MULTI_CLEANER_TEAM_MEMBER:
        fraction = platform.multi_cleaner_platform_fee_percent
    else:
        fraction = platform.fee_percent

    return _fallback(fraction, legacy_falsy_fallback)


def _per_provider_gross(settlement: SettlementInput) -> float:
    num_providers = max(1, coerce_int(settlement.num_providers, 1))
    return coerce_float(settlement.gross_price) / num_providers


def compute_provider_share(
    config: PricingConfig,
    settlement: SettlementInput,
    legacy_falsy_fallback: bool = False,
) -> float:
    """
    Amount paid to each provider on the job.

    share = gross_price / num_providers * (1 - fee_fraction)

    Team jobs split equally; effort weighting lives in split_team_earnings.
    The fee is read from ``config`` on every call and never cached.
    """
    fee = select_fee_fraction(config, settlement.provider_role, legacy_falsy_fallback)
    return _per_provider_gross(settlement) * (1 - fee)


def compute_platform_fee(
    config: PricingConfig,
    settlement: SettlementInput,
    legacy_falsy_fallback: bool = False,
) -> float:
    """Platform's cut per provider; share + fee reconstructs the per-provider gross"""
    fee = select_fee_fraction(config, settlement.provider_role, legacy_falsy_fallback)
    return _per_provider_gross(settlement) * fee


def _multi_cleaner_fee(config: PricingConfig, legacy_falsy_fallback: bool) -> float:
    return select_fee_fraction(config, ProviderRole.MULTI_CLEANER_TEAM_MEMBER, legacy_falsy_fallback)


def split_team_earnings(
    config: PricingConfig,
    total_price_cents: int,
    cleaner_count: int,
    room_assignments: Optional[Sequence[RoomAssignment]] = None,
    legacy_falsy_fallback: bool = False,
) -> TeamEarnings:
    """
    Divide a multi-cleaner job's payout between team members (in cents).

    The multi-cleaner platform fee comes off the top. Without room assignments
    the net is split equally and the first cleaner absorbs leftover pennies.
    With assignments, each cleaner's share follows their estimated minutes and
    the last cleaner absorbs the rounding remainder so shares sum to the net.
    """
    fee_percent = _multi_cleaner_fee(config, legacy_falsy_fallback)
    cleaner_count = max(1, cleaner_count)

    platform_fee = round_half_up(total_price_cents * fee_percent)
    net_for_cleaners = total_price_cents - platform_fee

    if not room_assignments:
        per_cleaner_base = net_for_cleaners // cleaner_count
        remainder = net_for_cleaners - per_cleaner_base * cleaner_count
        equal_shares = [
            CleanerEarning(
                cleaner_index=i,
                gross_amount=round_half_up(total_price_cents / cleaner_count),
                platform_fee=round_half_up(platform_fee / cleaner_count),
                net_amount=per_cleaner_base + (remainder if i == 0 else 0),
                percent_of_work=round_half_up(100 / cleaner_count),
            )
            for i in range(cleaner_count)
        ]
        return TeamEarnings(
            total_price=total_price_cents,
            platform_fee=platform_fee,
            net_for_cleaners=net_for_cleaners,
            platform_fee_percent=fee_percent,
            cleaner_earnings=equal_shares,
        )

    # Effort per cleaner, in first-seen order
    efforts: "OrderedDict[str, int]" = OrderedDict()
    for assignment in room_assignments:
        efforts[assignment.cleaner_id] = efforts.get(assignment.cleaner_id, 0) + (assignment.estimated_minutes or 0)
    total_effort = sum(efforts.values())

    earnings: List[CleanerEarning] = []
    allocated = 0
    for i, (cleaner_id, effort) in enumerate(efforts.items()):
        ratio = effort / total_effort if total_effort > 0 else 1 / len(efforts)
        if i == len(efforts) - 1:
            net_amount = net_for_cleaners - allocated
        else:
            net_amount = round_half_up(ratio * net_for_cleaners)
            allocated += net_amount

        earnings.append(
            CleanerEarning(
                cleaner_index=i,
                cleaner_id=cleaner_id,
                gross_amount=round_half_up(ratio * total_price_cents),
                platform_fee=round_half_up(ratio * platform_fee),
                net_amount=net_amount,
                percent_of_work=round_half_up(ratio * 100),
                estimated_minutes=effort,
            )
        )

    return TeamEarnings(
        total_price=total_price_cents,
        platform_fee=platform_fee,
        net_for_cleaners=net_for_cleaners,
        platform_fee_percent=fee_percent,
        cleaner_earnings=earnings,
    )


def calculate_partial_payment(
    config: PricingConfig,
    completed_rooms: int,
    total_rooms: int,
    total_price_cents: int,
    legacy_falsy_fallback: bool = False,
) -> PartialPayment:
    """Pro-rate a team job by rooms completed, then take the multi-cleaner fee"""
    fee_percent = _multi_cleaner_fee(config, legacy_falsy_fallback)

    completion_ratio = completed_rooms / total_rooms if total_rooms > 0 else 0
    partial_price = round_half_up(total_price_cents * completion_ratio)
    platform_fee = round_half_up(partial_price * fee_percent)

    return PartialPayment(
        completed_rooms=completed_rooms,
        total_rooms=total_rooms,
        completion_percentage=round_half_up(completion_ratio * 100),
        partial_price=partial_price,
        platform_fee=platform_fee,
        net_for_cleaners=partial_price - platform_fee,
    )


def solo_completion_earnings(
    config: PricingConfig,
    total_price_cents: int,
    legacy_falsy_fallback: bool = False,
) -> int:
    """
    Earnings for a cleaner who finishes a team job alone.

    Solo work pays at the regular marketplace fee, plus the configured
    large-home bonus.
    """
    fee_percent = select_fee_fraction(config, ProviderRole.MARKETPLACE_CLEANER, legacy_falsy_fallback)
    platform_fee = round_half_up(total_price_cents * fee_percent)
    return total_price_cents - platform_fee + round_half_up(config.multi_cleaner.solo_large_home_bonus)


def is_large_home(config: PricingConfig, home: HomeAttributes) -> bool:
    """Homes at or above either threshold are offered as team jobs"""
    policy = config.multi_cleaner
    return (
        coerce_int(home.num_beds) >= policy.large_home_beds_threshold
        or coerce_float(home.num_baths) >= policy.large_home_baths_threshold
    )
