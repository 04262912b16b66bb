"""Translate pricing service payloads into immutable PricingConfig snapshots"""

import math
from typing import Any, Dict, Mapping, Optional

from tidy_pricing.domain.defaults import DEFAULT_PRICING, WELL_KNOWN_WINDOW_LABELS
from tidy_pricing.domain.exceptions import InvalidPricingConfigError
from tidy_pricing.domain.models import (
    CancellationPolicy,
    LastMinutePolicy,
    LinenFees,
    MultiCleanerPolicy,
    PlatformFees,
    PricingConfig,
    TimeWindow,
)
from tidy_pricing.utils.numbers import coerce_float


def normalize_time_window(key: str, value: Any) -> TimeWindow:
    """
    Normalize either time-window shape into a TimeWindow.

    Accepts the legacy bare number (``{"10-3": 25}``), the object shape
    (``{"10-3": {"surcharge": 25, "label": "10am - 3pm"}}``) and an already
    normalized TimeWindow. Labels fall back to the well-known label for the
    key, then to the key itself. Unparseable surcharges count as 0.
    """
    fallback_label = WELL_KNOWN_WINDOW_LABELS.get(key, key)

    if isinstance(value, TimeWindow):
        return value
    if isinstance(value, Mapping):
        return TimeWindow(
            surcharge=coerce_float(value.get("surcharge")),
            label=str(value.get("label") or fallback_label),
        )
    return TimeWindow(surcharge=coerce_float(value), label=fallback_label)


def _amount(section: Mapping[str, Any], key: str, default: float) -> float:
    """Read a non-negative amount, keeping ``default`` when the key is absent"""
    value = section.get(key)
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidPricingConfigError(f"{key} must be a number, got {value!r}") from e
    if not math.isfinite(number):
        raise InvalidPricingConfigError(f"{key} must be a finite number, got {value!r}")
    if number < 0:
        raise InvalidPricingConfigError(f"{key} must be a non-negative number")
    return number


def _whole(section: Mapping[str, Any], key: str, default: int) -> int:
    return int(_amount(section, key, default))


def _fraction(section: Mapping[str, Any], key: str, default: Optional[float]) -> Optional[float]:
    """Read a fraction in [0, 1]; None stays None so callers can tell 'absent' from 0"""
    if section.get(key) is None:
        return default
    number = _amount(section, key, 0.0)
    if number > 1:
        raise InvalidPricingConfigError(f"{key} must be between 0 and 1")
    return number


def _section(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = payload.get(key) or {}
    if not isinstance(section, Mapping):
        raise InvalidPricingConfigError(f"{key} must be an object")
    return section


def pricing_from_payload(
    payload: Mapping[str, Any],
    defaults: PricingConfig = DEFAULT_PRICING,
) -> PricingConfig:
    """
    Build a PricingConfig from the camelCase pricing payload.

    Structural fields missing from the payload are taken from ``defaults``.
    Platform fee fractions are NOT defaulted: an absent fraction stays None so
    the settlement fallback applies. The multi-cleaner fee is accepted both as
    ``platform.multiCleanerPlatformFeePercent`` and the older
    ``multiCleaner.platformFeePercent``.

    Raises:
        InvalidPricingConfigError: A value is non-numeric, non-finite,
            negative, or a fraction above 1
    """
    if not isinstance(payload, Mapping):
        raise InvalidPricingConfigError("Pricing payload must be an object")

    linens = _section(payload, "linens")
    cancellation = _section(payload, "cancellation")
    platform = _section(payload, "platform")
    multi_cleaner = _section(payload, "multiCleaner")
    last_minute = _section(payload, "lastMinute")

    raw_windows = payload.get("timeWindows")
    if raw_windows is None:
        time_windows: Dict[str, TimeWindow] = dict(defaults.time_windows)
    elif isinstance(raw_windows, Mapping):
        time_windows = {str(key): normalize_time_window(str(key), value) for key, value in raw_windows.items()}
    else:
        raise InvalidPricingConfigError("timeWindows must be an object")

    # Incentive split lived at the top level in older payloads
    incentive_source: Dict[str, Any] = dict(payload)
    incentive_source.update({k: v for k, v in cancellation.items() if v is not None})

    multi_cleaner_fee = _fraction(platform, "multiCleanerPlatformFeePercent", None)
    if multi_cleaner_fee is None:
        multi_cleaner_fee = _fraction(multi_cleaner, "platformFeePercent", None)

    dc = defaults.cancellation
    dm = defaults.multi_cleaner

    return PricingConfig(
        base_price=_amount(payload, "basePrice", defaults.base_price),
        extra_bed_bath_fee=_amount(payload, "extraBedBathFee", defaults.extra_bed_bath_fee),
        half_bath_fee=_amount(payload, "halfBathFee", defaults.half_bath_fee),
        linens=LinenFees(
            sheet_fee_per_bed=_amount(linens, "sheetFeePerBed", defaults.linens.sheet_fee_per_bed),
            towel_fee=_amount(linens, "towelFee", defaults.linens.towel_fee),
            face_cloth_fee=_amount(linens, "faceClothFee", defaults.linens.face_cloth_fee),
        ),
        time_windows=time_windows,
        cancellation=CancellationPolicy(
            fee=_amount(cancellation, "fee", dc.fee),
            window_days=_whole(cancellation, "windowDays", dc.window_days),
            homeowner_penalty_days=_whole(cancellation, "homeownerPenaltyDays", dc.homeowner_penalty_days),
            cleaner_penalty_days=_whole(cancellation, "cleanerPenaltyDays", dc.cleaner_penalty_days),
            refund_percentage=_fraction(cancellation, "refundPercentage", dc.refund_percentage),
            incentive_refund_percent=_fraction(incentive_source, "incentiveRefundPercent", dc.incentive_refund_percent),
            incentive_cleaner_percent=_fraction(
                incentive_source, "incentiveCleanerPercent", dc.incentive_cleaner_percent
            ),
        ),
        platform=PlatformFees(
            fee_percent=_fraction(platform, "feePercent", None),
            business_owner_fee_percent=_fraction(platform, "businessOwnerFeePercent", None),
            multi_cleaner_platform_fee_percent=multi_cleaner_fee,
        ),
        multi_cleaner=MultiCleanerPolicy(
            solo_large_home_bonus=_amount(multi_cleaner, "soloLargeHomeBonus", dm.solo_large_home_bonus),
            large_home_beds_threshold=_whole(multi_cleaner, "largeHomeBedsThreshold", dm.large_home_beds_threshold),
            large_home_baths_threshold=_whole(multi_cleaner, "largeHomeBathsThreshold", dm.large_home_baths_threshold),
            offer_expiration_hours=_whole(multi_cleaner, "offerExpirationHours", dm.offer_expiration_hours),
        ),
        last_minute=LastMinutePolicy(
            fee=_amount(last_minute, "fee", defaults.last_minute.fee),
            threshold_hours=_whole(last_minute, "thresholdHours", defaults.last_minute.threshold_hours),
        ),
        high_volume_fee=_amount(payload, "highVolumeFee", defaults.high_volume_fee),
    )


def pricing_to_payload(config: PricingConfig) -> Dict[str, Any]:
    """Render a snapshot back into the camelCase wire shape"""
    return {
        "basePrice": config.base_price,
        "extraBedBathFee": config.extra_bed_bath_fee,
        "halfBathFee": config.half_bath_fee,
        "linens": {
            "sheetFeePerBed": config.linens.sheet_fee_per_bed,
            "towelFee": config.linens.towel_fee,
            "faceClothFee": config.linens.face_cloth_fee,
        },
        "timeWindows": {
            key: {"surcharge": window.surcharge, "label": window.label}
            for key, window in config.time_windows.items()
        },
        "cancellation": {
            "fee": config.cancellation.fee,
            "windowDays": config.cancellation.window_days,
            "homeownerPenaltyDays": config.cancellation.homeowner_penalty_days,
            "cleanerPenaltyDays": config.cancellation.cleaner_penalty_days,
            "refundPercentage": config.cancellation.refund_percentage,
            "incentiveRefundPercent": config.cancellation.incentive_refund_percent,
            "incentiveCleanerPercent": config.cancellation.incentive_cleaner_percent,
        },
        "platform": {
            "feePercent": config.platform.fee_percent,
            "businessOwnerFeePercent": config.platform.business_owner_fee_percent,
            "multiCleanerPlatformFeePercent": config.platform.multi_cleaner_platform_fee_percent,
        },
        "multiCleaner": {
            "soloLargeHomeBonus": config.multi_cleaner.solo_large_home_bonus,
            "largeHomeBedsThreshold": config.multi_cleaner.large_home_beds_threshold,
            "largeHomeBathsThreshold": config.multi_cleaner.large_home_baths_threshold,
            "offerExpirationHours": config.multi_cleaner.offer_expiration_hours,
        },
        "lastMinute": {
            "fee": config.last_minute.fee,
            "thresholdHours": config.last_minute.threshold_hours,
        },
        "highVolumeFee": config.high_volume_fee,
    }
