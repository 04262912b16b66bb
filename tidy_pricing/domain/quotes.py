"""Job quote calculation - client-facing price for a cleaning"""

import math
from typing import Optional

from tidy_pricing.domain.models import HomeAttributes, JobQuoteRequest, PricingConfig, TimeWindow
from tidy_pricing.domain.pricing_config import normalize_time_window
from tidy_pricing.utils.numbers import coerce_float, coerce_int

# Two towels are assumed per bathroom
TOWELS_PER_BATH = 2


def resolve_time_window(config: PricingConfig, window_key: Optional[str]) -> TimeWindow:
    """
    Look up a window in the config's open set of keys.

    Unknown or missing keys resolve to an "anytime" window with no surcharge.
    """
    if window_key is None or window_key not in config.time_windows:
        return TimeWindow(surcharge=0, label="Anytime")
    return normalize_time_window(window_key, config.time_windows[window_key])


def time_window_surcharge(config: PricingConfig, window_key: Optional[str]) -> float:
    return resolve_time_window(config, window_key).surcharge


def linen_add_ons(config: PricingConfig, home: HomeAttributes, sheets: bool, towels: bool) -> float:
    """Sheets are charged per bed, towels per bathroom (two each)"""
    total = 0.0
    if sheets:
        total += coerce_int(home.num_beds) * config.linens.sheet_fee_per_bed
    if towels:
        total += coerce_float(home.num_baths) * TOWELS_PER_BATH * config.linens.towel_fee
    return total


def structural_price(config: PricingConfig, home: HomeAttributes) -> float:
    """
    Base price plus extras for home size.

    The first bed and first full bath are included in the base price. A
    fractional bath of .5 or more counts as one half bath.
    """
    num_beds = coerce_int(home.num_beds)
    num_baths = coerce_float(home.num_baths)

    full_baths = math.floor(num_baths)
    has_half_bath = (num_baths % 1) >= 0.5

    extra_beds = max(0, num_beds - 1)
    extra_full_baths = max(0, full_baths - 1)
    half_bath_count = 1 if has_half_bath else 0

    return (
        config.base_price
        + extra_beds * config.extra_bed_bath_fee
        + extra_full_baths * config.extra_bed_bath_fee
        + half_bath_count * config.half_bath_fee
    )


def last_minute_fee(config: PricingConfig, hours_until_appointment: Optional[float]) -> float:
    """Flat fee when booking inside the last-minute threshold"""
    if hours_until_appointment is None:
        return 0.0
    if hours_until_appointment <= config.last_minute.threshold_hours:
        return config.last_minute.fee
    return 0.0


def compute_quote(config: PricingConfig, request: JobQuoteRequest) -> float:
    """
    Compute the job price for a booking request.

    Total = time-window surcharge + linen add-ons + structural price, plus the
    last-minute fee when ``hours_until_appointment`` is given and falls inside
    the threshold. Malformed bed/bath counts are coerced to 0, never rejected.

    Example (default pricing):
        3 beds, 2.5 baths, "10-3", sheets
        25 + 3*30 + (150 + 2*50 + 1*50 + 1*25) = 440
    """
    surcharge = time_window_surcharge(config, request.time_window)
    linens = linen_add_ons(config, request.home, request.sheets, request.towels)
    structural = structural_price(config, request.home)

    return surcharge + linens + structural + last_minute_fee(config, request.hours_until_appointment)
