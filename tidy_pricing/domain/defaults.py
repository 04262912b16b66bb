"""Compiled-in fallback pricing used when the pricing service is unavailable"""

from tidy_pricing.domain.models import (
    CancellationPolicy,
    LastMinutePolicy,
    LinenFees,
    MultiCleanerPolicy,
    PlatformFees,
    PricingConfig,
    TimeWindow,
)

# Fee fraction applied whenever a tier's fraction is missing
DEFAULT_FEE_FRACTION = 0.10

ANYTIME_WINDOW = "anytime"

WELL_KNOWN_WINDOW_LABELS = {
    ANYTIME_WINDOW: "Anytime",
    "10-3": "10am - 3pm",
    "11-4": "11am - 4pm",
    "12-2": "12pm - 2pm",
}

DEFAULT_PRICING = PricingConfig(
    base_price=150,
    extra_bed_bath_fee=50,
    half_bath_fee=25,
    linens=LinenFees(sheet_fee_per_bed=30, towel_fee=5, face_cloth_fee=2),
    time_windows={
        ANYTIME_WINDOW: TimeWindow(surcharge=0, label=WELL_KNOWN_WINDOW_LABELS[ANYTIME_WINDOW]),
        "10-3": TimeWindow(surcharge=25, label=WELL_KNOWN_WINDOW_LABELS["10-3"]),
        "11-4": TimeWindow(surcharge=25, label=WELL_KNOWN_WINDOW_LABELS["11-4"]),
        "12-2": TimeWindow(surcharge=30, label=WELL_KNOWN_WINDOW_LABELS["12-2"]),
    },
    cancellation=CancellationPolicy(
        fee=25,
        window_days=7,
        homeowner_penalty_days=3,
        cleaner_penalty_days=4,
        refund_percentage=0.5,
        incentive_refund_percent=0.10,
        incentive_cleaner_percent=0.40,
    ),
    platform=PlatformFees(
        fee_percent=0.10,
        business_owner_fee_percent=0.10,
        multi_cleaner_platform_fee_percent=0.13,
    ),
    multi_cleaner=MultiCleanerPolicy(
        solo_large_home_bonus=0,
        large_home_beds_threshold=3,
        large_home_baths_threshold=3,
        offer_expiration_hours=48,
    ),
    last_minute=LastMinutePolicy(fee=50, threshold_hours=48),
    high_volume_fee=50,
)
