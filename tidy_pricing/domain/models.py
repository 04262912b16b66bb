"""Domain models - pure Python dataclasses representing pricing entities"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional


@dataclass(frozen=True)
class LinenFees:
    """Per-item linen add-on fees"""

    sheet_fee_per_bed: float
    towel_fee: float
    face_cloth_fee: float


@dataclass(frozen=True)
class TimeWindow:
    """Arrival time window with its surcharge and display label"""

    surcharge: float
    label: str


@dataclass(frozen=True)
class CancellationPolicy:
    """Cancellation fee, windows and refund splits"""

    fee: float
    window_days: int
    homeowner_penalty_days: int
    cleaner_penalty_days: int
    refund_percentage: float
    incentive_refund_percent: float
    incentive_cleaner_percent: float


@dataclass(frozen=True)
class PlatformFees:
    """Platform fee fractions. None means the value was absent from the source."""

    fee_percent: Optional[float] = None
    business_owner_fee_percent: Optional[float] = None
    multi_cleaner_platform_fee_percent: Optional[float] = None


@dataclass(frozen=True)
class MultiCleanerPolicy:
    """Team job settings"""

    solo_large_home_bonus: float
    large_home_beds_threshold: int
    large_home_baths_threshold: int
    offer_expiration_hours: int


@dataclass(frozen=True)
class LastMinutePolicy:
    """Surcharge for bookings made close to the appointment"""

    fee: float
    threshold_hours: int


@dataclass(frozen=True)
class PricingConfig:
    """Immutable pricing configuration snapshot"""

    base_price: float
    extra_bed_bath_fee: float
    half_bath_fee: float
    linens: LinenFees
    time_windows: Mapping[str, TimeWindow]
    cancellation: CancellationPolicy
    platform: PlatformFees
    multi_cleaner: MultiCleanerPolicy
    last_minute: LastMinutePolicy
    high_volume_fee: float

    def __post_init__(self) -> None:
        # Freeze the window mapping so a snapshot can never be edited in place
        if not isinstance(self.time_windows, MappingProxyType):
            object.__setattr__(self, "time_windows", MappingProxyType(dict(self.time_windows)))


@dataclass(frozen=True)
class ResolvedPricing:
    """Result of resolving the active configuration"""

    pricing: PricingConfig
    source: str  # "database" or "config"
    error: Optional[str] = None


@dataclass
class HomeAttributes:
    """Home size as recorded on the home; values may arrive as strings"""

    num_beds: object
    num_baths: object


@dataclass
class JobQuoteRequest:
    """Inputs for a single job quote"""

    home: HomeAttributes
    time_window: Optional[str] = None
    sheets: bool = False
    towels: bool = False
    hours_until_appointment: Optional[float] = None


class ProviderRole(str, Enum):
    """Who performs the job, which decides the platform fee tier"""

    MARKETPLACE_CLEANER = "marketplaceCleaner"
    BUSINESS_EMPLOYEE = "businessEmployee"
    MULTI_CLEANER_TEAM_MEMBER = "multiCleanerTeamMember"


@dataclass
class SettlementInput:
    """Job price split request"""

    gross_price: float
    num_providers: int = 1
    provider_role: ProviderRole = ProviderRole.MARKETPLACE_CLEANER


@dataclass
class RoomAssignment:
    """Room handed to a team member, weighted by estimated effort"""

    cleaner_id: str
    estimated_minutes: int = 0


@dataclass
class CleanerEarning:
    """One team member's cut of a multi-cleaner job (cents)"""

    cleaner_index: int
    gross_amount: int
    platform_fee: int
    net_amount: int
    percent_of_work: int
    cleaner_id: Optional[str] = None
    estimated_minutes: Optional[int] = None


@dataclass
class TeamEarnings:
    """Full payout breakdown for a multi-cleaner job (cents)"""

    total_price: int
    platform_fee: int
    net_for_cleaners: int
    platform_fee_percent: float
    cleaner_earnings: List[CleanerEarning] = field(default_factory=list)


@dataclass
class PartialPayment:
    """Payout for a job where only some rooms were completed (cents)"""

    completed_rooms: int
    total_rooms: int
    completion_percentage: int
    partial_price: int
    platform_fee: int
    net_for_cleaners: int


@dataclass
class CancellationContext:
    """Read projection of an appointment at cancellation-intent time"""

    price: float
    original_price: Optional[float] = None
    days_until_appointment: float = 0  # fractional days round up
    has_cleaner_assigned: bool = False
    discount_applied: bool = False
    incentive_cleaner_percent: Optional[float] = None


@dataclass(frozen=True)
class CancellationOutcome:
    """What a homeowner cancellation would cost and pay out"""

    is_within_penalty_window: bool
    estimated_refund: str
    cleaner_payout: str
    refund_percent: float
    platform_keeps: Optional[str]
    warning_message: str
    will_charge_cancellation_fee: bool
    cancellation_fee: float
    raw_refund: float
    raw_cleaner_payout: float
    raw_platform_keeps: Optional[float]


@dataclass
class CleanerCancellationContext:
    """Cleaner-initiated cancellation inputs"""

    days_until_appointment: float
    recent_penalties: int = 0


@dataclass(frozen=True)
class CleanerCancellationOutcome:
    """Penalty consequences of a cleaner dropping a job"""

    is_within_penalty_window: bool
    will_result_in_freeze: bool
    remaining_before_freeze: int
    warning_message: str
