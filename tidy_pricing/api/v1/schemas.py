"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from tidy_pricing.domain.models import ProviderRole


class PricingResponse(BaseModel):
    """Response for GET /v1/pricing/current"""

    source: str
    pricing: Dict[str, Any]
    error: Optional[str] = None


class HomeSchema(BaseModel):
    """Home size; strings are accepted and coerced"""

    num_beds: Any = Field(..., description="Bedroom count")
    num_baths: Any = Field(..., description="Bathroom count, halves allowed (e.g. 2.5)")


class QuoteRequest(BaseModel):
    """Request body for POST /v1/quotes"""

    home: HomeSchema
    time_window: Optional[str] = Field(None, description="Time window key, e.g. '10-3'")
    sheets: bool = False
    towels: bool = False
    hours_until_appointment: Optional[float] = Field(None, ge=0)


class QuoteResponse(BaseModel):
    """Response for POST /v1/quotes"""

    price: float
    price_formatted: str
    time_window_label: str
    pricing_source: str


class ShareRequest(BaseModel):
    """Request body for POST /v1/settlements/share"""

    gross_price: float = Field(..., ge=0)
    num_providers: int = Field(1, ge=1)
    provider_role: ProviderRole = ProviderRole.MARKETPLACE_CLEANER


class ShareResponse(BaseModel):
    """Response for POST /v1/settlements/share"""

    provider_share: float
    provider_share_formatted: str
    platform_fee: float
    fee_percent: float
    pricing_source: str


class RoomAssignmentSchema(BaseModel):
    cleaner_id: str
    estimated_minutes: int = Field(0, ge=0)


class TeamEarningsRequest(BaseModel):
    """Request body for POST /v1/settlements/team"""

    total_price_cents: int = Field(..., ge=0)
    cleaner_count: int = Field(..., ge=1)
    room_assignments: Optional[List[RoomAssignmentSchema]] = None


class CleanerEarningSchema(BaseModel):
    cleaner_index: int
    cleaner_id: Optional[str] = None
    gross_amount: int
    platform_fee: int
    net_amount: int
    percent_of_work: int
    estimated_minutes: Optional[int] = None


class TeamEarningsResponse(BaseModel):
    """Response for POST /v1/settlements/team"""

    total_price: int
    platform_fee: int
    net_for_cleaners: int
    platform_fee_percent: float
    cleaner_earnings: List[CleanerEarningSchema]


class CancellationRequest(BaseModel):
    """Request body for POST /v1/cancellations/evaluate"""

    price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    days_until_appointment: float = Field(..., ge=0)
    has_cleaner_assigned: bool
    discount_applied: bool = False
    incentive_cleaner_percent: Optional[float] = Field(None, ge=0, le=1)


class CancellationResponse(BaseModel):
    """Response for POST /v1/cancellations/evaluate"""

    is_within_penalty_window: bool
    estimated_refund: str
    cleaner_payout: str
    refund_percent: float
    platform_keeps: Optional[str] = None
    warning_message: str
    will_charge_cancellation_fee: bool
    cancellation_fee: float


class CleanerCancellationRequest(BaseModel):
    """Request body for POST /v1/cancellations/cleaner"""

    days_until_appointment: float = Field(..., ge=0)
    recent_penalties: int = Field(0, ge=0)


class CleanerCancellationResponse(BaseModel):
    """Response for POST /v1/cancellations/cleaner"""

    is_within_penalty_window: bool
    will_result_in_freeze: bool
    remaining_before_freeze: int
    warning_message: str
