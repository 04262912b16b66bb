"""POST /v1/quotes - Job price quote endpoint"""

from fastapi import APIRouter, Depends

from tidy_pricing.api.v1.schemas import QuoteRequest, QuoteResponse
from tidy_pricing.api.dependencies import get_resolved_pricing
from tidy_pricing.domain.models import HomeAttributes, JobQuoteRequest, ResolvedPricing
from tidy_pricing.domain.quotes import compute_quote, resolve_time_window
from tidy_pricing.infrastructure.observability.metrics import quote_counter
from tidy_pricing.utils.numbers import format_currency

router = APIRouter()


@router.post("/quotes", response_model=QuoteResponse)
def create_quote(
    request_body: QuoteRequest,
    resolved: ResolvedPricing = Depends(get_resolved_pricing),
):
    """Quote a cleaning from home size, linens and arrival window"""
    quote_request = JobQuoteRequest(
        home=HomeAttributes(num_beds=request_body.home.num_beds, num_baths=request_body.home.num_baths),
        time_window=request_body.time_window,
        sheets=request_body.sheets,
        towels=request_body.towels,
        hours_until_appointment=request_body.hours_until_appointment,
    )

    price = compute_quote(resolved.pricing, quote_request)
    quote_counter.inc()

    return QuoteResponse(
        price=price,
        price_formatted=format_currency(price),
        time_window_label=resolve_time_window(resolved.pricing, request_body.time_window).label,
        pricing_source=resolved.source,
    )
