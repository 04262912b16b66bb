"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict, Optional
from fastapi.testclient import TestClient
from tidy_pricing.api.main import create_app
from tidy_pricing.api.dependencies import get_pricing_client
from tidy_pricing.domain.defaults import DEFAULT_PRICING
from tidy_pricing.domain.models import HomeAttributes, JobQuoteRequest, PricingConfig


class StubPricingClient:
    """Stands in for PricingServiceClient; returns a canned payload or raises"""

    def __init__(self, payload: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.calls = 0

    async def get_current_pricing(self) -> Optional[Dict[str, Any]]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def default_config() -> PricingConfig:
    return DEFAULT_PRICING


@pytest.fixture
def pricing_payload() -> Dict[str, Any]:
    """Pricing service payload in the formatted (object time window) shape"""
    return {
        "basePrice": 175,
        "extraBedBathFee": 60,
        "halfBathFee": 30,
        "linens": {"sheetFeePerBed": 35, "towelFee": 6, "faceClothFee": 3},
        "timeWindows": {
            "anytime": {"surcharge": 0, "label": "Anytime"},
            "10-3": {"surcharge": 30, "label": "10am - 3pm"},
            "11-4": {"surcharge": 30, "label": "11am - 4pm"},
            "12-2": {"surcharge": 40, "label": "12pm - 2pm"},
        },
        "cancellation": {
            "fee": 30,
            "windowDays": 7,
            "homeownerPenaltyDays": 3,
            "cleanerPenaltyDays": 4,
            "refundPercentage": 0.5,
        },
        "platform": {"feePercent": 0.12, "businessOwnerFeePercent": 0.08},
        "multiCleaner": {"platformFeePercent": 0.15},
        "highVolumeFee": 60,
    }


@pytest.fixture
def make_quote():
    """Build a quote request with sensible defaults"""

    def _make(beds: Any = 1, baths: Any = 1, window: Optional[str] = "anytime", **kwargs) -> JobQuoteRequest:
        return JobQuoteRequest(home=HomeAttributes(num_beds=beds, num_baths=baths), time_window=window, **kwargs)

    return _make


@pytest.fixture
def make_stub():
    """Factory for pricing service stubs"""
    return StubPricingClient


@pytest.fixture
def stub_client() -> StubPricingClient:
    """Pricing service that has no configuration stored"""
    return StubPricingClient(payload=None)


@pytest.fixture
def client(stub_client: StubPricingClient) -> TestClient:
    """Create FastAPI test client with a stubbed pricing service"""
    app = create_app()
    app.dependency_overrides[get_pricing_client] = lambda: stub_client
    return TestClient(app)
