"""Integration tests for the pricing service HTTP client"""

import httpx
import pytest
from tidy_pricing.domain.exceptions import PricingServiceError
from tidy_pricing.infrastructure.clients.pricing_service import PricingServiceClient

BASE_URL = "http://pricing.test"


def _client(handler) -> PricingServiceClient:
    return PricingServiceClient(base_url=BASE_URL, timeout=1.0, transport=httpx.MockTransport(handler))


async def test_get_current_pricing_wrapped(pricing_payload):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"source": "database", "pricing": pricing_payload})

    result = await _client(handler).get_current_pricing()

    assert result == pricing_payload
    assert seen["url"] == f"{BASE_URL}/api/v1/pricing/current"


async def test_get_current_pricing_bare_object(pricing_payload):
    result = await _client(lambda request: httpx.Response(200, json=pricing_payload)).get_current_pricing()
    assert result["basePrice"] == 175


@pytest.mark.parametrize("body", [{"source": "config", "pricing": None}, {"pricing": {}}, {}])
async def test_get_current_pricing_empty(body):
    result = await _client(lambda request: httpx.Response(200, json=body)).get_current_pricing()
    assert result is None


async def test_get_current_pricing_empty_body():
    result = await _client(lambda request: httpx.Response(204)).get_current_pricing()
    assert result is None


async def test_get_current_pricing_server_error():
    with pytest.raises(PricingServiceError, match="500"):
        await _client(lambda request: httpx.Response(500)).get_current_pricing()


async def test_get_current_pricing_unreachable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(PricingServiceError, match="unreachable"):
        await _client(handler).get_current_pricing()


async def test_get_current_pricing_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("Timed out", request=request)

    with pytest.raises(PricingServiceError, match="timeout"):
        await _client(handler).get_current_pricing()


async def test_get_current_pricing_invalid_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(PricingServiceError, match="Invalid pricing data"):
        await _client(handler).get_current_pricing()


async def test_get_current_pricing_non_object():
    with pytest.raises(PricingServiceError, match="expected an object"):
        await _client(lambda request: httpx.Response(200, json=[1, 2, 3])).get_current_pricing()
