"""Unit tests for the pricing configuration resolver"""

import dataclasses
from unittest.mock import patch

from prometheus_client import REGISTRY
from tidy_pricing.domain.defaults import DEFAULT_PRICING
from tidy_pricing.domain.exceptions import PricingServiceError
from tidy_pricing.domain.resolver import SOURCE_CONFIG, SOURCE_DATABASE, PricingConfigResolver


def _resolutions(source: str) -> float:
    return REGISTRY.get_sample_value("pricing_config_resolutions_total", {"source": source}) or 0.0


async def test_resolve_uses_remote_pricing(make_stub, pricing_payload):
    resolver = PricingConfigResolver(make_stub(payload=pricing_payload))

    result = await resolver.resolve()

    assert result.source == SOURCE_DATABASE
    assert result.error is None
    assert result.pricing.base_price == 175
    assert result.pricing.platform.fee_percent == 0.12


async def test_resolve_falls_back_when_service_has_nothing(make_stub):
    resolver = PricingConfigResolver(make_stub(payload=None))

    result = await resolver.resolve()

    assert result.source == SOURCE_CONFIG
    assert result.pricing is DEFAULT_PRICING
    assert result.error is None


async def test_resolve_falls_back_on_service_error(make_stub):
    resolver = PricingConfigResolver(make_stub(error=PricingServiceError("Pricing service timeout after 5.0s")))

    result = await resolver.resolve()

    assert result.source == SOURCE_CONFIG
    assert result.pricing is DEFAULT_PRICING
    assert "timeout" in result.error


async def test_resolve_falls_back_on_unexpected_error(make_stub):
    resolver = PricingConfigResolver(make_stub(error=RuntimeError("boom")))

    result = await resolver.resolve()

    assert result.source == SOURCE_CONFIG
    assert result.error == "boom"


async def test_resolve_falls_back_on_invalid_payload(make_stub):
    resolver = PricingConfigResolver(make_stub(payload={"basePrice": "free"}))

    result = await resolver.resolve()

    assert result.source == SOURCE_CONFIG
    assert "basePrice" in result.error


async def test_resolve_falls_back_on_non_finite_values(make_stub):
    resolver = PricingConfigResolver(make_stub(payload={"basePrice": "NaN", "platform": {"feePercent": float("nan")}}))

    result = await resolver.resolve()

    assert result.source == SOURCE_CONFIG
    assert result.pricing is DEFAULT_PRICING
    assert "finite" in result.error


async def test_resolve_fetches_every_call(make_stub, pricing_payload):
    """No caching: each resolve is a fresh fetch"""
    stub = make_stub(payload=pricing_payload)
    resolver = PricingConfigResolver(stub)

    await resolver.resolve()
    stub.payload = {**pricing_payload, "basePrice": 190}
    result = await resolver.resolve()

    assert stub.calls == 2
    assert result.pricing.base_price == 190


async def test_resolve_uses_custom_fallback(make_stub, default_config):
    fallback = dataclasses.replace(default_config, base_price=99)
    resolver = PricingConfigResolver(make_stub(payload=None), fallback=fallback)

    result = await resolver.resolve()

    assert result.pricing.base_price == 99


async def test_resolve_records_metrics_and_logs(make_stub, pricing_payload):
    before_db = _resolutions(SOURCE_DATABASE)
    before_config = _resolutions(SOURCE_CONFIG)

    with patch("tidy_pricing.domain.resolver.log_pricing_resolution") as mock_log:
        await PricingConfigResolver(make_stub(payload=pricing_payload)).resolve()
        await PricingConfigResolver(make_stub(error=PricingServiceError("down"))).resolve()

    assert _resolutions(SOURCE_DATABASE) == before_db + 1
    assert _resolutions(SOURCE_CONFIG) == before_config + 1

    assert mock_log.call_count == 2
    first_call, second_call = mock_log.call_args_list
    assert first_call.args[:2] == (SOURCE_DATABASE, None)
    assert second_call.args[:2] == (SOURCE_CONFIG, "down")
