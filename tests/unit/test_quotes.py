"""Unit tests for job quote calculation"""

import dataclasses

import pytest
from tidy_pricing.domain.defaults import DEFAULT_PRICING
from tidy_pricing.domain.models import HomeAttributes, JobQuoteRequest
from tidy_pricing.domain.quotes import (
    compute_quote,
    linen_add_ons,
    resolve_time_window,
    structural_price,
)


def test_compute_quote_minimal_home_is_base_price(default_config, make_quote):
    """1 bed / 1 bath, anytime, no linens costs exactly the base price"""
    assert compute_quote(default_config, make_quote(beds=1, baths=1)) == 150


def test_compute_quote_full_example(default_config, make_quote):
    """3 beds, 2.5 baths, 10-3 window, sheets"""
    request = make_quote(beds=3, baths=2.5, window="10-3", sheets=True)

    # 25 surcharge + 3*30 sheets + (150 + 2*50 beds + 1*50 bath + 25 half bath)
    assert compute_quote(default_config, request) == 440


def test_compute_quote_towels_two_per_bath(default_config):
    home = HomeAttributes(num_beds=1, num_baths=2)
    assert linen_add_ons(default_config, home, sheets=False, towels=True) == 20  # 2 baths * 2 * $5


def test_structural_price_half_bath_threshold(default_config):
    """Only a fraction of .5 or more counts as a half bath"""
    assert structural_price(default_config, HomeAttributes(num_beds=1, num_baths=1.5)) == 175
    assert structural_price(default_config, HomeAttributes(num_beds=1, num_baths=1.25)) == 150


@pytest.mark.parametrize("window", ["10-3", "11-4", "12-2", "anytime"])
def test_time_window_surcharge_is_additive(default_config, make_quote, window):
    with_window = compute_quote(default_config, make_quote(beds=2, baths=2, window=window))
    anytime = compute_quote(default_config, make_quote(beds=2, baths=2, window="anytime"))

    assert with_window - anytime == default_config.time_windows[window].surcharge


def test_unknown_or_missing_window_has_no_surcharge(default_config, make_quote):
    assert compute_quote(default_config, make_quote(window="7-9")) == 150
    assert compute_quote(default_config, make_quote(window=None)) == 150
    assert resolve_time_window(default_config, "7-9").label == "Anytime"


def test_legacy_bare_number_window_shape(make_quote):
    """Windows stored as bare numbers are still honoured"""
    config = dataclasses.replace(DEFAULT_PRICING, time_windows={"anytime": 0, "10-3": 25})

    assert compute_quote(config, make_quote(window="10-3")) == 175
    assert resolve_time_window(config, "10-3").label == "10am - 3pm"


def test_string_counts_are_coerced(default_config, make_quote):
    assert compute_quote(default_config, make_quote(beds="2", baths="2.5")) == 150 + 50 + 50 + 25


def test_invalid_counts_coerce_to_zero_extras(default_config, make_quote):
    """Unparseable or negative counts are treated as 0, never rejected"""
    assert compute_quote(default_config, make_quote(beds="abc", baths="n/a")) == 150
    assert compute_quote(default_config, make_quote(beds=-3, baths=-2)) == 150
    assert compute_quote(default_config, make_quote(beds=None, baths="")) == 150


def test_quote_is_monotonic_in_home_size(default_config, make_quote):
    bath_steps = [1, 1.5, 2, 2.5, 3, 3.5, 4]

    for baths in bath_steps:
        prices = [compute_quote(default_config, make_quote(beds=beds, baths=baths)) for beds in range(1, 7)]
        assert prices == sorted(prices)

    for beds in range(1, 7):
        prices = [compute_quote(default_config, make_quote(beds=beds, baths=baths)) for baths in bath_steps]
        assert prices == sorted(prices)


def test_last_minute_fee_inside_threshold(default_config, make_quote):
    assert compute_quote(default_config, make_quote(hours_until_appointment=24)) == 200
    assert compute_quote(default_config, make_quote(hours_until_appointment=48)) == 200
    assert compute_quote(default_config, make_quote(hours_until_appointment=72)) == 150


def test_compute_quote_is_idempotent(default_config):
    request = JobQuoteRequest(
        home=HomeAttributes(num_beds=4, num_baths=3.5),
        time_window="12-2",
        sheets=True,
        towels=True,
    )
    assert compute_quote(default_config, request) == compute_quote(default_config, request)
