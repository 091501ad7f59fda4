import json

import pytest

from btc_recovery.constants import FALLBACK_FEE_RATE, FEE_RECOMMENDATION_URL
from btc_recovery.exceptions import APIError, NetworkError, TimeoutError
from btc_recovery.modules.fee import FeeEstimator, parse_hour_fee
from btc_recovery.types.fee import FeeEstimate, FeeSource

from conftest import FakeProvider

FEE_URL = "https://fees.test/api/v1/fees/recommended"


def estimator_for(body) -> FeeEstimator:
    text = body if isinstance(body, str) else json.dumps(body)
    return FeeEstimator(FakeProvider({FEE_URL: text}), source_url=FEE_URL)


@pytest.mark.parametrize("payload,expected", [
    ({"hourFee": 37}, 37),
    ({"hourFee": 1}, 1),
    ({"hourFee": 37.0}, 37),
    ({"fastestFee": 80, "halfHourFee": 60, "hourFee": 40}, 40),
    ({"hourFee": "fast"}, None),
    ({"hourFee": "37"}, None),
    ({"hourFee": 12.5}, None),
    ({"hourFee": -5}, None),
    ({"hourFee": 0}, None),
    ({"hourFee": True}, None),
    ({"hourFee": None}, None),
    ({}, None),
    ([37], None),
    (None, None),
])
def test_parse_hour_fee(payload, expected):
    assert parse_hour_fee(payload) == expected


@pytest.mark.asyncio
async def test_live_fee():
    estimate = await estimator_for({"hourFee": 37}).get_recommended_fee()
    assert estimate == FeeEstimate(37, FeeSource.LIVE)
    assert not estimate.is_fallback


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {"hourFee": "fast"},
    {},
    {"hourFee": -1},
    "<html>Service Unavailable</html>",
    "",
    "[1, 2, 3]",
])
async def test_fallback_fee(body):
    estimate = await estimator_for(body).get_recommended_fee()
    assert estimate.satoshis_per_byte == FALLBACK_FEE_RATE == 100
    assert estimate.source == FeeSource.FALLBACK
    assert estimate.is_fallback


@pytest.mark.asyncio
async def test_fallback_is_logged(caplog):
    with caplog.at_level("WARNING"):
        await estimator_for({}).get_recommended_fee()
    assert "falling back to 100" in caplog.text


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    NetworkError("connection refused"),
    TimeoutError("timed out"),
    APIError("Client error 404", code=404),
])
async def test_transport_failures_propagate(error):
    estimator = FeeEstimator(FakeProvider({FEE_URL: error}), source_url=FEE_URL)
    with pytest.raises(type(error)):
        await estimator.get_recommended_fee()


@pytest.mark.asyncio
async def test_explicit_source_url_overrides_default():
    other = "https://other.test/fees"
    provider = FakeProvider({other: json.dumps({"hourFee": 12})})
    estimator = FeeEstimator(provider, source_url=FEE_URL)

    estimate = await estimator.get_recommended_fee(other)

    assert estimate.satoshis_per_byte == 12
    assert provider.calls == [("GET", other, None)]


@pytest.mark.asyncio
async def test_single_request_per_call():
    provider = FakeProvider({FEE_RECOMMENDATION_URL: json.dumps({"hourFee": 9})})
    estimator = FeeEstimator(provider)

    assert await estimator.get_recovery_fee_per_byte() == 9
    assert len(provider.calls) == 1


def test_estimate_rejects_non_positive_rate():
    with pytest.raises(ValueError):
        FeeEstimate(0, FeeSource.LIVE)


def test_fallback_rate_must_be_positive():
    with pytest.raises(ValueError):
        FeeEstimator(FakeProvider(), fallback_rate=0)
