import random
from datetime import date, timedelta
from decimal import Decimal

import pytest

from wealthsim.infrastructure.market_data.synthetic_generator import (
    FALLBACK_PRICE,
    MAX_VOLUME,
    MIN_VOLUME,
    fallback_quote,
    generate_candles,
    generate_quote,
)


@pytest.mark.parametrize("days", [1, 30, 60])
def test_candles_cover_consecutive_days_ending_today(days):
    today = date(2024, 6, 30)
    candles = generate_candles(days, today=today, rng=random.Random(7))

    assert len(candles) == days
    assert candles[-1].bar_date == today
    for prev, cur in zip(candles, candles[1:]):
        assert cur.bar_date - prev.bar_date == timedelta(days=1)


def test_candle_price_and_volume_bounds():
    for seed in range(20):
        for candle in generate_candles(60, rng=random.Random(seed)):
            assert candle.low <= candle.open <= candle.high
            assert candle.low <= candle.close <= candle.high
            assert MIN_VOLUME <= candle.volume < MAX_VOLUME


def test_same_seed_gives_same_series():
    today = date(2024, 1, 1)
    assert generate_candles(10, today=today, rng=random.Random(3)) == \
        generate_candles(10, today=today, rng=random.Random(3))


def test_first_bar_starts_near_base_price():
    first = generate_candles(1, base_price=200.0, rng=random.Random(1))[0]
    # close = 200 ± 200 * 0.05 / 2
    assert Decimal("195") <= first.close <= Decimal("205")


@pytest.mark.parametrize("days", [0, -5])
def test_non_positive_days_rejected(days):
    with pytest.raises(ValueError):
        generate_candles(days)


def test_generated_quote_is_consistent():
    for seed in range(20):
        quote = generate_quote("MSFT", rng=random.Random(seed))
        assert quote.symbol == "MSFT"
        assert Decimal("100") <= quote.price <= Decimal("150")
        assert quote.low < quote.price < quote.high
        assert abs(quote.price - quote.prev_close) <= Decimal("2.51")


def test_fallback_quote_is_flat():
    quote = fallback_quote("TSM")
    assert quote.price == FALLBACK_PRICE == Decimal("150")
    assert quote.change == 0
    assert quote.percent_change == 0
    assert quote.high == quote.low == quote.open == quote.prev_close == FALLBACK_PRICE
