"""
Ortak fixture'lar: bellek içi store ve sahte quote üretici.
"""

from decimal import Decimal

import pytest

from wealthsim.domain.models.market import StockQuote
from wealthsim.infrastructure.storage.memory_store import InMemoryKeyValueStore
from wealthsim.infrastructure.storage.portfolio_store import KeyValuePortfolioStore


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv_store):
    return KeyValuePortfolioStore(kv_store)


@pytest.fixture
def make_quote():
    def _make(symbol="AAPL", price="150"):
        price = Decimal(price)
        return StockQuote(
            symbol=symbol,
            price=price,
            change=Decimal("0"),
            percent_change=Decimal("0"),
            high=price,
            low=price,
            open=price,
            prev_close=price,
        )

    return _make
