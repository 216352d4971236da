# wealthsim/application/services/trade_service.py

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from wealthsim.domain.models.market import StockQuote
from wealthsim.domain.models.settlement import SettlementResult, settle
from wealthsim.domain.models.transaction import TradeSide, Transaction
from wealthsim.domain.services_interfaces.i_portfolio_store import IPortfolioStore

logger = logging.getLogger(__name__)


class TradeService:
    """
    Simülasyon alım/satım işlemlerini yöneten application servisi.

    - Store'dan güncel varlıkları okur
    - settle() ile nakit/hisse güncellemesini hesaplar
    - Sonucu (varlıklar + işlem kaydı) tek yazımda store'a kaydeder

    Fiyat bu servisin içinde çekilmez; çağıran taraf quote'u verir.
    """

    def __init__(
        self,
        store: IPortfolioStore,
        allow_uncovered_sell: bool = True,
    ) -> None:
        self._store = store
        self._allow_uncovered_sell = allow_uncovered_sell

    def execute(
        self,
        side: TradeSide,
        quantity: int,
        quote: StockQuote,
        trade_date: Optional[date] = None,
    ) -> SettlementResult:
        """
        Quote'taki sembol ve fiyatla işlemi gerçekleştirir.

        Raises:
            ValueError: geçersiz adet/fiyat
            InsufficientFundsError: bakiye yetersiz (hiçbir kayıt değişmez)
        """
        return self.execute_at_price(
            side=side,
            symbol=quote.symbol,
            quantity=quantity,
            price=quote.price,
            trade_date=trade_date,
        )

    def execute_at_price(
        self,
        side: TradeSide,
        symbol: str,
        quantity: int,
        price,
        trade_date: Optional[date] = None,
    ) -> SettlementResult:
        assets = self._store.load_assets()
        result = settle(
            side=side,
            symbol=symbol,
            quantity=quantity,
            quote_price=price,
            assets=assets,
            trade_date=trade_date,
            allow_uncovered_sell=self._allow_uncovered_sell,
        )

        self._store.save_settlement(result.assets, result.transaction)

        tx = result.transaction
        logger.info(
            "İşlem gerçekleşti: %s %s x%d @ %s (toplam %s), kalan nakit %s",
            tx.side.value,
            tx.symbol,
            tx.quantity,
            tx.price,
            tx.total,
            result.cash.value,
        )
        return result

    def recent_transactions(self, limit: Optional[int] = None) -> List[Transaction]:
        """İşlem geçmişi, en yeni başta."""
        transactions = self._store.load_transactions()
        if limit is not None:
            return transactions[:limit]
        return transactions
