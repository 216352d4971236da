# wealthsim/domain/models/settlement.py

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence
from uuid import uuid4

from .asset import Asset, CashAsset, StockAsset
from .transaction import TradeSide, Transaction
from wealthsim.domain.exceptions import InsufficientFundsError, InsufficientPositionError

DEFAULT_CASH_NAME = "Nakit"
DEFAULT_STOCK_COLOR = "#fb7185"


@dataclass(frozen=True)
class SettlementResult:
    """
    Settlement sonrası güncel varlık listesi ve yeni işlem kaydı.
    """
    assets: List[Asset]
    transaction: Transaction
    cash: CashAsset
    stock: Optional[StockAsset]


def find_cash(assets: Sequence[Asset]) -> Optional[CashAsset]:
    """Bakiye olarak kullanılan ilk CASH varlığını döner."""
    for asset in assets:
        if isinstance(asset, CashAsset):
            return asset
    return None


def find_stock(assets: Sequence[Asset], symbol: str) -> Optional[StockAsset]:
    """Sembole ait STOCK varlığını döner; yoksa None."""
    for asset in assets:
        if isinstance(asset, StockAsset) and asset.symbol == symbol:
            return asset
    return None


def _replace_or_append(assets: List[Asset], updated: Asset) -> None:
    for index, asset in enumerate(assets):
        if asset.id == updated.id:
            assets[index] = updated
            return
    assets.append(updated)


def _apply_cash(
    side: TradeSide,
    cash: Optional[CashAsset],
    total: Decimal,
) -> CashAsset:
    """
    Nakit tarafı:
        - BUY: bakiye yetmiyorsa InsufficientFundsError, kısmi dolum yok
        - SELL: satış tutarı koşulsuz eklenir
    """
    balance = cash.value if cash is not None else Decimal("0")

    if side == TradeSide.BUY:
        # total > 0 olduğundan nakit kaydı yoksa burada hata fırlatılır.
        if cash is None or balance < total:
            raise InsufficientFundsError(required=total, available=balance)
        return replace(cash, value=balance - total)

    if cash is None:
        return CashAsset(id=uuid4().hex, name=DEFAULT_CASH_NAME, value=total)
    return replace(cash, value=balance + total)


def _apply_stock(
    side: TradeSide,
    symbol: str,
    quantity: int,
    price: Decimal,
    existing: Optional[StockAsset],
) -> Optional[StockAsset]:
    """
    Hisse tarafı.
    Ağırlıklı ortalama maliyet:
        yeni_ortalama = (eski_ortalama * eski_adet + toplam) / (eski_adet + adet)
    Satış ortalama maliyeti değiştirmez.
    """
    total = price * Decimal(quantity)

    if side == TradeSide.BUY:
        if existing is None:
            return StockAsset(
                id=uuid4().hex,
                name=symbol,
                symbol=symbol,
                quantity=quantity,
                avg_cost=price,
                value=total,
                color=DEFAULT_STOCK_COLOR,
            )
        new_qty = existing.quantity + quantity
        new_avg = (existing.avg_cost * Decimal(existing.quantity) + total) / Decimal(new_qty)
        return replace(
            existing,
            quantity=new_qty,
            avg_cost=new_avg,
            value=price * Decimal(new_qty),
        )

    if existing is None:
        return None

    new_qty = max(existing.quantity - quantity, 0)
    if new_qty == 0:
        # Ortalama maliyet korunur; adet 0 iken bir sonraki alışın ortalamasını etkilemez.
        return replace(existing, quantity=0, value=Decimal("0"))
    return replace(existing, quantity=new_qty, value=existing.avg_cost * Decimal(new_qty))


def settle(
    side: TradeSide,
    symbol: str,
    quantity: int,
    quote_price: Decimal,
    assets: Sequence[Asset],
    trade_date: Optional[date] = None,
    allow_uncovered_sell: bool = True,
) -> SettlementResult:
    """
    Tek bir simülasyon işlemini nakit ve hisse varlıklarına uygular.

    Fonksiyon saf: verilen listeyi değiştirmez, güncel listeyi döner.
    Kalıcı yazma işini çağıran servis yapar.

    Raises:
        ValueError: quantity <= 0 veya quote_price <= 0
        InsufficientFundsError: BUY tutarı bakiyeyi aşıyorsa
        InsufficientPositionError: pozisyonsuz SELL ve allow_uncovered_sell=False
    """
    if not isinstance(quote_price, Decimal):
        quote_price = Decimal(str(quote_price))

    if quantity <= 0:
        raise ValueError("Quantity must be positive")
    if quote_price <= 0:
        raise ValueError("Price must be positive")

    side = TradeSide(side)
    total = quote_price * Decimal(quantity)
    existing_stock = find_stock(assets, symbol)

    if side == TradeSide.SELL and existing_stock is None and not allow_uncovered_sell:
        raise InsufficientPositionError(symbol)

    cash = _apply_cash(side, find_cash(assets), total)
    stock = _apply_stock(side, symbol, quantity, quote_price, existing_stock)

    updated: List[Asset] = list(assets)
    _replace_or_append(updated, cash)
    if stock is not None:
        _replace_or_append(updated, stock)

    transaction = Transaction.record(
        side=side,
        symbol=symbol,
        price=quote_price,
        quantity=quantity,
        trade_date=trade_date or date.today(),
    )
    return SettlementResult(assets=updated, transaction=transaction, cash=cash, stock=stock)
