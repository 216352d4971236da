# wealthsim/infrastructure/storage/portfolio_store.py

from __future__ import annotations

import json
import logging
from typing import Any, Callable, List, Sequence, TypeVar

from wealthsim.domain.models.asset import Asset, asset_from_dict, asset_to_dict
from wealthsim.domain.models.defaults import default_assets, default_transactions
from wealthsim.domain.models.transaction import Transaction
from wealthsim.domain.services_interfaces.i_key_value_store import IKeyValueStore
from wealthsim.domain.services_interfaces.i_portfolio_store import IPortfolioStore

logger = logging.getLogger(__name__)

ASSETS_KEY = "wealth_assets"
TRANSACTIONS_KEY = "wealth_transactions"

T = TypeVar("T")


class KeyValuePortfolioStore(IPortfolioStore):
    """
    IPortfolioStore'un anahtar/değer store üzerindeki implementasyonu.

    Her koleksiyon sabit bir anahtar altında tek bir JSON dizisi olarak durur:
      - wealth_assets       → varlıklar
      - wealth_transactions → işlemler (en yeni başta)

    Anahtar yoksa ilk okumada varsayılan veri yazılır ve döndürülür.
    """

    def __init__(self, kv_store: IKeyValueStore) -> None:
        self._kv = kv_store

    # ---------- Blob → Domain Mapper ---------- #

    @staticmethod
    def _dump(items: Sequence[Any], to_dict: Callable[[Any], dict]) -> str:
        return json.dumps([to_dict(item) for item in items], ensure_ascii=False)

    def _load_collection(
        self,
        key: str,
        from_dict: Callable[[dict], T],
        to_dict: Callable[[T], dict],
        seed: Callable[[], List[T]],
    ) -> List[T]:
        stored = self._kv.get(key)
        if stored is None:
            items = seed()
            self._kv.set(key, self._dump(items, to_dict))
            logger.info("'%s' koleksiyonu varsayılan verilerle oluşturuldu (%d kayıt).", key, len(items))
            return items

        raw = json.loads(stored)
        if not isinstance(raw, list):
            raise ValueError(f"'{key}' koleksiyonu JSON dizisi değil.")
        return [from_dict(row) for row in raw]

    # ---------- READ operasyonları ---------- #

    def load_assets(self) -> List[Asset]:
        return self._load_collection(ASSETS_KEY, asset_from_dict, asset_to_dict, default_assets)

    def load_transactions(self) -> List[Transaction]:
        return self._load_collection(
            TRANSACTIONS_KEY,
            Transaction.from_dict,
            Transaction.to_dict,
            default_transactions,
        )

    # ---------- WRITE operasyonları ---------- #

    def save_assets(self, assets: Sequence[Asset]) -> None:
        self._kv.set(ASSETS_KEY, self._dump(assets, asset_to_dict))

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        self._kv.set(TRANSACTIONS_KEY, self._dump(transactions, Transaction.to_dict))

    def save_asset(self, asset: Asset) -> List[Asset]:
        assets = self.load_assets()
        for index, existing in enumerate(assets):
            if existing.id == asset.id:
                assets[index] = asset
                break
        else:
            assets.append(asset)

        self.save_assets(assets)
        return assets

    def delete_asset(self, asset_id: str) -> List[Asset]:
        assets = [a for a in self.load_assets() if a.id != asset_id]
        self.save_assets(assets)
        return assets

    def add_transaction(self, transaction: Transaction) -> List[Transaction]:
        transactions = self.load_transactions()
        transactions.insert(0, transaction)
        self.save_transactions(transactions)
        return transactions

    def save_settlement(self, assets: Sequence[Asset], transaction: Transaction) -> None:
        transactions = self.load_transactions()
        transactions.insert(0, transaction)
        self._kv.set_many(
            {
                ASSETS_KEY: self._dump(assets, asset_to_dict),
                TRANSACTIONS_KEY: self._dump(transactions, Transaction.to_dict),
            }
        )

    def reset(self) -> None:
        self._kv.set_many(
            {
                ASSETS_KEY: self._dump(default_assets(), asset_to_dict),
                TRANSACTIONS_KEY: self._dump(default_transactions(), Transaction.to_dict),
            }
        )
        logger.info("Portföy varsayılan verilere döndürüldü.")
