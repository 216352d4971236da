# wealthsim/domain/services_interfaces/i_portfolio_store.py

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from wealthsim.domain.models.asset import Asset
from wealthsim.domain.models.transaction import Transaction


class IPortfolioStore(ABC):
    """
    Varlık ve işlem koleksiyonlarına erişim için soyut arayüz.

    Amaç:
      - Servis katmanı bu interface'e göre programlar
      - Dosya / MySQL / bellek fark etmeksizin concrete store bu interface'i uygular.
      - Koleksiyon hiç yazılmamışsa ilk okumada varsayılan veriler yazılır.
    """

    # --------- READ operasyonları --------- #

    @abstractmethod
    def load_assets(self) -> List[Asset]:
        """Tüm varlık kayıtlarını döner."""
        raise NotImplementedError

    @abstractmethod
    def load_transactions(self) -> List[Transaction]:
        """Tüm işlem kayıtlarını en yeniden eskiye döner."""
        raise NotImplementedError

    # --------- WRITE operasyonları --------- #

    @abstractmethod
    def save_assets(self, assets: Sequence[Asset]) -> None:
        """Varlık koleksiyonunu bütünüyle yazar."""
        raise NotImplementedError

    @abstractmethod
    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        """İşlem koleksiyonunu bütünüyle yazar."""
        raise NotImplementedError

    @abstractmethod
    def save_asset(self, asset: Asset) -> List[Asset]:
        """
        Tek bir varlığı ekler veya id'si eşleşen kaydı günceller.
        Dönüş: güncel varlık listesi.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_asset(self, asset_id: str) -> List[Asset]:
        """Varlığı siler. Dönüş: güncel varlık listesi."""
        raise NotImplementedError

    @abstractmethod
    def add_transaction(self, transaction: Transaction) -> List[Transaction]:
        """İşlemi listenin başına ekler. Dönüş: güncel işlem listesi."""
        raise NotImplementedError

    @abstractmethod
    def save_settlement(self, assets: Sequence[Asset], transaction: Transaction) -> None:
        """
        Settlement sonucunu (güncel varlıklar + yeni işlem) tek yazımda kaydeder.
        Nakit ve hisse güncellemesi ile işlem kaydı birlikte yazılır ya da hiç yazılmaz.
        """
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Koleksiyonları varsayılan verilere döndürür."""
        raise NotImplementedError
