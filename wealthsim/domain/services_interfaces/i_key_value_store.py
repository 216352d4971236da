# wealthsim/domain/services_interfaces/i_key_value_store.py

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class IKeyValueStore(ABC):
    """
    Genel amaçlı anahtar/değer blob deposu.

    Değerler düz string (JSON metni) olarak saklanır;
    yorumlama işi üst katmandaki portföy store'unundur.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Anahtarın değerini döner. Anahtar yoksa None."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Tek bir anahtarı yazar (varsa üzerine yazar)."""
        raise NotImplementedError

    @abstractmethod
    def set_many(self, items: Mapping[str, str]) -> None:
        """
        Birden fazla anahtarı tek seferde yazar.
        Ya hepsi yazılır ya hiçbiri (settlement bunu kullanır).
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Anahtarı siler. Yoksa sessizce geçer."""
        raise NotImplementedError
