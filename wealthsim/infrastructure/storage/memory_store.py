# wealthsim/infrastructure/storage/memory_store.py

from __future__ import annotations

from typing import Dict, Mapping, Optional

from wealthsim.domain.services_interfaces.i_key_value_store import IKeyValueStore


class InMemoryKeyValueStore(IKeyValueStore):
    """
    Süreç ömrü boyunca yaşayan dict tabanlı store.
    Testlerde ve STORE_BACKEND=memory ile kalıcılık olmadan çalışırken kullanılır.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
