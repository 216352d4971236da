# wealthsim/infrastructure/storage/json_file_store.py

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Mapping, Optional

from wealthsim.domain.services_interfaces.i_key_value_store import IKeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(IKeyValueStore):
    """
    Tüm anahtarları tek bir JSON dosyasında tutan yerel store.

    Notlar:
      - Dosya { "anahtar": "değer", ... } şeklinde düz bir sözlüktür.
      - Her yazım geçici dosyaya yapılıp os.replace ile taşınır;
        yarım kalan yazım eski içeriği bozmaz.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    # ----------------- Yardımcı metotlar ----------------- #

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        with open(self._path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Store dosyası bozuk: {self._path}")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            prefix=".store-", suffix=".json", dir=str(self._path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug("Store yazıldı: %s (%d anahtar)", self._path, len(data))

    # ----------------- IKeyValueStore ----------------- #

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        data = self._read_all()
        data.update(items)
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
