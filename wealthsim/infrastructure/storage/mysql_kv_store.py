# wealthsim/infrastructure/storage/mysql_kv_store.py

from __future__ import annotations

from typing import Mapping, Optional

from wealthsim.domain.services_interfaces.i_key_value_store import IKeyValueStore
from .mysql_connection import MySQLConnectionProvider


class MySQLKeyValueStore(IKeyValueStore):
    """
    IKeyValueStore'un MySQL implementasyonu.
    kv_blobs tablosuna erişir; tablo yoksa ilk kullanımda oluşturulur.
    """

    _CREATE_TABLE_SQL = """
        CREATE TABLE IF NOT EXISTS kv_blobs (
            blob_key   VARCHAR(191) NOT NULL PRIMARY KEY,
            blob_value LONGTEXT     NOT NULL,
            updated_at TIMESTAMP    NOT NULL DEFAULT CURRENT_TIMESTAMP
                                    ON UPDATE CURRENT_TIMESTAMP
        )
    """

    _UPSERT_SQL = """
        INSERT INTO kv_blobs (blob_key, blob_value)
        VALUES (%s, %s)
        ON DUPLICATE KEY UPDATE
            blob_value = VALUES(blob_value)
    """

    def __init__(self, connection_provider: MySQLConnectionProvider) -> None:
        self._cp = connection_provider
        self._schema_ready = False

    def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        with self._cp.transaction() as cursor:
            cursor.execute(self._CREATE_TABLE_SQL)
        self._schema_ready = True

    # ---------- READ ---------- #

    def get(self, key: str) -> Optional[str]:
        self._ensure_schema()
        sql = "SELECT blob_value FROM kv_blobs WHERE blob_key = %s"
        with self._cp.transaction() as cursor:
            cursor.execute(sql, (key,))
            row = cursor.fetchone()

        if row is None:
            return None
        return row[0]

    # ---------- WRITE ---------- #

    def set(self, key: str, value: str) -> None:
        self._ensure_schema()
        with self._cp.transaction() as cursor:
            cursor.execute(self._UPSERT_SQL, (key, value))

    def set_many(self, items: Mapping[str, str]) -> None:
        """
        Tüm anahtarlar tek transaction içinde yazılır.
        Hata olursa transaction() rollback yapar.
        """
        if not items:
            return
        self._ensure_schema()
        params = [(key, value) for key, value in items.items()]
        with self._cp.transaction() as cursor:
            cursor.executemany(self._UPSERT_SQL, params)

    def delete(self, key: str) -> None:
        self._ensure_schema()
        with self._cp.transaction() as cursor:
            cursor.execute("DELETE FROM kv_blobs WHERE blob_key = %s", (key,))
