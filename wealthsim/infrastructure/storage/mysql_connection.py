# wealthsim/infrastructure/storage/mysql_connection.py

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generator, Optional

from mysql.connector import pooling
from mysql.connector.cursor import MySQLCursor

logger = logging.getLogger(__name__)


@dataclass
class MySQLConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_name: str = "wealthsim_pool"
    pool_size: int = 5

    def pool_kwargs(self) -> Dict[str, Any]:
        return {
            "pool_name": self.pool_name,
            "pool_size": self.pool_size,
            "pool_reset_session": True,
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": self.database,
        }


class MySQLConnectionProvider:
    """
    Key-value store için MySQL bağlantı havuzu.

    - Havuz ilk transaction'da açılır; STORE_BACKEND=mysql seçilmese bile
      bu sınıfı oluşturmak sunucuya bağlanmaz.
    - transaction() bir cursor verir: blok hatasız biterse commit,
      hata olursa rollback; bağlantı her durumda havuza döner.
    """

    def __init__(
        self,
        config: MySQLConfig,
        pool_factory: Callable[..., Any] = pooling.MySQLConnectionPool,
    ) -> None:
        self._config = config
        self._pool_factory = pool_factory
        self._pool: Optional[Any] = None

    def _get_pool(self):
        if self._pool is None:
            logger.info(
                "MySQL havuzu açılıyor: %s@%s:%s/%s (boyut=%d)",
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
                self._config.pool_size,
            )
            self._pool = self._pool_factory(**self._config.pool_kwargs())
        return self._pool

    @contextmanager
    def transaction(self) -> Generator[MySQLCursor, None, None]:
        """
        with provider.transaction() as cursor: şeklinde kullan.
        Blok içindeki tüm sorgular tek transaction'dır.
        """
        conn = self._get_pool().get_connection()
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except Exception:
            logger.warning("MySQL transaction geri alındı", exc_info=True)
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
