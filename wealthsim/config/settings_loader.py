# wealthsim/config/settings_loader.py

from __future__ import annotations
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from wealthsim.infrastructure.storage.mysql_connection import MySQLConfig

DEFAULT_STORE_PATH = "~/.wealthsim/store.json"
DEFAULT_AI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_AI_MODEL = "gemini-2.5-flash"
DEFAULT_FINNHUB_BASE_URL = "https://finnhub.io/api/v1"

STORE_BACKENDS = ("file", "mysql", "memory")


@dataclass
class AppSettings:
    """
    Uygulama ayarları. İki kimlik bilgisi de opsiyoneldir:
      - finnhub_api_key yoksa piyasa verisi tamamen simülasyondur
      - ai_api_key yoksa analiz şablon metinle döner
    """
    finnhub_api_key: Optional[str]
    finnhub_base_url: str
    ai_api_key: Optional[str]
    ai_base_url: Optional[str]
    ai_model: str
    store_backend: str
    store_path: Path
    mysql: MySQLConfig
    simulated_latency: float
    request_timeout: float
    default_symbol: str
    log_level: str


def _optional(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def load_settings() -> AppSettings:
    """
    .env dosyasını okuyarak AppSettings nesnesi oluşturur.
    """
    load_dotenv()  # .env otomatik yukarıya doğru taranır (Geliştirme ortamı için)

    # Exe modunda (Nuitka/PyInstaller) .env dosyasını paket klasöründen oku
    if getattr(sys, "frozen", False):
        base_path = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
        env_path = os.path.join(base_path, ".env")
        if os.path.exists(env_path):
            load_dotenv(env_path)

    store_backend = os.getenv("STORE_BACKEND", "file").strip().lower()
    if store_backend not in STORE_BACKENDS:
        raise ValueError(
            f"Geçersiz STORE_BACKEND: {store_backend!r} (beklenen: {', '.join(STORE_BACKENDS)})"
        )

    mysql_config = MySQLConfig(
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "3306")),
        user=os.getenv("DB_USER", "root"),
        password=os.getenv("DB_PASSWORD", ""),
        database=os.getenv("DB_NAME", "wealthsim"),
        pool_name=os.getenv("POOL_NAME", "wealthsim_pool"),
        pool_size=int(os.getenv("POOL_SIZE", "5")),
    )

    ai_api_key = _optional("AI_API_KEY") or _optional("GEMINI_API_KEY") or _optional("API_KEY")

    return AppSettings(
        finnhub_api_key=_optional("FINNHUB_API_KEY"),
        finnhub_base_url=os.getenv("FINNHUB_BASE_URL", DEFAULT_FINNHUB_BASE_URL),
        ai_api_key=ai_api_key,
        ai_base_url=_optional("AI_BASE_URL") or DEFAULT_AI_BASE_URL,
        ai_model=os.getenv("AI_MODEL", DEFAULT_AI_MODEL),
        store_backend=store_backend,
        store_path=Path(os.getenv("STORE_PATH", DEFAULT_STORE_PATH)).expanduser(),
        mysql=mysql_config,
        simulated_latency=float(os.getenv("SIMULATED_LATENCY", "0.5")),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "10")),
        default_symbol=os.getenv("DEFAULT_SYMBOL", "AAPL").strip().upper(),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
