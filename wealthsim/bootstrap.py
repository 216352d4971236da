# wealthsim/bootstrap.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from wealthsim.config.settings_loader import AppSettings
from wealthsim.domain.services_interfaces.i_key_value_store import IKeyValueStore
from wealthsim.infrastructure.storage.json_file_store import JsonFileKeyValueStore
from wealthsim.infrastructure.storage.memory_store import InMemoryKeyValueStore
from wealthsim.infrastructure.storage.mysql_connection import MySQLConnectionProvider
from wealthsim.infrastructure.storage.mysql_kv_store import MySQLKeyValueStore
from wealthsim.infrastructure.storage.portfolio_store import KeyValuePortfolioStore
from wealthsim.infrastructure.market_data.finnhub_client import FinnhubMarketDataClient
from wealthsim.infrastructure.ai.openai_text_generator import OpenAITextGenerator

from wealthsim.application.services.insight_service import MarketInsightService
from wealthsim.application.services.market_data_gateway import MarketDataGateway
from wealthsim.application.services.market_refresh_service import MarketRefreshService
from wealthsim.application.services.portfolio_service import PortfolioService
from wealthsim.application.services.trade_service import TradeService

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    portfolio_service: PortfolioService
    trade_service: TradeService
    gateway: MarketDataGateway
    refresh_service: MarketRefreshService
    insight_service: MarketInsightService


def build_kv_store(settings: AppSettings) -> IKeyValueStore:
    if settings.store_backend == "mysql":
        return MySQLKeyValueStore(MySQLConnectionProvider(settings.mysql))
    if settings.store_backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(settings.store_path)


def build_services(settings: AppSettings) -> AppServices:
    # 1) Store
    kv_store = build_kv_store(settings)
    store = KeyValuePortfolioStore(kv_store)

    # 2) Market data client (Finnhub, anahtar varsa)
    live_client = None
    if settings.finnhub_api_key:
        live_client = FinnhubMarketDataClient(
            api_key=settings.finnhub_api_key,
            base_url=settings.finnhub_base_url,
            timeout=settings.request_timeout,
        )
    else:
        logger.info("FINNHUB_API_KEY tanımlı değil, sadece simülasyon modu kullanılacak.")

    # 3) Metin servisi (anahtar varsa)
    text_generator = None
    if settings.ai_api_key:
        text_generator = OpenAITextGenerator(
            api_key=settings.ai_api_key,
            model=settings.ai_model,
            base_url=settings.ai_base_url,
        )
    else:
        logger.info("AI API anahtarı tanımlı değil, analizler şablon metinle dönecek.")

    # 4) Services
    gateway = MarketDataGateway(live_client, simulated_latency=settings.simulated_latency)
    return AppServices(
        portfolio_service=PortfolioService(store),
        trade_service=TradeService(store),
        gateway=gateway,
        refresh_service=MarketRefreshService(gateway),
        insight_service=MarketInsightService(text_generator),
    )
