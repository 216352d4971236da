# wealthsim/application/services/insight_service.py

from __future__ import annotations

import logging
from typing import Optional, Sequence

from wealthsim.domain.exceptions import UpstreamUnavailableError
from wealthsim.domain.models.market import CandleData, StockQuote
from wealthsim.domain.services_interfaces.i_text_generator import ITextGenerator

logger = logging.getLogger(__name__)

RECENT_CLOSE_COUNT = 5

NO_RESPONSE_TEXT = "Yapay zeka analizi şu an yanıt vermedi."
SERVICE_DOWN_TEXT = "Yapay zeka analiz servisi şu an kullanılamıyor, lütfen daha sonra tekrar deneyin."


class MarketInsightService:
    """
    Fiyat ve mum verisinden kısa bir piyasa yorumu ister.

    - Metin servisi tanımlı değilse ağ çağrısı yapmadan şablon metin döner.
    - Tanımlıysa tek bir istek atılır; hata veya boş yanıtta özür metni döner.
    """

    def __init__(self, text_generator: Optional[ITextGenerator] = None) -> None:
        self._text_generator = text_generator

    @property
    def is_live(self) -> bool:
        return self._text_generator is not None

    @staticmethod
    def build_prompt(symbol: str, quote: StockQuote, candles: Sequence[CandleData]) -> str:
        """
        Sabit formatlı prompt: fiyat, yüzde değişim ve son 5 kapanış.
        """
        recent_closes = ", ".join(str(c.close) for c in candles[-RECENT_CLOSE_COUNT:])
        return (
            f"You are a professional Wall Street analyst. Give a short, sharp analysis of {symbol}.\n"
            f"\n"
            f"Current data:\n"
            f"- Price: {quote.price}\n"
            f"- Change: {quote.percent_change}%\n"
            f"- Recent closing prices: {recent_closes}\n"
            f"\n"
            f"Please provide:\n"
            f"1. Market sentiment summary (Bullish/Bearish/Neutral)\n"
            f"2. Three key observations\n"
            f"3. Concrete suggestions for retail investors\n"
            f"\n"
            f"Answer in Turkish, in a professional but friendly tone. Do not use Markdown; plain paragraphs only."
        )

    @staticmethod
    def offline_analysis(symbol: str, quote: StockQuote) -> str:
        """
        API anahtarı yokken gösterilen deterministik şablon metin.
        """
        return (
            "[Simülasyon Analizi]\n"
            "API anahtarı bulunamadığı için simülasyon analiz modu kullanılıyor.\n"
            f"{symbol} için güncel fiyat {quote.price}. Teknik açıdan son dönemde yatay bir seyir görülüyor.\n"
            "Yatırımcılara öneriler:\n"
            "1. İşlem hacmindeki değişimi takip edin.\n"
            f"2. Destek seviyesi yaklaşık {quote.low}.\n"
            f"3. {quote.high} üzerine çıkış yükseliş sinyali olarak değerlendirilebilir.\n"
            "(Bu metin simülasyonla üretilmiştir, gerçek analiz için API anahtarı tanımlayın.)"
        )

    def explain(self, symbol: str, quote: StockQuote, candles: Sequence[CandleData]) -> str:
        if self._text_generator is None:
            return self.offline_analysis(symbol, quote)

        prompt = self.build_prompt(symbol, quote, candles)
        try:
            text = self._text_generator.generate(prompt)
        except UpstreamUnavailableError as exc:
            logger.warning("%s için yapay zeka analizi alınamadı: %s", symbol, exc)
            return SERVICE_DOWN_TEXT

        if not text:
            logger.warning("%s için yapay zeka boş yanıt döndü", symbol)
            return NO_RESPONSE_TEXT
        return text
