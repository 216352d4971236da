# wealthsim/domain/exceptions.py

from __future__ import annotations

from decimal import Decimal


class InsufficientFundsError(ValueError):
    """
    Alış tutarı nakit bakiyesini aşıyor. Kullanıcıya gösterilir, durum değişmez.
    """

    def __init__(self, required: Decimal, available: Decimal) -> None:
        super().__init__(
            f"Yetersiz bakiye. Gereken: {required:.2f}, Mevcut: {available:.2f}"
        )
        self.required = required
        self.available = available


class InsufficientPositionError(ValueError):
    """
    Eldeki pozisyon olmadan satış denemesi (yalnızca açık satışa izin verilmiyorsa).
    """

    def __init__(self, symbol: str) -> None:
        super().__init__(f"{symbol} için satılacak pozisyon yok.")
        self.symbol = symbol


class UpstreamUnavailableError(Exception):
    """
    Dış servis (piyasa verisi / metin servisi) yanıt vermedi.
    Sadece fallback'i sahiplenen katmanda yakalanır, kullanıcıya ulaşmaz.
    """


class MalformedResponseError(UpstreamUnavailableError):
    """
    Dış servis yanıt verdi ama içerik beklenen formatta değil.
    """
