# wealthsim/domain/services_interfaces/i_text_generator.py

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class ITextGenerator(ABC):
    """
    Tek seferlik metin üretim servisi (prompt → düz metin).
    Tekrar deneme, streaming veya sohbet geçmişi yok.
    """

    @abstractmethod
    def generate(self, prompt: str) -> Optional[str]:
        """
        Prompt'u gönderir ve üretilen metni döner.
        Servis boş yanıt dönerse None.
        """
        raise NotImplementedError
