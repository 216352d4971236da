# wealthsim/infrastructure/ai/openai_text_generator.py

from __future__ import annotations

import logging
from typing import Any, Optional

from openai import OpenAI, OpenAIError

from wealthsim.domain.exceptions import UpstreamUnavailableError
from wealthsim.domain.services_interfaces.i_text_generator import ITextGenerator

logger = logging.getLogger(__name__)

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODEL = "gemini-2.5-flash"


class OpenAITextGenerator(ITextGenerator):
    """
    ITextGenerator'ı OpenAI uyumlu chat completions uç noktası ile implemente eder.

    base_url sayesinde Gemini'nin OpenAI uyumlu uç noktası
    veya başka bir uyumlu servis kullanılabilir.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: Optional[str] = GEMINI_OPENAI_BASE_URL,
        timeout: float = 30,
        client: Optional[Any] = None,
    ) -> None:
        if not api_key:
            raise ValueError("AI API key is required")
        self._model = model
        self._client = client or OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    @property
    def model(self) -> str:
        return self._model

    def generate(self, prompt: str) -> Optional[str]:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIError as exc:
            raise UpstreamUnavailableError(f"Metin servisi isteği başarısız: {exc}") from exc

        if not response.choices:
            return None
        text = response.choices[0].message.content
        if not text or not text.strip():
            return None
        return text.strip()
