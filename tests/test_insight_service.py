from datetime import date, timedelta
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from openai import OpenAIError

from wealthsim.application.services.insight_service import (
    NO_RESPONSE_TEXT,
    SERVICE_DOWN_TEXT,
    MarketInsightService,
)
from wealthsim.domain.exceptions import UpstreamUnavailableError
from wealthsim.domain.models.market import CandleData
from wealthsim.infrastructure.ai.openai_text_generator import OpenAITextGenerator


@pytest.fixture
def candles():
    start = date(2024, 1, 1)
    return [
        CandleData(
            bar_date=start + timedelta(days=i),
            open=Decimal(i),
            high=Decimal(i),
            low=Decimal(i),
            close=Decimal(i),
            volume=1000,
        )
        for i in range(1, 8)
    ]


class TestMarketInsightService:
    def test_offline_text_without_generator(self, make_quote, candles):
        service = MarketInsightService()
        quote = make_quote("AAPL", "150")

        text = service.explain("AAPL", quote, candles)

        assert not service.is_live
        assert "AAPL" in text
        assert "150" in text
        assert text == service.explain("AAPL", quote, candles)

    def test_prompt_contains_last_five_closes(self, make_quote, candles):
        prompt = MarketInsightService.build_prompt("AAPL", make_quote("AAPL", "182.5"), candles)

        assert "Recent closing prices: 3, 4, 5, 6, 7" in prompt
        assert "Price: 182.5" in prompt
        assert "Turkish" in prompt

    def test_generator_text_is_returned(self, make_quote, candles):
        generator = MagicMock()
        generator.generate.return_value = "Piyasa nötr."
        service = MarketInsightService(generator)
        quote = make_quote()

        assert service.explain("AAPL", quote, candles) == "Piyasa nötr."
        generator.generate.assert_called_once_with(
            MarketInsightService.build_prompt("AAPL", quote, candles)
        )

    def test_upstream_error_returns_apology(self, make_quote, candles):
        generator = MagicMock()
        generator.generate.side_effect = UpstreamUnavailableError("quota")
        assert MarketInsightService(generator).explain("AAPL", make_quote(), candles) == SERVICE_DOWN_TEXT

    @pytest.mark.parametrize("empty", [None, ""])
    def test_empty_response_returns_placeholder(self, make_quote, candles, empty):
        generator = MagicMock()
        generator.generate.return_value = empty
        assert MarketInsightService(generator).explain("AAPL", make_quote(), candles) == NO_RESPONSE_TEXT


def _completion(*contents):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=c)) for c in contents]
    )


class TestOpenAITextGenerator:
    def test_single_user_message(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _completion("  Yükseliş eğilimi.  ")
        generator = OpenAITextGenerator("key", model="test-model", client=client)

        assert generator.generate("prompt") == "Yükseliş eğilimi."
        client.chat.completions.create.assert_called_once_with(
            model="test-model",
            messages=[{"role": "user", "content": "prompt"}],
        )

    def test_sdk_error_becomes_upstream_error(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = OpenAIError("401")
        with pytest.raises(UpstreamUnavailableError):
            OpenAITextGenerator("key", client=client).generate("prompt")

    @pytest.mark.parametrize("completion", [_completion(), _completion("   "), _completion(None)])
    def test_blank_completion_is_none(self, completion):
        client = MagicMock()
        client.chat.completions.create.return_value = completion
        assert OpenAITextGenerator("key", client=client).generate("prompt") is None

    def test_api_key_is_required(self):
        with pytest.raises(ValueError):
            OpenAITextGenerator("", client=MagicMock())
