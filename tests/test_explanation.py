"""
Gemini 설명 서비스 테스트

실제 API를 호출하지 않도록 모듈의 ``genai``를 가짜 객체로 교체합니다.
"""
from __future__ import annotations

from types import SimpleNamespace

import pytest

from smartstock.domain.models import ForecastResult
from smartstock.services import explanation

FORECAST = ForecastResult("P001", 8.0, 56, 12.5, 31)


class FakeGenAI:
    """google.generativeai 대역. 마지막 호출 정보를 기록합니다."""

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.api_key = None
        self.model_name = None
        self.system_instruction = None
        self.prompts = []

    def configure(self, api_key):
        self.api_key = api_key

    def GenerativeModel(self, model_name, system_instruction=None):
        self.model_name = model_name
        self.system_instruction = system_instruction
        return SimpleNamespace(generate_content=self._generate_content)

    def _generate_content(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


@pytest.fixture
def with_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.delenv("GEMINI_MODEL", raising=False)


def _install(monkeypatch, **kwargs) -> FakeGenAI:
    fake = FakeGenAI(**kwargs)
    monkeypatch.setattr(explanation, "genai", fake)
    return fake


# ============================================================
# API 키 없음
# ============================================================

def test_missing_key_returns_error_fallbacks(monkeypatch, coffee):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    fake = _install(monkeypatch, text="should not be used")

    assert explanation.explain_forecast(coffee, FORECAST) == explanation.FORECAST_ERROR_FALLBACK
    assert (
        explanation.explain_simulation("Current Simulation:", 1, 100.0, "Stable")
        == explanation.SIMULATION_ERROR_FALLBACK
    )
    assert (
        explanation.chat_response("hi", scenario="", products=[coffee], forecasts=[FORECAST])
        == explanation.CHAT_ERROR_FALLBACK
    )
    assert fake.prompts == []


def test_blank_key_counts_as_missing(monkeypatch, coffee):
    monkeypatch.setenv("GEMINI_API_KEY", "   ")
    _install(monkeypatch, text="unused")

    assert explanation.explain_forecast(coffee, FORECAST) == explanation.FORECAST_ERROR_FALLBACK


# ============================================================
# 정상 응답 / 실패 / 빈 응답
# ============================================================

def test_forecast_explanation_success(monkeypatch, with_key, coffee):
    fake = _install(monkeypatch, text="  Restock 31 kg before the weekend.  \n")

    text = explanation.explain_forecast(coffee, FORECAST)

    assert text == "Restock 31 kg before the weekend."
    assert fake.api_key == "test-key"
    assert fake.model_name == "gemini-1.5-flash"
    prompt = fake.prompts[0]
    assert "Product: Organic Coffee Beans" in prompt
    assert "Forecasted Demand (7 Days): 56" in prompt
    assert "Recent Trend: 12.5%" in prompt
    assert "Suggested Restock: 31 units" in prompt


def test_model_name_from_environment(monkeypatch, with_key, coffee):
    monkeypatch.setenv("GEMINI_MODEL", "gemini-custom")
    fake = _install(monkeypatch, text="ok")

    explanation.explain_forecast(coffee, FORECAST)

    assert fake.model_name == "gemini-custom"


def test_request_error_returns_error_fallback(monkeypatch, with_key, coffee):
    _install(monkeypatch, error=RuntimeError("quota exceeded"))

    assert explanation.explain_forecast(coffee, FORECAST) == explanation.FORECAST_ERROR_FALLBACK
    assert (
        explanation.explain_simulation("s", 0, 0.0, "Stable")
        == explanation.SIMULATION_ERROR_FALLBACK
    )


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_response_returns_empty_fallback(monkeypatch, with_key, coffee, text):
    _install(monkeypatch, text=text)

    assert explanation.explain_forecast(coffee, FORECAST) == explanation.FORECAST_EMPTY_FALLBACK
    assert (
        explanation.explain_simulation("s", 0, 0.0, "Stable")
        == explanation.SIMULATION_EMPTY_FALLBACK
    )
    assert (
        explanation.chat_response("hi", scenario="s", products=[], forecasts=[])
        == explanation.CHAT_EMPTY_FALLBACK
    )


def test_simulation_prompt_content(monkeypatch, with_key):
    fake = _install(monkeypatch, text="Order early.")

    text = explanation.explain_simulation("Current Simulation:\n- Supply Delay: 3 days", 2, 1234.5, "Critical")

    assert text == "Order early."
    prompt = fake.prompts[0]
    assert "Supply Delay: 3 days" in prompt
    assert "2 products at risk of stockout" in prompt
    assert "$1,234.50" in prompt
    assert "Risk Level: Critical" in prompt


def test_chat_uses_inventory_context(monkeypatch, with_key, coffee):
    fake = _install(monkeypatch, text="Increase coffee safety stock.")

    reply = explanation.chat_response(
        "What should I reorder?",
        scenario="Current Simulation:",
        products=[coffee],
        forecasts=[FORECAST],
    )

    assert reply == "Increase coffee safety stock."
    assert fake.prompts == ["What should I reorder?"]
    assert "Organic Coffee Beans: 45 in stock, Rec: 31 restock." in fake.system_instruction
    assert "SmartStock AI Assistant" in fake.system_instruction


# ============================================================
# 예측 결과에 설명 첨부
# ============================================================

def test_attach_explanations(monkeypatch, with_key, coffee):
    _install(monkeypatch, text="Order 31 kg this week.")
    orphan = ForecastResult("P999", 1.0, 7, 0.0, 3)

    explained = explanation.attach_explanations([coffee], [FORECAST, orphan])

    assert explained[0].explanation == "Order 31 kg this week."
    assert explained[0].recommended_restock == FORECAST.recommended_restock
    assert explained[1] is orphan
    # 원본은 변경되지 않음
    assert FORECAST.explanation is None


def test_attach_explanations_without_key_uses_fallback(monkeypatch, coffee):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    explained = explanation.attach_explanations([coffee], [FORECAST])

    assert explained[0].explanation == explanation.FORECAST_ERROR_FALLBACK
