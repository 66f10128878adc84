"""
Gemini 기반 자연어 설명 서비스

예측 결과, What-if 시뮬레이션, 재고 관련 질문에 대해
자연어 설명을 생성합니다. 설명은 부가 정보일 뿐 수치 계산에는
영향을 주지 않으며, API 키가 없거나 호출이 실패하면
고정 폴백 문구를 반환합니다 (예외를 밖으로 던지지 않음).
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional, Sequence

import google.generativeai as genai

from ..core.config import CONFIG, ExplanationConfig
from ..domain.exceptions import ExplanationError
from ..domain.models import ForecastResult, Product

logger = logging.getLogger(__name__)

# ============================================================
# 폴백 문구
# ============================================================

FORECAST_EMPTY_FALLBACK = "Unable to generate explanation."
FORECAST_ERROR_FALLBACK = "Error fetching AI insights."
SIMULATION_EMPTY_FALLBACK = "Prepare for supply chain volatility."
SIMULATION_ERROR_FALLBACK = "Scenario suggests cautious inventory buffers."
CHAT_EMPTY_FALLBACK = "I'm having trouble analyzing this scenario. Could you try rephrasing?"
CHAT_ERROR_FALLBACK = (
    "I'm temporarily disconnected from the AI core. "
    "Please check your connectivity and API key."
)


def _generate(
    prompt: str,
    *,
    system_instruction: Optional[str] = None,
    config: Optional[ExplanationConfig] = None,
) -> str:
    """Gemini로 텍스트를 생성합니다. 빈 응답은 빈 문자열로 반환합니다.

    Raises:
        ExplanationError: API 키가 없거나 호출이 실패한 경우
    """
    cfg = config or CONFIG.explanation
    api_key = cfg.api_key
    if api_key is None:
        raise ExplanationError(f"{cfg.api_key_env} is not set")

    try:
        genai.configure(api_key=api_key)
        if system_instruction:
            model = genai.GenerativeModel(cfg.model_name, system_instruction=system_instruction)
        else:
            model = genai.GenerativeModel(cfg.model_name)
        response = model.generate_content(prompt)
        text = response.text
    except Exception as e:
        raise ExplanationError(f"Gemini request failed: {e}") from e

    return (text or "").strip()


def build_forecast_prompt(product: Product, forecast: ForecastResult) -> str:
    return f"""Act as a senior retail consultant. Explain this inventory forecast in simple, non-technical language.
Product: {product.name}
Current Stock: {product.current_stock:g} units
Historical Avg Daily Sales: {forecast.historical_avg:g}
Forecasted Demand (7 Days): {forecast.predicted_demand_7_days}
Recent Trend: {forecast.trend_percentage:g}%
Suggested Restock: {forecast.recommended_restock:g} units

Structure your response:
1. Why we recommend this restock quantity.
2. The risk of doing nothing.
3. Business context.
Keep it under 80 words."""


def build_simulation_prompt(
    scenario: str,
    impacted_count: int,
    total_restock: float,
    risk_level: str,
) -> str:
    return f"""Act as a Business Strategy Advisor. I am running a "What-If" inventory simulation.
Scenario Description: {scenario}
Impact: {impacted_count} products at risk of stockout.
Total Capital Required for optimal restock: ${total_restock:,.2f}.
System Calculated Risk Level: {risk_level}.

Task: Provide a 2-3 sentence strategic recommendation for the business owner.
Focus on "Explainability": Why does this scenario create risk and how should they adapt (e.g. order early, increase safety stock)?"""


def build_chat_system_prompt(
    scenario: str,
    products: Sequence[Product],
    forecasts: Sequence[ForecastResult],
) -> str:
    restock_by_id = {f.product_id: f.recommended_restock for f in forecasts}
    inventory_context = "\n".join(
        f"{p.name}: {p.current_stock:g} in stock, Rec: {restock_by_id.get(p.id, 0):g} restock."
        for p in products
    )
    return f"""You are "SmartStock AI Assistant", a specialist in retail inventory optimization.

CURRENT SCENARIO CONTEXT:
{scenario}

FULL INVENTORY DATA:
{inventory_context}

YOUR GOAL:
1. Answer the retailer's questions about inventory risks and opportunities.
2. Suggest specific restock or pricing strategies based on the current "What-If" scenario.
3. Be concise, actionable, and encouraging.
4. Use a professional yet helpful tone."""


def explain_forecast(
    product: Product,
    forecast: ForecastResult,
    *,
    config: Optional[ExplanationConfig] = None,
) -> str:
    """예측 결과에 대한 80단어 이내의 설명을 생성합니다."""
    try:
        text = _generate(build_forecast_prompt(product, forecast), config=config)
    except ExplanationError as e:
        logger.error(f"Forecast explanation failed for {product.id}: {e}")
        return FORECAST_ERROR_FALLBACK
    return text or FORECAST_EMPTY_FALLBACK


def explain_simulation(
    scenario: str,
    impacted_count: int,
    total_restock: float,
    risk_level: str,
    *,
    config: Optional[ExplanationConfig] = None,
) -> str:
    """What-if 시나리오에 대한 2~3문장 전략 권고를 생성합니다."""
    prompt = build_simulation_prompt(scenario, impacted_count, total_restock, risk_level)
    try:
        text = _generate(prompt, config=config)
    except ExplanationError as e:
        logger.error(f"Simulation insight failed: {e}")
        return SIMULATION_ERROR_FALLBACK
    return text or SIMULATION_EMPTY_FALLBACK


def chat_response(
    message: str,
    *,
    scenario: str,
    products: Sequence[Product],
    forecasts: Sequence[ForecastResult],
    config: Optional[ExplanationConfig] = None,
) -> str:
    """현재 시나리오와 재고 컨텍스트를 바탕으로 사용자 질문에 답합니다."""
    system_prompt = build_chat_system_prompt(scenario, products, forecasts)
    try:
        text = _generate(message, system_instruction=system_prompt, config=config)
    except ExplanationError as e:
        logger.error(f"Chat response failed: {e}")
        return CHAT_ERROR_FALLBACK
    return text or CHAT_EMPTY_FALLBACK


def attach_explanations(
    products: Sequence[Product],
    forecasts: Sequence[ForecastResult],
    *,
    config: Optional[ExplanationConfig] = None,
) -> list[ForecastResult]:
    """예측 결과마다 설명을 붙인 새 ForecastResult 리스트를 반환합니다.

    상품 목록에 없는 예측은 설명 없이 그대로 둡니다.
    """
    by_id = {p.id: p for p in products}
    explained: list[ForecastResult] = []
    for forecast in forecasts:
        product = by_id.get(forecast.product_id)
        if product is None:
            explained.append(forecast)
            continue
        text = explain_forecast(product, forecast, config=config)
        explained.append(dataclasses.replace(forecast, explanation=text))
    return explained
