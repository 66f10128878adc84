"""KPI 계산 함수들."""

from __future__ import annotations

from typing import Iterable, NamedTuple, Optional, Sequence

from ..core.config import CONFIG, RiskConfig
from ..domain.models import Anomaly, ForecastResult, Product, Severity, SimulationParams

RISK_CRITICAL = "Critical"
RISK_ELEVATED = "Elevated"
RISK_STABLE = "Stable"


class OverviewKpis(NamedTuple):
    """대시보드 개요 카드 지표."""

    total_stock_value: float
    low_stock_count: int
    critical_alerts: int


class SimulationRiskSummary(NamedTuple):
    """What-if 시뮬레이션 리스크 요약."""

    products_at_risk: int
    total_restock_capital: float
    risk_level: str


def overview_kpis(products: Sequence[Product], anomalies: Iterable[Anomaly]) -> OverviewKpis:
    """총 재고 가치, 안전 재고 이하 상품 수, CRITICAL 이상 징후 수를 계산합니다."""
    total_value = sum(p.current_stock * p.unit_price for p in products)
    low_stock = sum(1 for p in products if p.current_stock <= p.min_stock_level)
    critical = sum(1 for a in anomalies if a.severity == Severity.CRITICAL)
    return OverviewKpis(float(total_value), low_stock, critical)


def classify_risk_level(
    simulation: SimulationParams,
    *,
    config: Optional[RiskConfig] = None,
) -> str:
    """시뮬레이션 파라미터로 리스크 등급(Critical/Elevated/Stable)을 판정합니다.

    - Critical: 수요 배수 > 1.8, 지연 >= 3일, 또는 특별 이벤트 활성
    - Elevated: 수요 배수 > 1.3 또는 지연 >= 1일
    - Stable: 그 외
    """
    cfg = config or CONFIG.risk
    if (
        simulation.demand_multiplier > cfg.critical_demand_multiplier
        or simulation.lead_time_delay_days >= cfg.critical_delay_days
        or simulation.active_event is not None
    ):
        return RISK_CRITICAL
    if (
        simulation.demand_multiplier > cfg.elevated_demand_multiplier
        or simulation.lead_time_delay_days >= cfg.elevated_delay_days
    ):
        return RISK_ELEVATED
    return RISK_STABLE


def simulation_risk_summary(
    products: Sequence[Product],
    forecasts: Iterable[ForecastResult],
    simulation: SimulationParams,
    *,
    config: Optional[RiskConfig] = None,
) -> SimulationRiskSummary:
    """품절 위험 상품 수, 재입고 필요 자금, 리스크 등급을 계산합니다.

    품절 위험: 현재 재고 < 7일 예측 수요.
    재입고 자금: 추천량 × 단가 합계 (상품 목록에 없는 예측은 제외).
    """
    by_id = {p.id: p for p in products}
    at_risk = 0
    capital = 0.0
    for forecast in forecasts:
        product = by_id.get(forecast.product_id)
        if product is None:
            continue
        capital += forecast.recommended_restock * product.unit_price
        if product.current_stock < forecast.predicted_demand_7_days:
            at_risk += 1

    return SimulationRiskSummary(
        products_at_risk=at_risk,
        total_restock_capital=capital,
        risk_level=classify_risk_level(simulation, config=config),
    )
