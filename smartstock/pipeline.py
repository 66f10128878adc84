"""End-to-end orchestration helpers for the SmartStock dashboard core."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

import pandas as pd

from .analytics.anomalies import detect_anomalies
from .analytics.kpi import (
    OverviewKpis,
    SimulationRiskSummary,
    overview_kpis,
    simulation_risk_summary,
)
from .analytics.notifications import merge_anomaly_feed, order_status_anomalies
from .core.config import CONFIG, DashboardConfig
from .domain.models import Anomaly, ForecastResult, Product, SimulationParams, SupplyOrder
from .domain.normalization import (
    SalesInput,
    normalize_orders,
    normalize_products,
    normalize_sales,
)
from .forecast.engine import forecast_products
from .forecast.scenario import DEFAULT_SIMULATION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardInputs:
    """외부 저장소에서 가져온 상품/판매/주문 스냅샷."""

    products: Sequence[Product]
    sales: pd.DataFrame
    orders: Sequence[SupplyOrder] = field(default_factory=tuple)

    @classmethod
    def from_records(
        cls,
        products: Iterable[Union[Product, Mapping[str, Any]]],
        sales: SalesInput,
        orders: Iterable[Union[SupplyOrder, Mapping[str, Any]]] = (),
    ) -> "DashboardInputs":
        return cls(
            products=tuple(normalize_products(products)),
            sales=normalize_sales(sales),
            orders=tuple(normalize_orders(orders)),
        )


@dataclass(frozen=True)
class DashboardResult:
    forecasts: list[ForecastResult]
    anomalies: list[Anomaly]
    kpis: OverviewKpis
    risk: SimulationRiskSummary


def build_dashboard(
    inputs: DashboardInputs,
    *,
    horizon_days: Optional[int] = None,
    simulation: Optional[SimulationParams] = None,
    as_of: Union[date, pd.Timestamp, str, None] = None,
    include_order_updates: bool = True,
    config: Optional[DashboardConfig] = None,
) -> DashboardResult:
    """예측, 이상 징후, 주문 알림, KPI를 한 번에 계산합니다.

    Args:
        inputs: 상품/판매/주문 스냅샷
        horizon_days: 예측 기간 (기본 7일)
        simulation: What-if 시뮬레이션 파라미터
        as_of: 이상 징후 감지 날짜 (기본: 오늘)
        include_order_updates: 주문 상태 변경 알림을 피드에 포함할지 여부
            (소매점 사용자만 해당)
        config: 전역 설정 오버라이드
    """
    cfg = config or CONFIG
    sim = simulation or DEFAULT_SIMULATION

    logger.debug(f"Forecasting {len(inputs.products)} products over {len(inputs.sales)} sales rows")
    forecasts = forecast_products(
        inputs.products, inputs.sales, horizon_days, sim, config=cfg.forecast
    )

    logger.debug("Detecting anomalies")
    anomalies = detect_anomalies(inputs.products, inputs.sales, as_of, config=cfg.anomaly)
    if include_order_updates and inputs.orders:
        anomalies = merge_anomaly_feed(anomalies, order_status_anomalies(inputs.orders))

    kpis = overview_kpis(inputs.products, anomalies)
    risk = simulation_risk_summary(inputs.products, forecasts, sim, config=cfg.risk)
    logger.debug(
        f"Dashboard built: {len(forecasts)} forecasts, {len(anomalies)} anomalies, "
        f"risk={risk.risk_level}"
    )

    return DashboardResult(forecasts=forecasts, anomalies=anomalies, kpis=kpis, risk=risk)
