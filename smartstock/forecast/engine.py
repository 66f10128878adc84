"""수요 예측 및 재입고 추천량 계산.

판매 집계, 추세, 시나리오 배수, 리드타임을 결합하여 상품별
ForecastResult를 만듭니다. 모든 중간 계산은 반올림 없이 수행하고,
결과 객체를 만드는 시점에만 반올림합니다.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from ..common.data_utils import as_quantity, round_half_up
from ..core.config import CONFIG, ForecastConfig
from ..domain.models import ForecastResult, Product, SimulationParams
from ..domain.normalization import SalesInput, ensure_sales_frame
from .aggregation import aggregate_sales_windows, estimate_trend
from .scenario import DEFAULT_SIMULATION, resolve_scenario_multiplier

logger = logging.getLogger(__name__)


def calculate_forecast(
    product: Product,
    sales: SalesInput,
    horizon_days: Optional[int] = None,
    simulation: Optional[SimulationParams] = None,
    *,
    config: Optional[ForecastConfig] = None,
) -> ForecastResult:
    """상품 하나의 수요 예측과 재입고 추천량을 계산합니다.

    계산 단계:
    1. 최근/이전 구간 판매 평균 집계
    2. 판매 기록이 없으면 안전 재고(min_stock_level)를 추천량으로 반환
    3. 추세(%)와 추세 보정 계수 1 + trend/100 (반올림 없음)
    4. 시나리오 배수 (수요 × 프로모션 × 이벤트)
    5. 예측 수요 = ceil(평균 × 기간 × 추세 보정 × 수요 × 프로모션 × 이벤트)
    6. 유효 리드타임 = 상품 리드타임 + 시뮬레이션 지연
    7. 일 수요 = 예측 수요 / 기간 (제수 최소 1)
    8. 안전 재고 = ceil(일 수요 × 유효 리드타임)
    9. 추천량 = max(0, 예측 수요 + 안전 재고 - 현재 재고)

    Args:
        product: 대상 상품
        sales: 판매 이력 (다른 상품 기록이 섞여 있어도 됨)
        horizon_days: 예측 기간 (기본 7일)
        simulation: 시뮬레이션 파라미터 (기본: 배수 1.0, 지연/프로모션/이벤트 없음)
        config: 예측 설정 오버라이드

    Returns:
        ForecastResult. historical_avg는 소수 2자리, trend_percentage는 1자리,
        predicted_demand_7_days는 정수.

    Examples:
        >>> result = calculate_forecast(product, sales)
        >>> result.predicted_demand_7_days
        56
    """
    cfg = config or CONFIG.forecast
    sim = simulation or DEFAULT_SIMULATION
    horizon = cfg.default_horizon_days if horizon_days is None else horizon_days

    # ========================================
    # 1~2단계: 판매 집계 및 빈 이력 처리
    # ========================================
    windows = aggregate_sales_windows(product.id, sales, config=cfg)
    if not windows.has_history:
        return ForecastResult(
            product_id=product.id,
            historical_avg=0,
            predicted_demand_7_days=0,
            trend_percentage=0,
            recommended_restock=as_quantity(product.min_stock_level),
        )

    # ========================================
    # 3~4단계: 추세 보정 및 시나리오 배수
    # ========================================
    trend = estimate_trend(windows.recent_avg, windows.prior_avg)
    trend_adjustment = 1 + (trend / 100)
    multiplier = resolve_scenario_multiplier(product.category, sim, config=cfg)

    # ========================================
    # 5단계: 예측 수요 (과소 예측 방지를 위해 올림)
    # ========================================
    predicted = math.ceil(
        windows.recent_avg
        * horizon
        * trend_adjustment
        * multiplier.demand
        * multiplier.promotion
        * multiplier.event
    )

    # ========================================
    # 6~9단계: 리드타임 기반 안전 재고 및 추천량
    # ========================================
    effective_lead_time = product.lead_time_days + sim.lead_time_delay_days
    daily_demand = predicted / max(1, horizon)
    safety_stock = math.ceil(daily_demand * effective_lead_time)
    recommended = max(0, (predicted + safety_stock) - product.current_stock)

    return ForecastResult(
        product_id=product.id,
        historical_avg=round_half_up(windows.recent_avg, 2),
        predicted_demand_7_days=predicted,
        trend_percentage=round_half_up(trend, 1),
        recommended_restock=as_quantity(recommended),
    )


def forecast_products(
    products: Iterable[Product],
    sales: SalesInput,
    horizon_days: Optional[int] = None,
    simulation: Optional[SimulationParams] = None,
    *,
    config: Optional[ForecastConfig] = None,
) -> list[ForecastResult]:
    """모든 상품에 대해 예측을 수행합니다. 결과는 상품 입력 순서를 따릅니다."""
    frame = ensure_sales_frame(sales)
    results = [
        calculate_forecast(product, frame, horizon_days, simulation, config=config)
        for product in products
    ]
    logger.debug(f"Forecast computed for {len(results)} products")
    return results
