"""수요 예측 모듈.

판매 집계, 추세, 시나리오 배수, 예측 엔진을 re-export합니다.
"""

from .aggregation import (
    SalesWindows,
    aggregate_sales_windows,
    estimate_trend,
    product_sales,
    window_mean,
)
from .engine import calculate_forecast, forecast_products
from .scenario import (
    DEFAULT_SIMULATION,
    FESTIVAL_PRESETS,
    ScenarioMultiplier,
    describe_scenario,
    find_preset,
    resolve_scenario_multiplier,
    toggle_event,
)

__all__ = [
    "SalesWindows",
    "aggregate_sales_windows",
    "estimate_trend",
    "product_sales",
    "window_mean",
    "calculate_forecast",
    "forecast_products",
    "DEFAULT_SIMULATION",
    "FESTIVAL_PRESETS",
    "ScenarioMultiplier",
    "describe_scenario",
    "find_preset",
    "resolve_scenario_multiplier",
    "toggle_event",
]
