"""판매 분석 함수들."""

from __future__ import annotations

from typing import Optional

import pandas as pd

from ..common.data_utils import round_to_nearest
from ..core.config import CONFIG, ChartConfig
from ..domain.models import ForecastResult
from ..domain.normalization import SalesInput, ensure_sales_frame

CHART_COLUMNS = ["label", "date", "actual", "predicted"]


def prepare_forecast_chart_series(
    product_id: str,
    sales: SalesInput,
    forecast: ForecastResult,
    *,
    config: Optional[ChartConfig] = None,
) -> pd.DataFrame:
    """실측 판매와 예측 수요를 하나의 차트용 시계열로 묶어 반환합니다.

    Args:
        product_id: 대상 상품 id
        sales: 판매 이력
        forecast: 해당 상품의 예측 결과
        config: 표시 구간 설정 (기본: 과거 14건 + 예측 7일)

    Returns:
        label, date, actual, predicted 컬럼의 DataFrame.
        과거 구간은 날짜 오름차순(label=MM-DD, predicted 없음),
        예측 구간은 ``Forecast +Nd`` 라벨에 일 예측량 + N × 0.2를 반올림한 값.
        판매 기록이 없으면 빈 DataFrame.
    """
    cfg = config or CONFIG.chart
    frame = ensure_sales_frame(sales)
    hist = frame[frame["product_id"] == str(product_id)]
    if hist.empty:
        return pd.DataFrame(columns=CHART_COLUMNS)

    hist = hist.sort_values("date", kind="mergesort").tail(cfg.history_points)

    actual = pd.DataFrame(
        {
            "label": hist["date"].dt.strftime("%m-%d").to_numpy(),
            "date": hist["date"].to_numpy(),
            "actual": hist["units_sold"].to_numpy(),
            "predicted": None,
        }
    )

    daily = forecast.predicted_demand_7_days / 7
    projected = pd.DataFrame(
        {
            "label": [f"Forecast +{i}d" for i in range(1, cfg.forecast_points + 1)],
            "date": pd.NaT,
            "actual": None,
            "predicted": [
                round_to_nearest(daily + i * cfg.daily_drift)
                for i in range(1, cfg.forecast_points + 1)
            ],
        }
    )

    return pd.concat([actual, projected], ignore_index=True)[CHART_COLUMNS]
