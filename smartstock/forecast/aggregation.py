"""판매 이력 집계 및 추세 계산.

상품 하나의 판매 기록을 최신순으로 정렬하여 최근/이전 구간 평균을 구하고,
두 평균의 변화율(추세)을 계산합니다.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

import pandas as pd

from ..core.config import CONFIG, ForecastConfig
from ..domain.normalization import SalesInput, ensure_sales_frame


class SalesWindows(NamedTuple):
    """최근/이전 구간 판매 평균."""

    recent_avg: float
    prior_avg: float
    record_count: int

    @property
    def has_history(self) -> bool:
        return self.record_count > 0


def product_sales(sales: pd.DataFrame, product_id: str) -> pd.DataFrame:
    """상품의 판매 기록을 날짜 내림차순으로 반환합니다.

    같은 날짜의 기록은 입력 순서를 유지합니다 (stable sort).
    """
    frame = sales[sales["product_id"] == str(product_id)]
    return frame.sort_values("date", ascending=False, kind="mergesort")


def window_mean(units: pd.Series) -> float:
    """구간 평균. 실제 기록 수로 나누며, 제수는 최소 1."""
    return float(units.sum()) / max(1, len(units))


def aggregate_sales_windows(
    product_id: str,
    sales: SalesInput,
    *,
    config: Optional[ForecastConfig] = None,
) -> SalesWindows:
    """상품 판매 이력을 최근/이전 구간 평균으로 축약합니다.

    Args:
        product_id: 대상 상품 id
        sales: 전체 판매 이력 (정렬 불필요)
        config: 구간 크기 설정 (기본: 최근 7건, 이전 7건)

    Returns:
        SalesWindows. 기록이 없으면 두 평균 모두 0.
        이전 구간이 비어 있으면(기록 8건 미만) prior_avg = recent_avg.
    """
    cfg = config or CONFIG.forecast
    ordered = product_sales(ensure_sales_frame(sales), product_id)
    units = ordered["units_sold"]

    if units.empty:
        return SalesWindows(0.0, 0.0, 0)

    recent_end = cfg.recent_window
    prior_end = recent_end + cfg.prior_window

    recent_avg = window_mean(units.iloc[:recent_end])

    prior = units.iloc[recent_end:prior_end]
    prior_avg = window_mean(prior) if len(prior) > 0 else recent_avg

    return SalesWindows(recent_avg, prior_avg, len(units))


def estimate_trend(recent_avg: float, prior_avg: float) -> float:
    """최근 평균의 이전 평균 대비 변화율(%)을 반올림 없이 반환합니다.

    prior_avg가 0이면 0을 반환합니다.
    """
    if prior_avg == 0:
        return 0.0
    return ((recent_avg - prior_avg) / prior_avg) * 100
