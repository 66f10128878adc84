"""이상 징후 감지.

상품별로 재고 부족(DROP)과 판매 급증(SPIKE)을 검사합니다.
두 검사는 독립적으로 항상 수행되며, 상태를 저장하지 않고
매 호출마다 현재 스냅샷으로부터 다시 계산합니다.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Union

import pandas as pd

from ..common.data_utils import format_fixed
from ..core.config import CONFIG, AnomalyConfig
from ..domain.models import Anomaly, AnomalyType, Product, Severity, to_day
from ..domain.normalization import SalesInput, ensure_sales_frame
from ..forecast.aggregation import product_sales, window_mean

logger = logging.getLogger(__name__)

SPIKE_DESCRIPTION = "Unusual 80%+ increase in sales detected over the last 3 days."


def low_stock_anomaly(
    product: Product,
    as_of: pd.Timestamp,
    *,
    config: Optional[AnomalyConfig] = None,
) -> Optional[Anomaly]:
    """현재 재고가 안전 재고의 절반 이하이면 CRITICAL DROP 이상 징후를 반환합니다."""
    cfg = config or CONFIG.anomaly
    if product.current_stock > product.min_stock_level * cfg.low_stock_ratio:
        return None

    return Anomaly(
        id=f"AN-{product.id}-LOW",
        product_id=product.id,
        type=AnomalyType.DROP,
        severity=Severity.CRITICAL,
        description=(
            f"Extreme low stock alert. Currently at "
            f"{format_fixed(product.current_stock, 2)} {product.unit}."
        ),
        date=as_of,
    )


def spike_anomaly(
    product: Product,
    sales: pd.DataFrame,
    as_of: pd.Timestamp,
    *,
    config: Optional[AnomalyConfig] = None,
) -> Optional[Anomaly]:
    """최근 3건 평균이 직전 10건 평균의 1.8배를 넘으면 WARNING SPIKE를 반환합니다.

    직전 구간이 비어 있을 때는 ``require_spike_history`` 설정을 따릅니다:
    True면 근거 부족으로 검사를 건너뛰고, False면 과거 평균을 0으로 봅니다.
    """
    cfg = config or CONFIG.anomaly
    units = product_sales(sales, product.id)["units_sold"]

    recent_end = cfg.spike_recent_window
    hist_end = recent_end + cfg.spike_history_window
    recent = units.iloc[:recent_end]
    historical = units.iloc[recent_end:hist_end]

    if historical.empty and cfg.require_spike_history:
        return None

    avg_recent = window_mean(recent)
    avg_hist = window_mean(historical)
    if not avg_recent > avg_hist * cfg.spike_ratio:
        return None

    return Anomaly(
        id=f"AN-{product.id}-SPIKE",
        product_id=product.id,
        type=AnomalyType.SPIKE,
        severity=Severity.WARNING,
        description=SPIKE_DESCRIPTION,
        date=as_of,
    )


def detect_anomalies(
    products: Iterable[Product],
    sales: SalesInput,
    as_of: Union[date, pd.Timestamp, str, None] = None,
    *,
    config: Optional[AnomalyConfig] = None,
) -> list[Anomaly]:
    """상품별 재고 부족/판매 급증 이상 징후를 감지합니다.

    Args:
        products: 상품 목록
        sales: 판매 이력 (정렬 불필요)
        as_of: 감지 날짜 (기본: 오늘). 이상 징후의 date 필드에 기록됩니다.
        config: 임계값 설정 오버라이드

    Returns:
        상품 순서대로, 상품 내에서는 DROP → SPIKE 순서의 이상 징후 리스트
    """
    frame = ensure_sales_frame(sales)
    stamp = to_day(as_of if as_of is not None else pd.Timestamp.today())

    anomalies: list[Anomaly] = []
    for product in products:
        low = low_stock_anomaly(product, stamp, config=config)
        if low is not None:
            anomalies.append(low)

        spike = spike_anomaly(product, frame, stamp, config=config)
        if spike is not None:
            anomalies.append(spike)

    logger.debug(f"Detected {len(anomalies)} anomalies")
    return anomalies
