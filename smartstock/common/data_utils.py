"""공통 데이터 처리 유틸리티 함수 모듈.

판매 DataFrame 템플릿과 출력 경계에서의 반올림을 제공합니다.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

import pandas as pd

# 정규화된 판매 DataFrame 컬럼
SALES_COLUMNS = ["product_id", "date", "units_sold", "is_promotion"]


def empty_sales_frame() -> pd.DataFrame:
    """빈 판매 DataFrame을 반환합니다.

    Returns:
        정규화된 스키마를 가진 빈 판매 DataFrame
    """
    return pd.DataFrame(
        {
            "product_id": pd.Series(dtype=str),
            "date": pd.Series(dtype="datetime64[ns]"),
            "units_sold": pd.Series(dtype=float),
            "is_promotion": pd.Series(dtype=bool),
        }
    )


def round_half_up(value: float, digits: int = 0) -> float:
    """소수점 ``digits`` 자리에서 반올림합니다 (동률은 0에서 먼 쪽).

    float의 정확한 이진 값을 기준으로 반올림합니다. ``round()``의
    은행가 반올림과 달리 0.125 같은 정확한 동률은 0.13이 됩니다.
    NaN/inf는 그대로 반환합니다.
    """
    if not math.isfinite(value):
        return float(value)
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_fixed(value: float, digits: int = 2) -> str:
    """``round_half_up`` 규칙으로 고정 소수점 문자열을 만듭니다."""
    if not math.isfinite(value):
        return str(value)
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_to_nearest(value: float) -> int:
    """가장 가까운 정수로 반올림합니다 (x.5는 +inf 방향)."""
    return int(math.floor(value + 0.5))


def as_quantity(value: float) -> int | float:
    """정수값이면 int로, 아니면 float 그대로 반환합니다."""
    number = float(value)
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number
