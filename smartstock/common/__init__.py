"""공통 유틸리티 모듈.

여러 모듈에서 공통으로 사용하는 유틸리티 함수들을 제공합니다.
"""

from .data_utils import (
    SALES_COLUMNS,
    as_quantity,
    empty_sales_frame,
    format_fixed,
    round_half_up,
    round_to_nearest,
)

__all__ = [
    "SALES_COLUMNS",
    "as_quantity",
    "empty_sales_frame",
    "format_fixed",
    "round_half_up",
    "round_to_nearest",
]
