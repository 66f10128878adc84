"""
데이터 정규화 유틸리티

판매 이력은 데이터클래스, 문서 저장소 레코드(dict), DataFrame 중
어떤 형태로든 들어올 수 있습니다. 이 모듈은 이를 하나의 표준 스키마
(product_id, date, units_sold, is_promotion)를 가진 DataFrame으로 변환합니다.
날짜는 자정(00:00:00)으로 정규화되며 입력 순서는 그대로 유지됩니다.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence, Union

import pandas as pd

from ..common.data_utils import SALES_COLUMNS, empty_sales_frame
from .exceptions import ValidationError
from .models import Product, SalesRecord, SupplyOrder, _pick, _require_mapping, to_day

logger = logging.getLogger(__name__)

SalesInput = Union[pd.DataFrame, Iterable[Union[SalesRecord, Mapping[str, Any]]]]


# 문서 저장소/CSV에서 관찰되는 컬럼 별칭. 소문자, 공백 제거 값으로
# 대소문자 구분 없이 조회합니다.
SALES_COLUMN_ALIASES: dict[str, Sequence[str]] = {
    "product_id": (
        "product_id",
        "productid",
        "product id",
        "sku",
    ),
    "date": (
        "date",
        "sale_date",
        "sales_date",
    ),
    "units_sold": (
        "units_sold",
        "unitssold",
        "units sold",
        "quantity",
        "qty",
    ),
    "is_promotion": (
        "is_promotion",
        "ispromotion",
        "promotion",
    ),
}


def _rename_sales_columns(frame: pd.DataFrame) -> pd.DataFrame:
    lookup = {str(col).strip().lower(): col for col in frame.columns}
    rename_map: dict[Any, str] = {}
    for canonical, aliases in SALES_COLUMN_ALIASES.items():
        for alias in aliases:
            source = lookup.get(alias)
            if source is not None:
                rename_map[source] = canonical
                break
    return frame.rename(columns=rename_map)


def _parse_day(value: Any) -> pd.Timestamp:
    """날짜 하나를 자정 Timestamp로 변환합니다. 변환 실패 시 NaT."""
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return pd.NaT
    return to_day(ts)


def _records_to_frame(records: Iterable[Union[SalesRecord, Mapping[str, Any]]]) -> pd.DataFrame:
    rows = []
    for record in records:
        if isinstance(record, SalesRecord):
            rows.append(
                {
                    "product_id": record.product_id,
                    "date": record.date,
                    "units_sold": record.units_sold,
                    "is_promotion": record.is_promotion,
                }
            )
            continue

        # 매핑 레코드는 DataFrame 경로와 같은 규칙으로 정규화 (날짜 변환 실패 행은 제거)
        data = _require_mapping(record, "Sales")
        product_id = _pick(data, "product_id", "productId")
        if product_id is None:
            raise ValidationError("Sales record must include productId")
        rows.append(
            {
                "product_id": str(product_id),
                "date": _parse_day(_pick(data, "date")),
                "units_sold": _pick(data, "units_sold", "unitsSold", default=0.0),
                "is_promotion": _pick(data, "is_promotion", "isPromotion", default=False),
            }
        )
    if not rows:
        return empty_sales_frame()
    return pd.DataFrame(rows, columns=SALES_COLUMNS)


def normalize_sales(sales: SalesInput) -> pd.DataFrame:
    """
    판매 이력을 표준 스키마의 DataFrame으로 정규화합니다.

    - product_id: 문자열
    - date: datetime64 (자정으로 정규화, 변환 실패 행은 제거)
    - units_sold: float (숫자 변환 실패 시 0)
    - is_promotion: bool (컬럼이 없으면 False)

    Args:
        sales: SalesRecord/dict 리스트 또는 DataFrame

    Returns:
        원래 순서를 유지하는 정규화된 판매 DataFrame (RangeIndex)

    Raises:
        ValidationError: DataFrame에 product_id/date/units_sold 컬럼이 없거나
            레코드가 매핑이 아니거나 productId가 없을 때
    """
    if sales is None:
        return empty_sales_frame()

    if not isinstance(sales, pd.DataFrame):
        df = _records_to_frame(sales)
    elif sales.empty and not len(sales.columns):
        return empty_sales_frame()
    else:
        df = _rename_sales_columns(sales.copy())

    # ========================================
    # 필수 컬럼 검증
    # ========================================
    missing = [col for col in ("product_id", "date", "units_sold") if col not in df.columns]
    if missing:
        logger.error(f"Missing sales columns: {missing}")
        raise ValidationError("판매 데이터에 필요한 컬럼이 없습니다: " + ", ".join(missing))

    # ========================================
    # 컬럼 타입 정규화
    # ========================================
    dates = pd.to_datetime(df["date"], errors="coerce")
    if getattr(dates.dt, "tz", None) is not None:
        dates = dates.dt.tz_convert(None)
    df["date"] = dates.dt.normalize()

    df["product_id"] = df["product_id"].astype(str)
    df["units_sold"] = pd.to_numeric(df["units_sold"], errors="coerce").fillna(0.0).astype(float)

    if "is_promotion" in df.columns:
        df["is_promotion"] = df["is_promotion"].fillna(False).astype(bool)
    else:
        df["is_promotion"] = False

    # 날짜가 NaT인 행은 제거 (필수 필드)
    dropped = int(df["date"].isna().sum())
    if dropped:
        logger.debug(f"Dropping {dropped} sales rows without a usable date")
    df = df.dropna(subset=["date"])

    return df[SALES_COLUMNS].reset_index(drop=True)


def ensure_sales_frame(sales: SalesInput) -> pd.DataFrame:
    """이미 정규화된 판매 DataFrame이면 그대로, 아니면 정규화하여 반환합니다."""
    if isinstance(sales, pd.DataFrame) and _is_normalized_sales(sales):
        return sales
    return normalize_sales(sales)


def _is_normalized_sales(frame: pd.DataFrame) -> bool:
    """표준 스키마, 문자열 product_id, tz 없는 자정 날짜인지 확인합니다."""
    if list(frame.columns) != SALES_COLUMNS:
        return False
    dates = frame["date"]
    if not pd.api.types.is_datetime64_dtype(dates) or dates.dt.tz is not None:
        return False
    if not pd.api.types.is_float_dtype(frame["units_sold"]):
        return False
    if not frame["product_id"].map(lambda value: isinstance(value, str)).all():
        return False
    # NaT 행이나 시각이 남은 날짜가 있으면 다시 정규화
    return bool((dates == dates.dt.normalize()).all())


def normalize_products(products: Iterable[Union[Product, Mapping[str, Any]]]) -> list[Product]:
    """상품 레코드를 Product 리스트로 변환합니다 (순서 유지)."""
    return [p if isinstance(p, Product) else Product.from_dict(p) for p in products]


def normalize_orders(orders: Iterable[Union[SupplyOrder, Mapping[str, Any]]]) -> list[SupplyOrder]:
    """공급 주문 레코드를 SupplyOrder 리스트로 변환합니다 (순서 유지)."""
    return [o if isinstance(o, SupplyOrder) else SupplyOrder.from_dict(o) for o in orders]
