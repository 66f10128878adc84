"""
도메인 모델: 예측 코어의 핵심 데이터 구조

이 모듈은 상품, 판매 기록, 시뮬레이션 파라미터, 예측 결과, 이상 징후 등
예측 코어가 주고받는 데이터 모델을 정의합니다.
모든 모델은 불변(frozen) 데이터클래스로 구현되어 안전한 데이터 전달을 보장합니다.

외부 문서 저장소는 camelCase 키(``currentStock`` 등)를 사용하므로
``from_dict``/``to_dict``에서 키 변환을 담당합니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

import pandas as pd

from .exceptions import ValidationError


class AnomalyType(str, Enum):
    SPIKE = "SPIKE"
    DROP = "DROP"
    SUPPLY_DELAY = "SUPPLY_DELAY"
    STATUS_CHANGE = "STATUS_CHANGE"


class Severity(str, Enum):
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    INFO = "INFO"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


def to_day(value: Any) -> pd.Timestamp:
    """날짜 값을 자정으로 정규화된 tz-naive Timestamp로 변환합니다.

    타임존이 있는 값(ISO ``...Z`` 문자열 등)은 UTC 기준 날짜를 사용합니다.
    """
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts.normalize()


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """여러 후보 키 중 처음 존재하는 값을 반환합니다."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _require_mapping(data: object, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{kind} record must be a mapping, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class Product:
    """
    재고 관리 대상 상품.

    Attributes:
        id: 상품 식별자
        name: 표시 이름
        category: 카테고리 (이벤트 부스트 조회 키)
        current_stock: 현재 재고
        min_stock_level: 안전 재고 기준
        lead_time_days: 공급사 보충 소요 일수
        unit_price: 단가
        unit: 단위 라벨 (kg, pcs 등)
    """

    id: str
    name: str
    category: str
    current_stock: float
    min_stock_level: float
    lead_time_days: int
    unit_price: float
    unit: str
    supplier_name: Optional[str] = None
    supplier_phone: Optional[str] = None
    supplier_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Product":
        """문서 저장소 레코드(camelCase 또는 snake_case)로부터 상품을 생성합니다."""
        data = _require_mapping(data, "Product")
        product_id = _pick(data, "id", "product_id", "productId")
        if product_id is None:
            raise ValidationError("Product record must include an id")

        return cls(
            id=str(product_id),
            name=str(_pick(data, "name", default="")),
            category=str(_pick(data, "category", default="")),
            current_stock=float(_pick(data, "current_stock", "currentStock", default=0.0)),
            min_stock_level=float(_pick(data, "min_stock_level", "minStockLevel", default=0.0)),
            lead_time_days=int(_pick(data, "lead_time_days", "leadTimeDays", default=0)),
            unit_price=float(_pick(data, "unit_price", "unitPrice", default=0.0)),
            unit=str(_pick(data, "unit", default="")),
            supplier_name=_pick(data, "supplier_name", "supplierName"),
            supplier_phone=_pick(data, "supplier_phone", "supplierPhone"),
            supplier_id=_pick(data, "supplier_id", "supplierId"),
        )


@dataclass(frozen=True)
class SalesRecord:
    """
    일 단위 판매 기록.

    같은 상품/날짜에 여러 기록이 있어도 중복 제거하지 않습니다.
    """

    product_id: str
    date: pd.Timestamp
    units_sold: float
    is_promotion: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "product_id", str(self.product_id))
        try:
            day = to_day(self.date)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid sales date: {self.date!r}") from exc
        if pd.isna(day):
            raise ValidationError("Sales record date is missing")
        object.__setattr__(self, "date", day)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SalesRecord":
        data = _require_mapping(data, "Sales")
        product_id = _pick(data, "product_id", "productId")
        date = _pick(data, "date")
        if product_id is None or date is None:
            raise ValidationError("Sales record must include productId and date")

        units = _pick(data, "units_sold", "unitsSold", default=0.0)
        try:
            units_sold = float(units)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid unitsSold value: {units!r}") from exc

        return cls(
            product_id=str(product_id),
            date=date,
            units_sold=units_sold,
            is_promotion=bool(_pick(data, "is_promotion", "isPromotion", default=False)),
        )


@dataclass(frozen=True)
class SpecialEvent:
    """
    카테고리별 수요 부스트를 가진 특별 이벤트 (명절, 시즌 세일 등).

    Examples:
        >>> diwali = SpecialEvent("Diwali Peak", {"Grocery": 2.8, "Produce": 1.8})
        >>> diwali.boost_for("Grocery")
        2.8
        >>> diwali.boost_for("Bakery")
        1.0
    """

    name: str
    category_boosts: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "category_boosts", dict(self.category_boosts))

    def boost_for(self, category: str) -> float:
        """카테고리의 부스트 배수. 매핑에 없으면 1.0."""
        return float(self.category_boosts.get(category, 1.0))


@dataclass(frozen=True)
class SimulationParams:
    """
    What-if 시뮬레이션 입력. 호출 단위로 불변 스냅샷으로 취급됩니다.

    Attributes:
        demand_multiplier: 전체 수요 배수 (일반적으로 0.5 ~ 2.0)
        lead_time_delay_days: 상품 리드타임에 더해지는 공급 지연 일수
        is_promotion_active: 프로모션 활성화 여부 (+40%)
        active_event: 활성 특별 이벤트 (없으면 None)
    """

    demand_multiplier: float = 1.0
    lead_time_delay_days: int = 0
    is_promotion_active: bool = False
    active_event: Optional[SpecialEvent] = None


@dataclass(frozen=True)
class ForecastResult:
    """상품별 예측 결과. 출력 경계에서만 반올림된 값을 담습니다."""

    product_id: str
    historical_avg: float
    predicted_demand_7_days: int
    trend_percentage: float
    recommended_restock: float
    explanation: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "productId": self.product_id,
            "historicalAvg": self.historical_avg,
            "predictedDemand7Days": self.predicted_demand_7_days,
            "trendPercentage": self.trend_percentage,
            "recommendedRestock": self.recommended_restock,
        }
        if self.explanation is not None:
            out["explanation"] = self.explanation
        return out


@dataclass(frozen=True)
class Anomaly:
    """
    이상 징후 레코드.

    ``id``는 상품 id + 종류로 결정되어 같은 조건이면 반복 실행에도
    동일하므로 알림 계층에서 중복 제거에 사용할 수 있습니다.
    """

    id: str
    product_id: str
    type: AnomalyType
    severity: Severity
    description: str
    date: pd.Timestamp

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "productId": self.product_id,
            "type": self.type.value,
            "severity": self.severity.value,
            "description": self.description,
            "date": self.date.strftime("%Y-%m-%d"),
        }


@dataclass(frozen=True)
class SupplyOrder:
    """공급 주문. 알림 파생을 위해 읽기 전용으로만 사용됩니다."""

    id: str
    product_id: str
    product_name: str
    supplier_business_name: str
    quantity: float
    unit: str
    status: OrderStatus
    created_at: pd.Timestamp
    retailer_id: str = ""
    retailer_business_name: str = ""
    supplier_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SupplyOrder":
        data = _require_mapping(data, "Supply order")
        order_id = _pick(data, "id")
        created_at = _pick(data, "created_at", "createdAt")
        if order_id is None or created_at is None:
            raise ValidationError("Supply order must include id and createdAt")

        raw_status = str(_pick(data, "status", default="PENDING")).upper()
        try:
            status = OrderStatus(raw_status)
        except ValueError as exc:
            raise ValidationError(f"Unknown supply order status: {raw_status}") from exc

        return cls(
            id=str(order_id),
            product_id=str(_pick(data, "product_id", "productId", default="")),
            product_name=str(_pick(data, "product_name", "productName", default="")),
            supplier_business_name=str(
                _pick(data, "supplier_business_name", "supplierBusinessName", default="")
            ),
            quantity=float(_pick(data, "quantity", default=0.0)),
            unit=str(_pick(data, "unit", default="")),
            status=status,
            created_at=pd.Timestamp(created_at),
            retailer_id=str(_pick(data, "retailer_id", "retailerId", default="")),
            retailer_business_name=str(
                _pick(data, "retailer_business_name", "retailerBusinessName", default="")
            ),
            supplier_id=str(_pick(data, "supplier_id", "supplierId", default="")),
        )
