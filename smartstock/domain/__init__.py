"""
도메인 계층 퍼블릭 API

이 모듈은 도메인 계층의 주요 클래스와 함수를 재수출하여
일관된 퍼블릭 API를 제공합니다.
"""
from __future__ import annotations

from .exceptions import DomainError, ExplanationError, ValidationError
from .models import (
    Anomaly,
    AnomalyType,
    ForecastResult,
    OrderStatus,
    Product,
    SalesRecord,
    Severity,
    SimulationParams,
    SpecialEvent,
    SupplyOrder,
    to_day,
)
from .normalization import (
    ensure_sales_frame,
    normalize_orders,
    normalize_products,
    normalize_sales,
)

__all__ = [
    # 예외
    "DomainError",
    "ValidationError",
    "ExplanationError",
    # 모델
    "Product",
    "SalesRecord",
    "SpecialEvent",
    "SimulationParams",
    "ForecastResult",
    "Anomaly",
    "AnomalyType",
    "Severity",
    "SupplyOrder",
    "OrderStatus",
    # 정규화
    "normalize_sales",
    "ensure_sales_frame",
    "normalize_products",
    "normalize_orders",
    "to_day",
]
