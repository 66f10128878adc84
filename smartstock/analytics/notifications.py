"""공급 주문 상태 변경 알림.

배송(SHIPPED)/취소(CANCELLED)된 공급 주문을 STATUS_CHANGE 이상 징후로
변환하고, 판매 기반 이상 징후 피드와 합칩니다.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from ..domain.models import Anomaly, AnomalyType, OrderStatus, Severity, SupplyOrder, to_day

# 알림 대상 상태와 심각도
NOTIFY_SEVERITY: dict[OrderStatus, Severity] = {
    OrderStatus.SHIPPED: Severity.INFO,
    OrderStatus.CANCELLED: Severity.CRITICAL,
}


def order_status_anomaly(order: SupplyOrder) -> Anomaly | None:
    severity = NOTIFY_SEVERITY.get(order.status)
    if severity is None:
        return None

    return Anomaly(
        id=f"ORD-{order.id}",
        product_id=order.product_id,
        type=AnomalyType.STATUS_CHANGE,
        severity=severity,
        description=(
            f"Order #{order.id[:4]} for {order.product_name} was "
            f"{order.status.value.lower()} by {order.supplier_business_name}."
        ),
        date=to_day(order.created_at),
    )


def order_status_anomalies(orders: Iterable[SupplyOrder]) -> list[Anomaly]:
    """배송/취소된 주문을 주문 순서대로 STATUS_CHANGE 이상 징후로 변환합니다."""
    out: list[Anomaly] = []
    for order in orders:
        anomaly = order_status_anomaly(order)
        if anomaly is not None:
            out.append(anomaly)
    return out


def merge_anomaly_feed(base: Sequence[Anomaly], extra: Iterable[Anomaly]) -> list[Anomaly]:
    """기본 피드 뒤에 추가 이상 징후를 붙입니다. 같은 id는 먼저 나온 것만 유지합니다."""
    seen: set[str] = set()
    merged: list[Anomaly] = []
    for anomaly in [*base, *extra]:
        if anomaly.id in seen:
            continue
        seen.add(anomaly.id)
        merged.append(anomaly)
    return merged


def count_new_status_updates(
    previous: Iterable[SupplyOrder],
    fetched: Iterable[SupplyOrder],
) -> int:
    """새로 배송/취소된 주문 수를 셉니다.

    이전에 없던 주문이거나, 이전 상태가 PENDING이던 주문만 셉니다.
    """
    known = {order.id: order.status for order in previous}
    count = 0
    for order in fetched:
        if order.status not in NOTIFY_SEVERITY:
            continue
        before = known.get(order.id)
        if before is None or before == OrderStatus.PENDING:
            count += 1
    return count
