"""
SmartStock 예측 리포트 엔트리 포인트

데모 카탈로그와 판매 이력으로 예측/이상 징후/KPI를 계산하여
콘솔에 출력합니다. ``--explain``을 주면 Gemini 설명을 함께 출력합니다
(GEMINI_API_KEY가 없으면 폴백 문구).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import pandas as pd

# 로깅 설정
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from smartstock.demo import PRODUCTS, generate_sales_history
from smartstock.domain import SimulationParams
from smartstock.forecast import FESTIVAL_PRESETS, describe_scenario, find_preset
from smartstock.pipeline import DashboardInputs, build_dashboard
from smartstock.services import attach_explanations, explain_simulation


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SmartStock forecast report (demo data)")
    parser.add_argument("--horizon", type=int, default=7, help="Forecast horizon in days")
    parser.add_argument("--demand", type=float, default=1.0, help="Global demand multiplier")
    parser.add_argument("--delay", type=int, default=0, help="Supplier delay in days")
    parser.add_argument("--promotion", action="store_true", help="Activate the +40%% promotion")
    parser.add_argument(
        "--event",
        default=None,
        help="Festival preset: " + ", ".join(p.name for p in FESTIVAL_PRESETS),
    )
    parser.add_argument("--as-of", default=None, help="Report date (YYYY-MM-DD)")
    parser.add_argument("--seed", type=int, default=42, help="Demo sales seed")
    parser.add_argument("--explain", action="store_true", help="Add Gemini explanations")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    event = None
    if args.event:
        event = find_preset(args.event)
        if event is None:
            logger.error(f"Unknown event preset: {args.event}")
            return 2

    simulation = SimulationParams(
        demand_multiplier=args.demand,
        lead_time_delay_days=args.delay,
        is_promotion_active=args.promotion,
        active_event=event,
    )

    sales = generate_sales_history(args.as_of, seed=args.seed)
    inputs = DashboardInputs(products=PRODUCTS, sales=sales)
    result = build_dashboard(
        inputs, horizon_days=args.horizon, simulation=simulation, as_of=args.as_of
    )

    names = {p.id: p.name for p in PRODUCTS}
    table = pd.DataFrame([f.to_dict() for f in result.forecasts])
    table.insert(1, "name", table["productId"].map(names))

    print(describe_scenario(simulation))
    print()
    print(table.to_string(index=False))
    print()
    print(
        f"Stock value: ${result.kpis.total_stock_value:,.2f} | "
        f"Low stock: {result.kpis.low_stock_count} | "
        f"Critical alerts: {result.kpis.critical_alerts}"
    )
    print(
        f"At risk: {result.risk.products_at_risk} | "
        f"Restock capital: ${result.risk.total_restock_capital:,.2f} | "
        f"Risk: {result.risk.risk_level}"
    )

    print()
    if not result.anomalies:
        print("No anomalies detected today.")
    for anomaly in result.anomalies:
        print(
            f"[{anomaly.severity.value}] {names.get(anomaly.product_id, 'Unknown Product')}: "
            f"{anomaly.description} ({anomaly.date:%Y-%m-%d})"
        )

    if args.explain:
        print()
        for forecast in attach_explanations(PRODUCTS, result.forecasts):
            print(f"{names[forecast.product_id]}: {forecast.explanation}")
        print()
        print(
            explain_simulation(
                describe_scenario(simulation),
                result.risk.products_at_risk,
                result.risk.total_restock_capital,
                result.risk.risk_level,
            )
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
