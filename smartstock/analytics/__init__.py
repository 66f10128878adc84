"""Analytics layer facade for the SmartStock core."""

from .anomalies import detect_anomalies, low_stock_anomaly, spike_anomaly
from .kpi import (
    OverviewKpis,
    SimulationRiskSummary,
    classify_risk_level,
    overview_kpis,
    simulation_risk_summary,
)
from .notifications import (
    count_new_status_updates,
    merge_anomaly_feed,
    order_status_anomalies,
)
from .sales import prepare_forecast_chart_series

__all__ = [
    "detect_anomalies",
    "low_stock_anomaly",
    "spike_anomaly",
    "OverviewKpis",
    "SimulationRiskSummary",
    "classify_risk_level",
    "overview_kpis",
    "simulation_risk_summary",
    "count_new_status_updates",
    "merge_anomaly_feed",
    "order_status_anomalies",
    "prepare_forecast_chart_series",
]
