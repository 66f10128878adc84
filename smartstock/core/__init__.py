"""Core configuration facade."""

from .config import (
    CONFIG,
    AnomalyConfig,
    ChartConfig,
    DashboardConfig,
    ExplanationConfig,
    ForecastConfig,
    RiskConfig,
)

__all__ = [
    "CONFIG",
    "AnomalyConfig",
    "ChartConfig",
    "DashboardConfig",
    "ExplanationConfig",
    "ForecastConfig",
    "RiskConfig",
]
