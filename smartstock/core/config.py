"""Configuration and constants for the SmartStock forecasting core.

예측 윈도우, 이상 징후 임계값, 리스크 등급 기준, Gemini 설정 등
전역 설정을 제공합니다.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


# ============================================================
# 예측 설정
# ============================================================

@dataclass(frozen=True)
class ForecastConfig:
    """판매 집계 및 수요 예측 관련 설정"""

    # 최근 평균 계산에 사용할 판매 기록 수
    recent_window: int = 7

    # 추세 비교용 이전 구간 판매 기록 수 (8~14번째 기록)
    prior_window: int = 7

    # 기본 예측 기간 (일)
    default_horizon_days: int = 7

    # 프로모션 활성화 시 고정 수요 가중치 (+40%)
    promotion_multiplier: float = 1.4


# ============================================================
# 이상 징후 설정
# ============================================================

@dataclass(frozen=True)
class AnomalyConfig:
    """재고 부족/판매 급증 감지 관련 설정"""

    # 현재 재고가 안전 재고의 이 비율 이하이면 CRITICAL
    low_stock_ratio: float = 0.5

    # 급증 판단용 최근 판매 기록 수
    spike_recent_window: int = 3

    # 급증 판단용 과거 판매 기록 수 (4~13번째 기록)
    spike_history_window: int = 10

    # 최근 평균이 과거 평균의 이 배수를 넘으면 급증 (80%+)
    spike_ratio: float = 1.8

    # 과거 구간 기록이 없으면 급증 검사를 건너뜀
    # False로 두면 과거 평균을 0으로 보고 검사함 (최근 판매가 있으면 항상 발생)
    require_spike_history: bool = True


# ============================================================
# 시뮬레이션 리스크 설정
# ============================================================

@dataclass(frozen=True)
class RiskConfig:
    """What-if 시뮬레이션 리스크 등급 기준"""

    critical_demand_multiplier: float = 1.8
    critical_delay_days: int = 3
    elevated_demand_multiplier: float = 1.3
    elevated_delay_days: int = 1


# ============================================================
# 차트 시계열 설정
# ============================================================

@dataclass(frozen=True)
class ChartConfig:
    """예측 차트용 시계열 설정"""

    # 표시할 과거 판매 기록 수
    history_points: int = 14

    # 표시할 예측 일수
    forecast_points: int = 7

    # 예측 구간 일별 증가분
    daily_drift: float = 0.2


# ============================================================
# 설명 서비스 (Gemini) 설정
# ============================================================

@dataclass(frozen=True)
class ExplanationConfig:
    """자연어 설명 생성 서비스 설정"""

    api_key_env: str = "GEMINI_API_KEY"
    model_env: str = "GEMINI_MODEL"
    default_model: str = "gemini-1.5-flash"

    @property
    def api_key(self) -> str | None:
        value = os.getenv(self.api_key_env, "").strip()
        return value or None

    @property
    def model_name(self) -> str:
        return os.getenv(self.model_env, "").strip() or self.default_model


@dataclass(frozen=True)
class DashboardConfig:
    """예측 코어 전역 설정"""

    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    anomaly: AnomalyConfig = field(default_factory=AnomalyConfig)
    risk: RiskConfig = field(default_factory=RiskConfig)
    chart: ChartConfig = field(default_factory=ChartConfig)
    explanation: ExplanationConfig = field(default_factory=ExplanationConfig)


# ============================================================
# 전역 설정 인스턴스
# ============================================================

# 전역 설정 객체 (불변)
CONFIG = DashboardConfig()
