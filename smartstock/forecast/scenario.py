"""What-if 시나리오 배수 계산.

수요 배수, 프로모션, 특별 이벤트의 카테고리 부스트를 곱셈으로 결합합니다.
명절 이벤트 프리셋과 시나리오 설명 문구 생성도 함께 제공합니다.
"""

from __future__ import annotations

import dataclasses
from typing import NamedTuple, Optional

from ..common.data_utils import round_to_nearest
from ..core.config import CONFIG, ForecastConfig
from ..domain.models import SimulationParams, SpecialEvent

# 기본 시뮬레이션: 배수 1.0, 지연 없음, 프로모션 없음, 이벤트 없음
DEFAULT_SIMULATION = SimulationParams()


FESTIVAL_PRESETS: tuple[SpecialEvent, ...] = (
    SpecialEvent(
        name="Diwali Peak",
        category_boosts={"Grocery": 2.8, "Produce": 1.8, "Dairy": 2.0},
    ),
    SpecialEvent(
        name="Christmas / New Year",
        category_boosts={"Beverages": 2.5, "Bakery": 3.0, "Grocery": 1.5},
    ),
    SpecialEvent(
        name="Monsoon Sale",
        category_boosts={"Grocery": 1.4, "Dairy": 1.2},
    ),
)


class ScenarioMultiplier(NamedTuple):
    """시나리오를 구성하는 세 가지 독립 배수."""

    demand: float
    promotion: float
    event: float

    @property
    def combined(self) -> float:
        return self.demand * self.promotion * self.event


def promotion_multiplier(
    simulation: SimulationParams,
    *,
    config: Optional[ForecastConfig] = None,
) -> float:
    """프로모션 활성 시 1.4, 아니면 1.0."""
    cfg = config or CONFIG.forecast
    return cfg.promotion_multiplier if simulation.is_promotion_active else 1.0


def event_multiplier(simulation: SimulationParams, category: str) -> float:
    """활성 이벤트의 카테고리 부스트. 이벤트가 없거나 카테고리가 없으면 1.0."""
    event = simulation.active_event
    if event is None:
        return 1.0
    return event.boost_for(category)


def resolve_scenario_multiplier(
    category: str,
    simulation: Optional[SimulationParams] = None,
    *,
    config: Optional[ForecastConfig] = None,
) -> ScenarioMultiplier:
    """상품 카테고리에 대한 시나리오 배수를 계산합니다.

    Examples:
        >>> sim = SimulationParams(is_promotion_active=True,
        ...                        active_event=FESTIVAL_PRESETS[0])
        >>> resolve_scenario_multiplier("Grocery", sim)
        ScenarioMultiplier(demand=1.0, promotion=1.4, event=2.8)
    """
    sim = simulation or DEFAULT_SIMULATION
    return ScenarioMultiplier(
        demand=float(sim.demand_multiplier),
        promotion=promotion_multiplier(sim, config=config),
        event=event_multiplier(sim, category),
    )


def toggle_event(simulation: SimulationParams, event: SpecialEvent) -> SimulationParams:
    """이벤트를 활성화합니다. 같은 이름의 이벤트가 이미 활성이면 해제합니다."""
    active = simulation.active_event
    if active is not None and active.name == event.name:
        return dataclasses.replace(simulation, active_event=None)
    return dataclasses.replace(simulation, active_event=event)


def find_preset(name: str) -> Optional[SpecialEvent]:
    """이름(대소문자 무시)으로 이벤트 프리셋을 찾습니다."""
    key = name.strip().lower()
    for preset in FESTIVAL_PRESETS:
        if preset.name.lower() == key:
            return preset
    return None


def describe_scenario(simulation: Optional[SimulationParams] = None) -> str:
    """설명 서비스에 전달할 시나리오 요약 문구를 만듭니다."""
    sim = simulation or DEFAULT_SIMULATION
    promotion = "ACTIVE (+40%)" if sim.is_promotion_active else "None"
    event = sim.active_event.name if sim.active_event is not None else "Standard Operations"
    lines = [
        "Current Simulation:",
        f"- Demand Multiplier: {round_to_nearest(sim.demand_multiplier * 100)}%",
        f"- Supply Delay: {sim.lead_time_delay_days} days",
        f"- Promotion Status: {promotion}",
        f"- Special Event: {event}",
    ]
    return "\n".join(lines)
