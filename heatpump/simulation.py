"""Orchestrate the interactions between the units, the rooms and the weather."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Protocol

import logging

import pandas as pd

from .environment import SimulatedEnvironment
from .interfaces import Mode, UnitId
from .scheduler import Scheduler

__all__ = [
    "SimulationConfig",
    "SimulationResult",
    "run_closed_loop_simulation",
]

logger = logging.getLogger(__name__)


class _Weather(Protocol):
    def outdoor_temperature(self, seconds: float) -> float:
        ...


@dataclass
class SimulationConfig:
    duration_seconds: float = 3600.0
    start_seconds: float = 0.0


@dataclass
class SimulationResult:
    """Samples recorded after every control interval."""

    times: List[float] = field(default_factory=list)
    outdoor_temperatures: List[float] = field(default_factory=list)
    room_temperatures: Dict[str, List[float]] = field(default_factory=dict)
    modes: Dict[UnitId, List[Mode]] = field(default_factory=dict)
    outdoor_efficiency: Dict[UnitId, List[float]] = field(default_factory=dict)

    def heating_fraction(self, unit_id: UnitId) -> float:
        """Share of the samples in which ``unit_id`` was heating."""

        modes = self.modes.get(unit_id, [])
        if not modes:
            return 0.0
        return sum(1 for mode in modes if mode is Mode.HEATING) / len(modes)

    def to_dataframe(self) -> pd.DataFrame:
        data: Dict[str, list] = {"outdoor": list(self.outdoor_temperatures)}
        for name, values in self.room_temperatures.items():
            data[f"room:{name}"] = list(values)
        for unit_id, modes in self.modes.items():
            data[f"mode:{unit_id}"] = [mode.value for mode in modes]
        for unit_id, values in self.outdoor_efficiency.items():
            data[f"efficiency:{unit_id}"] = list(values)
        return pd.DataFrame(data, index=pd.Index(self.times, name="seconds"))


def run_closed_loop_simulation(scheduler: Scheduler,
                               environment: SimulatedEnvironment,
                               weather: _Weather,
                               config: SimulationConfig | None = None) -> SimulationResult:
    """Run the scheduler against the in-memory environment.

    The exterior temperature and the room heat losses are updated once per
    control interval; the units run at their own cadences in between.
    """

    cfg = config or SimulationConfig()
    interval_ticks = scheduler.config.control_interval_ticks
    interval_seconds = scheduler.config.control_seconds
    intervals = int(cfg.duration_seconds / interval_seconds)

    result = SimulationResult()
    for name in environment.rooms:
        result.room_temperatures[name] = []
    for unit in scheduler.indoor_units:
        result.modes[unit.unit_id] = []
    for unit in scheduler.outdoor_units:
        result.outdoor_efficiency[unit.unit_id] = []

    logger.info(f"Simulating {intervals} control intervals ({cfg.duration_seconds:.0f}s)")

    for i in range(intervals):
        now = cfg.start_seconds + i * interval_seconds
        environment.set_outdoor_temperature(weather.outdoor_temperature(now))
        environment.step(interval_seconds)
        scheduler.run(interval_ticks)

        result.times.append(now + interval_seconds)
        result.outdoor_temperatures.append(environment.outdoor_temperature())
        for name, room in environment.rooms.items():
            result.room_temperatures[name].append(room.temperature)
        for unit in scheduler.indoor_units:
            result.modes.setdefault(unit.unit_id, []).append(unit.mode)
        for unit in scheduler.outdoor_units:
            result.outdoor_efficiency.setdefault(unit.unit_id, []).append(unit.efficiency)

    logger.info("Simulation finished")
    return result
