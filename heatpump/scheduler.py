"""Tick driven orchestration of indoor and outdoor units."""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional

import logging

from .arbiter import UnitState
from .config import SchedulerConfig
from .exceptions import ConfigurationError, UnknownUnitError
from .interfaces import UnitId
from .persistence import dump_states
from .units import GroupReport, IndoorUnit, OutdoorUnit

__all__ = [
    "Scheduler",
]

logger = logging.getLogger(__name__)


class Scheduler:
    """Drive every registered unit at two independent cadences.

    The host calls :meth:`tick` once per simulation tick.  Every
    ``control_interval_ticks`` ticks all indoor units are arbitrated, then all
    outdoor units aggregate their groups, so aggregation always observes the
    modes chosen in the same interval.  Every ``step_interval_ticks`` ticks
    each indoor unit applies its heating effect.  On a tick shared by both
    cadences the control pass runs first.
    """

    def __init__(self, config: SchedulerConfig | None = None) -> None:
        self.config = config or SchedulerConfig()
        self._indoor: Dict[UnitId, IndoorUnit] = {}
        self._outdoor: Dict[UnitId, OutdoorUnit] = {}
        self._ticks = 0

    # ------------------------------------------------------------------
    # Registration

    def _check_unique(self, unit_id: UnitId) -> None:
        if unit_id in self._indoor or unit_id in self._outdoor:
            raise ConfigurationError(f"A unit with id {unit_id!r} is already registered")

    def add_outdoor(self, unit: OutdoorUnit) -> OutdoorUnit:
        self._check_unique(unit.unit_id)
        self._outdoor[unit.unit_id] = unit
        return unit

    def add_indoor(self, unit: IndoorUnit, outdoor: OutdoorUnit | None = None,
                   restored: UnitState | None = None) -> IndoorUnit:
        """Register and spawn an indoor unit.

        Args:
            unit: The unit to register.
            outdoor: Outdoor unit whose group the unit joins.
            restored: Saved state; when given the mode is not re-initialised
                from the current room temperature.
        """

        self._check_unique(unit.unit_id)
        unit.spawn(restored)
        self._indoor[unit.unit_id] = unit
        if outdoor is not None:
            outdoor.connect(unit)
        return unit

    def remove(self, unit_id: UnitId) -> None:
        if unit_id in self._indoor:
            self._indoor.pop(unit_id).despawn()
        elif unit_id in self._outdoor:
            outdoor = self._outdoor.pop(unit_id)
            for indoor in outdoor:
                outdoor.disconnect(indoor)
        else:
            raise UnknownUnitError(f"No unit registered with id {unit_id!r}")

    @property
    def indoor_units(self) -> List[IndoorUnit]:
        return list(self._indoor.values())

    @property
    def outdoor_units(self) -> List[OutdoorUnit]:
        return list(self._outdoor.values())

    def indoor(self, unit_id: UnitId) -> IndoorUnit:
        try:
            return self._indoor[unit_id]
        except KeyError:
            raise UnknownUnitError(f"No indoor unit registered with id {unit_id!r}") from None

    # ------------------------------------------------------------------
    # Time

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def elapsed_seconds(self) -> float:
        return self._ticks / self.config.ticks_per_second

    def tick(self) -> Optional[Dict[UnitId, GroupReport]]:
        """Advance one tick.

        Returns:
            The outdoor reports when a control interval ran on this tick,
            ``None`` otherwise.
        """

        self._ticks += 1
        reports = None
        if self._ticks % self.config.control_interval_ticks == 0:
            reports = self.control_pass()
        if self._ticks % self.config.step_interval_ticks == 0:
            self.step_pass(self.config.step_seconds)
        return reports

    def run(self, ticks: int) -> None:
        for _ in range(int(ticks)):
            self.tick()

    def control_pass(self) -> Dict[UnitId, GroupReport]:
        skipped = sum(1 for unit in self._indoor.values() if not unit.control_tick())
        if skipped:
            logger.debug(f"{skipped} indoor unit(s) skipped at tick {self._ticks}")
        return {unit_id: unit.control_tick() for unit_id, unit in self._outdoor.items()}

    def step_pass(self, dt_seconds: float) -> None:
        for unit in self._indoor.values():
            unit.apply_effect(dt_seconds)

    # ------------------------------------------------------------------
    # Persistence

    def snapshot(self) -> Dict[str, Dict[str, object]]:
        return dump_states(self._indoor.values())

    def restore(self, states: Mapping[str, UnitState]) -> None:
        """Apply loaded states to registered indoor units, keyed by ``str(unit_id)``."""

        by_key = {str(unit_id): unit for unit_id, unit in self._indoor.items()}
        for key, state in states.items():
            unit = by_key.get(str(key))
            if unit is None:
                raise UnknownUnitError(f"Saved state for unknown unit {key!r}")
            unit.spawn(state)
