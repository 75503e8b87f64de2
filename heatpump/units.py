"""Indoor and outdoor heat pump units.

An :class:`IndoorUnit` conditions one room.  It heats by pushing heat into its
room and delegates cooling to a companion :class:`CoolingSubsystem` that it
switches on and off in lockstep with its mode.

An :class:`OutdoorUnit` owns the group of indoor units connected to it.  It
reports which way it operates (absorbing exterior heat when any connected unit
heats, exhausting heat otherwise) and the efficiency that scales its capacity.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import logging

from .arbiter import ModeArbiter, ToggleResult, UnitState
from .config import UnitConfig
from .efficiency import EfficiencyModel, efficiency_label
from .interfaces import (
    CapacityController,
    CoolingSubsystem,
    Mode,
    PowerStatus,
    ThermalEnvironment,
    ThermostatSource,
    UnitId,
)

__all__ = [
    "HEATING_DIRECTION",
    "COOLING_DIRECTION",
    "GroupReport",
    "IndoorUnit",
    "OutdoorUnit",
]

logger = logging.getLogger(__name__)

HEATING_DIRECTION = "Heating mode (absorbing exterior heat)"
COOLING_DIRECTION = "Cooling mode (exhausting heat)"


def _format_temp(value: float) -> str:
    return f"{value:.1f}°C"


class IndoorUnit:
    """Indoor side of a heat pump.

    Args:
        unit_id: Stable identity of the unit.
        environment: Thermal field the unit reads from and pushes heat into.
        thermostat: Source of the target temperature.
        power: Power availability, checked before every effect application.
        cooling: Companion cooling subsystem, enabled while cooling.
        config: Unit type settings.
    """

    def __init__(self, unit_id: UnitId, environment: ThermalEnvironment,
                 thermostat: ThermostatSource, power: PowerStatus,
                 cooling: CoolingSubsystem | None = None,
                 config: UnitConfig | None = None) -> None:
        self.unit_id = unit_id
        self.environment = environment
        self.thermostat = thermostat
        self.power = power
        self.cooling = cooling
        self.config = config or UnitConfig()
        self.efficiency_model = EfficiencyModel(self.config.min_heating_outdoor_temp)
        self.arbiter = ModeArbiter(self.config)
        self.outdoor: Optional["OutdoorUnit"] = None
        self._efficiency = 1.0

    # ------------------------------------------------------------------
    # Lifecycle

    def spawn(self, restored: UnitState | None = None) -> None:
        """Initialise the mode, from the room on first spawn or from a save."""

        if restored is not None:
            self.arbiter = ModeArbiter.restore(restored, self.config)
        else:
            room_temp = self.environment.room_temperature(self.unit_id)
            self.arbiter = ModeArbiter.initial(
                room_temp, self.thermostat.target_temperature, self.config
            )
        self._efficiency = self.efficiency_model(self.mode, self.environment.outdoor_temperature())

    def despawn(self) -> None:
        if self.outdoor is not None:
            self.outdoor.disconnect(self)

    # ------------------------------------------------------------------
    # Properties

    @property
    def state(self) -> UnitState:
        return UnitState(mode=self.arbiter.mode, manual_override=self.arbiter.manual_override)

    @property
    def mode(self) -> Mode:
        return self.arbiter.mode

    @property
    def is_heating(self) -> bool:
        return self.arbiter.mode is Mode.HEATING

    @property
    def manual_override(self) -> bool:
        return self.arbiter.manual_override

    @property
    def can_heat(self) -> bool:
        return self.arbiter.can_heat(self.environment.outdoor_temperature())

    @property
    def efficiency(self) -> float:
        """Efficiency of the current mode, refreshed by control intervals and toggles."""
        return self._efficiency

    # ------------------------------------------------------------------
    # Cadences

    def control_tick(self) -> bool:
        """Run the arbiter for one control interval.

        Returns:
            ``False`` when the unit is not enclosed in a room and the interval
            was skipped.
        """

        room_temp = self.environment.room_temperature(self.unit_id)
        if room_temp is None:
            logger.debug(f"Unit {self.unit_id!r} is not in a room, skipping interval")
            return False

        outdoor_temp = self.environment.outdoor_temperature()
        mode = self.arbiter.evaluate(room_temp, self.thermostat.target_temperature, outdoor_temp)
        self._efficiency = self.efficiency_model(mode, outdoor_temp)
        self._sync_cooling()
        return True

    def apply_effect(self, dt_seconds: float) -> float:
        """Push heat into the room for ``dt_seconds`` of simulated time.

        Returns:
            The temperature increment written to the room (°C).
        """

        if not self.is_heating or not self.can_heat:
            return 0.0
        if not self.power.is_powered(self.unit_id):
            return 0.0

        environment = self.environment
        room_temp = environment.room_temperature(self.unit_id)
        if room_temp is None or environment.is_outdoor_exposed(self.unit_id):
            return 0.0
        if self.config.heat_only_below_target and room_temp >= self.thermostat.target_temperature:
            return 0.0

        energy = self.config.heat_per_second * dt_seconds * self._efficiency
        if self.config.scale_by_room_size:
            delta = energy / max(1, environment.room_cell_count(self.unit_id))
        else:
            delta = energy
        environment.adjust_room_temperature(self.unit_id, delta)
        return delta

    def _sync_cooling(self) -> None:
        if self.cooling is not None:
            self.cooling.set_enabled(self.mode is Mode.COOLING)

    # ------------------------------------------------------------------
    # Commands

    def toggle_mode(self) -> ToggleResult:
        """Manual toggle between heating and cooling, applied immediately."""

        outdoor_temp = self.environment.outdoor_temperature()
        result = self.arbiter.toggle(outdoor_temp)
        if result.accepted:
            self._efficiency = self.efficiency_model(self.mode, outdoor_temp)
            self._sync_cooling()
        return result

    def resume_auto(self) -> None:
        self.arbiter.resume_auto()

    # ------------------------------------------------------------------

    def inspect(self) -> str:
        lines = [f"Mode: {self.mode.label} [{'Manual' if self.manual_override else 'Auto'}]"]

        room_temp = self.environment.room_temperature(self.unit_id)
        target = self.thermostat.target_temperature
        if room_temp is not None:
            lines.append(f"Room: {_format_temp(room_temp)} / Target: {_format_temp(target)}")

        lines.append(f"Outdoor: {_format_temp(self.environment.outdoor_temperature())}")
        if (room_temp is not None and room_temp < target - self.config.mode_threshold
                and not self.can_heat):
            floor = _format_temp(self.config.min_heating_outdoor_temp)
            lines.append(f"Heating unavailable below {floor} outdoor")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"IndoorUnit({self.unit_id!r}, mode={self.mode.value}, manual={self.manual_override})"


@dataclass(frozen=True)
class GroupReport:
    """Aggregated view of one outdoor unit and its connected indoor units."""

    heating_count: int
    cooling_count: int
    ambient_temperature: float
    efficiency: float
    effective_capacity: Optional[float] = None

    @property
    def any_heating(self) -> bool:
        return self.heating_count > 0

    @property
    def size(self) -> int:
        return self.heating_count + self.cooling_count

    @property
    def direction(self) -> Optional[str]:
        if self.size == 0:
            return None
        return HEATING_DIRECTION if self.any_heating else COOLING_DIRECTION


class OutdoorUnit:
    """Outdoor side of a heat pump shared by a group of indoor units."""

    def __init__(self, unit_id: UnitId, environment: ThermalEnvironment,
                 capacity: CapacityController | None = None,
                 config: UnitConfig | None = None) -> None:
        self.unit_id = unit_id
        self.environment = environment
        self.capacity = capacity
        self.config = config or UnitConfig()
        self.efficiency_model = EfficiencyModel(self.config.min_heating_outdoor_temp)
        self._group: Dict[UnitId, IndoorUnit] = {}
        self.last_report: Optional[GroupReport] = None

    # ------------------------------------------------------------------
    # Group membership

    def connect(self, indoor: IndoorUnit) -> None:
        if indoor.outdoor is not None and indoor.outdoor is not self:
            indoor.outdoor.disconnect(indoor)
        self._group[indoor.unit_id] = indoor
        indoor.outdoor = self

    def disconnect(self, indoor: IndoorUnit) -> None:
        if self._group.pop(indoor.unit_id, None) is not None:
            indoor.outdoor = None

    @property
    def group(self) -> List[IndoorUnit]:
        return list(self._group.values())

    def __iter__(self) -> Iterator[IndoorUnit]:
        return iter(list(self._group.values()))

    def __len__(self) -> int:
        return len(self._group)

    # ------------------------------------------------------------------

    def ambient_temperature(self) -> float:
        """Room temperature when installed in an enclosed room, the exterior otherwise."""

        environment = self.environment
        room_temp = environment.room_temperature(self.unit_id)
        if room_temp is None or environment.is_outdoor_exposed(self.unit_id):
            return environment.outdoor_temperature()
        return room_temp

    def aggregate(self) -> GroupReport:
        """Compute the group report without touching the capacity controller."""

        heating = sum(1 for unit in self._group.values() if unit.is_heating)
        cooling = len(self._group) - heating
        ambient = self.ambient_temperature()

        if self._group:
            mode = Mode.HEATING if heating else Mode.COOLING
            efficiency = self.efficiency_model(mode, ambient)
        else:
            efficiency = self.efficiency_model.ambient(ambient)

        effective_capacity = None
        if self.capacity is not None:
            effective_capacity = self.capacity.base_capacity * efficiency

        return GroupReport(
            heating_count=heating,
            cooling_count=cooling,
            ambient_temperature=ambient,
            efficiency=efficiency,
            effective_capacity=effective_capacity,
        )

    def control_tick(self) -> GroupReport:
        """Aggregate the group and push the effective capacity to the controller."""

        report = self.aggregate()
        if self.capacity is not None and report.effective_capacity is not None:
            self.capacity.set_effective_capacity(report.effective_capacity)
        self.last_report = report
        logger.debug(f"Outdoor unit {self.unit_id!r}: {report.heating_count} heating, "
                     f"{report.cooling_count} cooling, efficiency {report.efficiency:.2f}")
        return report

    @property
    def efficiency(self) -> float:
        report = self.last_report or self.aggregate()
        return report.efficiency

    def inspect(self) -> str:
        report = self.last_report or self.aggregate()
        line = f"Efficiency: {report.efficiency * 100.0:.1f}%"
        label = efficiency_label(report.ambient_temperature)
        if label:
            line += f" ({label})"
        if report.direction is None:
            return line
        return f"{report.direction}\n{line}"

    def __repr__(self) -> str:
        return f"OutdoorUnit({self.unit_id!r}, connected={len(self._group)})"
