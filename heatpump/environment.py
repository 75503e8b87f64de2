"""In-memory host collaborators.

The control core only talks to the small interfaces in
:mod:`heatpump.interfaces`.  This module implements them with plain Python
objects so the units can be exercised without a host: rooms are single
temperature nodes that lose heat to the exterior with a first-order law, the
same lumped approach as a 1R1C building model.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .interfaces import UnitId

__all__ = [
    "Room",
    "SimulatedEnvironment",
    "Thermostat",
    "PowerGrid",
    "AirConditioner",
    "FixedCapacity",
]


@dataclass
class Room:
    """A room of the host map.

    ``loss_coefficient`` is the fraction of the indoor/outdoor temperature gap
    closed per simulated second.  Outdoor-exposed rooms always track the
    exterior temperature.
    """

    name: str
    temperature: float = 20.0
    cell_count: int = 1
    outdoor_exposed: bool = False
    loss_coefficient: float = 0.0005


class SimulatedEnvironment:
    """Thermal field with rooms, unit placement and a uniform exterior."""

    def __init__(self, outdoor_temp: float = 10.0) -> None:
        self._outdoor_temp = float(outdoor_temp)
        self.rooms: Dict[str, Room] = {}
        self._placement: Dict[UnitId, str] = {}
        self._appliances: List["AirConditioner"] = []

    # ------------------------------------------------------------------
    # Map setup

    def add_room(self, room: Room) -> Room:
        self.rooms[room.name] = room
        if room.outdoor_exposed:
            room.temperature = self._outdoor_temp
        return room

    def place(self, unit_id: UnitId, room_name: Optional[str]) -> None:
        """Put a unit into a room; ``None`` leaves it unenclosed."""

        if room_name is None:
            self._placement.pop(unit_id, None)
        else:
            self._placement[unit_id] = room_name

    def attach(self, appliance: "AirConditioner") -> None:
        self._appliances.append(appliance)

    def room_of(self, unit_id: UnitId) -> Optional[Room]:
        name = self._placement.get(unit_id)
        if name is None:
            return None
        return self.rooms.get(name)

    def set_outdoor_temperature(self, value: float) -> None:
        self._outdoor_temp = float(value)
        for room in self.rooms.values():
            if room.outdoor_exposed:
                room.temperature = self._outdoor_temp

    # ------------------------------------------------------------------
    # ThermalEnvironment

    def room_temperature(self, unit_id: UnitId) -> Optional[float]:
        room = self.room_of(unit_id)
        return None if room is None else room.temperature

    def outdoor_temperature(self) -> float:
        return self._outdoor_temp

    def adjust_room_temperature(self, unit_id: UnitId, delta: float) -> None:
        room = self.room_of(unit_id)
        if room is not None and not room.outdoor_exposed:
            room.temperature += delta

    def is_outdoor_exposed(self, unit_id: UnitId) -> bool:
        room = self.room_of(unit_id)
        return room is None or room.outdoor_exposed

    def room_cell_count(self, unit_id: UnitId) -> int:
        room = self.room_of(unit_id)
        return 1 if room is None else max(1, room.cell_count)

    # ------------------------------------------------------------------
    # Dynamics

    def step(self, dt_seconds: float) -> None:
        """Let enclosed rooms lose heat to the exterior and run attached appliances."""

        if dt_seconds <= 0:
            raise ValueError("dt_seconds must be positive")

        for room in self.rooms.values():
            if room.outdoor_exposed:
                continue
            # Fraction is capped at one so long steps cannot overshoot.
            fraction = min(1.0, room.loss_coefficient * dt_seconds)
            room.temperature += (self._outdoor_temp - room.temperature) * fraction

        for appliance in self._appliances:
            appliance.apply(dt_seconds)


@dataclass
class Thermostat:
    target_temperature: float = 21.0


@dataclass
class PowerGrid:
    """Per-unit power availability; units are powered unless switched off."""

    unpowered: Set[UnitId] = field(default_factory=set)

    def is_powered(self, unit_id: UnitId) -> bool:
        return unit_id not in self.unpowered

    def set_powered(self, unit_id: UnitId, powered: bool) -> None:
        if powered:
            self.unpowered.discard(unit_id)
        else:
            self.unpowered.add(unit_id)


class AirConditioner:
    """Companion cooling subsystem of an indoor unit.

    While enabled and powered it removes ``cooling_per_second`` of heat from
    the room as long as the room is warmer than the thermostat target.
    """

    def __init__(self, unit_id: UnitId, environment: SimulatedEnvironment,
                 thermostat: Thermostat, power: PowerGrid | None = None,
                 cooling_per_second: float = 21.0) -> None:
        self.unit_id = unit_id
        self.environment = environment
        self.thermostat = thermostat
        self.power = power or PowerGrid()
        self.cooling_per_second = cooling_per_second
        self.enabled = True

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = bool(enabled)

    def apply(self, dt_seconds: float) -> float:
        if not self.enabled or not self.power.is_powered(self.unit_id):
            return 0.0
        room = self.environment.room_of(self.unit_id)
        if room is None or room.outdoor_exposed:
            return 0.0
        if room.temperature <= self.thermostat.target_temperature:
            return 0.0
        delta = -self.cooling_per_second * dt_seconds / max(1, room.cell_count)
        self.environment.adjust_room_temperature(self.unit_id, delta)
        return delta


@dataclass
class FixedCapacity:
    """Capacity controller that records the capacity pushed by its outdoor unit."""

    base_capacity: float = 100.0
    effective_capacity: Optional[float] = None

    def set_effective_capacity(self, capacity: float) -> None:
        self.effective_capacity = float(capacity)
