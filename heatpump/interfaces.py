"""Collaborator interfaces consumed by the control core.

The host is responsible for locating concrete implementations and injecting
them when units are created.  :mod:`heatpump.environment` provides in-memory
implementations used by the simulation driver and the tests.
"""
from __future__ import annotations

from enum import Enum
from typing import Hashable, Optional, Protocol, runtime_checkable

__all__ = [
    "Mode",
    "UnitId",
    "ThermalEnvironment",
    "PowerStatus",
    "CoolingSubsystem",
    "ThermostatSource",
    "CapacityController",
]

UnitId = Hashable


class Mode(str, Enum):
    """Operating mode of an indoor unit."""

    HEATING = "heating"
    COOLING = "cooling"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def flipped(self) -> "Mode":
        return Mode.COOLING if self is Mode.HEATING else Mode.HEATING


@runtime_checkable
class ThermalEnvironment(Protocol):
    """Read/write access to the host's thermal field."""

    def room_temperature(self, unit_id: UnitId) -> Optional[float]:
        """Temperature of the room enclosing the unit, ``None`` when unenclosed."""

    def outdoor_temperature(self) -> float:
        ...

    def adjust_room_temperature(self, unit_id: UnitId, delta: float) -> None:
        """Add ``delta`` (°C) to the room enclosing the unit."""

    def is_outdoor_exposed(self, unit_id: UnitId) -> bool:
        """Whether the unit's room uses the exterior temperature directly."""

    def room_cell_count(self, unit_id: UnitId) -> int:
        ...


@runtime_checkable
class PowerStatus(Protocol):
    def is_powered(self, unit_id: UnitId) -> bool:
        ...


@runtime_checkable
class CoolingSubsystem(Protocol):
    """Companion cooling mechanism of an indoor unit."""

    def set_enabled(self, enabled: bool) -> None:
        ...


@runtime_checkable
class ThermostatSource(Protocol):
    target_temperature: float


@runtime_checkable
class CapacityController(Protocol):
    """Capacity-sharing subsystem attached to an outdoor unit."""

    base_capacity: float

    def set_effective_capacity(self, capacity: float) -> None:
        ...
