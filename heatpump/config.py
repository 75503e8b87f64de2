"""Configuration dataclasses for heat pump units and the scheduler.

Values come from static definition data, never from runtime state.  Keys may
be given in snake_case or in the camelCase used by definition files.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Tuple

import json
import re

from .exceptions import ConfigurationError

__all__ = [
    "UnitConfig",
    "SchedulerConfig",
    "load_config",
]


def _camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def _convert(cls: type, data: Mapping[str, Any]) -> dict:
    known = {f.name for f in fields(cls)}
    converted = {_camel_to_snake(k): v for k, v in data.items()}
    unknown = sorted(set(converted) - known)
    if unknown:
        raise ConfigurationError(f"Unknown {cls.__name__} keys: {', '.join(unknown)}")
    return converted


@dataclass(frozen=True)
class UnitConfig:
    """Per unit-type settings of an indoor heat pump unit.

    * ``mode_threshold`` is the hysteresis half-width (°C) around the target.
    * ``min_heating_outdoor_temp`` is the feasibility floor: below it the
      outdoor unit cannot extract heat from the exterior air.
    * ``heat_per_second`` is the heat pushed into the room while heating, in
      the host's energy units per simulated second.
    * ``scale_by_room_size`` divides the pushed energy by the room cell count
      so the injected energy does not depend on the room size.  When false the
      rate is applied as a flat temperature increment.
    * ``heat_only_below_target`` stops pushing heat once the room reached the
      target temperature.
    """

    mode_threshold: float = 2.0
    min_heating_outdoor_temp: float = -25.0
    heat_per_second: float = 21.0
    scale_by_room_size: bool = True
    heat_only_below_target: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.mode_threshold < 0:
            raise ConfigurationError("mode_threshold must not be negative")
        if self.heat_per_second < 0:
            raise ConfigurationError("heat_per_second must not be negative")
        if self.min_heating_outdoor_temp >= 15.0:
            # The heating efficiency curve interpolates up to 15°C.
            raise ConfigurationError("min_heating_outdoor_temp must be below 15°C")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnitConfig":
        """Create from dictionary."""
        return cls(**_convert(cls, data))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SchedulerConfig:
    """Host tick rate and the two cadences derived from it."""

    ticks_per_second: int = 60
    control_interval_ticks: int = 60
    step_interval_ticks: int = 1

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name in ("ticks_per_second", "control_interval_ticks", "step_interval_ticks"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")

    @property
    def step_seconds(self) -> float:
        """Simulated seconds covered by one effect-application step."""
        return self.step_interval_ticks / self.ticks_per_second

    @property
    def control_seconds(self) -> float:
        return self.control_interval_ticks / self.ticks_per_second

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SchedulerConfig":
        """Create from dictionary."""
        return cls(**_convert(cls, data))

    def to_dict(self) -> dict:
        return asdict(self)


def load_config(path: str | Path) -> Tuple[UnitConfig, SchedulerConfig]:
    """Read a JSON definition file with optional ``unit`` and ``scheduler`` sections."""

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid configuration file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain an object")

    unit = UnitConfig.from_dict(data.get("unit", {}))
    scheduler = SchedulerConfig.from_dict(data.get("scheduler", {}))
    return unit, scheduler
