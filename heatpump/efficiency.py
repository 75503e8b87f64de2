"""Ambient temperature efficiency curves of the heat pump.

A heat pump works best when the exterior is mild.  Output is scaled by a
fraction between 50 % and 100 %:

* heating degrades linearly from 100 % at 15°C down to 50 % at the
  feasibility floor (``min_heating_outdoor_temp``, -25°C by default);
* cooling degrades linearly from 100 % at 25°C down to 50 % at 50°C.

Outside the stated bands the values clamp to the end points, which is exactly
what :func:`numpy.interp` does with its ``left``/``right`` defaults.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .interfaces import Mode

__all__ = [
    "MIN_EFFICIENCY",
    "MAX_EFFICIENCY",
    "HEATING_OPTIMAL_TEMP",
    "COOLING_OPTIMAL_TEMP",
    "COOLING_LIMIT_TEMP",
    "DEFAULT_HEATING_FLOOR",
    "EfficiencyModel",
    "efficiency",
    "ambient_efficiency",
    "efficiency_label",
]

MIN_EFFICIENCY = 0.5
MAX_EFFICIENCY = 1.0

#: Heating runs at full efficiency from this exterior temperature upwards (°C).
HEATING_OPTIMAL_TEMP = 15.0

#: Cooling runs at full efficiency up to this exterior temperature (°C).
COOLING_OPTIMAL_TEMP = 25.0

#: Cooling efficiency bottoms out at this exterior temperature (°C).
COOLING_LIMIT_TEMP = 50.0

DEFAULT_HEATING_FLOOR = -25.0


def _heating(ambient_temp: float, floor: float) -> float:
    return float(np.interp(ambient_temp, [floor, HEATING_OPTIMAL_TEMP],
                           [MIN_EFFICIENCY, MAX_EFFICIENCY]))


def _cooling(ambient_temp: float) -> float:
    return float(np.interp(ambient_temp, [COOLING_OPTIMAL_TEMP, COOLING_LIMIT_TEMP],
                           [MAX_EFFICIENCY, MIN_EFFICIENCY]))


def efficiency(mode: Mode, ambient_temp: float,
               min_heating_outdoor_temp: float = DEFAULT_HEATING_FLOOR) -> float:
    """Return the output fraction of a unit running in ``mode``.

    Args:
        mode: Operating mode of the unit.
        ambient_temp: Temperature of the air the outdoor side exchanges heat
            with (°C).
        min_heating_outdoor_temp: Feasibility floor of the heating curve (°C).

    Returns:
        A fraction in ``[0.5, 1.0]``.
    """

    if mode is Mode.HEATING:
        return _heating(ambient_temp, min_heating_outdoor_temp)
    return _cooling(ambient_temp)


def ambient_efficiency(ambient_temp: float,
                       min_heating_outdoor_temp: float = DEFAULT_HEATING_FLOOR) -> float:
    """Mode independent curve: optimal between 15°C and 25°C, degrading on both sides."""

    return min(_heating(ambient_temp, min_heating_outdoor_temp), _cooling(ambient_temp))


def efficiency_label(ambient_temp: float) -> Optional[str]:
    """Qualitative description of the ambient temperature shown next to the efficiency."""

    if ambient_temp < 0.0:
        return "very cold"
    if ambient_temp < 10.0:
        return "cold"
    if ambient_temp > 40.0:
        return "very hot"
    if ambient_temp > 30.0:
        return "hot"
    return None


@dataclass(frozen=True)
class EfficiencyModel:
    """Efficiency curves bound to one feasibility floor."""

    min_heating_outdoor_temp: float = DEFAULT_HEATING_FLOOR

    def __call__(self, mode: Mode, ambient_temp: float) -> float:
        return efficiency(mode, ambient_temp, self.min_heating_outdoor_temp)

    def ambient(self, ambient_temp: float) -> float:
        return ambient_efficiency(ambient_temp, self.min_heating_outdoor_temp)
