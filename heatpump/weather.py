"""Synthetic exterior temperature generation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

import math
import random

__all__ = [
    "SECONDS_PER_DAY",
    "SyntheticWeatherProvider",
    "ConstantWeather",
]

SECONDS_PER_DAY = 24.0 * 3600.0


@dataclass(frozen=True)
class ConstantWeather:
    """Exterior held at a fixed temperature."""

    temperature: float = 10.0

    def outdoor_temperature(self, seconds: float) -> float:
        return self.temperature


class SyntheticWeatherProvider:
    """Generate a pseudo realistic exterior temperature without external data.

    The temperature follows a daily sinusoid peaking in the afternoon.  A
    ``noise_std`` above zero adds gaussian noise drawn from ``rng``; pass a
    seeded :class:`random.Random` for reproducible runs.
    """

    def __init__(self, *, base_temp: float = 5.0, diurnal_amplitude: float = 8.0,
                 noise_std: float = 0.0, peak_hour: float = 15.0,
                 rng: random.Random | None = None) -> None:
        self.base_temp = float(base_temp)
        self.diurnal_amplitude = float(diurnal_amplitude)
        self.noise_std = float(noise_std)
        self.peak_hour = float(peak_hour)
        self.rng = rng or random.Random()

    def _daily_shape(self, seconds: float) -> float:
        hour_of_day = (seconds % SECONDS_PER_DAY) / 3600.0
        phase = (hour_of_day - self.peak_hour) / 24.0
        return math.cos(2.0 * math.pi * phase)

    def outdoor_temperature(self, seconds: float) -> float:
        temp = self.base_temp + self.diurnal_amplitude * self._daily_shape(seconds)
        if self.noise_std > 0:
            temp += self.rng.gauss(0.0, self.noise_std)
        return temp

    def forecast(self, hours: int, *, start_seconds: float = 0.0) -> List[float]:
        return list(self.iter_forecast(hours, start_seconds=start_seconds))

    def iter_forecast(self, hours: int, *, start_seconds: float = 0.0) -> Iterator[float]:
        for i in range(int(hours)):
            yield self.outdoor_temperature(start_seconds + i * 3600.0)
