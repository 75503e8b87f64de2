"""Heating/cooling mode arbitration with hysteresis and manual override."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import logging

from .config import UnitConfig
from .interfaces import Mode

__all__ = [
    "UnitState",
    "ToggleResult",
    "ModeArbiter",
]

logger = logging.getLogger(__name__)


@dataclass
class UnitState:
    """The only runtime state of an indoor unit that survives save/load."""

    mode: Mode = Mode.COOLING
    manual_override: bool = False

    @property
    def is_heating(self) -> bool:
        return self.mode is Mode.HEATING


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of a manual mode toggle.

    Attributes:
        accepted: ``False`` when the requested mode was infeasible.
        mode: Mode of the unit after the toggle.
        reason: Short explanation of a rejection, for the calling UI layer.
    """

    accepted: bool
    mode: Mode
    reason: Optional[str] = None


class ModeArbiter:
    """Hysteresis state machine choosing between heating and cooling.

    In automatic mode the arbiter heats once the room falls more than
    ``mode_threshold`` below the target and cools once it rises more than
    ``mode_threshold`` above it.  Inside that dead zone the mode is kept so the
    unit does not chatter around the target.

    Heating is only feasible when the exterior is at least
    ``min_heating_outdoor_temp``.  The auto rule never selects infeasible
    heating, a manual toggle to infeasible heating is rejected, and a unit
    that is heating when the exterior drops below the floor is forced back to
    cooling with its manual override cleared.
    """

    def __init__(self, config: UnitConfig | None = None,
                 state: UnitState | None = None) -> None:
        self.config = config or UnitConfig()
        self.state = state or UnitState()

    # ------------------------------------------------------------------
    # Construction

    @classmethod
    def initial(cls, room_temp: Optional[float], target_temp: float,
                config: UnitConfig | None = None) -> "ModeArbiter":
        """Arbiter for a freshly spawned unit.

        The unit starts heating when the room is colder than the target.  An
        unenclosed unit starts in cooling mode.
        """

        mode = Mode.COOLING
        if room_temp is not None and room_temp < target_temp:
            mode = Mode.HEATING
        return cls(config, UnitState(mode=mode, manual_override=False))

    @classmethod
    def restore(cls, state: UnitState, config: UnitConfig | None = None) -> "ModeArbiter":
        """Arbiter for a unit loaded from a save; the state is kept verbatim."""

        return cls(config, UnitState(mode=state.mode, manual_override=state.manual_override))

    # ------------------------------------------------------------------
    # Properties

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def manual_override(self) -> bool:
        return self.state.manual_override

    def can_heat(self, outdoor_temp: float) -> bool:
        return outdoor_temp >= self.config.min_heating_outdoor_temp

    # ------------------------------------------------------------------
    # Transitions

    def evaluate(self, room_temp: float, target_temp: float, outdoor_temp: float) -> Mode:
        """Run one control interval and return the resulting mode."""

        state = self.state
        previous = state.mode
        can_heat = self.can_heat(outdoor_temp)

        if not state.manual_override:
            threshold = self.config.mode_threshold
            should_heat = room_temp < target_temp - threshold
            should_cool = room_temp > target_temp + threshold

            if should_heat and can_heat:
                state.mode = Mode.HEATING
            elif should_cool:
                state.mode = Mode.COOLING

        self._enforce_feasibility(can_heat)

        if state.mode is not previous:
            logger.debug(f"Mode {previous.label} -> {state.mode.label} "
                         f"(room={room_temp:.1f}, target={target_temp:.1f}, outdoor={outdoor_temp:.1f})")
        return state.mode

    def _enforce_feasibility(self, can_heat: bool) -> None:
        # Final step of every evaluation; the only transition allowed to
        # override a manual choice.
        state = self.state
        if state.mode is Mode.HEATING and not can_heat:
            state.mode = Mode.COOLING
            if state.manual_override:
                logger.debug("Manual heating override cleared, exterior below heating floor")
            state.manual_override = False

    def toggle(self, outdoor_temp: float) -> ToggleResult:
        """Manual toggle: flip the mode and switch to manual override."""

        state = self.state
        requested = state.mode.flipped()

        if requested is Mode.HEATING and not self.can_heat(outdoor_temp):
            state.mode = Mode.COOLING
            floor = self.config.min_heating_outdoor_temp
            reason = f"Cannot enable heating mode: outdoor temperature below {floor:.1f}°C"
            logger.info(reason)
            return ToggleResult(accepted=False, mode=state.mode, reason=reason)

        state.mode = requested
        state.manual_override = True
        return ToggleResult(accepted=True, mode=state.mode)

    def resume_auto(self) -> None:
        """Return to automatic switching without changing the current mode."""

        self.state.manual_override = False
