"""Save and load the persisted state of indoor units.

Only ``mode`` and ``manual_override`` are written.  Efficiency and group
direction are derived values recomputed at every control interval.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

import json

from .arbiter import UnitState
from .exceptions import PersistenceError
from .interfaces import Mode, UnitId
from .units import IndoorUnit

__all__ = [
    "state_to_dict",
    "state_from_dict",
    "dump_states",
    "load_states",
    "save_states",
    "read_states",
]


def state_to_dict(state: UnitState) -> Dict[str, Any]:
    return {"mode": state.mode.value, "manual_override": bool(state.manual_override)}


def state_from_dict(data: Mapping[str, Any]) -> UnitState:
    try:
        mode = Mode(data["mode"])
        manual_override = data.get("manual_override", False)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Invalid unit state: {data!r}") from exc

    if not isinstance(manual_override, bool):
        raise PersistenceError(f"manual_override must be a boolean, got {manual_override!r}")
    return UnitState(mode=mode, manual_override=manual_override)


def dump_states(units: Iterable[IndoorUnit]) -> Dict[str, Dict[str, Any]]:
    """Map every unit id (as a string) to its persisted state."""

    return {str(unit.unit_id): state_to_dict(unit.state) for unit in units}


def load_states(data: Mapping[str, Any]) -> Dict[str, UnitState]:
    if not isinstance(data, Mapping):
        raise PersistenceError("Saved states must be a mapping of unit id to state")
    return {str(unit_id): state_from_dict(state) for unit_id, state in data.items()}


def save_states(units: Iterable[IndoorUnit], path: str | Path) -> None:
    Path(path).write_text(json.dumps(dump_states(units), indent=2), encoding="utf-8")


def read_states(path: str | Path) -> Dict[str, UnitState]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PersistenceError(f"Invalid save file {path}: {exc}") from exc
    return load_states(data)
