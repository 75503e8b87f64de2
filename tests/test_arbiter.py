from heatpump.arbiter import ModeArbiter, UnitState
from heatpump.config import UnitConfig
from heatpump.interfaces import Mode


def _arbiter(mode=Mode.COOLING, manual=False, **config):
    return ModeArbiter(UnitConfig(**config), UnitState(mode=mode, manual_override=manual))


def test_initial_mode_follows_room_temperature():
    assert ModeArbiter.initial(18.0, 21.0).mode is Mode.HEATING
    assert ModeArbiter.initial(21.0, 21.0).mode is Mode.COOLING
    assert ModeArbiter.initial(None, 21.0).mode is Mode.COOLING
    assert not ModeArbiter.initial(18.0, 21.0).manual_override


def test_restore_keeps_state_verbatim():
    arbiter = ModeArbiter.restore(UnitState(Mode.HEATING, True))
    assert arbiter.mode is Mode.HEATING
    assert arbiter.manual_override


def test_normal_heat_demand_switches_to_heating():
    arbiter = _arbiter(Mode.COOLING)
    assert arbiter.evaluate(18.0, 21.0, 5.0) is Mode.HEATING


def test_cold_snap_never_selects_infeasible_heating():
    arbiter = _arbiter(Mode.COOLING)
    assert arbiter.evaluate(18.0, 21.0, -30.0) is Mode.COOLING
    assert not arbiter.manual_override


def test_warm_room_switches_to_cooling():
    arbiter = _arbiter(Mode.HEATING)
    assert arbiter.evaluate(23.5, 21.0, 5.0) is Mode.COOLING


def test_dead_zone_keeps_mode():
    for initial in Mode:
        arbiter = _arbiter(initial)
        room = 19.0
        while room <= 23.0:
            for _ in range(5):
                assert arbiter.evaluate(room, 21.0, 5.0) is initial
            room += 0.25


def test_manual_override_blocks_auto_switching():
    arbiter = _arbiter(Mode.COOLING, manual=True)
    assert arbiter.evaluate(10.0, 21.0, 5.0) is Mode.COOLING
    assert arbiter.manual_override


def test_override_cleared_when_heating_becomes_infeasible():
    arbiter = _arbiter(Mode.HEATING, manual=True)
    assert arbiter.evaluate(18.0, 21.0, -30.0) is Mode.COOLING
    assert not arbiter.manual_override


def test_heating_feasibility_holds_after_every_evaluation():
    for outdoor in (-40.0, -25.5, -25.0, -10.0, 5.0):
        for room in (5.0, 18.0, 21.0, 24.0, 30.0):
            for mode in Mode:
                for manual in (False, True):
                    arbiter = _arbiter(mode, manual)
                    result = arbiter.evaluate(room, 21.0, outdoor)
                    if result is Mode.HEATING:
                        assert outdoor >= -25.0


def test_manual_toggle_sets_override():
    arbiter = _arbiter(Mode.COOLING)
    result = arbiter.toggle(5.0)

    assert result.accepted
    assert arbiter.mode is Mode.HEATING
    assert arbiter.manual_override


def test_manual_toggle_to_heating_rejected_in_cold():
    arbiter = _arbiter(Mode.COOLING)
    result = arbiter.toggle(-30.0)

    assert not result.accepted
    assert result.reason
    assert arbiter.mode is Mode.COOLING
    assert not arbiter.manual_override


def test_rejected_toggle_keeps_existing_override():
    arbiter = _arbiter(Mode.COOLING, manual=True)
    assert not arbiter.toggle(-30.0).accepted
    assert arbiter.manual_override


def test_toggle_to_cooling_always_allowed():
    arbiter = _arbiter(Mode.HEATING)
    result = arbiter.toggle(-30.0)

    assert result.accepted
    assert arbiter.mode is Mode.COOLING
    assert arbiter.manual_override


def test_resume_auto_clears_override_only():
    arbiter = _arbiter(Mode.HEATING, manual=True)
    arbiter.resume_auto()

    assert arbiter.mode is Mode.HEATING
    assert not arbiter.manual_override


def test_threshold_is_configurable():
    arbiter = _arbiter(Mode.COOLING, mode_threshold=0.5)
    assert arbiter.evaluate(20.0, 21.0, 5.0) is Mode.HEATING
