import pytest

from heatpump.arbiter import UnitState
from heatpump.config import SchedulerConfig
from heatpump.environment import PowerGrid, Room, SimulatedEnvironment, Thermostat
from heatpump.exceptions import ConfigurationError, UnknownUnitError
from heatpump.interfaces import Mode
from heatpump.scheduler import Scheduler
from heatpump.units import IndoorUnit, OutdoorUnit


def _setup(room_temp=10.0, outdoor=5.0, state=None, config=None):
    environment = SimulatedEnvironment(outdoor_temp=outdoor)
    environment.add_room(Room("living", temperature=room_temp, cell_count=1))
    environment.place("indoor", "living")
    scheduler = Scheduler(config)
    outdoor_unit = scheduler.add_outdoor(OutdoorUnit("outdoor", environment))
    indoor = IndoorUnit("indoor", environment, Thermostat(21.0), PowerGrid())
    scheduler.add_indoor(indoor, outdoor_unit, restored=state)
    return scheduler, environment, indoor, outdoor_unit


def test_mode_changes_only_at_control_interval():
    scheduler, environment, indoor, _ = _setup(state=UnitState(Mode.COOLING))

    scheduler.run(59)
    assert indoor.mode is Mode.COOLING
    assert environment.rooms["living"].temperature == 10.0

    reports = scheduler.tick()
    assert reports is not None
    assert indoor.mode is Mode.HEATING
    assert environment.rooms["living"].temperature > 10.0


def test_outdoor_aggregation_sees_current_interval():
    scheduler, _, _, _ = _setup(state=UnitState(Mode.COOLING))

    scheduler.run(59)
    reports = scheduler.tick()
    assert reports["outdoor"].heating_count == 1
    assert reports["outdoor"].any_heating


def test_effect_applied_every_step():
    config = SchedulerConfig(ticks_per_second=60, control_interval_ticks=60, step_interval_ticks=10)
    scheduler, environment, indoor, _ = _setup(room_temp=10.0, outdoor=15.0,
                                                state=UnitState(Mode.HEATING, True), config=config)

    scheduler.run(9)
    assert environment.rooms["living"].temperature == 10.0

    scheduler.tick()
    expected = 10.0 + 21.0 * (10 / 60)
    assert abs(environment.rooms["living"].temperature - expected) < 1e-9

    scheduler.run(50)
    assert abs(scheduler.elapsed_seconds - 1.0) < 1e-9
    assert abs(environment.rooms["living"].temperature - (10.0 + 21.0)) < 1e-9


def test_duplicate_ids_rejected():
    scheduler, environment, _, _ = _setup()
    with pytest.raises(ConfigurationError):
        scheduler.add_indoor(IndoorUnit("indoor", environment, Thermostat(), PowerGrid()))
    with pytest.raises(ConfigurationError):
        scheduler.add_outdoor(OutdoorUnit("indoor", environment))


def test_remove_units():
    scheduler, _, indoor, outdoor_unit = _setup()

    scheduler.remove("indoor")
    assert scheduler.indoor_units == []
    assert len(outdoor_unit) == 0
    assert indoor.outdoor is None

    scheduler.remove("outdoor")
    assert scheduler.outdoor_units == []

    with pytest.raises(UnknownUnitError):
        scheduler.remove("missing")


def test_snapshot_and_restore():
    scheduler, _, indoor, _ = _setup(room_temp=25.0)
    indoor.toggle_mode()
    saved = scheduler.snapshot()
    assert saved == {"indoor": {"mode": "heating", "manual_override": True}}

    indoor.resume_auto()
    scheduler.run(60)
    assert indoor.mode is Mode.COOLING

    scheduler.restore({"indoor": UnitState(Mode.HEATING, True)})
    assert indoor.mode is Mode.HEATING
    assert indoor.manual_override

    with pytest.raises(UnknownUnitError):
        scheduler.restore({"ghost": UnitState()})


def test_indoor_lookup():
    scheduler, _, indoor, _ = _setup()

    assert scheduler.indoor("indoor") is indoor
    with pytest.raises(UnknownUnitError):
        scheduler.indoor("outdoor")
