"""High level facade for the heatpump package."""

from .arbiter import ModeArbiter, ToggleResult, UnitState
from .config import SchedulerConfig, UnitConfig, load_config
from .efficiency import EfficiencyModel, ambient_efficiency, efficiency
from .environment import (
    AirConditioner,
    FixedCapacity,
    PowerGrid,
    Room,
    SimulatedEnvironment,
    Thermostat,
)
from .exceptions import (
    ConfigurationError,
    HeatPumpError,
    PersistenceError,
    UnknownUnitError,
)
from .interfaces import Mode
from .persistence import load_states, read_states, save_states
from .scheduler import Scheduler
from .simulation import SimulationConfig, SimulationResult, run_closed_loop_simulation
from .units import GroupReport, IndoorUnit, OutdoorUnit
from .weather import ConstantWeather, SyntheticWeatherProvider

__all__ = [
    "Mode",
    "ModeArbiter",
    "ToggleResult",
    "UnitState",
    "SchedulerConfig",
    "UnitConfig",
    "load_config",
    "EfficiencyModel",
    "ambient_efficiency",
    "efficiency",
    "AirConditioner",
    "FixedCapacity",
    "PowerGrid",
    "Room",
    "SimulatedEnvironment",
    "Thermostat",
    "ConfigurationError",
    "HeatPumpError",
    "PersistenceError",
    "UnknownUnitError",
    "load_states",
    "read_states",
    "save_states",
    "Scheduler",
    "SimulationConfig",
    "SimulationResult",
    "run_closed_loop_simulation",
    "GroupReport",
    "IndoorUnit",
    "OutdoorUnit",
    "ConstantWeather",
    "SyntheticWeatherProvider",
]
