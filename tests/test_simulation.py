import random

from heatpump import (
    AirConditioner,
    ConstantWeather,
    IndoorUnit,
    OutdoorUnit,
    PowerGrid,
    Room,
    Scheduler,
    SimulatedEnvironment,
    SimulationConfig,
    SyntheticWeatherProvider,
    Thermostat,
    run_closed_loop_simulation,
)


def _house(outdoor=0.0):
    environment = SimulatedEnvironment(outdoor_temp=outdoor)
    environment.add_room(Room("living", temperature=15.0, cell_count=200))
    environment.place("indoor", "living")

    thermostat = Thermostat(21.0)
    power = PowerGrid()
    aircon = AirConditioner("indoor", environment, thermostat, power)
    environment.attach(aircon)

    scheduler = Scheduler()
    outdoor_unit = scheduler.add_outdoor(OutdoorUnit("outdoor", environment))
    scheduler.add_indoor(IndoorUnit("indoor", environment, thermostat, power, aircon),
                         outdoor_unit)
    return scheduler, environment


def test_run_closed_loop_simulation():
    scheduler, environment = _house()
    config = SimulationConfig(duration_seconds=600.0)

    result = run_closed_loop_simulation(scheduler, environment, ConstantWeather(0.0), config)

    assert len(result.times) == 600
    assert result.heating_fraction("indoor") > 0.0
    assert result.room_temperatures["living"][-1] > 15.0
    assert all(value == 0.0 for value in result.outdoor_temperatures)

    frame = result.to_dataframe()
    assert frame.shape[0] == 600
    assert "room:living" in frame.columns
    assert "mode:indoor" in frame.columns
    assert "efficiency:outdoor" in frame.columns


def test_cold_weather_keeps_heating_off():
    scheduler, environment = _house(outdoor=-30.0)
    config = SimulationConfig(duration_seconds=120.0)

    result = run_closed_loop_simulation(scheduler, environment, ConstantWeather(-30.0), config)

    assert result.heating_fraction("indoor") == 0.0
    assert result.room_temperatures["living"][-1] < 15.0


def test_synthetic_weather_is_deterministic():
    weather = SyntheticWeatherProvider(base_temp=5.0, diurnal_amplitude=8.0)
    assert abs(weather.outdoor_temperature(15 * 3600.0) - 13.0) < 1e-9
    assert abs(weather.outdoor_temperature(3 * 3600.0) + 3.0) < 1e-9
    assert len(weather.forecast(24)) == 24

    noisy_a = SyntheticWeatherProvider(noise_std=1.0, rng=random.Random(3))
    noisy_b = SyntheticWeatherProvider(noise_std=1.0, rng=random.Random(3))
    assert noisy_a.forecast(6) == noisy_b.forecast(6)
