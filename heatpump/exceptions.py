"""
heatpump custom exceptions

Small exception hierarchy.  Tick processing never raises; these cover the
configuration, wiring and persistence edges of the package.
"""


class HeatPumpError(Exception):
    """Base exception for heatpump."""

    pass


class ConfigurationError(HeatPumpError):
    """Configuration or unit wiring is invalid."""

    pass


class PersistenceError(HeatPumpError):
    """Saved unit state is malformed."""

    pass


class UnknownUnitError(HeatPumpError):
    """No unit is registered under the requested id."""

    pass
