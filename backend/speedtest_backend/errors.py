"""Exception hierarchy for the speed-test backend."""


class SpeedTestError(Exception):
    """Base class for service specific exceptions."""


class InputError(SpeedTestError):
    """Raised when a request or import file carries unusable data."""


class InvalidCoordinates(InputError):
    """Raised when a latitude/longitude pair is not a pair of finite numbers."""


class StorageError(SpeedTestError):
    """Raised when a read or write against a store fails."""
