class ACOError(Exception):
    """Base class for every error raised by acs_tsp."""


class InvalidInstanceError(ACOError, ValueError):
    """The city list cannot describe a TSP instance (too small, wrong shape, size mismatch)."""


class DegenerateInstanceError(InvalidInstanceError):
    """All cities coincide after rounding, so no positive tour length exists."""


class ConfigError(ACOError, ValueError):
    pass


class InstanceFormatError(ACOError, ValueError):
    pass


class SearchError(ACOError):
    """The search finished without completing a single iteration."""
