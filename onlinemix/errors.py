"""Exception types raised by onlinemix."""

__all__ = [
    "OnlineMixError",
    "ConstructionError",
    "UnsupportedOperationError",
    "ConfigurationError",
]


class OnlineMixError(Exception):
    """Base class for all onlinemix errors."""


class ConstructionError(OnlineMixError, ValueError):
    """A density component cannot be built from the given parameters.

    Raised, for example, for a non-positive standard deviation or a
    covariance matrix that is not symmetric positive definite.
    """


class UnsupportedOperationError(OnlineMixError, NotImplementedError):
    """The requested operation is not supported by this object."""


class ConfigurationError(OnlineMixError, ValueError):
    """Malformed static configuration, such as inverted bounds."""
