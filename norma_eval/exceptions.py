"""Custom exception hierarchy for the Norma evaluation runner."""


class NormaEvalError(Exception):
    """Base exception for all evaluation runner errors."""

    pass


class BuildError(NormaEvalError):
    """Raised when building the driver fails."""

    pass


class DriverInvocationError(NormaEvalError):
    """Raised when a driver command cannot be spawned."""

    pass


class ConfigurationError(NormaEvalError):
    """Raised when the evaluation matrix is invalid or missing."""

    pass
