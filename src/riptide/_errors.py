"""Riptide error types."""


class RiptideError(Exception):
    """Base error for all riptide failures."""


class RiptideConfigError(RiptideError, ValueError):
    """Engine configuration is inconsistent or out of range."""


class RiptideVersionError(RiptideError):
    """Tuning profile version mismatch."""
