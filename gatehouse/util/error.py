"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigError(UtilError):
    """Missing or invalid process configuration.

    Raised at startup only, never per request.
    """

    pass


class DependencyInjectionError(UtilError):
    """Dependency injection error."""

    pass
