"""
ltc Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
Every error knows the exit category it maps to.
"""

from typing import Optional

from ltc.constants import (
    ERROR_INVALID_PORT,
    ERROR_MALFORMED_ROUTE,
    ERROR_MONITOR_PORT_NOT_EXPOSED,
    ERROR_NO_TARGET,
    ERROR_PLACEMENT,
    ExitCode,
)


class LatticeError(Exception):
    """Base exception for all ltc errors."""

    exit_code: ExitCode = ExitCode.UNEXPECTED
    # Set when the message was already shown to the user before raising
    announced: bool = False

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class InvalidSyntaxError(LatticeError):
    """Raised when arguments or flags cannot be understood."""

    exit_code = ExitCode.INVALID_SYNTAX


class IncorrectUsageError(InvalidSyntaxError):
    """Raised when positional arguments or flag values are used wrongly."""

    pass


class CommandFailedError(LatticeError):
    """Raised when a well-formed request cannot be carried out."""

    exit_code = ExitCode.COMMAND_FAILED


class BadDockerError(LatticeError):
    """Raised when the docker image cannot supply what the app needs."""

    exit_code = ExitCode.BAD_DOCKER


class PlacementError(LatticeError):
    """Raised when the cluster cannot place the requested instances."""

    exit_code = ExitCode.PLACEMENT_ERROR
    announced = True

    def __init__(self, app_name: str):
        self.app_name = app_name
        super().__init__(ERROR_PLACEMENT, context=f"App: {app_name}")


class InvalidPortError(InvalidSyntaxError):
    """Raised when a port list or monitor URL is malformed."""

    def __init__(self, value: Optional[str] = None):
        self.value = value
        super().__init__(ERROR_INVALID_PORT)


class MalformedRouteError(InvalidSyntaxError):
    """Raised when a route clause is not PORT:PREFIX."""

    def __init__(self, route: Optional[str] = None):
        self.route = route
        super().__init__(ERROR_MALFORMED_ROUTE)


class MonitorPortNotExposedError(CommandFailedError):
    """Raised when the monitored port is not among the exposed ports."""

    def __init__(self, port: int, exposed_ports: tuple[int, ...]):
        self.port = port
        self.exposed_ports = exposed_ports
        super().__init__(ERROR_MONITOR_PORT_NOT_EXPOSED)


class AppCreationError(CommandFailedError):
    """Raised when the cluster refuses to create the app."""

    def __init__(self, app_name: str, cause: Exception):
        self.app_name = app_name
        self.cause = cause
        if isinstance(cause, LatticeError):
            super().__init__(f"Error creating app: {cause.message}", cause.context)
        else:
            super().__init__(f"Error creating app: {cause}")


class ConfigurationError(CommandFailedError):
    """Raised when the CLI configuration is invalid or missing."""

    @classmethod
    def not_targeted(cls) -> "ConfigurationError":
        return cls(ERROR_NO_TARGET, context="Run: ltc target DOMAIN")


class ClusterApiError(CommandFailedError):
    """Raised when the scheduler API rejects or fails a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        context = f"HTTP {status_code}" if status_code else None
        super().__init__(message, context)


class RegistryError(BadDockerError):
    """Raised when image metadata cannot be read from the registry."""

    pass
