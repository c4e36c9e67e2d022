"""
Domain exceptions for DocGuard.

Follows the "Fail Fast" and "Strict Types" principles.
All application errors should inherit from DocGuardError.
"""


class DocGuardError(Exception):
    """Base class for all DocGuard exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.context = context or {}


class SecurityViolation(DocGuardError):
    """Raised when a security constraint is violated (e.g. path traversal)."""

    pass


class ConfigurationError(DocGuardError):
    """Raised when configuration is invalid or corrupt."""

    pass


class WorkspaceNotConfiguredError(ConfigurationError):
    """Raised when an operation needs a workspace root and none is registered."""

    pass


class ResolutionError(DocGuardError):
    """Raised when a requested file cannot be found in any allowed location."""

    pass
