"""
BaseDir validation error taxonomy.

Five closed error codes, all non-retryable: each one is a deterministic
outcome of the input and the current filesystem state. Every message
names the rejected path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from docguard.shared.domain.base_model import BaseDomainModel
from docguard.shared.domain.exceptions import DocGuardError, SecurityViolation


class BaseDirErrorCode(str, Enum):
    """BaseDir validation error codes."""

    INVALID_INPUT = "INVALID_INPUT"
    NOT_EXIST = "NOT_EXIST"
    NOT_DIRECTORY = "NOT_DIRECTORY"
    OUTSIDE_WORKSPACE = "OUTSIDE_WORKSPACE"
    PATH_ESCAPE = "PATH_ESCAPE"


@dataclass(frozen=True)
class ValidationFailure(BaseDomainModel):
    """Immutable description of a rejected path."""

    code: BaseDirErrorCode
    message: str
    path: Optional[str] = None
    hint: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def retryable(self) -> bool:
        """No validation failure is transient."""
        return False


class BaseDirValidationError(SecurityViolation):
    """Raised when a base directory or a path beneath it is rejected."""

    def __init__(
        self,
        code: BaseDirErrorCode,
        message: str,
        path: Optional[str] = None,
        hint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        full_message = f"{message} {hint}" if hint else message
        super().__init__(full_message, context=dict(details or {}))
        self.code = code
        self.path = path
        self.hint = hint

    @property
    def details(self) -> Dict[str, Any]:
        return self.context

    @property
    def retryable(self) -> bool:
        return False

    def to_failure(self) -> ValidationFailure:
        """Convert to an immutable value for result-style callers."""
        return ValidationFailure(
            code=self.code,
            message=str(self),
            path=self.path,
            hint=self.hint,
            details=dict(self.context),
        )


class PathResolutionError(DocGuardError):
    """Raised when a path cannot be canonicalized (e.g. a symlink loop)."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot resolve path: {path} ({reason})", context={"path": path})
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class ValidationResult(BaseDomainModel):
    """
    Either a canonical path or a failure, never both.

    Returned by the check_* functions so callers have to look at the
    outcome before they can get at the path.
    """

    path: Optional[str] = None
    failure: Optional[ValidationFailure] = None

    def __post_init__(self):
        if (self.path is None) == (self.failure is None):
            raise ValueError("ValidationResult needs exactly one of path or failure")

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def code(self) -> Optional[BaseDirErrorCode]:
        return self.failure.code if self.failure else None

    def unwrap(self) -> str:
        """Return the canonical path or raise the recorded failure."""
        if self.failure is not None:
            raise BaseDirValidationError(
                self.failure.code,
                self.failure.message,
                path=self.failure.path,
                details=self.failure.details,
            )
        return self.path

    @classmethod
    def success(cls, path: str) -> "ValidationResult":
        return cls(path=path)

    @classmethod
    def from_error(cls, error: BaseDirValidationError) -> "ValidationResult":
        return cls(failure=error.to_failure())
