"""
BaseDir validator.

Gate for every file operation of the document tooling:

1. validate_base_dir()              - establish the project root once
2. validate_path_within_base_dir()  - confine each requested path to it

Both return canonical paths. Callers must perform I/O on the returned
path, never on the original string.

Nothing is cached: symlink targets and existence can change between
calls, so every call re-resolves. A race remains between validation and
the caller's I/O; see docguard.security.safe_io for no-follow helpers
that narrow it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional

from docguard.security.canonicalizer import (
    canonicalize_candidate,
    canonicalize_existing,
    check_name_lengths,
    check_path_input,
)
from docguard.security.containment import is_within
from docguard.security.errors import (
    BaseDirErrorCode,
    BaseDirValidationError,
    PathResolutionError,
    ValidationResult,
)
from docguard.security.workspace import WorkspaceRootRegistry, workspace_registry
from docguard.shared.domain.exceptions import WorkspaceNotConfiguredError
from docguard.shared.infrastructure.config import get_settings
from docguard.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

_FROM_REGISTRY = object()


@dataclass(frozen=True)
class ValidationOptions:
    """
    Options for validate_base_dir().

    Attributes:
        check_within_workspace: Require the base dir to sit inside the
            workspace root. None means "use the configured default"
            (DOCGUARD_CHECK_WITHIN_WORKSPACE, off unless set).
        require_absolute: Reject relative base dirs instead of resolving
            them against the current directory.
    """

    check_within_workspace: Optional[bool] = None
    require_absolute: bool = False


class BaseDirValidator:
    """
    Validates project roots and the paths requested beneath them.

    The workspace root is either injected (`workspace_root=...`, where None
    disables the boundary) or read from the process-wide registry on every
    call.
    """

    def __init__(
        self,
        workspace_root: Any = _FROM_REGISTRY,
        registry: WorkspaceRootRegistry | None = None,
        settings=None,
    ):
        self._workspace_root = workspace_root
        self._registry = registry or workspace_registry
        self._settings = settings

    @property
    def settings(self):
        return self._settings or get_settings()

    def _remediation_hint(self) -> str:
        return (
            f"Please delete {self.settings.session_dir_name}/ "
            "and recreate the project."
        )

    def workspace_root(self) -> Optional[str]:
        """Return the canonical workspace root in effect, or None."""
        if self._workspace_root is _FROM_REGISTRY:
            return self._registry.get_canonical()
        if self._workspace_root is None:
            return None
        return canonicalize_candidate(os.fspath(self._workspace_root))

    def _reject(self, error: BaseDirValidationError, event: str = "base_dir_rejected") -> BaseDirValidationError:
        if error.code == BaseDirErrorCode.PATH_ESCAPE:
            event = "path_escape_blocked"
        logger.warning(
            event,
            code=error.code.value,
            path=error.path,
        )
        return error

    def _resolve_base_dir(self, base_dir: Any, require_absolute: bool = False) -> str:
        """Run the input/existence/type checks and return the real base dir."""
        hint = self._remediation_hint()
        try:
            raw = check_path_input(base_dir, label="BaseDir", hint=hint)
        except BaseDirValidationError as e:
            raise self._reject(e) from None

        trimmed = raw.strip()

        if require_absolute and not os.path.isabs(trimmed):
            raise self._reject(BaseDirValidationError(
                BaseDirErrorCode.INVALID_INPUT,
                f"BaseDir must be an absolute path: {trimmed}.",
                path=trimmed,
                hint="Relative paths are not allowed here.",
            ))

        try:
            check_name_lengths(trimmed, label="BaseDir", hint=hint)
        except BaseDirValidationError as e:
            raise self._reject(e) from None

        try:
            real_base_dir = canonicalize_existing(trimmed)
        except BaseDirValidationError as e:
            raise self._reject(BaseDirValidationError(
                BaseDirErrorCode.NOT_EXIST,
                f"BaseDir does not exist: {trimmed}.",
                path=trimmed,
                hint=(
                    "Please verify the directory exists or delete "
                    f"{self.settings.session_dir_name}/ to reset."
                ),
                details=e.details,
            )) from None

        if not os.path.isdir(real_base_dir):
            raise self._reject(BaseDirValidationError(
                BaseDirErrorCode.NOT_DIRECTORY,
                f"BaseDir is not a directory: {trimmed}.",
                path=trimmed,
                hint="BaseDir must be a directory, not a file.",
                details={"real_path": real_base_dir},
            ))

        return real_base_dir

    def _check_workspace(self, real_base_dir: str) -> None:
        try:
            workspace_root = self.workspace_root()
        except PathResolutionError as e:
            raise self._reject(BaseDirValidationError(
                BaseDirErrorCode.OUTSIDE_WORKSPACE,
                f"BaseDir {real_base_dir} cannot be checked against the workspace root: {e}",
                path=real_base_dir,
                details={"base_dir": real_base_dir, "workspace_root": e.path},
            )) from e

        if workspace_root is None:
            logger.debug("workspace_check_skipped", base_dir=real_base_dir)
            return

        if not is_within(real_base_dir, workspace_root):
            raise self._reject(BaseDirValidationError(
                BaseDirErrorCode.OUTSIDE_WORKSPACE,
                f"BaseDir is outside workspace: {real_base_dir} "
                f"(workspace root: {workspace_root}).",
                path=real_base_dir,
                hint="BaseDir must be within the workspace root for security.",
                details={"base_dir": real_base_dir, "workspace_root": workspace_root},
            ))

    def validate_base_dir(
        self,
        base_dir: Any,
        options: ValidationOptions | None = None,
    ) -> str:
        """
        Validate a project root.

        Checks, in order: non-empty and free of null bytes, absolute (only
        with require_absolute), exists, is a directory, and (only with
        check_within_workspace and a registered root) lies within the
        workspace root.

        Args:
            base_dir: Candidate project root
            options: ValidationOptions

        Returns:
            The real (symlink-resolved) base dir

        Raises:
            BaseDirValidationError: INVALID_INPUT, NOT_EXIST, NOT_DIRECTORY
                or OUTSIDE_WORKSPACE
        """
        options = options or ValidationOptions()
        check_within_workspace = options.check_within_workspace
        if check_within_workspace is None:
            check_within_workspace = self.settings.check_within_workspace

        real_base_dir = self._resolve_base_dir(base_dir, require_absolute=options.require_absolute)

        if check_within_workspace:
            self._check_workspace(real_base_dir)

        logger.debug("base_dir_validated", base_dir=real_base_dir)
        return real_base_dir

    def validate_path_within_base_dir(self, candidate: Any, base_dir: Any) -> str:
        """
        Confine a requested path to a base dir.

        Relative candidates are taken relative to the base dir. The path
        does not have to exist: its longest existing ancestor is resolved
        and the rest is appended.

        Args:
            candidate: Requested path (relative or absolute)
            base_dir: Project root; re-validated on every call

        Returns:
            Canonical path to use for the actual I/O

        Raises:
            BaseDirValidationError: PATH_ESCAPE if the canonical form leaves
                the base dir; INVALID_INPUT/NOT_EXIST/NOT_DIRECTORY for a bad
                base dir or a malformed candidate
        """
        real_base_dir = self._resolve_base_dir(base_dir)

        try:
            raw = check_path_input(candidate, label="Target path")
        except BaseDirValidationError as e:
            raise self._reject(e, event="target_path_rejected") from None

        if os.path.isabs(raw):
            absolute_path = raw
        else:
            absolute_path = os.path.join(real_base_dir, raw)

        try:
            check_name_lengths(absolute_path, label="Target path")
        except BaseDirValidationError as e:
            raise self._reject(e, event="target_path_rejected") from None

        try:
            real_path = canonicalize_candidate(absolute_path)
        except PathResolutionError as e:
            raise self._reject(BaseDirValidationError(
                BaseDirErrorCode.PATH_ESCAPE,
                f"Path escape detected: {raw} cannot be resolved ({e.reason}), "
                f"so containment in baseDir {real_base_dir} cannot be proven.",
                path=raw,
                details={"base_dir": real_base_dir},
            )) from e

        if not is_within(real_path, real_base_dir):
            raise self._reject(BaseDirValidationError(
                BaseDirErrorCode.PATH_ESCAPE,
                f"Path escape detected: {raw} resolves to {real_path}, "
                f"which is outside baseDir: {real_base_dir}",
                path=raw,
                details={"resolved_path": real_path, "base_dir": real_base_dir},
            ))

        return real_path

    def get_safe_base_dir(
        self,
        base_dir: Any,
        options: ValidationOptions | None = None,
    ) -> str:
        """
        Validate `base_dir` if one is given, otherwise fall back to the
        workspace root.

        Raises:
            BaseDirValidationError: base_dir is given but invalid
            WorkspaceNotConfiguredError: no base_dir and no workspace root
        """
        if isinstance(base_dir, (str, os.PathLike)) and os.fspath(base_dir).strip():
            return self.validate_base_dir(base_dir, options)

        workspace_root = self.workspace_root()
        if workspace_root is None:
            raise WorkspaceNotConfiguredError(
                "No workspace folder available. Please open a workspace first."
            )
        return workspace_root

    def check_base_dir(
        self,
        base_dir: Any,
        options: ValidationOptions | None = None,
    ) -> ValidationResult:
        """validate_base_dir() returning a ValidationResult instead of raising."""
        try:
            return ValidationResult.success(self.validate_base_dir(base_dir, options))
        except BaseDirValidationError as e:
            return ValidationResult.from_error(e)

    def check_path_within_base_dir(self, candidate: Any, base_dir: Any) -> ValidationResult:
        """validate_path_within_base_dir() returning a ValidationResult."""
        try:
            return ValidationResult.success(self.validate_path_within_base_dir(candidate, base_dir))
        except BaseDirValidationError as e:
            return ValidationResult.from_error(e)


# Default validator bound to the process-wide workspace registry
default_validator = BaseDirValidator()


def validate_base_dir(base_dir: Any, options: ValidationOptions | None = None) -> str:
    """Validate a project root with the default validator."""
    return default_validator.validate_base_dir(base_dir, options)


def validate_path_within_base_dir(candidate: Any, base_dir: Any) -> str:
    """Confine `candidate` to `base_dir` with the default validator."""
    return default_validator.validate_path_within_base_dir(candidate, base_dir)


def get_safe_base_dir(base_dir: Any, options: ValidationOptions | None = None) -> str:
    return default_validator.get_safe_base_dir(base_dir, options)


def check_base_dir(base_dir: Any, options: ValidationOptions | None = None) -> ValidationResult:
    return default_validator.check_base_dir(base_dir, options)


def check_path_within_base_dir(candidate: Any, base_dir: Any) -> ValidationResult:
    return default_validator.check_path_within_base_dir(candidate, base_dir)
