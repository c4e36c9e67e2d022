"""
Project name validation.

A project name becomes a folder name under the workspace, so it must be a
single, portable path component:
1. not empty
2. at most 255 characters
3. no path separators
4. no "." / ".." / embedded ".."
5. no characters illegal on Windows, no control characters
6. not a Windows reserved device name
7. no leading/trailing spaces, no trailing dot
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from docguard.security.validator import validate_path_within_base_dir
from docguard.shared.domain.exceptions import DocGuardError


class ProjectNameErrorCode(str, Enum):
    """Project name validation error codes."""

    EMPTY = "PROJECTNAME_EMPTY"
    TOO_LONG = "PROJECTNAME_TOO_LONG"
    INVALID_CHARS = "PROJECTNAME_INVALID_CHARS"
    PATH_SEPARATOR = "PROJECTNAME_PATH_SEPARATOR"
    PATH_ESCAPE = "PROJECTNAME_PATH_ESCAPE"
    RESERVED_NAME = "PROJECTNAME_RESERVED_NAME"
    SPACE_BOUNDARY = "PROJECTNAME_SPACE_BOUNDARY"


class ProjectNameValidationError(DocGuardError):
    """Raised when a project name cannot be used as a folder name."""

    def __init__(self, code: ProjectNameErrorCode, message: str, details: Dict[str, Any] = None):
        super().__init__(message, context=details)
        self.code = code


@dataclass(frozen=True)
class ProjectNameCheck:
    """Non-raising outcome of is_valid_project_name()."""

    valid: bool
    error: Optional[str] = None
    code: Optional[ProjectNameErrorCode] = None


class ProjectNameValidator:
    """Validates and sanitizes project folder names."""

    MAX_LENGTH = 255

    WINDOWS_RESERVED_NAMES = frozenset(
        ["CON", "PRN", "AUX", "NUL"]
        + [f"COM{i}" for i in range(1, 10)]
        + [f"LPT{i}" for i in range(1, 10)]
    )

    # < > : " / \ | ? *  (the Windows set, strictest of the platforms)
    INVALID_CHARS = re.compile(r'[<>:"/\\|?*]')
    CONTROL_CHARS = re.compile(r"[\x00-\x1f]")

    @classmethod
    def _reserved_stem(cls, name: str) -> str:
        return name.split(".")[0].upper()

    @classmethod
    def validate_project_name(cls, project_name: Optional[str]) -> str:
        """
        Validate a project name.

        Returns:
            The validated name

        Raises:
            ProjectNameValidationError
        """
        if not project_name or not project_name.strip():
            raise ProjectNameValidationError(
                ProjectNameErrorCode.EMPTY,
                f"Project name cannot be empty: {project_name!r}",
            )

        trimmed = project_name.strip()

        if len(trimmed) > cls.MAX_LENGTH:
            raise ProjectNameValidationError(
                ProjectNameErrorCode.TOO_LONG,
                f"Project name is too long ({len(trimmed)} chars). "
                f"Maximum {cls.MAX_LENGTH} characters allowed.",
                {"length": len(trimmed), "max_length": cls.MAX_LENGTH},
            )

        if "/" in trimmed or "\\" in trimmed:
            raise ProjectNameValidationError(
                ProjectNameErrorCode.PATH_SEPARATOR,
                f'Project name cannot contain path separators (/ or \\): "{trimmed}"',
                {"invalid_chars": ["/", "\\"]},
            )

        if trimmed in (".", ".."):
            raise ProjectNameValidationError(
                ProjectNameErrorCode.PATH_ESCAPE,
                f'Project name cannot be "." or "..": "{trimmed}"',
            )

        if ".." in trimmed:
            raise ProjectNameValidationError(
                ProjectNameErrorCode.PATH_ESCAPE,
                f'Project name cannot contain "..": "{trimmed}"',
            )

        invalid = sorted(set(cls.INVALID_CHARS.findall(trimmed)))
        if invalid:
            raise ProjectNameValidationError(
                ProjectNameErrorCode.INVALID_CHARS,
                f'Project name contains invalid characters: "{trimmed}". '
                f"Invalid characters: {', '.join(invalid)}. "
                'Not allowed: < > : " / \\ | ? *',
                {"invalid_chars": invalid},
            )

        if cls.CONTROL_CHARS.search(trimmed):
            raise ProjectNameValidationError(
                ProjectNameErrorCode.INVALID_CHARS,
                f"Project name contains control characters: {trimmed!r}",
            )

        stem = cls._reserved_stem(trimmed)
        if stem in cls.WINDOWS_RESERVED_NAMES:
            raise ProjectNameValidationError(
                ProjectNameErrorCode.RESERVED_NAME,
                f'Project name cannot use Windows reserved name: "{trimmed}".',
                {"reserved_name": stem},
            )

        if trimmed != project_name:
            raise ProjectNameValidationError(
                ProjectNameErrorCode.SPACE_BOUNDARY,
                f'Project name cannot start or end with spaces: "{project_name}"',
            )

        if trimmed.endswith("."):
            raise ProjectNameValidationError(
                ProjectNameErrorCode.SPACE_BOUNDARY,
                f'Project name cannot end with a dot: "{trimmed}". '
                "This is not allowed on Windows.",
            )

        return trimmed

    @classmethod
    def is_valid_project_name(cls, project_name: Optional[str]) -> ProjectNameCheck:
        """Check a project name without raising."""
        try:
            cls.validate_project_name(project_name)
        except ProjectNameValidationError as e:
            return ProjectNameCheck(valid=False, error=str(e), code=e.code)
        return ProjectNameCheck(valid=True)

    @classmethod
    def sanitize_project_name(cls, project_name: Optional[str]) -> str:
        """
        Best-effort cleanup of a project name.

        The result is not guaranteed to be valid (e.g. it may be empty);
        prefer rejecting names with validate_project_name().
        """
        if not project_name:
            return ""

        sanitized = project_name.strip()
        sanitized = cls.CONTROL_CHARS.sub("", sanitized)
        # Separators first: they are also in INVALID_CHARS
        sanitized = re.sub(r"[/\\]", "-", sanitized)
        sanitized = cls.INVALID_CHARS.sub("_", sanitized)
        sanitized = re.sub(r"\.{2,}", ".", sanitized)
        sanitized = re.sub(r"^[.\s]+|[.\s]+$", "", sanitized)
        sanitized = sanitized[: cls.MAX_LENGTH]

        if sanitized and cls._reserved_stem(sanitized) in cls.WINDOWS_RESERVED_NAMES:
            sanitized = "_" + sanitized

        return sanitized


def project_dir_for(project_name: str, parent_dir: Any) -> str:
    """
    Validate `project_name` and return the canonical folder path for it
    under `parent_dir`.

    Raises:
        ProjectNameValidationError: the name is not a valid folder name
        BaseDirValidationError: parent_dir is invalid or the folder escapes it
    """
    name = ProjectNameValidator.validate_project_name(project_name)
    return validate_path_within_base_dir(name, parent_dir)
