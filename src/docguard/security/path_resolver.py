"""
Project-aware path resolution.

Resolves a path requested by a document tool:
1. against the session's project base dir, when it validates
2. otherwise against the workspace root

Every candidate still goes through validate_path_within_base_dir(), so a
fallback never widens what a path may reach: a PATH_ESCAPE is raised,
not retried against the workspace.
"""

from __future__ import annotations

import os
from typing import Any, Optional

from docguard.security.errors import BaseDirErrorCode, BaseDirValidationError
from docguard.security.validator import (
    BaseDirValidator,
    ValidationOptions,
    default_validator,
)
from docguard.shared.domain.exceptions import ResolutionError, WorkspaceNotConfiguredError
from docguard.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def resolve_project_path(
    relative_path: Any,
    base_dir: Optional[Any] = None,
    check_existence: bool = False,
    context_name: str = "file",
    validator: BaseDirValidator | None = None,
) -> str:
    """
    Resolve `relative_path` for a document tool.

    Args:
        relative_path: Path requested by the tool (relative or absolute)
        base_dir: Project root from the current session, if any
        check_existence: Fall back to the workspace root when the file is
            missing under base_dir, and fail if it is missing there too
        context_name: Used in error messages and logs ("template", ...)
        validator: Validator to use (default: process-wide one)

    Returns:
        Canonical path

    Raises:
        BaseDirValidationError: PATH_ESCAPE or a malformed path
        WorkspaceNotConfiguredError: fallback needed but no workspace root
        ResolutionError: check_existence and the file exists nowhere
    """
    validator = validator or default_validator

    if base_dir is not None:
        try:
            real_base_dir = validator.validate_base_dir(
                base_dir, ValidationOptions(check_within_workspace=True)
            )
        except BaseDirValidationError as e:
            logger.warning(
                "session_base_dir_invalid",
                base_dir=str(base_dir),
                code=e.code.value,
                fallback="workspace_root",
            )
        else:
            resolved = validator.validate_path_within_base_dir(relative_path, real_base_dir)
            if not check_existence or os.path.exists(resolved):
                logger.debug("path_resolved", context=context_name, path=resolved, root="base_dir")
                return resolved
            logger.info("path_missing_in_base_dir", context=context_name, path=resolved)
    else:
        logger.debug("no_session_base_dir", context=context_name)

    workspace_root = validator.workspace_root()
    if workspace_root is None:
        raise WorkspaceNotConfiguredError(
            f"No workspace folder available; cannot resolve {context_name} path: {relative_path}"
        )

    try:
        resolved = validator.validate_path_within_base_dir(relative_path, workspace_root)
    except BaseDirValidationError as e:
        if e.code in (BaseDirErrorCode.NOT_EXIST, BaseDirErrorCode.NOT_DIRECTORY):
            raise WorkspaceNotConfiguredError(
                f"Workspace root is not usable ({e}); cannot resolve {context_name} path: {relative_path}",
                context={"workspace_root": workspace_root},
            ) from e
        raise

    if check_existence and not os.path.exists(resolved):
        raise ResolutionError(
            f"{context_name} does not exist in any location: {relative_path}",
            context={"path": str(relative_path), "workspace_root": workspace_root},
        )

    logger.debug("path_resolved", context=context_name, path=resolved, root="workspace")
    return resolved
