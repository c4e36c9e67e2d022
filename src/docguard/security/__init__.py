"""
Base-directory security gate.

Decides whether a project root, and any path requested beneath it, may be
read from or written to. Defends against:
- path traversal (../)
- symlink escape
- null-byte injection
- lookalike prefixes (/base vs /base-other)

Exports:
    - BaseDirValidator: validator with an injectable workspace root
    - validate_base_dir / validate_path_within_base_dir: raising API
    - check_base_dir / check_path_within_base_dir: result-returning API
    - set_test_workspace_root: test-only workspace override
    - BaseDirErrorCode / BaseDirValidationError / ValidationResult
"""

from docguard.security.config_loader import (
    GuardConfig,
    apply_guard_config,
    load_guard_config,
    save_guard_config,
)
from docguard.security.containment import is_within
from docguard.security.errors import (
    BaseDirErrorCode,
    BaseDirValidationError,
    PathResolutionError,
    ValidationFailure,
    ValidationResult,
)
from docguard.security.path_resolver import resolve_project_path
from docguard.security.project_name import (
    ProjectNameErrorCode,
    ProjectNameValidationError,
    ProjectNameValidator,
    project_dir_for,
)
from docguard.security.safe_io import read_text, write_text
from docguard.security.validator import (
    BaseDirValidator,
    ValidationOptions,
    check_base_dir,
    check_path_within_base_dir,
    get_safe_base_dir,
    validate_base_dir,
    validate_path_within_base_dir,
)
from docguard.security.workspace import (
    WorkspaceRootRegistry,
    configure_host_workspace_root,
    get_workspace_root,
    set_test_workspace_root,
    workspace_registry,
)

__all__ = [
    "BaseDirValidator",
    "ValidationOptions",
    "validate_base_dir",
    "validate_path_within_base_dir",
    "get_safe_base_dir",
    "check_base_dir",
    "check_path_within_base_dir",
    "is_within",
    "BaseDirErrorCode",
    "BaseDirValidationError",
    "PathResolutionError",
    "ValidationFailure",
    "ValidationResult",
    "WorkspaceRootRegistry",
    "workspace_registry",
    "configure_host_workspace_root",
    "get_workspace_root",
    "set_test_workspace_root",
    "resolve_project_path",
    "read_text",
    "write_text",
    "ProjectNameErrorCode",
    "ProjectNameValidationError",
    "ProjectNameValidator",
    "project_dir_for",
    "GuardConfig",
    "load_guard_config",
    "save_guard_config",
    "apply_guard_config",
]
