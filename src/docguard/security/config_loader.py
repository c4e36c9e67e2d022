"""
Configuration loader for the project guard settings.

Loads .docguard/config.yaml from a project root:

    workspaceRoot: /path/to/workspace     # optional
    checkWithinWorkspace: true            # optional
    requireAbsolute: false                # optional

Keys may be written in camelCase or snake_case.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from docguard.security.canonicalizer import check_path_input
from docguard.security.errors import BaseDirValidationError
from docguard.security.safe_io import read_text, write_text
from docguard.security.validator import ValidationOptions, validate_path_within_base_dir
from docguard.security.workspace import WorkspaceRootRegistry, workspace_registry
from docguard.shared.domain.exceptions import ConfigurationError
from docguard.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

CONFIG_DIR = ".docguard"
CONFIG_FILE = "config.yaml"


def _to_snake_case(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)


class GuardConfig(BaseModel):
    """Per-project guard settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    workspace_root: Optional[str] = Field(default=None, description="Outer trust boundary")
    check_within_workspace: Optional[bool] = Field(
        default=None, description="Require base dirs inside the workspace root"
    )
    require_absolute: bool = Field(default=False, description="Reject relative base dirs")

    def to_options(self) -> ValidationOptions:
        return ValidationOptions(
            check_within_workspace=self.check_within_workspace,
            require_absolute=self.require_absolute,
        )


def load_guard_config(
    project_root: Path | str | None = None,
    config_path: Path | str | None = None,
) -> GuardConfig:
    """
    Load guard configuration from YAML.

    Args:
        project_root: Project root (uses .docguard/config.yaml)
        config_path: Explicit config file path

    Returns:
        GuardConfig loaded from file, or defaults if the file is missing

    Raises:
        ConfigurationError: invalid YAML, unknown keys or wrong types, or a
            config path outside the project root
    """
    if config_path is None:
        if project_root is None:
            raise ConfigurationError("Either config_path or project_root must be provided")
        config_path = Path(CONFIG_DIR) / CONFIG_FILE
    config_path = Path(config_path)

    if project_root is not None:
        try:
            config_path = Path(validate_path_within_base_dir(config_path, project_root))
        except BaseDirValidationError as e:
            raise ConfigurationError(f"Invalid config path: {e}", context={"path": str(config_path)}) from e

    if not config_path.exists():
        logger.debug("guard_config_missing", path=str(config_path))
        return GuardConfig()

    try:
        if project_root is not None:
            content = read_text(config_path, project_root)
        else:
            content = config_path.read_text(encoding="utf-8")
        data = yaml.safe_load(content) if content.strip() else {}
    except BaseDirValidationError as e:
        raise ConfigurationError(f"Invalid config path: {e}", context={"path": str(config_path)}) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config root must be a mapping in {config_path}, got {type(data).__name__}"
        )

    try:
        config = GuardConfig(**{_to_snake_case(str(k)): v for k, v in data.items()})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config in {config_path}: {e}") from e

    logger.debug("guard_config_loaded", path=str(config_path))
    return config


def apply_guard_config(
    config: GuardConfig,
    registry: WorkspaceRootRegistry | None = None,
) -> ValidationOptions:
    """
    Register the configured workspace root as the host root and return
    the matching validation options.
    """
    registry = registry or workspace_registry
    if config.workspace_root is not None:
        try:
            check_path_input(config.workspace_root, label="workspaceRoot")
        except BaseDirValidationError as e:
            raise ConfigurationError(str(e)) from e
        registry.configure_host_root(config.workspace_root)
    return config.to_options()


def save_guard_config(config: GuardConfig, project_root: Path | str) -> Path:
    """Write config as camelCase YAML under project_root/.docguard/."""
    data: dict[str, Any] = {}
    for name, value in config.model_dump(exclude_none=True).items():
        parts = name.split("_")
        data[parts[0] + "".join(p.capitalize() for p in parts[1:])] = value

    written = write_text(
        f"{CONFIG_DIR}/{CONFIG_FILE}",
        project_root,
        yaml.safe_dump(data, sort_keys=False, default_flow_style=False),
    )
    return Path(written)
