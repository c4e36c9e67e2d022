"""Shared test fixtures for DocGuard Core test suite."""

import os
from pathlib import Path

import pytest

from docguard.security.workspace import workspace_registry
from docguard.shared.infrastructure.config import settings


def _can_symlink(tmp_path: Path) -> bool:
    link = tmp_path / ".symlink-link"
    try:
        os.symlink(tmp_path, link)
    except (OSError, NotImplementedError):
        return False
    link.unlink()
    return True


@pytest.fixture(autouse=True)
def isolated_workspace_root(monkeypatch):
    """Every test starts with no workspace root registered anywhere."""
    monkeypatch.setattr(settings, "workspace_root", None)
    monkeypatch.setattr(settings, "check_within_workspace", False)
    workspace_registry.reset()
    yield
    workspace_registry.reset()


@pytest.fixture
def workspace(tmp_path):
    """
    Create a workspace tree:

        ws/
          project/
            README.md
            docs/guide.md
        outside/
          secret.txt
    """
    ws = tmp_path / "ws"
    project = ws / "project"
    (project / "docs").mkdir(parents=True)
    (project / "README.md").write_text("# Project\n")
    (project / "docs" / "guide.md").write_text("guide\n")

    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_text("secret\n")

    return ws


@pytest.fixture
def project_dir(workspace):
    """The project root inside the workspace."""
    return workspace / "project"


@pytest.fixture
def outside_dir(workspace):
    """A directory next to the workspace, not inside it."""
    return workspace.parent / "outside"


@pytest.fixture
def requires_symlinks(tmp_path):
    """Skip when the platform/user cannot create symlinks."""
    if not _can_symlink(tmp_path):
        pytest.skip("symlinks not supported")
