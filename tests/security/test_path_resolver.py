"""Tests for project-aware path resolution."""

import os

import pytest

from docguard.security.errors import BaseDirErrorCode, BaseDirValidationError
from docguard.security.path_resolver import resolve_project_path
from docguard.security.validator import BaseDirValidator
from docguard.security.workspace import set_test_workspace_root
from docguard.shared.domain.exceptions import ResolutionError, WorkspaceNotConfiguredError


@pytest.fixture
def templates(workspace):
    """A template file that only exists at the workspace level."""
    (workspace / "templates").mkdir()
    (workspace / "templates" / "srs.md").write_text("template\n")
    return workspace / "templates"


class TestResolveWithBaseDir:
    def test_resolves_against_base_dir(self, workspace, project_dir):
        set_test_workspace_root(workspace)
        result = resolve_project_path("docs/guide.md", base_dir=project_dir)
        assert result == os.path.realpath(project_dir / "docs" / "guide.md")

    def test_missing_file_allowed_without_existence_check(self, workspace, project_dir):
        set_test_workspace_root(workspace)
        result = resolve_project_path("new.md", base_dir=project_dir)
        assert result == os.path.join(os.path.realpath(project_dir), "new.md")

    def test_escape_is_not_retried_against_workspace(self, workspace, project_dir):
        set_test_workspace_root(workspace)
        with pytest.raises(BaseDirValidationError) as exc_info:
            resolve_project_path("../templates/srs.md", base_dir=project_dir)
        assert exc_info.value.code == BaseDirErrorCode.PATH_ESCAPE

    def test_missing_file_falls_back_to_workspace(self, workspace, project_dir, templates):
        set_test_workspace_root(workspace)
        result = resolve_project_path("templates/srs.md", base_dir=project_dir, check_existence=True)
        assert result == os.path.realpath(templates / "srs.md")

    def test_invalid_base_dir_falls_back_to_workspace(self, workspace, templates):
        set_test_workspace_root(workspace)
        result = resolve_project_path("templates/srs.md", base_dir=workspace / "deleted-project")
        assert result == os.path.realpath(templates / "srs.md")

    def test_base_dir_outside_workspace_falls_back(self, workspace, outside_dir, templates):
        set_test_workspace_root(workspace)
        result = resolve_project_path("templates/srs.md", base_dir=outside_dir)
        assert result == os.path.realpath(templates / "srs.md")


class TestResolveWithoutBaseDir:
    def test_uses_workspace_root(self, workspace, templates):
        set_test_workspace_root(workspace)
        assert resolve_project_path("templates/srs.md") == os.path.realpath(templates / "srs.md")

    def test_no_workspace_root(self):
        with pytest.raises(WorkspaceNotConfiguredError):
            resolve_project_path("a.md")

    def test_workspace_escape_rejected(self, workspace):
        set_test_workspace_root(workspace)
        with pytest.raises(BaseDirValidationError) as exc_info:
            resolve_project_path("../outside/secret.txt")
        assert exc_info.value.code == BaseDirErrorCode.PATH_ESCAPE

    def test_missing_everywhere(self, workspace, project_dir):
        set_test_workspace_root(workspace)
        with pytest.raises(ResolutionError) as exc_info:
            resolve_project_path("nope.md", base_dir=project_dir, check_existence=True, context_name="template")
        assert "template" in str(exc_info.value)
        assert "nope.md" in str(exc_info.value)

    def test_workspace_root_not_created(self, tmp_path):
        set_test_workspace_root(tmp_path / "missing-ws")
        with pytest.raises(WorkspaceNotConfiguredError):
            resolve_project_path("a.md")

    def test_injected_validator(self, workspace, templates):
        validator = BaseDirValidator(workspace_root=str(workspace))
        result = resolve_project_path("templates/srs.md", validator=validator)
        assert result == os.path.realpath(templates / "srs.md")
