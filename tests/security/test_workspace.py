"""Tests for the workspace root registry."""

import os
import threading

import pytest

from docguard.security.errors import BaseDirErrorCode, BaseDirValidationError
from docguard.security.workspace import (
    WorkspaceRootRegistry,
    configure_host_workspace_root,
    get_workspace_root,
    set_test_workspace_root,
    workspace_registry,
)
from docguard.shared.infrastructure.config import Settings, settings


class TestLookupOrder:
    def test_nothing_registered(self):
        assert get_workspace_root() is None

    def test_settings_fallback(self, workspace, monkeypatch):
        monkeypatch.setattr(settings, "workspace_root", str(workspace))
        assert get_workspace_root() == os.path.realpath(workspace)

    def test_host_root_beats_settings(self, workspace, outside_dir, monkeypatch):
        monkeypatch.setattr(settings, "workspace_root", str(outside_dir))
        configure_host_workspace_root(workspace)
        assert get_workspace_root() == os.path.realpath(workspace)

    def test_override_beats_host_root(self, workspace, project_dir):
        configure_host_workspace_root(workspace)
        set_test_workspace_root(project_dir)
        assert get_workspace_root() == os.path.realpath(project_dir)

    def test_clearing_override_restores_host_root(self, workspace, project_dir):
        configure_host_workspace_root(workspace)
        set_test_workspace_root(project_dir)
        set_test_workspace_root(None)
        assert workspace_registry.override is None
        assert get_workspace_root() == os.path.realpath(workspace)

    def test_clearing_override_without_host_disables_boundary(self, workspace):
        set_test_workspace_root(workspace)
        set_test_workspace_root(None)
        assert get_workspace_root() is None

    def test_reset_drops_everything(self, workspace):
        configure_host_workspace_root(workspace)
        set_test_workspace_root(workspace)
        workspace_registry.reset()
        assert workspace_registry.get() is None


class TestRegistryInstances:
    def test_injected_settings(self, workspace):
        registry = WorkspaceRootRegistry(settings=Settings(workspace_root=str(workspace)))
        assert registry.get() == str(workspace)
        assert registry.get_canonical() == os.path.realpath(workspace)

    def test_blank_setting_means_unset(self):
        assert Settings(workspace_root="   ").workspace_root is None

    def test_instances_are_independent(self, workspace):
        registry = WorkspaceRootRegistry(settings=Settings())
        registry.set_test_override(workspace)
        assert workspace_registry.get() is None

    def test_null_byte_root_rejected(self):
        with pytest.raises(BaseDirValidationError) as exc_info:
            set_test_workspace_root("/ws\x00/evil")
        assert exc_info.value.code == BaseDirErrorCode.INVALID_INPUT
        assert workspace_registry.override is None

    def test_concurrent_reads_see_a_registered_value(self, workspace, project_dir):
        registry = WorkspaceRootRegistry(settings=Settings())
        allowed = {str(workspace), str(project_dir)}
        seen = []

        def reader():
            for _ in range(200):
                seen.append(registry.get())

        def writer():
            for i in range(200):
                registry.set_test_override(workspace if i % 2 else project_dir)

        registry.set_test_override(workspace)
        threads = [threading.Thread(target=reader) for _ in range(4)] + [threading.Thread(target=writer)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert set(seen) <= allowed
