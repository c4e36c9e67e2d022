"""
Workspace root registry.

Holds the outer trust boundary (e.g. the folder the editor has open).
Lookup order, first match wins:

1. test override  (set_test_workspace_root)
2. host root      (configure_host_root, called once at startup)
3. settings       (DOCGUARD_WORKSPACE_ROOT)
4. None           -> workspace boundary checks are disabled
"""

from __future__ import annotations

import os
import threading
from typing import Optional

from docguard.security.canonicalizer import canonicalize_candidate, check_path_input
from docguard.shared.infrastructure.config import get_settings
from docguard.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class WorkspaceRootRegistry:
    """Process-wide source of the workspace root."""

    def __init__(self, settings=None):
        self._settings = settings
        self._lock = threading.Lock()
        self._host_root: Optional[str] = None
        self._override: Optional[str] = None

    def configure_host_root(self, root: Optional[str | os.PathLike]) -> None:
        """Register the root discovered from the host environment."""
        value = None if root is None else check_path_input(root, label="Workspace root")
        with self._lock:
            self._host_root = value
        logger.info("workspace_root_configured", root=value)

    def set_test_override(self, root: Optional[str | os.PathLike]) -> None:
        """Override the root for tests; None clears the override."""
        value = None if root is None else check_path_input(root, label="Workspace root")
        with self._lock:
            self._override = value
        logger.debug("workspace_root_overridden", root=value)

    def reset(self) -> None:
        """Drop both the override and the host root."""
        with self._lock:
            self._override = None
            self._host_root = None

    @property
    def override(self) -> Optional[str]:
        return self._override

    def get(self) -> Optional[str]:
        """Return the active workspace root as registered (not canonicalized)."""
        override = self._override
        if override is not None:
            return override
        host_root = self._host_root
        if host_root is not None:
            return host_root
        settings = self._settings or get_settings()
        return settings.workspace_root

    def get_canonical(self) -> Optional[str]:
        """
        Return the active root in canonical form.

        A root that does not exist (yet) is still honoured: its existing
        ancestors are resolved and the rest is kept as written.
        """
        root = self.get()
        if root is None:
            return None
        return canonicalize_candidate(root)


# Global registry instance
workspace_registry = WorkspaceRootRegistry()


def get_workspace_root() -> Optional[str]:
    """Return the canonical workspace root, or None if none is registered."""
    return workspace_registry.get_canonical()


def configure_host_workspace_root(root: Optional[str | os.PathLike]) -> None:
    """Register the host-detected workspace root (call once at startup)."""
    workspace_registry.configure_host_root(root)


def set_test_workspace_root(root: Optional[str | os.PathLike]) -> None:
    """
    Override the workspace root for the duration of a test.

    Passing None clears the override; lookups then fall back to the host
    root, then DOCGUARD_WORKSPACE_ROOT, then no boundary at all.
    Production code never calls this.
    """
    workspace_registry.set_test_override(root)
