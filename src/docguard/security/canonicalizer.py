"""
Path canonicalization.

Turns a path string into its absolute, symlink-free ("real") form:
- existing paths are resolved by the OS through every symlink
- for paths that do not exist yet, the longest existing ancestor is
  resolved and the missing tail is appended after lexical normalization

Null bytes and strings the filesystem encoding cannot represent are
rejected before any OS call sees the string. New segments longer than the
filesystem name limit are rejected before canonicalization.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List, Tuple

from docguard.security.errors import (
    BaseDirErrorCode,
    BaseDirValidationError,
    PathResolutionError,
)

# POSIX NAME_MAX on common filesystems, used where pathconf() is unavailable
_DEFAULT_NAME_MAX = 255


def check_path_input(path: Any, label: str = "Path", hint: str | None = None) -> str:
    """
    Validate a raw path argument and return it as a string.

    Raises:
        BaseDirValidationError(INVALID_INPUT): None, wrong type, empty,
            whitespace-only, containing a null byte, or not encodable
            with the filesystem encoding
    """
    if path is None:
        raise BaseDirValidationError(
            BaseDirErrorCode.INVALID_INPUT,
            f"{label} is missing: {path!r}.",
            path=None,
            hint=hint,
        )

    if isinstance(path, os.PathLike):
        path = os.fspath(path)

    if not isinstance(path, str):
        raise BaseDirValidationError(
            BaseDirErrorCode.INVALID_INPUT,
            f"{label} must be a string path, got {type(path).__name__}: {path!r}.",
            path=repr(path),
            hint=hint,
        )

    if not path.strip():
        raise BaseDirValidationError(
            BaseDirErrorCode.INVALID_INPUT,
            f"{label} is empty: {path!r}.",
            path=path,
            hint=hint,
        )

    if "\x00" in path:
        raise BaseDirValidationError(
            BaseDirErrorCode.INVALID_INPUT,
            f"{label} contains a null byte: {path!r}.",
            path=path,
            hint=hint,
        )

    try:
        os.fsencode(path)
    except UnicodeEncodeError:
        raise BaseDirValidationError(
            BaseDirErrorCode.INVALID_INPUT,
            f"{label} contains characters the filesystem cannot represent: {path!r}.",
            path=path,
            hint=hint,
        ) from None

    return path


def _name_max(directory: str) -> int:
    try:
        limit = os.pathconf(directory, "PC_NAME_MAX")
    except (AttributeError, OSError, ValueError):
        return _DEFAULT_NAME_MAX
    return limit if limit and limit > 0 else _DEFAULT_NAME_MAX


def check_name_lengths(path: str, label: str = "Path", hint: str | None = None) -> None:
    """
    Reject a path whose not-yet-existing segments exceed the name limit of
    the filesystem they would be created on (os.path.lexists() reports
    such names as missing rather than failing).

    Raises:
        BaseDirValidationError(INVALID_INPUT): a segment is too long
    """
    head, missing = split_existing_prefix(lexical_normalize(path))
    if not missing:
        return
    limit = _name_max(head)
    for name in missing:
        if len(os.fsencode(name)) > limit:
            raise BaseDirValidationError(
                BaseDirErrorCode.INVALID_INPUT,
                f"{label} has a segment longer than {limit} bytes: {path!r}.",
                path=path,
                hint=hint,
                details={"segment_length": len(os.fsencode(name)), "name_max": limit},
            )


def lexical_normalize(path: str) -> str:
    """Make absolute and collapse '.'/'..' without touching the filesystem."""
    return os.path.normpath(os.path.abspath(path))


def canonicalize_existing(path: str) -> str:
    """
    Resolve an existing path through every symlink.

    Raises:
        BaseDirValidationError(NOT_EXIST): path is missing or cannot be resolved
    """
    try:
        return str(Path(path).resolve(strict=True))
    except FileNotFoundError:
        raise BaseDirValidationError(
            BaseDirErrorCode.NOT_EXIST,
            f"Path does not exist: {path}.",
            path=path,
        ) from None
    except (OSError, RuntimeError, ValueError) as e:
        # Symlink loops, permission errors on a parent, names too long
        raise BaseDirValidationError(
            BaseDirErrorCode.NOT_EXIST,
            f"Path cannot be resolved: {path} ({e}).",
            path=path,
        ) from e


def split_existing_prefix(path: str) -> Tuple[str, List[str]]:
    """
    Split a normalized absolute path into its longest existing ancestor
    and the missing segments below it (in order).

    A dangling symlink counts as existing, so it is followed later
    instead of being treated as a fresh name.
    """
    head = path
    missing: List[str] = []
    while not os.path.lexists(head):
        parent, name = os.path.split(head)
        if parent == head:
            break
        if name:
            missing.append(name)
        head = parent
    missing.reverse()
    return head, missing


def canonicalize_candidate(path: str) -> str:
    """
    Canonicalize a path that may not exist yet.

    The path is normalized lexically first, then the longest existing
    ancestor is resolved through all symlinks and the missing tail is
    appended.

    Raises:
        PathResolutionError: the existing ancestor cannot be resolved
    """
    normalized = lexical_normalize(path)
    head, missing = split_existing_prefix(normalized)

    try:
        real_head = os.path.realpath(head, strict=False)
        # realpath() leaves a looping link in place instead of failing
        if os.path.islink(real_head):
            raise OSError(f"symlink loop at {real_head}")
    except (OSError, RuntimeError) as e:
        raise PathResolutionError(path, str(e)) from e

    if not missing:
        return real_head
    return os.path.join(real_head, *missing)
