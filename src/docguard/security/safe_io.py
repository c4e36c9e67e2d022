"""
File I/O on validated paths.

Validation and use are separate steps, so the filesystem can change in
between (e.g. a file swapped for a symlink). These helpers keep that
window small:
- I/O is done on the canonical path returned by validation
- the final component is opened with O_NOFOLLOW where the platform has it
- parent directories are created one validated level at a time

Intermediate directories swapped for symlinks mid-operation are not
detected; that needs openat()-style directory handles.
"""

from __future__ import annotations

import errno
import os
from typing import Any

from docguard.security.canonicalizer import split_existing_prefix
from docguard.security.errors import BaseDirErrorCode, BaseDirValidationError
from docguard.security.validator import BaseDirValidator, default_validator
from docguard.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

_NOFOLLOW = getattr(os, "O_NOFOLLOW", 0)
_CLOEXEC = getattr(os, "O_CLOEXEC", 0)


def open_no_follow(path: str, flags: int, mode: int = 0o666) -> int:
    """
    os.open() that refuses a symlink as the final component.

    Raises:
        BaseDirValidationError(PATH_ESCAPE): the path is a symlink now
    """
    try:
        return os.open(path, flags | _NOFOLLOW | _CLOEXEC, mode)
    except OSError as e:
        if _NOFOLLOW and e.errno == errno.ELOOP:
            logger.warning("symlink_swap_detected", path=path)
            raise BaseDirValidationError(
                BaseDirErrorCode.PATH_ESCAPE,
                f"Path escape detected: {path} became a symbolic link after validation.",
                path=path,
            ) from e
        raise


def _make_parents(directory: str, base_dir: Any, validator: BaseDirValidator) -> None:
    head, missing = split_existing_prefix(directory)
    current = head
    for name in missing:
        current = validator.validate_path_within_base_dir(os.path.join(current, name), base_dir)
        try:
            os.mkdir(current)
        except FileExistsError:
            if not os.path.isdir(current):
                raise


def read_text(
    candidate: Any,
    base_dir: Any,
    encoding: str = "utf-8",
    validator: BaseDirValidator | None = None,
) -> str:
    """
    Read a text file confined to `base_dir`.

    Raises:
        BaseDirValidationError: the path is rejected
        FileNotFoundError: the path is valid but missing
    """
    validator = validator or default_validator
    path = validator.validate_path_within_base_dir(candidate, base_dir)

    fd = open_no_follow(path, os.O_RDONLY)
    with os.fdopen(fd, "r", encoding=encoding) as f:
        return f.read()


def write_text(
    candidate: Any,
    base_dir: Any,
    content: str,
    encoding: str = "utf-8",
    make_parents: bool = True,
    validator: BaseDirValidator | None = None,
) -> str:
    """
    Write a text file confined to `base_dir`.

    Nothing is written when validation fails.

    Returns:
        Canonical path that was written
    """
    validator = validator or default_validator
    path = validator.validate_path_within_base_dir(candidate, base_dir)

    if make_parents:
        _make_parents(os.path.dirname(path), base_dir, validator)

    fd = open_no_follow(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    with os.fdopen(fd, "w", encoding=encoding) as f:
        f.write(content)

    logger.debug("file_written", path=path, size=len(content))
    return path
