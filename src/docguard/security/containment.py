"""
Containment checks on canonical paths.

Both arguments must already be canonical (symlinks resolved): a purely
lexical comparison is what symlink escapes exploit.
"""

import os


def _boundary_prefix(boundary: str) -> str:
    # The filesystem root already ends with a separator
    if boundary.endswith(os.sep) or (os.altsep and boundary.endswith(os.altsep)):
        return boundary
    return boundary + os.sep


def is_within(candidate: str, boundary: str) -> bool:
    """
    Return True if `candidate` equals `boundary` or lies beneath it.

    The boundary must be followed by a separator, so `/base` does not
    contain `/base-other`. Case is folded only where the platform folds it.

    Examples:
        >>> is_within("/ws/base/file", "/ws/base")
        True
        >>> is_within("/ws/base-other/file", "/ws/base")
        False
    """
    candidate = os.path.normcase(candidate)
    boundary = os.path.normcase(boundary)

    if candidate == boundary:
        return True
    return candidate.startswith(_boundary_prefix(boundary))
