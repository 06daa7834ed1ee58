"""
RK Media Server v1.0.0 - Path Resolver
Resolve configured and user-supplied paths against the media base directory
"""

import logging
import os
import re
from typing import Optional

from ..errors import StartupError
from ..utils.files import is_directory

logger = logging.getLogger(__name__)

# One or more leading "../" (or "..\") segments, or a bare trailing ".."
_LEADING_PARENT_SEGMENTS = re.compile(r"^(\.\.(/|\\|$))+")


def find_existing_dir(start_path: str) -> Optional[str]:
    """
    Walk upwards from start_path and return the first existing directory

    Returns None only if nothing on the ancestor chain, root included, is a
    directory.
    """
    current = os.path.abspath(start_path)

    while True:
        if is_directory(current):
            return current

        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def resolve_base(configured_path: str) -> str:
    """
    Resolve the media base directory at startup

    Relative paths are taken from the process working directory. If the
    directory is missing, the nearest existing ancestor is used instead.

    Raises:
        StartupError: no directory exists anywhere on the ancestor chain
    """
    desired = os.path.abspath(configured_path)
    found = find_existing_dir(desired)
    if not found:
        raise StartupError(
            f"No valid base directory found starting from {desired} and moving upwards."
        )

    if found != desired:
        logger.warning("Media directory %s does not exist, falling back to %s", desired, found)
    logger.info("Using base directory: %s", found)
    return found


def resolve_relative(base_path: str, candidate: str) -> str:
    """
    Absolute candidates are kept, relative ones are joined to base_path

    Never checks existence; callers decide what a missing path means.
    """
    if os.path.isabs(candidate):
        return os.path.normpath(candidate)
    return os.path.normpath(os.path.join(base_path, candidate))


def strip_parent_traversal(relative_path: str) -> str:
    """
    Normalize a client-supplied relative path and drop leading ".." segments

    Leading separators are dropped too, so the result is always relative.
    Any ".." in the middle is folded away by normalization first.
    """
    normalized = os.path.normpath(relative_path.replace("\\", "/"))
    stripped = _LEADING_PARENT_SEGMENTS.sub("", normalized)
    stripped = stripped.lstrip("/\\")
    return "" if stripped == "." else stripped
