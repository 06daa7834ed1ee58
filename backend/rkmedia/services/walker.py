"""
RK Media Server v1.0.0 - Directory Walker
Recursive traversal and single-level listings of media directories
"""

import logging
import os
import stat
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ..errors import ForbiddenError, NotFoundError
from ..utils.files import is_directory

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset({".mp4", ".mkv", ".avi", ".mov", ".flv"})


@dataclass
class WalkFailure:
    """A path the walker or indexer had to skip"""

    path: str
    reason: str


@dataclass
class DirectoryNode:
    name: str
    path: str
    is_directory: bool = True


@dataclass
class ScannableFile:
    name: str
    path: str
    size: int


def is_supported(file_name: str) -> bool:
    """Case-insensitive extension check against SUPPORTED_EXTENSIONS"""
    return os.path.splitext(file_name)[1].lower() in SUPPORTED_EXTENSIONS


def walk(
    root_path: str, failures: Optional[List[WalkFailure]] = None
) -> Iterator[Tuple[str, os.stat_result]]:
    """
    Lazily yield (file_path, stat) for every file under root_path

    Depth-first over an explicit stack of pending directories, entries in
    name order. Unreadable directories and files that cannot be stat'ed are
    logged, recorded in ``failures`` and skipped. Each real directory is
    visited once, so symlink cycles terminate.
    """
    pending = [root_path]
    visited = set()

    while pending:
        directory = pending.pop()

        real = os.path.realpath(directory)
        if real in visited:
            continue
        visited.add(real)

        try:
            names = sorted(os.listdir(directory))
        except OSError as exc:
            logger.warning("Cannot read directory %s: %s", directory, exc)
            if failures is not None:
                failures.append(WalkFailure(directory, f"cannot read directory: {exc}"))
            continue

        subdirectories = []
        for name in names:
            file_path = os.path.join(directory, name)
            try:
                file_stat = os.stat(file_path)
            except OSError as exc:
                logger.warning("Cannot stat file %s: %s", file_path, exc)
                if failures is not None:
                    failures.append(WalkFailure(file_path, f"cannot stat: {exc}"))
                continue

            if stat.S_ISDIR(file_stat.st_mode):
                subdirectories.append(file_path)
            else:
                yield file_path, file_stat

        # Reversed so the first subdirectory is popped first
        pending.extend(reversed(subdirectories))


def _list_directory(base_dir: str, current_path: str) -> Tuple[str, List[os.DirEntry]]:
    if os.path.isabs(current_path):
        absolute = current_path
    else:
        absolute = os.path.normpath(os.path.join(base_dir, current_path))

    if not is_directory(absolute):
        raise NotFoundError("Directory does not exist.")

    try:
        with os.scandir(absolute) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise ForbiddenError(f"Cannot access directory: {exc}") from exc

    return absolute, entries


def list_subdirectories(base_dir: str, current_path: str = "") -> List[DirectoryNode]:
    """
    Immediate subdirectories of a path (absolute, or relative to base_dir)

    Raises:
        NotFoundError: path is missing or not a directory
        ForbiddenError: directory cannot be read
    """
    _, entries = _list_directory(base_dir, current_path)
    return [
        DirectoryNode(name=entry.name, path=os.path.join(current_path, entry.name))
        for entry in entries
        if entry.is_dir()
    ]


def list_scannable_files(base_dir: str, directory_path: str = "") -> List[ScannableFile]:
    """
    Supported media files directly inside a path (absolute, or relative to base_dir)

    A file whose size cannot be read is listed with size 0.

    Raises:
        NotFoundError: path is missing or not a directory
        ForbiddenError: directory cannot be read
    """
    _, entries = _list_directory(base_dir, directory_path)

    files = []
    for entry in entries:
        if not entry.is_file() or not is_supported(entry.name):
            continue
        try:
            size = entry.stat().st_size
        except OSError as exc:
            logger.warning("Cannot stat file %s: %s", entry.path, exc)
            size = 0
        files.append(
            ScannableFile(name=entry.name, path=os.path.join(directory_path, entry.name), size=size)
        )
    return files
