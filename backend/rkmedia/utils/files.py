"""
RK Media Server v1.0.0 - File Utilities
File operations and management
"""

from pathlib import Path


def is_directory(path: str | Path) -> bool:
    """
    True if path exists and is a directory (symlinks followed)

    Args:
        path: Path to check

    Returns:
        Whether the path is an existing directory
    """
    try:
        return Path(path).is_dir()
    except OSError:
        return False


def write_file(path: str | Path, data: bytes) -> int:
    """
    Write bytes to path, replacing any existing file

    Args:
        path: Destination file path (its directory must exist)
        data: File contents

    Returns:
        Number of bytes written
    """
    path = Path(path)
    with open(path, "wb") as f:
        return f.write(data)
