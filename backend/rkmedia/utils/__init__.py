"""
RK Media Server v1.0.0 - Utilities
Helper functions and utilities
"""

from .sanitize import sanitize_filename
from .files import is_directory, write_file

__all__ = [
    "sanitize_filename",
    "is_directory",
    "write_file",
]
