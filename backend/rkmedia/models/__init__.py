"""
RK Media Server v1.0.0 - Database Models
SQLAlchemy models for libraries and their media items
"""

from .library import Library
from .item import MediaItem

__all__ = [
    "Library",
    "MediaItem",
]
