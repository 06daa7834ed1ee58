"""
RK Media Server v1.0.0 - Services
Media indexing core
"""

from .indexer import IndexReport, MediaIndexer
from .ingestor import UploadedFile, UploadIngestor
from .library_registry import LibraryRegistry
from .locks import LibraryLocks
from .probe import FFProbe, seconds_to_hms

__all__ = [
    "IndexReport",
    "MediaIndexer",
    "UploadedFile",
    "UploadIngestor",
    "LibraryRegistry",
    "LibraryLocks",
    "FFProbe",
    "seconds_to_hms",
]
