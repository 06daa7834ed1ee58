"""
RK Media Server v1.0.0 - Pydantic Schemas
Request/Response models for API validation
"""

from .library import LibraryCreate, LibraryResponse, MediaItemResponse
from .media import DirectoryNodeResponse, IndexResult, ScannableFileResponse

__all__ = [
    "LibraryCreate",
    "LibraryResponse",
    "MediaItemResponse",
    "DirectoryNodeResponse",
    "IndexResult",
    "ScannableFileResponse",
]
