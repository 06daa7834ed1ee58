"""
RK Media Server v1.0.0 - Media Schemas
Directory browsing and indexing results
"""

from pydantic import BaseModel, Field
from typing import List


class DirectoryNodeResponse(BaseModel):
    name: str
    path: str
    is_directory: bool = True

    class Config:
        from_attributes = True


class ScannableFileResponse(BaseModel):
    name: str
    path: str
    size: int

    class Config:
        from_attributes = True


class IndexFailure(BaseModel):
    path: str
    reason: str

    class Config:
        from_attributes = True


class IndexResult(BaseModel):
    """Result of a scan or upload"""

    message: str
    library_id: int
    added: int
    skipped: int
    failures: List[IndexFailure] = Field(default_factory=list)
