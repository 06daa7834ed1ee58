"""
RK Media Server v1.0.0 - Library Schemas
Pydantic models for library validation
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class LibraryCreate(BaseModel):
    """Schema for creating a library"""

    name: str = Field(..., min_length=1, max_length=255)
    path: str = Field(..., min_length=1)


class MediaItemResponse(BaseModel):
    """Schema for media item response"""

    id: int
    filename: str
    filepath: str
    size: int
    duration: Optional[str] = None

    class Config:
        from_attributes = True  # For SQLAlchemy models


class LibraryResponse(BaseModel):
    """Schema for library response"""

    id: int
    name: str
    path: str
    items: List[MediaItemResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True
