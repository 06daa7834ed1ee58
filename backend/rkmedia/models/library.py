"""
RK Media Server v1.0.0 - Library Model
Database model for media libraries
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base


class Library(Base):
    """
    Registered media library (a named root directory on disk)
    """

    __tablename__ = "libraries"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Basic info
    name = Column(String, nullable=False, unique=True)  # Sanitized display name
    path = Column(String, nullable=False)  # Absolute root path

    # Relationships
    # Items are removed explicitly by LibraryRegistry.delete, not by ORM cascade
    items = relationship("MediaItem", back_populates="library", passive_deletes=True)

    def __repr__(self):
        return f"<Library(id={self.id}, name={self.name})>"
