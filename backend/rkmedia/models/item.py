"""
RK Media Server v1.0.0 - Media Item Model
Database model for indexed media files
"""

from sqlalchemy import BigInteger, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from ..database import Base


class MediaItem(Base):
    """
    Media file discovered by a scan or stored by an upload
    """

    __tablename__ = "media_items"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # File info
    filename = Column(String, nullable=False)  # Original file name
    filepath = Column(String, nullable=False, unique=True)  # Absolute path, dedup key
    size = Column(BigInteger, nullable=False)  # Bytes
    duration = Column(Text, nullable=True)  # "HH:MM:SS" or NULL if probing failed

    # Foreign key
    library_id = Column(Integer, ForeignKey("libraries.id"), nullable=False)

    # Relationships
    library = relationship("Library", back_populates="items")

    # Indexes
    __table_args__ = (
        Index("idx_media_items_library", "library_id"),
    )

    def __repr__(self):
        return f"<MediaItem(id={self.id}, filepath={self.filepath})>"
