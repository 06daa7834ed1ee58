"""
RK Media Server v1.0.0 - Library Registry
Create, list and delete media libraries
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import ConflictError, InvalidInputError, NotFoundError
from ..models import Library, MediaItem
from ..repository import Repository
from ..utils.files import is_directory
from ..utils.sanitize import sanitize_filename
from .locks import LibraryLocks
from .paths import resolve_relative

logger = logging.getLogger(__name__)


class LibraryRegistry:
    """CRUD over library records"""

    def __init__(self, db: Session, base_dir: str, locks: Optional[LibraryLocks] = None):
        self.db = db
        self.base_dir = base_dir
        self.locks = locks
        self.libraries = Repository(db, Library)
        self.items = Repository(db, MediaItem)

    def create(self, name: str, path: str) -> Library:
        """
        Register a library rooted at path

        Raises:
            InvalidInputError: name is empty or would be altered by sanitization
            ConflictError: a library with this name exists
            NotFoundError: resolved path is missing or not a directory
        """
        sanitized = sanitize_filename(name)
        if not name or sanitized != name:
            raise InvalidInputError("Invalid library name.")

        if self.libraries.find_one(name=sanitized):
            raise ConflictError("Media library with this name already exists")

        absolute_path = resolve_relative(self.base_dir, path)
        if not is_directory(absolute_path):
            raise NotFoundError("The specified path does not exist or is not a directory")

        library = self.libraries.create(name=sanitized, path=absolute_path)
        try:
            self.libraries.save(library)
        except IntegrityError as exc:
            # Another request registered the same name after our lookup
            raise ConflictError("Media library with this name already exists") from exc
        logger.info("Created library %r at %s", library.name, library.path)
        return library

    def list_all(self) -> List[Library]:
        """All libraries with their items loaded"""
        return self.libraries.find(relations=("items",))

    def get(self, library_id: int) -> Library:
        library = self.libraries.find_one(id=library_id)
        if not library:
            raise NotFoundError("Media library not found")
        return library

    def delete(self, library_id: int) -> int:
        """
        Delete a library and its items in one transaction

        Returns:
            Number of items removed with the library
        """
        library = self.get(library_id)
        name = library.name
        try:
            removed = self.items.delete_where(library_id=library.id)
            self.db.expire(library, ["items"])
            self.libraries.remove(library, commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        if self.locks:
            self.locks.discard(library_id)
        logger.info("Deleted library %r and %d media items", name, removed)
        return removed
