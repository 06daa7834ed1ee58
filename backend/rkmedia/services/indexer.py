"""
RK Media Server v1.0.0 - Media Indexer
Scan a library's directory tree and index new media files
"""

import logging
import os
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError
from ..models import Library, MediaItem
from ..repository import Repository
from .locks import LibraryLocks
from .probe import DurationProbe
from .walker import WalkFailure, is_supported, walk

logger = logging.getLogger(__name__)


@dataclass
class IndexReport:
    """Outcome of one scan or upload batch"""

    library_id: int
    added: int = 0
    skipped: int = 0  # already indexed
    failures: List[WalkFailure] = field(default_factory=list)


def save_batch(items: Repository, new_items: List[MediaItem], library: Library) -> None:
    """Persist all new items in one write; no write at all for an empty batch"""
    if not new_items:
        logger.info('No new media items found in library "%s"', library.name)
        return

    try:
        items.save(new_items)
    except IntegrityError as exc:
        raise ConflictError("A media item with the same file path was indexed concurrently") from exc

    logger.info('Found and saved %d new media items in library "%s"', len(new_items), library.name)


class MediaIndexer:
    """Walks a library root and adds items for supported files not yet indexed"""

    def __init__(self, db: Session, prober: DurationProbe, locks: Optional[LibraryLocks] = None):
        self.db = db
        self.prober = prober
        self.locks = locks
        self.libraries = Repository(db, Library)
        self.items = Repository(db, MediaItem)

    def scan(self, library_id: int) -> IndexReport:
        """
        Index supported files under the library root

        Already-indexed files (same filepath) are skipped without re-probing;
        rescans only add. New items are saved in one batch after the walk.

        Raises:
            NotFoundError: unknown library id
        """
        library = self.libraries.find_one(id=library_id)
        if not library:
            raise NotFoundError("Media library not found")

        with self.locks.hold(library.id) if self.locks else nullcontext():
            report = IndexReport(library_id=library.id)
            new_items = []

            for file_path, file_stat in walk(library.path, report.failures):
                file_name = os.path.basename(file_path)
                if not is_supported(file_name):
                    continue

                if self.items.find_one(filepath=file_path):
                    report.skipped += 1
                    continue

                new_items.append(
                    self.items.create(
                        filename=file_name,
                        filepath=file_path,
                        size=file_stat.st_size,
                        duration=self.prober(file_path),
                        library_id=library.id,
                    )
                )

            save_batch(self.items, new_items, library)
            report.added = len(new_items)

        return report
