"""
RK Media Server v1.0.0 - Upload Ingestor
Store uploaded files under the media base directory and index them
"""

import logging
import os
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Iterable, Optional, Set

from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..models import Library, MediaItem
from ..repository import Repository
from ..utils.files import is_directory, write_file
from .indexer import IndexReport, save_batch
from .locks import LibraryLocks
from .paths import find_existing_dir, strip_parent_traversal
from .probe import DurationProbe
from .walker import WalkFailure

logger = logging.getLogger(__name__)


@dataclass
class UploadedFile:
    """One file of an upload batch; name is the client's relative path"""

    name: str
    data: bytes
    size: Optional[int] = None


def _is_within(path: str, base_dir: str) -> bool:
    try:
        return os.path.commonpath([path, base_dir]) == base_dir
    except ValueError:
        return False


class UploadIngestor:
    """Best-effort per file: one bad file never aborts the batch"""

    def __init__(
        self,
        db: Session,
        base_dir: str,
        prober: DurationProbe,
        locks: Optional[LibraryLocks] = None,
    ):
        self.db = db
        self.base_dir = os.path.abspath(base_dir)
        self.prober = prober
        self.locks = locks
        self.libraries = Repository(db, Library)
        self.items = Repository(db, MediaItem)

    def ingest(self, files: Iterable[UploadedFile], library_id: int) -> IndexReport:
        """
        Write each upload to disk, probe it and index it under the library

        Raises:
            NotFoundError: unknown library id
        """
        library = self.libraries.find_one(id=library_id)
        if not library:
            raise NotFoundError("Media library not found")

        with self.locks.hold(library.id) if self.locks else nullcontext():
            report = IndexReport(library_id=library.id)
            claimed: Set[str] = set()
            new_items = []

            for upload in files:
                item = self._ingest_one(upload, library, report, claimed)
                if item is not None:
                    new_items.append(item)

            save_batch(self.items, new_items, library)
            report.added = len(new_items)

        return report

    def _already_indexed(self, path: str, claimed: Set[str]) -> bool:
        return path in claimed or self.items.find_one(filepath=path) is not None

    def _ingest_one(
        self, upload: UploadedFile, library: Library, report: IndexReport, claimed: Set[str]
    ) -> Optional[MediaItem]:
        relative_path = strip_parent_traversal(upload.name)
        if not relative_path:
            logger.warning("Skipping upload with empty file name: %r", upload.name)
            report.failures.append(WalkFailure(upload.name, "empty file name"))
            return None

        target = os.path.join(self.base_dir, relative_path)
        if self._already_indexed(target, claimed):
            report.skipped += 1
            return None

        directory = os.path.dirname(target)
        if not is_directory(directory):
            fallback = find_existing_dir(directory)
            if not fallback or not _is_within(fallback, self.base_dir):
                logger.warning("No valid directory found for file: %s", target)
                report.failures.append(WalkFailure(target, "no existing directory"))
                return None

            logger.info("Falling back to existing directory: %s", fallback)
            target = os.path.join(fallback, os.path.basename(target))
            if self._already_indexed(target, claimed):
                report.skipped += 1
                return None

        try:
            write_file(target, upload.data)
        except OSError as exc:
            logger.warning("Failed to save file %s: %s", target, exc)
            report.failures.append(WalkFailure(target, f"write failed: {exc}"))
            return None
        logger.info("Saved file: %s", target)
        claimed.add(target)

        return self.items.create(
            filename=os.path.basename(target),
            filepath=target,
            size=upload.size if upload.size is not None else len(upload.data),
            duration=self.prober(target),
            library_id=library.id,
        )
