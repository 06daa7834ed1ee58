import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from rkmedia.errors import NotFoundError
from rkmedia.models import MediaItem
from rkmedia.services import LibraryLocks, LibraryRegistry, MediaIndexer, UploadedFile, UploadIngestor
from rkmedia.services import ingestor as ingestor_module

from .helpers import StubProber, make_session


class UploadIngestorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.base = Path(self._tmp.name) / "Media"
        (self.base / "movies").mkdir(parents=True)
        self.db = make_session()
        self.library = LibraryRegistry(self.db, str(self.base)).create("Movies", "movies")
        self.prober = StubProber()
        self.ingestor = UploadIngestor(self.db, str(self.base), self.prober, LibraryLocks())

    def tearDown(self) -> None:
        self.db.close()
        self._tmp.cleanup()

    def _items(self):
        return self.db.query(MediaItem).order_by(MediaItem.filepath).all()

    def test_writes_and_indexes_uploads(self) -> None:
        report = self.ingestor.ingest(
            [UploadedFile("movies/a.mp4", b"abc"), UploadedFile("movies/b.mkv", b"de", size=2)],
            self.library.id,
        )

        self.assertEqual(2, report.added)
        self.assertEqual(b"abc", (self.base / "movies" / "a.mp4").read_bytes())
        items = self._items()
        self.assertEqual(["a.mp4", "b.mkv"], [i.filename for i in items])
        self.assertEqual([3, 2], [i.size for i in items])
        self.assertEqual(str(self.base / "movies" / "a.mp4"), items[0].filepath)
        self.assertEqual(self.library.id, items[0].library_id)
        self.assertEqual("00:01:00", items[0].duration)

    def test_leading_traversal_never_escapes_base(self) -> None:
        names = ["../escape.mp4", "../../../../escape2.mp4", "movies/../../../escape3.mp4", "/tmp/escape4.mp4"]
        self.ingestor.ingest([UploadedFile(n, b"x") for n in names], self.library.id)

        base = os.path.realpath(self.base)
        items = self._items()
        self.assertEqual(4, len(items))
        for item in items:
            with self.subTest(path=item.filepath):
                self.assertEqual(base, os.path.commonpath([os.path.realpath(item.filepath), base]))
        self.assertFalse((Path(self._tmp.name) / "escape.mp4").exists())

    def test_missing_directory_falls_back_to_nearest_ancestor(self) -> None:
        report = self.ingestor.ingest(
            [UploadedFile("movies/new/season1/e01.mp4", b"x")], self.library.id
        )

        self.assertEqual(1, report.added)
        target = self.base / "movies" / "e01.mp4"
        self.assertTrue(target.is_file())
        self.assertEqual(str(target), self._items()[0].filepath)

    def test_already_indexed_file_is_skipped(self) -> None:
        (self.base / "movies" / "a.mp4").write_bytes(b"original")
        MediaIndexer(self.db, self.prober).scan(self.library.id)

        report = self.ingestor.ingest([UploadedFile("movies/a.mp4", b"new")], self.library.id)

        self.assertEqual(0, report.added)
        self.assertEqual(1, report.skipped)
        self.assertEqual(b"original", (self.base / "movies" / "a.mp4").read_bytes())

    def test_fallback_target_already_indexed_is_skipped(self) -> None:
        (self.base / "movies" / "e01.mp4").write_bytes(b"original")
        MediaIndexer(self.db, self.prober).scan(self.library.id)

        report = self.ingestor.ingest([UploadedFile("movies/new/e01.mp4", b"new")], self.library.id)

        self.assertEqual(0, report.added)
        self.assertEqual(1, report.skipped)
        self.assertEqual(b"original", (self.base / "movies" / "e01.mp4").read_bytes())
        self.assertFalse((self.base / "movies" / "new").exists())
        self.assertEqual([str(self.base / "movies" / "e01.mp4")], [i.filepath for i in self._items()])

    def test_duplicate_names_in_one_batch_index_once(self) -> None:
        report = self.ingestor.ingest(
            [UploadedFile("movies/a.mp4", b"1"), UploadedFile("movies/a.mp4", b"2")],
            self.library.id,
        )

        self.assertEqual(1, report.added)
        self.assertEqual(1, report.skipped)
        self.assertEqual(1, len(self._items()))

    def test_write_failure_skips_only_that_file(self) -> None:
        real_write = ingestor_module.write_file

        def write_file(path, data):
            if path.endswith("bad.mp4"):
                raise OSError(28, "No space left on device")
            return real_write(path, data)

        with patch.object(ingestor_module, "write_file", side_effect=write_file):
            with self.assertLogs("rkmedia.services.ingestor", level="WARNING"):
                report = self.ingestor.ingest(
                    [UploadedFile("movies/bad.mp4", b"x"), UploadedFile("movies/good.mp4", b"y")],
                    self.library.id,
                )

        self.assertEqual(1, report.added)
        self.assertEqual(["good.mp4"], [i.filename for i in self._items()])
        self.assertEqual(1, len(report.failures))

    def test_no_fallback_directory_skips_file(self) -> None:
        with patch.object(ingestor_module, "find_existing_dir", return_value=None):
            report = self.ingestor.ingest(
                [UploadedFile("missing/a.mp4", b"x"), UploadedFile("movies/b.mp4", b"y")],
                self.library.id,
            )

        self.assertEqual(1, report.added)
        self.assertEqual(["b.mp4"], [i.filename for i in self._items()])

    def test_empty_name_is_skipped(self) -> None:
        report = self.ingestor.ingest([UploadedFile("..", b"x")], self.library.id)

        self.assertEqual(0, report.added)
        self.assertEqual(1, len(report.failures))

    def test_failed_probe_still_indexes(self) -> None:
        self.ingestor.prober = StubProber(default=None)
        self.ingestor.ingest([UploadedFile("movies/a.mp4", b"x")], self.library.id)
        self.assertIsNone(self._items()[0].duration)

    def test_unknown_library_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            self.ingestor.ingest([UploadedFile("movies/a.mp4", b"x")], self.library.id + 1)
        self.assertFalse((self.base / "movies" / "a.mp4").exists())


if __name__ == "__main__":
    unittest.main()
