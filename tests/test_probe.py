import json
import subprocess
import unittest
from unittest.mock import Mock, patch

from rkmedia.services import probe
from rkmedia.services.probe import FFProbe, seconds_to_hms


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0) -> Mock:
    return Mock(stdout=stdout, stderr=stderr, returncode=returncode)


class SecondsToHmsTests(unittest.TestCase):
    def test_truncates_fractional_seconds(self) -> None:
        self.assertEqual("01:30:25", seconds_to_hms(5425.7))

    def test_zero(self) -> None:
        self.assertEqual("00:00:00", seconds_to_hms(0))

    def test_never_rounds_up(self) -> None:
        self.assertEqual("00:00:59", seconds_to_hms(59.999))
        self.assertEqual("00:59:59", seconds_to_hms(3599.9))

    def test_hours_beyond_two_digits(self) -> None:
        self.assertEqual("100:00:01", seconds_to_hms(360001))


class FFProbeTests(unittest.TestCase):
    def test_formats_reported_duration(self) -> None:
        output = json.dumps({"format": {"duration": "5425.700000"}})
        with patch.object(probe.subprocess, "run", return_value=_completed(output)) as run:
            self.assertEqual("01:30:25", FFProbe()("/media/movie.mp4"))

        command = run.call_args.args[0]
        self.assertEqual("ffprobe", command[0])
        self.assertEqual("/media/movie.mp4", command[-1])
        self.assertIsNone(run.call_args.kwargs["timeout"])

    def test_configured_binary_and_timeout_are_used(self) -> None:
        output = json.dumps({"format": {"duration": "1"}})
        with patch.object(probe.subprocess, "run", return_value=_completed(output)) as run:
            FFProbe("/opt/ffprobe", timeout=5)("/media/a.mkv")

        self.assertEqual("/opt/ffprobe", run.call_args.args[0][0])
        self.assertEqual(5, run.call_args.kwargs["timeout"])

    def test_missing_duration_is_none(self) -> None:
        for payload in ({"format": {}}, {"format": {"duration": "N/A"}}, {}):
            with self.subTest(payload=payload):
                with patch.object(probe.subprocess, "run", return_value=_completed(json.dumps(payload))):
                    self.assertIsNone(FFProbe()("/media/a.avi"))

    def test_nonzero_exit_is_none(self) -> None:
        failed = _completed(stderr="Invalid data found when processing input", returncode=1)
        with patch.object(probe.subprocess, "run", return_value=failed):
            with self.assertLogs("rkmedia.services.probe", level="WARNING"):
                self.assertIsNone(FFProbe()("/media/corrupt.mp4"))

    def test_missing_binary_is_none(self) -> None:
        with patch.object(probe.subprocess, "run", side_effect=FileNotFoundError("ffprobe")):
            self.assertIsNone(FFProbe()("/media/a.mp4"))

    def test_timeout_is_none(self) -> None:
        with patch.object(
            probe.subprocess, "run", side_effect=subprocess.TimeoutExpired(cmd="ffprobe", timeout=1)
        ):
            self.assertIsNone(FFProbe(timeout=1)("/media/a.mp4"))

    def test_garbage_output_is_none(self) -> None:
        with patch.object(probe.subprocess, "run", return_value=_completed("not json")):
            self.assertIsNone(FFProbe()("/media/a.mp4"))


if __name__ == "__main__":
    unittest.main()
