"""
RK Media Server v1.0.0 - Duration Prober
Read a media file's duration with ffprobe
"""

import json
import logging
import math
import subprocess
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# path -> "HH:MM:SS" or None; the indexer only depends on this shape
DurationProbe = Callable[[str], Optional[str]]


class ProbeError(Exception):
    """ffprobe ran but did not produce a usable duration"""


def seconds_to_hms(total_seconds: float) -> str:
    """
    Format seconds as zero-padded HH:MM:SS

    Fractional seconds are truncated, never rounded up.
    """
    whole = int(math.floor(total_seconds))
    hours = whole // 3600
    minutes = (whole % 3600) // 60
    seconds = whole % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


class FFProbe:
    """Callable duration prober backed by the ffprobe binary"""

    def __init__(self, binary: str = "ffprobe", timeout: Optional[float] = None):
        self.binary = binary
        self.timeout = timeout

    def read_duration(self, file_path: str) -> Optional[float]:
        """
        Return the container duration in seconds, or None if ffprobe reports none

        Raises:
            ProbeError, OSError, subprocess.SubprocessError
        """
        command = [
            self.binary,
            "-v",
            "error",
            "-show_entries",
            "format=duration",
            "-of",
            "json",
            str(file_path),
        ]
        process = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
            text=True,
            timeout=self.timeout,
        )
        if process.returncode != 0:
            raise ProbeError((process.stderr or process.stdout).strip() or f"exit code {process.returncode}")

        try:
            payload = json.loads(process.stdout or "{}")
        except json.JSONDecodeError as exc:
            raise ProbeError(f"unreadable ffprobe output: {exc}") from exc

        raw = (payload.get("format") or {}).get("duration")
        if raw in (None, "", "N/A"):
            return None
        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise ProbeError(f"invalid duration {raw!r}") from exc
        if math.isnan(value) or math.isinf(value) or value < 0:
            raise ProbeError(f"invalid duration {raw!r}")
        return value

    def __call__(self, file_path: str) -> Optional[str]:
        """Probe one file; failures are logged and become None"""
        try:
            seconds = self.read_duration(file_path)
        except (ProbeError, OSError, subprocess.SubprocessError) as exc:
            logger.warning("ffprobe failed for %s: %s", Path(file_path), exc)
            return None
        return seconds_to_hms(seconds) if seconds is not None else None
