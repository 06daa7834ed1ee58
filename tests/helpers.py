from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy.orm import sessionmaker

from rkmedia.database import build_engine, init_db


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database per call"""
    engine = build_engine("sqlite://")
    init_db(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_session():
    return make_session_factory()()


def write_video(directory: Path, name: str, data: bytes = b"00") -> Path:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


class StubProber:
    """Deterministic stand-in for ffprobe"""

    def __init__(self, durations: Optional[Dict[str, Optional[str]]] = None, default: Optional[str] = "00:01:00"):
        self.durations = durations or {}
        self.default = default
        self.calls: List[str] = []

    def __call__(self, file_path: str) -> Optional[str]:
        self.calls.append(file_path)
        return self.durations.get(Path(file_path).name, self.default)
