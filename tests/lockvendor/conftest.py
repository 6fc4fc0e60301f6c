"""
Shared fixtures for lockvendor tests: fake HTTP sessions and zip builders.
"""

import json
import logging
import pathlib
import threading
import zipfile
from typing import Dict, List, Optional, Tuple, Union

import pytest

from lockvendor.lockvendor_config import LockvendorConfig
from lockvendor.lockvendor_logger import LockvendorLogger


class FakeResponse:
    def __init__(self, status_code: int, body: bytes = b""):
        self.status_code = status_code
        self._body = body
        self.closed = False

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self._body), chunk_size):
            yield self._body[start:start + chunk_size]

    def close(self) -> None:
        self.closed = True


Route = Union[Tuple[int, bytes], Exception]


class FakeSession:
    """Stands in for requests.Session; routes urls to canned responses or errors."""

    def __init__(self, routes: Optional[Dict[str, Route]] = None, barrier: Optional[threading.Barrier] = None):
        self.routes = dict(routes or {})
        self.barrier = barrier
        self.calls: List[str] = []
        self.responses: List[FakeResponse] = []
        self._lock = threading.Lock()

    def get(self, url: str, stream: bool = False, timeout: Optional[float] = None) -> FakeResponse:
        with self._lock:
            self.calls.append(url)
        if self.barrier is not None:
            self.barrier.wait()
        if url not in self.routes:
            raise AssertionError(f"unexpected request to {url}")
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        response = FakeResponse(*route)
        with self._lock:
            self.responses.append(response)
        return response


def build_zip(path: pathlib.Path, entries: List[Tuple[str, Optional[bytes], int]]) -> bytes:
    """
    Write a zip archive with explicit entries and return its bytes.

    Each entry is (name, content, unix mode); a None content makes a directory entry.
    """
    with zipfile.ZipFile(path, "w") as zf:
        for name, content, mode in entries:
            info = zipfile.ZipInfo(name)
            info.external_attr = mode << 16
            if content is None:
                info.external_attr |= 0x10
                zf.writestr(info, b"")
            else:
                zf.writestr(info, content)
    return path.read_bytes()


@pytest.fixture
def zip_builder(tmp_path):
    """Build zip archives under a scratch directory and return their bytes."""
    archives = tmp_path / "archives"
    archives.mkdir()

    def _build(name: str, entries: List[Tuple[str, Optional[bytes], int]]) -> bytes:
        return build_zip(archives / name, entries)

    return _build


@pytest.fixture
def fake_session_cls():
    return FakeSession


@pytest.fixture
def install_root(tmp_path) -> pathlib.Path:
    return tmp_path / "vendor"


@pytest.fixture
def config(install_root) -> LockvendorConfig:
    return LockvendorConfig(install_root=str(install_root))


@pytest.fixture
def logger() -> LockvendorLogger:
    return LockvendorLogger()


@pytest.fixture
def events(caplog):
    """Structured events logged through LockvendorLogger, decoded from JSON."""
    caplog.set_level(logging.INFO, logger="lockvendor")

    def _events() -> List[dict]:
        return [
            json.loads(record.getMessage())
            for record in caplog.records
            if record.name == "lockvendor"
        ]

    return _events
