"""Shared fixtures: a fake HTTP session and in-memory test images."""
from __future__ import annotations

import struct
import sys
import zlib
from io import BytesIO
from pathlib import Path

import pytest
import requests
from PIL import Image

# Ensure project root is importable so 'poster_finder' is a package
THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = THIS_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200, json_data=None, headers=None) -> None:
        self.content = content
        self.status_code = status_code
        self.headers = headers or {}
        self._json_data = json_data
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.closed = True

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._json_data is None:
            raise ValueError("No JSON object could be decoded")
        return self._json_data


class FakeSession:
    """Stands in for requests.Session; routes GETs by URL."""

    def __init__(self) -> None:
        self.routes: dict[str, object] = {}
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.closed = True

    def add(self, url: str, response) -> None:
        self.routes[url] = response

    def get(self, url, params=None, timeout=None, stream=False):
        self.calls.append((url, {"params": params, "timeout": timeout, "stream": stream}))
        result = self.routes.get(url)
        if result is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(params)
        return result


def image_bytes(size: tuple[int, int], fmt: str = "PNG", mode: str = "RGB", color=(200, 30, 30)) -> bytes:
    out = BytesIO()
    Image.new(mode, size, color).save(out, format=fmt)
    return out.getvalue()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


def png_header(width: int, height: int) -> bytes:
    """A PNG signature plus IHDR chunk declaring the given size, no pixel data."""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    chunk = b"IHDR" + ihdr
    return b"\x89PNG\r\n\x1a\n" + struct.pack(">I", len(ihdr)) + chunk + struct.pack(">I", zlib.crc32(chunk))
