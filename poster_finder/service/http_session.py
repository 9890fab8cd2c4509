#!/usr/bin/env python3
"""HTTP session shared by the OMDb client and the thumbnail service."""
from __future__ import annotations

import requests

from ..config import MAX_DOWNLOAD_BYTES, USER_AGENT

CHUNK_SIZE = 64 * 1024


def new_session() -> requests.Session:
    """Create the process-wide HTTP session."""
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    return session


def check_timeout(timeout: float) -> float:
    """Return ``timeout`` if usable by requests.

    Raises:
        ValueError: If the timeout is not a positive number.
    """
    if not timeout > 0:
        raise ValueError(f"timeout must be a positive number of seconds, got {timeout!r}")
    return timeout


def fetch_bytes(
    session: requests.Session,
    url: str,
    timeout: float,
    max_bytes: int = MAX_DOWNLOAD_BYTES,
) -> bytes:
    """GET a URL and return its body, refusing bodies over ``max_bytes``.

    Raises:
        requests.RequestException: On transport failure or HTTP error status.
        ValueError: If the body is larger than ``max_bytes``.
    """
    with session.get(url, timeout=timeout, stream=True) as response:
        response.raise_for_status()

        declared = response.headers.get("Content-Length")
        if declared and declared.isdigit() and int(declared) > max_bytes:
            raise ValueError(f"body of {declared} bytes exceeds limit of {max_bytes}")

        data = bytearray()
        for chunk in response.iter_content(CHUNK_SIZE):
            data.extend(chunk)
            if len(data) > max_bytes:
                raise ValueError(f"body exceeds limit of {max_bytes} bytes")
        return bytes(data)
