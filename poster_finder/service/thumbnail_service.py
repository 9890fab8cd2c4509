#!/usr/bin/env python3
"""Thumbnail Service - downloads a poster and writes a padded JPEG thumbnail.

The image is scaled (up or down) to fit inside a fixed box while keeping
its aspect ratio; the rest of the box is filled with PAD_COLOR.
"""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple

import requests
from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import (
    JPEG_QUALITY,
    MAX_DOWNLOAD_BYTES,
    PAD_COLOR,
    REQUEST_TIMEOUT,
    THUMBNAIL_SIZE,
    get_logger,
)
from ..exceptions import ThumbnailError, ThumbnailExistsError
from .http_session import check_timeout, fetch_bytes, new_session

LOGGER = get_logger("poster-finder")


def pad_to_fit(
    image: Image.Image,
    size: Tuple[int, int] = THUMBNAIL_SIZE,
    color: Tuple[int, int, int] = PAD_COLOR,
) -> Image.Image:
    """Scale an image to fit a box and pad the remainder.

    Args:
        image: Source image (any mode).
        size: Target (width, height).
        color: Padding RGB color.

    Returns:
        New RGB image of exactly ``size``.
    """
    # Flatten transparency onto the pad color so it survives JPEG encoding
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, color)
        background.paste(rgba, mask=rgba.getchannel("A"))
        rgb = background
    else:
        rgb = image.convert("RGB")
    return ImageOps.pad(rgb, size, method=Image.Resampling.LANCZOS, color=color)


class ThumbnailService:
    """Service to turn a remote image into a local thumbnail."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        size: Tuple[int, int] = THUMBNAIL_SIZE,
        timeout: float = REQUEST_TIMEOUT,
        max_bytes: int = MAX_DOWNLOAD_BYTES,
    ) -> None:
        self.size = size
        self.max_bytes = max_bytes
        self.timeout = check_timeout(timeout)
        self._session = session or new_session()
        self._logger = LOGGER

    def download(self, source_url: str) -> bytes:
        try:
            return fetch_bytes(self._session, source_url, self.timeout, self.max_bytes)
        except (requests.RequestException, ValueError) as e:
            raise ThumbnailError(f"download failed: {e}") from e

    def render(self, data: bytes) -> bytes:
        """Decode image bytes, pad-to-fit, and encode as JPEG."""
        try:
            with Image.open(BytesIO(data)) as image:
                image.load()
                thumb = pad_to_fit(image, self.size)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise ThumbnailError(f"cannot decode image: {e}") from e

        out = BytesIO()
        thumb.save(out, format="JPEG", quality=JPEG_QUALITY)
        return out.getvalue()

    @staticmethod
    def write_new(destination: Path, payload: bytes) -> None:
        """Write bytes to a file that must not exist yet.

        Raises:
            ThumbnailExistsError: If the destination already exists.
            ThumbnailError: If the write fails; partial output is removed.
        """
        try:
            f = destination.open("xb")
        except FileExistsError as e:
            raise ThumbnailExistsError(f"destination exists: {destination}") from e
        except OSError as e:
            raise ThumbnailError(f"cannot create {destination}: {e}") from e

        try:
            with f:
                f.write(payload)
        except OSError as e:
            destination.unlink(missing_ok=True)
            raise ThumbnailError(f"cannot write {destination}: {e}") from e

    def generate(self, source_url: str, destination: Path) -> Path:
        """Download ``source_url`` and write a thumbnail to ``destination``.

        Args:
            source_url: HTTP(S) URL of the source image.
            destination: Output path; JPEG is always written.

        Returns:
            The destination path.

        Raises:
            ThumbnailExistsError: If ``destination`` already exists.
            ThumbnailError: On download, decode, or write failure.
        """
        destination = Path(destination)
        # Checked again by write_new(); never overwrite
        if destination.exists():
            raise ThumbnailExistsError(f"destination exists: {destination}")

        self._logger.debug("DOWNLOAD: %s", source_url)
        payload = self.render(self.download(source_url))
        self.write_new(destination, payload)
        self._logger.info("THUMBNAIL: %s", destination)
        return destination
