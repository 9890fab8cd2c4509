#!/usr/bin/env python3
"""Scan Service - finds disc images without thumbnails and fetches posters.

For every ``*.iso`` below the root whose sibling ``.jpg`` is missing:
    parse "<Title> (<Year>)...iso" -> look up OMDb -> write <name>.jpg

Per-file problems are logged and counted; they never stop the scan.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from ..config import get_logger
from ..exceptions import MetadataLookupError, ThumbnailError, ThumbnailExistsError
from ..utils import is_source_file, parse_movie_filename, thumbnail_path_for
from .omdb_client import OmdbClient
from .thumbnail_service import ThumbnailService

LOGGER = get_logger("poster-finder")

# Asks the operator for a poster URL; returns "" to skip
PosterPrompt = Callable[[str, str], str]


@dataclass(frozen=True)
class ScanEntry:
    """A disc image that has no thumbnail yet."""

    original: Path
    file_name: str
    thumbnail: Path


@dataclass
class ScanSummary:
    """Per-run outcome counters."""

    found: int = 0
    generated: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def ok(self) -> bool:
        return self.errors == 0


class ScanService:
    """Service to generate missing thumbnails for a directory tree."""

    def __init__(
        self,
        client: OmdbClient,
        thumbnails: ThumbnailService,
        prompt: Optional[PosterPrompt] = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: OMDb client used for title lookups.
            thumbnails: Thumbnail generator.
            prompt: Optional callback asked for a poster URL when OMDb has
                none. Without it such entries are skipped.
        """
        self._client = client
        self._thumbnails = thumbnails
        self._prompt = prompt
        self._logger = LOGGER

    @staticmethod
    def find_candidates(root: Path) -> List[ScanEntry]:
        """Collect .iso files under root that have no sibling .jpg.

        Args:
            root: Scan root.

        Returns:
            Entries sorted by path.
        """
        files: List[Path] = []
        for dirpath, _, filenames in os.walk(root):
            for fn in filenames:
                if is_source_file(fn):
                    files.append(Path(dirpath) / fn)

        entries: List[ScanEntry] = []
        for path in sorted(files):
            thumbnail = thumbnail_path_for(path)
            if thumbnail.exists():
                continue
            entries.append(
                ScanEntry(
                    original=path.relative_to(root),
                    file_name=path.name,
                    thumbnail=thumbnail,
                )
            )
        return entries

    def _poster_from_operator(self, title: str, year: str) -> Optional[str]:
        if self._prompt is None:
            return None
        answer = self._prompt(title, year).strip()
        return answer or None

    def process_entry(self, entry: ScanEntry, summary: ScanSummary) -> None:
        """Run one entry through parse -> lookup -> generate.

        Args:
            entry: Candidate disc image.
            summary: Counters updated in place.
        """
        parsed = parse_movie_filename(entry.file_name)
        if not parsed:
            self._logger.warning(
                "SKIP '%s': unable to parse movie title and year from filename", entry.original
            )
            summary.skipped += 1
            return

        title, year = parsed
        self._logger.info("Looking up '%s' (%s)...", title, year)
        try:
            record = self._client.lookup(title, year)
        except MetadataLookupError as e:
            self._logger.warning("no movie record found (%s)", e)
            summary.errors += 1
            return

        poster = record.poster_url
        if poster is None:
            poster = self._poster_from_operator(title, year)
        if poster is None:
            self._logger.warning("SKIP '%s': no thumbnail found", entry.original)
            summary.skipped += 1
            return

        if entry.thumbnail.exists():
            self._logger.info("SKIP '%s': thumbnail already exists", entry.original)
            summary.skipped += 1
            return

        try:
            self._thumbnails.generate(poster, entry.thumbnail)
        except ThumbnailExistsError:
            self._logger.info("SKIP '%s': thumbnail already exists", entry.original)
            summary.skipped += 1
            return
        except ThumbnailError as e:
            self._logger.warning("thumbnail generation failed (%s)", e)
            summary.errors += 1
            return

        summary.generated += 1

    def run(self, root: Path) -> ScanSummary:
        """Run the thumbnail scan.

        Args:
            root: Directory to scan recursively.

        Returns:
            Outcome counters for the run.
        """
        self._logger.info("Scanning: %s", root)
        entries = self.find_candidates(root)
        self._logger.info("Found %s files with missing thumbnails", f"{len(entries):,}")

        summary = ScanSummary(found=len(entries))
        for entry in entries:
            self.process_entry(entry, summary)

        self._logger.info(
            "END: %d generated, %d skipped, %d errors",
            summary.generated, summary.skipped, summary.errors,
        )
        return summary
