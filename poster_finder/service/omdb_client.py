#!/usr/bin/env python3
"""OMDb client - looks up a movie by title and year.

One GET per lookup against https://www.omdbapi.com/ with the ``apikey``,
``t`` and ``y`` query parameters. The JSON answer is decoded into a
MovieRecord.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..config import (
    OMDB_BASE_URL,
    POSTER_NOT_AVAILABLE,
    REQUEST_TIMEOUT,
    get_logger,
)
from ..exceptions import MetadataLookupError
from .http_session import check_timeout, new_session

LOGGER = get_logger("poster-finder")


@dataclass(frozen=True)
class MovieRecord:
    """A movie as returned by OMDb. Only the fields we need are kept."""

    title: Optional[str] = None
    year: Optional[str] = None
    rated: Optional[str] = None
    poster: Optional[str] = None
    response: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "MovieRecord":
        return cls(
            title=data.get("Title"),
            year=data.get("Year"),
            rated=data.get("Rated"),
            poster=data.get("Poster"),
            response=data.get("Response"),
            error=data.get("Error"),
        )

    @property
    def poster_url(self) -> Optional[str]:
        """Poster URL, or None when absent, empty, or OMDb's "N/A"."""
        if not self.poster or self.poster == POSTER_NOT_AVAILABLE:
            return None
        return self.poster


class OmdbClient:
    """Thin wrapper around the OMDb title lookup."""

    def __init__(
        self,
        api_key: str,
        session: Optional[requests.Session] = None,
        base_url: str = OMDB_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = check_timeout(timeout)
        self._session = session or new_session()
        self._logger = LOGGER

    def lookup(self, title: str, year: str) -> MovieRecord:
        """Fetch the movie record for a title and year.

        Args:
            title: Sanitized movie title.
            year: Release year as parsed from the filename.

        Returns:
            Decoded MovieRecord. A "not found" answer still yields a record
            (with no poster), so callers treat it as a skip.

        Raises:
            MetadataLookupError: On network failure, HTTP error status,
                or a body that is not a JSON object.
        """
        params = {"apikey": self.api_key, "t": title, "y": year}
        try:
            response = self._session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise MetadataLookupError(f"request failed for '{title}' ({year}): {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise MetadataLookupError(f"invalid JSON for '{title}' ({year}): {e}") from e

        if not isinstance(data, dict):
            raise MetadataLookupError(f"unexpected response for '{title}' ({year}): {data!r}")

        record = MovieRecord.from_json(data)
        if record.error:
            self._logger.debug("OMDb: '%s' (%s) -> %s", title, year, record.error)
        else:
            self._logger.debug(
                "OMDb: '%s' (%s) -> '%s' (%s) rated %s",
                title, year, record.title, record.year, record.rated,
            )
        return record


def lookup(
    api_key: str,
    title: str,
    year: str,
    session: Optional[requests.Session] = None,
) -> MovieRecord:
    """Look up a movie with a one-off client.

    Args:
        api_key: OMDb API key.
        title: Movie title.
        year: Release year.
        session: Optional shared HTTP session.

    Returns:
        Decoded MovieRecord.
    """
    if session is not None:
        return OmdbClient(api_key, session=session).lookup(title, year)
    with new_session() as own:
        return OmdbClient(api_key, session=own).lookup(title, year)
