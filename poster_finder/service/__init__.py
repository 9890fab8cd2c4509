"""Poster Finder services."""
from .http_session import fetch_bytes, new_session
from .omdb_client import MovieRecord, OmdbClient, lookup
from .scan_service import ScanEntry, ScanService, ScanSummary
from .thumbnail_service import ThumbnailService, pad_to_fit

__all__ = [
    "MovieRecord",
    "OmdbClient",
    "ScanEntry",
    "ScanService",
    "ScanSummary",
    "ThumbnailService",
    "fetch_bytes",
    "lookup",
    "new_session",
    "pad_to_fit",
]
