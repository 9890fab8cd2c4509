"""Poster Finder - fetch movie posters as thumbnails for disc images."""
from .config import get_api_key, get_logger
from .exceptions import (
    ConfigurationError,
    MetadataLookupError,
    PosterFinderError,
    ThumbnailError,
    ThumbnailExistsError,
)
from .utils import (
    is_source_file,
    is_url,
    parse_movie_filename,
    sanitize_title,
    thumbnail_path_for,
)

__all__ = [
    "get_api_key",
    "get_logger",
    "ConfigurationError",
    "MetadataLookupError",
    "PosterFinderError",
    "ThumbnailError",
    "ThumbnailExistsError",
    "is_source_file",
    "is_url",
    "parse_movie_filename",
    "sanitize_title",
    "thumbnail_path_for",
]
