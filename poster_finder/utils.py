#!/usr/bin/env python3
"""Shared utilities for Poster Finder: filename parsing and path helpers."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Tuple

from .config import SOURCE_EXT, THUMBNAIL_EXT, URL_PREFIXES

# "<title>(<year>)<anything>.iso"; greedy title, so the last "(digits)" wins
RE_MOVIE_ISO = re.compile(r"^(.+)\(([0-9]+)\).*\.iso$")


def sanitize_title(raw_title: str) -> str:
    """Replace punctuation noise in a raw title with spaces.

    Every character that is not a letter, a decimal digit, or an apostrophe
    becomes a single space; the result is stripped. Interior runs of spaces
    are kept as-is.

    Args:
        raw_title: Title text taken from a filename.

    Returns:
        Sanitized title.

    Examples:
        >>> sanitize_title("The.Thing.")
        'The Thing'
        >>> sanitize_title("Ocean's_Eleven ")
        "Ocean's Eleven"
    """
    chars = [
        c if (c.isalpha() or c.isdecimal() or c == "'") else " "
        for c in raw_title
    ]
    return "".join(chars).strip()


def parse_movie_filename(name: str) -> Optional[Tuple[str, str]]:
    """Parse a disc-image filename into (title, year).

    Args:
        name: Bare filename including the .iso extension.

    Returns:
        Tuple of (sanitized title, year) or None if the name does not match.
    """
    match = RE_MOVIE_ISO.fullmatch(name)
    if not match:
        return None
    title = sanitize_title(match.group(1))
    year = match.group(2).strip()
    return title, year


def thumbnail_path_for(path: Path) -> Path:
    """Return the sibling thumbnail path (same stem, .jpg extension)."""
    return path.with_suffix(THUMBNAIL_EXT)


def is_source_file(name: str) -> bool:
    """Check whether a filename is a disc image (case-sensitive .iso)."""
    return name.endswith(SOURCE_EXT)


def is_url(arg: str) -> bool:
    """Check whether a command-line argument looks like an http(s) URL.

    Only the scheme prefix is inspected; other absolute URI forms
    (ftp://, file://) are treated as paths.
    """
    return arg.lower().startswith(URL_PREFIXES)
