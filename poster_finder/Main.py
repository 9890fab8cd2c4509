#!/usr/bin/env python3
"""
Runtime entrypoint for Poster Finder.

Usage:
  python -m poster_finder.Main [DIRECTORY | IMAGE_URL] [--timeout SECONDS] [--interactive] [-v]

Requires the OMDBAPIKEY environment variable.

Exit codes:
  0  success
  1  per-file errors during a scan, or single-URL thumbnail failed
  2  configuration error (missing API key, bad directory)
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from poster_finder.config import (
    DEFAULT_THUMBNAIL_NAME,
    REQUEST_TIMEOUT,
    get_api_key,
    get_logger,
)
from poster_finder.exceptions import ConfigurationError, ThumbnailError
from poster_finder.service.http_session import new_session
from poster_finder.service.omdb_client import OmdbClient
from poster_finder.service.scan_service import ScanService
from poster_finder.service.thumbnail_service import ThumbnailService
from poster_finder.utils import is_url

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_CONFIG = 2

LOGGER = get_logger("poster-finder")


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {value!r}")
    return number


def parse_args(argv=None):
    ap = argparse.ArgumentParser(
        description="Generate poster thumbnails for .iso movie files (Poster Finder)"
    )
    ap.add_argument(
        "target",
        nargs="?",
        help="Directory to scan (default: current directory) or an http(s) image URL",
    )
    ap.add_argument(
        "--timeout",
        type=positive_float,
        default=REQUEST_TIMEOUT,
        help=f"HTTP timeout in seconds (default: {REQUEST_TIMEOUT:g})",
    )
    ap.add_argument(
        "--interactive",
        action="store_true",
        help="Ask for a poster URL when OMDb has none (default: skip)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap.parse_args(argv)


def prompt_for_poster(title: str, year: str) -> str:
    try:
        return input(f"No poster for '{title}' ({year}). Poster URL (blank to skip): ")
    except EOFError:
        return ""


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        LOGGER.setLevel(logging.DEBUG)

    try:
        api_key = get_api_key()
    except ConfigurationError as e:
        LOGGER.error("%s", e)
        return EXIT_CONFIG

    with new_session() as session:
        return dispatch(args, api_key, session)


def dispatch(args, api_key: str, session) -> int:
    thumbnails = ThumbnailService(session=session, timeout=args.timeout)

    if args.target and is_url(args.target):
        destination = Path.cwd() / DEFAULT_THUMBNAIL_NAME
        try:
            thumbnails.generate(args.target, destination)
        except ThumbnailError as e:
            LOGGER.error("thumbnail generation failed (%s)", e)
            return EXIT_ERRORS
        return EXIT_OK

    root = Path(args.target).expanduser().resolve() if args.target else Path.cwd()
    if not root.is_dir():
        LOGGER.error("not a directory: %s", root)
        return EXIT_CONFIG

    client = OmdbClient(api_key, session=session, timeout=args.timeout)
    prompt = prompt_for_poster if args.interactive else None
    service = ScanService(client, thumbnails, prompt=prompt)
    summary = service.run(root)
    return EXIT_OK if summary.ok else EXIT_ERRORS


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
