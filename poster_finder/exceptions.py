"""
Exception hierarchy for Poster Finder.

Services raise these; the scanner and the entry point decide which ones
are fatal.
"""


class PosterFinderError(Exception):
    """Base exception for all Poster Finder errors."""
    pass


class ConfigurationError(PosterFinderError):
    """Raised when required configuration (API key, scan root) is missing or invalid."""
    pass


class MetadataLookupError(PosterFinderError):
    """Raised when no movie record could be retrieved from OMDb."""
    pass


class ThumbnailError(PosterFinderError):
    """Raised when a poster cannot be downloaded, decoded, or written."""
    pass


class ThumbnailExistsError(ThumbnailError):
    """Raised when the thumbnail destination already exists at write time."""
    pass
