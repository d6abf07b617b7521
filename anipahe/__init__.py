"""
AniPahe - Async resolver for the animepahe catalog.

Searches titles, enumerates episodes through the paginated release API and
resolves episode pages into playable stream URLs grouped by quality.
"""

__version__ = "0.1.0"
__author__ = "AniPahe Team"

# Package metadata
__title__ = "anipahe"
__description__ = "Async resolver for animepahe search, episodes and streams"
__license__ = "MIT"

# Version info tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split(".")))

# Export main components for easy importing
from anipahe.core.exceptions import (
    AniPaheError,
    ApiUsageError,
    ExtractionError,
    ResolutionError,
)
from anipahe.core.models import Episode, SearchResult, StreamSource
from anipahe.plugins.animepahe import AnimePahePlugin

__all__ = [
    "__version__",
    "__author__",
    "AnimePahePlugin",
    "SearchResult",
    "Episode",
    "StreamSource",
    "AniPaheError",
    "ApiUsageError",
    "ExtractionError",
    "ResolutionError",
]
