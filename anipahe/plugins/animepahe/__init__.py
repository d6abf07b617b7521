"""
AnimePahe Plugin - Anime source plugin for animepahe.com

This plugin provides search, paginated episode listing and multi-provider
stream resolution for animepahe.
"""

from .api import CatalogClient
from .extractor import (
    DEFAULT_PATTERNS,
    ExtractionPatterns,
    extract_catalog_id,
    extract_provider_names,
    extract_provider_session,
    extract_title,
    iter_provider_names,
)
from .plugin import AnimePahePlugin
from .resolvers import AnimeResolver, QualityResolver, SearchService

__all__ = [
    "AnimePahePlugin",
    "CatalogClient",
    "SearchService",
    "AnimeResolver",
    "QualityResolver",
    "ExtractionPatterns",
    "DEFAULT_PATTERNS",
    "extract_catalog_id",
    "extract_title",
    "iter_provider_names",
    "extract_provider_names",
    "extract_provider_session",
]
