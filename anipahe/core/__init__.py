"""
Core Layer - Data models, configuration and shared services.

This module contains the data models, configuration handling, error types
and the HTTP transport that the source plugins are built on.
"""

from anipahe.core.config import (
    AnimePaheConfig,
    get_default_config,
    load_config,
    merge_with_defaults,
    validate_config,
)
from anipahe.core.exceptions import (
    AniPaheError,
    ApiUsageError,
    ConfigurationError,
    ExtractionError,
    NetworkError,
    ResolutionError,
)
from anipahe.core.models import (
    CatalogPage,
    EmbedStream,
    Episode,
    ProviderSession,
    QualityMap,
    ReleaseItem,
    SearchResult,
    StreamSource,
)
from anipahe.core.transport import AiohttpTransport, Transport
from anipahe.core.utils import build_headers, format_qualities, setup_logging

__all__ = [
    # Data Models
    "SearchResult",
    "Episode",
    "ReleaseItem",
    "CatalogPage",
    "ProviderSession",
    "EmbedStream",
    "StreamSource",
    "QualityMap",
    # Configuration
    "AnimePaheConfig",
    "get_default_config",
    "merge_with_defaults",
    "validate_config",
    "load_config",
    # Transport and collaborators
    "Transport",
    "AiohttpTransport",
    "build_headers",
    "format_qualities",
    "setup_logging",
    # Exceptions
    "AniPaheError",
    "ApiUsageError",
    "ConfigurationError",
    "ExtractionError",
    "NetworkError",
    "ResolutionError",
]
