"""
AnimePahe Plugin - Main plugin implementation for animepahe.com

This module wires the API client, extractor patterns and resolvers into a
single plugin exposing search, episode listing and stream resolution.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from anipahe import __version__
from anipahe.core.config import AnimePaheConfig, validate_config
from anipahe.core.exceptions import AniPaheError
from anipahe.core.models import Episode, QualityMap, SearchResult
from anipahe.core.transport import AiohttpTransport, Transport
from anipahe.core.utils import build_headers, format_qualities
from anipahe.plugins.base import BasePlugin, PluginMetadata

from .api import CatalogClient, HeaderBuilder
from .extractor import DEFAULT_PATTERNS, ExtractionPatterns
from .resolvers import AnimeResolver, QualityFormatter, QualityResolver, SearchService


logger = logging.getLogger(__name__)


class AnimePahePlugin(BasePlugin):
    """
    AnimePahe plugin for accessing anime content from animepahe.com

    When no transport is given the plugin creates an aiohttp transport
    and closes it on ``cleanup()``. An injected transport is left open
    for its owner.
    """

    def __init__(
        self,
        config: Optional[Union[AnimePaheConfig, Dict[str, Any]]] = None,
        transport: Optional[Transport] = None,
        header_builder: HeaderBuilder = build_headers,
        formatter: QualityFormatter = format_qualities,
        patterns: ExtractionPatterns = DEFAULT_PATTERNS,
    ):
        """
        Initialize AnimePahe plugin.

        Args:
            config: Validated config or a dictionary of overrides
            transport: Transport for all requests
            header_builder: Builds request headers from overrides
            formatter: Post-processes resolved qualities
            patterns: Page layout patterns

        Raises:
            ConfigurationError: If a configuration dictionary is invalid
        """
        if isinstance(config, AnimePaheConfig):
            self.plugin_config = config
        else:
            self.plugin_config = validate_config(config or {})

        self._owns_transport = transport is None
        self.transport = transport or AiohttpTransport(self.plugin_config)

        self.client = CatalogClient(self.transport, self.plugin_config, header_builder=header_builder)
        self.search_service = SearchService(self.client, self.plugin_config)
        self.anime_resolver = AnimeResolver(self.client, patterns)
        self.quality_resolver = QualityResolver(self.client, self.plugin_config, formatter, patterns)

        logger.debug("AnimePahe plugin initialized successfully")

    @property
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata."""
        return PluginMetadata(
            name="AnimePahe",
            version=__version__,
            author="AniPahe Team",
            description="Anime source plugin for animepahe with search, episodes and stream resolution",
            website=self.plugin_config.base_url,
            providers=list(self.plugin_config.supported_providers),
        )

    @property
    def base_url(self) -> str:
        """Get base URL for AnimePahe"""
        return self.plugin_config.base_url

    async def search(self, query: str) -> List[SearchResult]:
        """
        Search for anime on animepahe.

        Args:
            query: Search query string

        Returns:
            List of anime search results
        """
        logger.debug(f"Searching AnimePahe with query: '{query}'")
        return await self.search_service.search(query)

    async def get_episodes(self, anime_url: str) -> List[Episode]:
        """
        Get every episode of a catalog entry.

        Args:
            anime_url: URL to the anime page

        Returns:
            Episodes in page order
        """
        logger.debug(f"Fetching episodes from: {anime_url}")
        return await self.anime_resolver.resolve(anime_url)

    # Alias
    get_anime = get_episodes

    async def get_qualities(self, episode_url: str) -> QualityMap:
        """
        Get playable streams of an episode keyed by quality label.

        Args:
            episode_url: URL to the episode page

        Returns:
            Quality label to StreamSource mapping
        """
        logger.debug(f"Resolving qualities for: {episode_url}")
        return await self.quality_resolver.resolve(episode_url)

    def get_download_headers(self) -> Dict[str, str]:
        """Headers the site expects on every request."""
        return dict(self.client.headers)

    async def validate_connection(self) -> bool:
        """
        Validate connection to animepahe.

        Returns:
            True if connection is successful, False otherwise
        """
        try:
            logger.debug("Validating connection to AnimePahe")
            await self.client.search("test")
            logger.info("AnimePahe connection validation successful")
            return True
        except AniPaheError as e:
            logger.error(f"AnimePahe connection validation failed: {e}")
            return False

    async def cleanup(self) -> None:
        """Close the transport if this plugin created it."""
        if self._owns_transport and isinstance(self.transport, AiohttpTransport):
            await self.transport.close()
            logger.debug("AnimePahe plugin cleanup completed")

    def __repr__(self) -> str:
        return f"AnimePahePlugin(base_url='{self.base_url}')"


__all__ = ["AnimePahePlugin"]
