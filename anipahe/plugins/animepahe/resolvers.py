"""
AnimePahe Resolvers

This module implements the three entry points of the animepahe pipeline:
query search, catalog entry to episode list, and episode page to a
quality -> stream mapping. Calls are strictly sequential and each
resolution keeps all intermediate state local, so independent
resolutions may run concurrently.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from anipahe.core.config import AnimePaheConfig
from anipahe.core.exceptions import ExtractionError, ResolutionError
from anipahe.core.models import CatalogPage, Episode, ProviderSession, QualityMap, SearchResult
from anipahe.core.utils import format_qualities

from .api import CatalogClient
from .extractor import (
    DEFAULT_PATTERNS,
    ExtractionPatterns,
    extract_catalog_id,
    extract_provider_names,
    extract_provider_session,
    extract_title,
)


logger = logging.getLogger(__name__)

QualityFormatter = Callable[[Mapping[str, str], Mapping[str, Any]], QualityMap]


class SearchService:
    """Maps API search hits to SearchResult objects."""

    def __init__(self, client: CatalogClient, config: Optional[AnimePaheConfig] = None):
        self.client = client
        self.config = config or client.config

    async def search(self, query: str) -> List[SearchResult]:
        """
        Search animepahe for a query.

        Args:
            query: Search query string

        Returns:
            Search results in API order
        """
        hits = await self.client.search(query)
        results = [
            SearchResult(
                title=hit.title,
                url=f"{self.config.anime_url}{hit.slug}",
                poster=hit.image,
            )
            for hit in hits
        ]

        logger.info(f"Found {len(results)} anime results for query: '{query}'")
        return results


class AnimeResolver:
    """
    Resolves a catalog entry URL into its full episode list.

    The catalog id scraped from the entry page drives the release API,
    which is paginated; every page is fetched in order and the episodes
    are concatenated.
    """

    def __init__(self, client: CatalogClient, patterns: ExtractionPatterns = DEFAULT_PATTERNS):
        self.client = client
        self.patterns = patterns

    async def resolve(self, catalog_url: str) -> List[Episode]:
        """
        Get every episode of a catalog entry.

        Args:
            catalog_url: URL of the catalog entry page

        Returns:
            Episodes in page order

        Raises:
            ExtractionError: If the page has no title
            ResolutionError: If the page has no catalog id
        """
        page_text = await self.client.get_page(catalog_url)

        try:
            title = extract_title(page_text, self.patterns)
        except ExtractionError as e:
            raise ExtractionError(e.message, pattern=e.pattern, url=catalog_url) from e

        try:
            catalog_id = extract_catalog_id(page_text, self.patterns)
        except ExtractionError as e:
            raise ResolutionError("missing catalog id", url=catalog_url) from e

        logger.debug(f"Resolved '{title}' to catalog id {catalog_id}")

        release_page = await self.client.fetch_release_page(catalog_id)
        episodes = self._build_episodes(title, catalog_url, release_page)

        if release_page.has_more:
            for page in range(release_page.current_page + 1, release_page.last_page + 1):
                next_page = await self.client.fetch_release_page(catalog_id, page)
                episodes.extend(self._build_episodes(title, catalog_url, next_page))

        logger.info(f"Found {len(episodes)} episodes for anime: {title}")
        return episodes

    @staticmethod
    def _build_episodes(title: str, catalog_url: str, release_page: CatalogPage) -> List[Episode]:
        base = catalog_url.rstrip("/")
        return [
            Episode(
                title=f"{title} Episode {item.episode}",
                url=f"{base}/{item.id}",
                number=item.episode,
            )
            for item in release_page.items
        ]


class QualityResolver:
    """
    Resolves an episode page into playable streams grouped by quality.

    Providers are probed in document order. Unsupported providers are
    skipped; the first supported one is queried and its streams are
    returned. Streams from different providers are never merged.
    """

    def __init__(
        self,
        client: CatalogClient,
        config: Optional[AnimePaheConfig] = None,
        formatter: QualityFormatter = format_qualities,
        patterns: ExtractionPatterns = DEFAULT_PATTERNS,
    ):
        """
        Initialize the quality resolver.

        Args:
            client: API client
            config: Supplies the supported provider set
            formatter: Post-processes the raw quality -> URL mapping
            patterns: Page layout patterns
        """
        self.client = client
        self.config = config or client.config
        self.formatter = formatter
        self.patterns = patterns

    def read_session(self, page_text: str) -> ProviderSession:
        """Extract providers and embed credentials from episode page text."""
        providers = extract_provider_names(page_text, self.patterns)
        episode_id, session_token = extract_provider_session(page_text, self.patterns)
        return ProviderSession(
            episode_id=episode_id,
            session_token=session_token,
            providers=providers,
        )

    async def resolve(self, episode_url: str) -> QualityMap:
        """
        Get the streams of an episode.

        Args:
            episode_url: URL of the episode page

        Returns:
            Quality label -> StreamSource mapping in provider-reported order

        Raises:
            ExtractionError: If the page has no embed session
            ResolutionError: If the page lists no providers, or none is supported
            ApiUsageError: If the embed API rejects the session
        """
        page_text = await self.client.get_page(episode_url)
        try:
            session = self.read_session(page_text)
        except ExtractionError as e:
            raise ExtractionError(e.message, pattern=e.pattern, url=episode_url) from e

        if not session.providers:
            raise ResolutionError("no servers found", url=episode_url)

        for provider in session.providers:
            if not self.config.is_supported(provider):
                logger.debug(f"Skipping unsupported provider: {provider}")
                continue

            streams = await self.client.fetch_embed_data(provider, session.episode_id, session.session_token)

            qualities: Dict[str, str] = {}
            for stream in streams:
                qualities[stream.label] = stream.url

            logger.info(f"Resolved {len(qualities)} qualities from {provider} for {episode_url}")
            return self.formatter(qualities, {"extractor": provider, "referer": episode_url})

        raise ResolutionError(
            f"no supported servers found among {list(session.providers)}",
            url=episode_url
        )


__all__ = ["SearchService", "AnimeResolver", "QualityResolver", "QualityFormatter"]
