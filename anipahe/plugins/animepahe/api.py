"""
AnimePahe API Client

This module handles all API interactions with the animepahe backend:
search, release listing and provider embed lookup.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import urlencode

from anipahe.core.config import AnimePaheConfig
from anipahe.core.exceptions import ApiUsageError
from anipahe.core.models import CatalogPage, EmbedStream
from anipahe.core.transport import Transport
from anipahe.core.utils import build_headers

from .parser import SearchHit, parse_embed_data, parse_json, parse_release_page, parse_search_hits


logger = logging.getLogger(__name__)

HeaderBuilder = Callable[[Mapping[str, str]], Dict[str, str]]


class CatalogClient:
    """Client for the animepahe JSON API."""

    def __init__(
        self,
        transport: Transport,
        config: Optional[AnimePaheConfig] = None,
        header_builder: HeaderBuilder = build_headers,
    ):
        """
        Initialize the API client.

        Args:
            transport: Transport used for every request
            config: Endpoint and API parameter configuration
            header_builder: Builds the request headers from overrides
        """
        self.transport = transport
        self.config = config or AnimePaheConfig()
        self.api_url = self.config.api_url

        # Built once and reused for every call
        self.headers = header_builder({
            "Referer": self.config.referer,
            "User-Agent": self.config.user_agent,
        })

    async def get_page(self, url: str) -> str:
        """Fetch a site page with the shared headers."""
        logger.debug(f"Fetching page: {url}")
        return await self.transport.get(url, headers=self.headers)

    async def _get_api(self, params: Dict[str, Any]) -> str:
        logger.debug(f"API request: {self.api_url} with params: {params}")
        return await self.transport.get(self.api_url, params=params, headers=self.headers)

    def _request_url(self, params: Dict[str, Any]) -> str:
        return f"{self.api_url}?{urlencode(params)}"

    async def search(self, query: str) -> List[SearchHit]:
        """
        Search the catalog.

        Args:
            query: Search query string

        Returns:
            Raw search hits; empty when the API reports no data

        Raises:
            ExtractionError: If the response is not a well-formed search payload
        """
        params = {"l": self.config.search_limit, "m": "search", "q": query}
        body = await self._get_api(params)

        source = self._request_url(params)
        hits = parse_search_hits(parse_json(body, source), source)
        logger.debug(f"Found {len(hits)} search results for query: '{query}'")
        return hits

    async def fetch_release_page(self, catalog_id: int, page: int = 1) -> CatalogPage:
        """
        Fetch one page of the release listing for a catalog entry.

        Args:
            catalog_id: Numeric catalog id
            page: Page number, starting at 1

        Returns:
            Parsed release page

        Raises:
            ExtractionError: If the response is not a well-formed release page
        """
        params = {
            "m": "release",
            "id": catalog_id,
            "sort": self.config.release_sort,
            "page": page,
        }
        body = await self._get_api(params)

        source = self._request_url(params)
        release_page = parse_release_page(parse_json(body, source), source)
        logger.debug(
            f"Release page {release_page.current_page}/{release_page.last_page} "
            f"for catalog {catalog_id}: {len(release_page.items)} episodes"
        )
        return release_page

    async def fetch_embed_data(self, provider: str, episode_id: str, session: str) -> List[EmbedStream]:
        """
        Fetch the streams a provider offers for an episode.

        Args:
            provider: Provider name, e.g. ``kwik``
            episode_id: Episode id from the episode page
            session: Session token from the episode page

        Returns:
            Streams in provider-reported order

        Raises:
            ApiUsageError: If the API answers with an empty body. A body of
                only whitespace is not empty and fails as malformed JSON.
            ExtractionError: If the response is not a well-formed embed payload
        """
        params = {"id": episode_id, "m": "embed", "p": provider, "session": session}
        body = await self._get_api(params)

        if body == "":
            raise ApiUsageError("Incorrect API usage", params=params)

        source = self._request_url(params)
        streams = parse_embed_data(parse_json(body, source), source)
        logger.debug(f"Provider {provider} reported {len(streams)} streams for episode {episode_id}")
        return streams


__all__ = ["CatalogClient", "HeaderBuilder"]
