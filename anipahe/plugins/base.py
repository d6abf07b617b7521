"""
Base Plugin Interface - Abstract base class for anime source plugins.

This module defines the interface that all anime source plugins must implement,
providing a consistent API for searching, episode listing and stream resolution.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, Field

from anipahe.core.models import Episode, QualityMap, SearchResult


logger = logging.getLogger(__name__)


class PluginMetadata(BaseModel):
    """Metadata information for a plugin."""

    name: str = Field(..., description="Plugin display name")
    version: str = Field(default="1.0.0", description="Plugin version")
    author: str = Field(default="Unknown", description="Plugin author")
    description: str = Field(default="", description="Plugin description")
    website: Optional[str] = Field(None, description="Source website URL")
    providers: List[str] = Field(default_factory=list, description="Stream providers the plugin resolves")


class BasePlugin(ABC):
    """
    Abstract base class for anime source plugins.

    All source plugins must inherit from this class and implement the required
    abstract methods to provide search, episode listing and stream resolution.
    Plugins are async context managers; leaving the context releases any
    network resources the plugin owns.
    """

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata information."""
        pass

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Get the base URL for the anime source."""
        pass

    @abstractmethod
    async def search(self, query: str) -> List[SearchResult]:
        """
        Search for anime by title.

        Args:
            query: Search query string

        Returns:
            List of anime search results
        """
        pass

    @abstractmethod
    async def get_episodes(self, anime_url: str) -> List[Episode]:
        """
        Get episodes for a specific anime.

        Args:
            anime_url: URL to the anime page

        Returns:
            List of available episodes
        """
        pass

    @abstractmethod
    async def get_qualities(self, episode_url: str) -> QualityMap:
        """
        Get playable streams for an episode, keyed by quality label.

        Args:
            episode_url: URL to the episode page

        Returns:
            Quality label to stream mapping
        """
        pass

    async def cleanup(self) -> None:
        """Clean up resources used by the plugin."""

    async def __aenter__(self) -> "BasePlugin":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    def __str__(self) -> str:
        return f"{self.metadata.name} v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.metadata.name}')"


# Export base plugin class and metadata
__all__ = ["BasePlugin", "PluginMetadata"]
