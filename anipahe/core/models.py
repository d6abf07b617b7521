"""
Core Data Models - Pydantic models for the resolution pipeline.

This module defines the data structures handed between pipeline stages:
search results, episodes, release pages, provider sessions and resolved
stream sources. Every model is frozen; a stage constructs its output once
and passes it on by value.
"""

from typing import Dict, Tuple
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _is_absolute_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class SearchResult(BaseModel):
    """
    Represents a catalog entry returned by a search query.

    Contains the display title, the catalog entry URL that can be passed
    to the anime resolver, and the poster image URL.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Anime title")
    url: str = Field(..., description="Catalog entry URL")
    poster: str = Field(default="", description="Poster image URL")

    @field_validator('url')
    @classmethod
    def validate_entry_url(cls, v: str) -> str:
        """Ensure the catalog entry URL is absolute."""
        if not _is_absolute_url(v):
            raise ValueError(f"Catalog entry URL must be absolute: {v}")
        return v

    def __str__(self) -> str:
        return self.title


class Episode(BaseModel):
    """
    Represents a single episode of a catalog entry.

    The title is synthesized as ``"<anime title> Episode <n>"`` and the
    URL points at the episode detail page consumed by the quality resolver.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="Episode title")
    url: str = Field(..., description="Episode detail URL")
    number: int = Field(default=0, ge=0, description="Episode number")

    @field_validator('url')
    @classmethod
    def validate_episode_url(cls, v: str) -> str:
        """Ensure the episode URL is absolute."""
        if not _is_absolute_url(v):
            raise ValueError(f"Episode URL must be absolute: {v}")
        return v

    def __str__(self) -> str:
        return self.title

    def __repr__(self) -> str:
        return f"Episode(title='{self.title}', url='{self.url}')"


class ReleaseItem(BaseModel):
    """One entry of a release page."""

    model_config = ConfigDict(frozen=True)

    episode: int = Field(..., ge=0, description="Episode number")
    id: str = Field(..., min_length=1, description="Episode identifier")

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        # The API reports numeric ids for older entries
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class CatalogPage(BaseModel):
    """A page of the release listing for a catalog id."""

    model_config = ConfigDict(frozen=True)

    items: Tuple[ReleaseItem, ...] = Field(default_factory=tuple, description="Episodes on this page")
    current_page: int = Field(..., ge=1, description="Page number of this response")
    last_page: int = Field(..., ge=1, description="Total number of pages")

    @model_validator(mode='after')
    def validate_page_bounds(self) -> 'CatalogPage':
        """Ensure the current page lies within the reported page range."""
        if self.current_page > self.last_page:
            raise ValueError(
                f"current_page {self.current_page} exceeds last_page {self.last_page}"
            )
        return self

    @property
    def has_more(self) -> bool:
        """Whether pages after this one exist."""
        return self.current_page < self.last_page


class ProviderSession(BaseModel):
    """
    Provider names and embed credentials scraped from an episode page.

    Providers keep document order, duplicates included.
    """

    model_config = ConfigDict(frozen=True)

    episode_id: str = Field(..., min_length=1, description="Episode identifier for the embed API")
    session_token: str = Field(..., min_length=1, description="Short-lived embed session token")
    providers: Tuple[str, ...] = Field(default_factory=tuple, description="Provider names in document order")


class EmbedStream(BaseModel):
    """A single quality entry reported by a provider."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Quality label, e.g. 720p")
    url: str = Field(..., min_length=1, description="Stream URL")


class StreamSource(BaseModel):
    """
    A playable stream for one quality label.

    Carries the originating provider and the referer the stream host
    expects, plus any headers needed for playback.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1, description="Playable stream URL")
    extractor: str = Field(..., min_length=1, description="Provider the stream was resolved from")
    referer: str = Field(..., description="Referer URL required by the stream host")
    headers: Dict[str, str] = Field(default_factory=dict, description="HTTP headers for playback")

    def __str__(self) -> str:
        return f"{self.url} ({self.extractor})"


# Quality label -> stream, in provider-reported order
QualityMap = Dict[str, StreamSource]

# Export all models and types
__all__ = [
    "SearchResult",
    "Episode",
    "ReleaseItem",
    "CatalogPage",
    "ProviderSession",
    "EmbedStream",
    "StreamSource",
    "QualityMap",
]
