"""
AnimePahe Response Parser

This module turns raw animepahe API bodies into validated models. Any
payload that does not have the expected shape raises ``ExtractionError``
instead of leaking a ``KeyError`` or ``TypeError`` into the pipeline.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from anipahe.core.exceptions import ExtractionError
from anipahe.core.models import CatalogPage, EmbedStream


logger = logging.getLogger(__name__)


class SearchHit(BaseModel):
    """A raw search hit as reported by the API."""

    model_config = ConfigDict(frozen=True, extra='ignore')

    title: str = Field(..., description="Anime title")
    slug: str = Field(..., min_length=1, description="Catalog entry slug")
    image: Optional[str] = Field(default="", description="Poster image URL")

    @field_validator('image')
    @classmethod
    def validate_image(cls, v: Optional[str]) -> str:
        return v or ""


def parse_json(body: str, source: Optional[str] = None) -> Dict[str, Any]:
    """
    Decode a JSON object from a response body.

    Args:
        body: Raw response body
        source: Request URL, used in error messages

    Returns:
        Decoded JSON object

    Raises:
        ExtractionError: If the body is not a JSON object
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, TypeError) as e:
        raise ExtractionError(f"Invalid JSON response: {e}", url=source)

    if not isinstance(payload, dict):
        raise ExtractionError(
            f"Expected JSON object, got {type(payload).__name__}",
            url=source
        )
    return payload


def parse_search_hits(payload: Dict[str, Any], source: Optional[str] = None) -> List[SearchHit]:
    """
    Parse the hits of a search response.

    A missing or null ``data`` field means no results.
    """
    data = payload.get("data")
    if not data:
        return []

    if not isinstance(data, list):
        raise ExtractionError(f"Search data must be a list, got {type(data).__name__}", url=source)

    try:
        hits = [SearchHit.model_validate(hit) for hit in data]
    except ValidationError as e:
        raise ExtractionError(f"Malformed search hit: {e}", url=source, details=e.errors())

    logger.debug(f"Parsed {len(hits)} search hits")
    return hits


def parse_release_page(payload: Dict[str, Any], source: Optional[str] = None) -> CatalogPage:
    """
    Parse a release listing page.

    Args:
        payload: Decoded release response
        source: Request URL, used in error messages

    Returns:
        CatalogPage with items in API order

    Raises:
        ExtractionError: If pagination fields or items are malformed
    """
    try:
        return CatalogPage(
            items=payload.get("data") or (),
            current_page=payload.get("current_page"),
            last_page=payload.get("last_page"),
        )
    except ValidationError as e:
        raise ExtractionError(f"Malformed release page: {e}", url=source, details=e.errors())


def parse_embed_data(payload: Dict[str, Any], source: Optional[str] = None) -> List[EmbedStream]:
    """
    Parse the streams reported by a provider embed response.

    ``data`` holds one entry per stream, each a single-key object mapping
    the numeric quality to a stream object with a ``url`` field::

        {"data": [{"720": {"url": "https://..."}}, {"1080": {"url": "..."}}]}

    ``data`` may also be an object whose values are such entries.

    Args:
        payload: Decoded embed response
        source: Request URL, used in error messages

    Returns:
        Streams in provider-reported order, labelled ``"<n>p"``

    Raises:
        ExtractionError: If the payload does not have this shape
    """
    data = payload.get("data")
    if isinstance(data, dict):
        entries = list(data.values())
    elif isinstance(data, list):
        entries = data
    else:
        raise ExtractionError(f"Embed data must be a list or object, got {type(data).__name__}", url=source)

    streams = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry:
            raise ExtractionError(f"Malformed embed entry: {entry!r}", url=source)

        quality = next(iter(entry))
        info = entry[quality]
        if not isinstance(info, dict) or not info.get("url"):
            raise ExtractionError(f"Embed entry for quality {quality} has no url", url=source)

        streams.append(EmbedStream(label=f"{quality}p", url=str(info["url"])))

    return streams


__all__ = [
    "SearchHit",
    "parse_json",
    "parse_search_hits",
    "parse_release_page",
    "parse_embed_data",
]
