"""
AnimePahe Text Extractor

Pure functions that pull fields out of raw animepahe page text using
fixed patterns. Nothing here performs I/O.

Matching rules:
    - catalog id, title and provider session: first occurrence wins
    - provider names: every occurrence, in document order
"""

import logging
import re
from typing import Iterator, NamedTuple, Pattern, Tuple

from anipahe.core.exceptions import ExtractionError


logger = logging.getLogger(__name__)


class ExtractionPatterns(NamedTuple):
    """Compiled patterns describing the animepahe page layout."""

    catalog_id: Pattern[str]
    title: Pattern[str]
    provider: Pattern[str]
    embed_session: Pattern[str]


DEFAULT_PATTERNS = ExtractionPatterns(
    catalog_id=re.compile(r'&id=(\d+)'),
    title=re.compile(r'<h1>([^<]+)'),
    provider=re.compile(r'data-provider="([^"]+)'),
    embed_session=re.compile(r'getEmbeds\((\d+), "([^"]+)'),
)


def extract_catalog_id(page_text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> int:
    """
    Extract the numeric catalog id from a catalog entry page.

    Args:
        page_text: Raw HTML of the catalog entry page
        patterns: Page layout patterns

    Returns:
        Catalog id

    Raises:
        ExtractionError: If no catalog id marker is present
    """
    match = patterns.catalog_id.search(page_text)
    if not match:
        raise ExtractionError("Catalog id not found in page", pattern=patterns.catalog_id.pattern)
    return int(match.group(1))


def extract_title(page_text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> str:
    """
    Extract the anime title from the first heading of a catalog entry page.

    Args:
        page_text: Raw HTML of the catalog entry page
        patterns: Page layout patterns

    Returns:
        Title text of the first heading

    Raises:
        ExtractionError: If no heading is present
    """
    match = patterns.title.search(page_text)
    if not match:
        raise ExtractionError("Title not found in page", pattern=patterns.title.pattern)
    return match.group(1)


def iter_provider_names(page_text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> Iterator[str]:
    """Lazily yield provider names in document order."""
    for match in patterns.provider.finditer(page_text):
        yield match.group(1)


def extract_provider_names(page_text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> Tuple[str, ...]:
    """
    Collect every provider name listed on an episode page.

    Duplicates are kept. An empty result is not an error; the caller
    decides how to report a page without providers.

    Args:
        page_text: Raw HTML of the episode page
        patterns: Page layout patterns

    Returns:
        Provider names in document order
    """
    providers = tuple(iter_provider_names(page_text, patterns))
    logger.debug(f"Found {len(providers)} providers: {providers}")
    return providers


def extract_provider_session(page_text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> Tuple[str, str]:
    """
    Extract the episode id and session token from the first embed call.

    Args:
        page_text: Raw HTML of the episode page
        patterns: Page layout patterns

    Returns:
        Tuple of (episode_id, session_token)

    Raises:
        ExtractionError: If the page has no embed invocation
    """
    match = patterns.embed_session.search(page_text)
    if not match:
        raise ExtractionError("Embed session not found in page", pattern=patterns.embed_session.pattern)
    return match.group(1), match.group(2)


__all__ = [
    "ExtractionPatterns",
    "DEFAULT_PATTERNS",
    "extract_catalog_id",
    "extract_title",
    "iter_provider_names",
    "extract_provider_names",
    "extract_provider_session",
]
