"""
Core Utilities - Shared helpers used around the resolution pipeline.

This module provides the default header builder and quality formatter
collaborators, URL validation, and application logging setup.
"""

import logging
import sys
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from anipahe.core.models import QualityMap, StreamSource


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/138.0.0.0 Safari/537.36"
)

BASE_HEADERS: Mapping[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
}


def validate_url(url: str) -> bool:
    """
    Validate if a string is a properly formatted URL.

    Args:
        url: The URL string to validate

    Returns:
        True if URL is valid, False otherwise
    """
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except (TypeError, ValueError, AttributeError):
        return False


def build_headers(overrides: Optional[Mapping[str, str]] = None, user_agent: str = DEFAULT_USER_AGENT) -> Dict[str, str]:
    """
    Build a browser-like header set merged with overrides.

    Args:
        overrides: Headers that replace or extend the base set
        user_agent: User-Agent value for the base set

    Returns:
        New header dictionary
    """
    headers = dict(BASE_HEADERS)
    headers["User-Agent"] = user_agent
    if overrides:
        headers.update(overrides)
    return headers


def format_qualities(qualities: Mapping[str, str], context: Mapping[str, Any]) -> QualityMap:
    """
    Turn a raw quality -> URL mapping into playable stream sources.

    The ``context`` must provide ``extractor`` (provider name) and
    ``referer`` (page the streams were resolved from). Key order is kept.

    Args:
        qualities: Quality label to stream URL mapping
        context: Extraction metadata

    Returns:
        Quality label to StreamSource mapping
    """
    extractor = context["extractor"]
    referer = context["referer"]
    playback_headers = {"Referer": referer}

    return {
        label: StreamSource(
            url=url,
            extractor=extractor,
            referer=referer,
            headers=playback_headers,
        )
        for label, url in qualities.items()
    }


def setup_logging(level: str = "INFO", debug: bool = False) -> None:
    """
    Set up application logging.

    Args:
        level: Logging level name used when not debugging
        debug: Enable debug logging
    """
    log_level = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )

    # Reduce noise from third-party libraries
    if not debug:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)


__all__ = [
    "DEFAULT_USER_AGENT",
    "BASE_HEADERS",
    "validate_url",
    "build_headers",
    "format_qualities",
    "setup_logging",
]
