"""
AniPahe Configuration

This module handles configuration validation, defaults and JSON loading.
The validated configuration is immutable and is handed to every
component that needs an endpoint, header or provider setting.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from anipahe.core.exceptions import ConfigurationError
from anipahe.core.utils import DEFAULT_USER_AGENT, validate_url


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://animepahe.com"


class AnimePaheConfig(BaseModel):
    """Configuration model for the animepahe resolver."""

    model_config = ConfigDict(frozen=True)

    # Endpoints; api_url, anime_url and referer derive from base_url when omitted
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Site base URL")
    api_url: str = Field(default="", description="API endpoint")
    anime_url: str = Field(default="", description="Prefix of catalog entry URLs")
    referer: str = Field(default="", description="Referer sent with every request")

    # Providers resolved, in priority order
    supported_providers: Tuple[str, ...] = Field(
        default=("kwik", "mp4upload"),
        description="Stream providers the resolver may query"
    )

    # API parameters
    search_limit: int = Field(default=8, ge=1, le=100, description="Maximum search results to return")
    release_sort: str = Field(default="episode_asc", description="Sort order for release pages")

    # Transport
    timeout: int = Field(default=30, description="Request timeout in seconds")
    max_retries: int = Field(default=0, ge=0, le=10, description="Transport-level retries on connection errors")
    retry_delay: float = Field(default=1.0, ge=0.0, description="Base delay between retries in seconds")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User agent string for requests")

    @model_validator(mode='before')
    @classmethod
    def derive_endpoints(cls, data: Any) -> Any:
        """Fill endpoint fields that were not given from the base URL."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        base_url = str(data.get("base_url") or DEFAULT_BASE_URL).rstrip("/")
        data["base_url"] = base_url
        if not data.get("api_url"):
            data["api_url"] = f"{base_url}/api"
        if not data.get("anime_url"):
            data["anime_url"] = f"{base_url}/anime/"
        if not data.get("referer"):
            data["referer"] = f"{base_url}/"
        return data

    @field_validator('base_url', 'api_url', 'anime_url', 'referer')
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not validate_url(v):
            raise ValueError(f"Invalid URL: {v}")
        return v

    @field_validator('supported_providers')
    @classmethod
    def validate_providers(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("At least one supported provider is required")
        return tuple(name.strip() for name in v)

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 5:
            raise ValueError("Timeout must be at least 5 seconds")
        return v

    def is_supported(self, provider: str) -> bool:
        """Check whether a provider name is in the supported set (exact match)."""
        return provider in self.supported_providers


def get_default_config() -> Dict[str, Any]:
    """Get default configuration values."""
    return {
        "base_url": DEFAULT_BASE_URL,
        "supported_providers": ["kwik", "mp4upload"],
        "search_limit": 8,
        "release_sort": "episode_asc",
        "timeout": 30,
        "max_retries": 0,
        "retry_delay": 1.0,
        "user_agent": DEFAULT_USER_AGENT,
    }


def merge_with_defaults(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge provided config with defaults.

    Args:
        config: User configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    merged = get_default_config()
    if config:
        merged.update(config)
    return merged


def validate_config(config: Dict[str, Any], config_path: Optional[str] = None) -> AnimePaheConfig:
    """
    Validate and create AnimePaheConfig from dictionary.

    Args:
        config: Configuration dictionary, merged with defaults
        config_path: Source file, reported in errors

    Returns:
        Validated AnimePaheConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    try:
        return AnimePaheConfig(**merge_with_defaults(config))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", config_path=config_path, details=e.errors())


def load_config(path: Union[str, Path]) -> AnimePaheConfig:
    """
    Load configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Validated AnimePaheConfig instance

    Raises:
        ConfigurationError: If the file cannot be read or is invalid
    """
    config_path = Path(path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file: {e}", config_path=str(config_path))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration file is not valid JSON: {e}", config_path=str(config_path))

    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must contain a JSON object", config_path=str(config_path))

    config = validate_config(data, config_path=str(config_path))
    logger.debug(f"Configuration loaded from {config_path}")
    return config


__all__ = [
    "DEFAULT_BASE_URL",
    "AnimePaheConfig",
    "get_default_config",
    "merge_with_defaults",
    "validate_config",
    "load_config",
]
