"""
Plugin Layer - Anime source implementations.

This module contains the plugin interface and the source implementations
that provide search, episode listing and stream resolution.
"""

from anipahe.plugins.base import BasePlugin, PluginMetadata

__all__ = [
    "BasePlugin",
    "PluginMetadata",
]
