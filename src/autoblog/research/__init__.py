"""Research module for content discovery and video scraping."""

from .discovery import DiscoveryClient, TaskKind
from .media import MediaScraper

__all__ = [
    "DiscoveryClient",
    "TaskKind",
    "MediaScraper",
]
