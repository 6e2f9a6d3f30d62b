"""AI and stock media providers."""

from .config import ProviderConfig, load_provider_config
from .image import UnsplashImageProvider, extract_keywords, generate_attribution
from .text import TextProvider

__all__ = [
    "ProviderConfig",
    "load_provider_config",
    "TextProvider",
    "UnsplashImageProvider",
    "extract_keywords",
    "generate_attribution",
]
