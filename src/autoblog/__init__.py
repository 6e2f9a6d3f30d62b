"""Autoblog - AI blog post generation pipeline."""

__version__ = "0.1.0"

from .exceptions import AutoblogError, ConfigError, ProviderError

__all__ = [
    "AutoblogError",
    "ConfigError",
    "ProviderError",
    "__version__",
]
