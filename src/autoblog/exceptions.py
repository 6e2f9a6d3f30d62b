"""Exceptions raised by the content generation pipeline."""

from __future__ import annotations


class AutoblogError(Exception):
    """Base exception for autoblog errors."""

    pass


class ConfigError(AutoblogError):
    """A required credential or identifier is missing.

    Raised before any network call is made, so the message can be shown
    to the operator verbatim.
    """

    pass


class ProviderError(AutoblogError):
    """A third-party provider call failed.

    Covers transport errors, non-2xx responses and malformed bodies.

    Attributes:
        provider: Provider name (gemini, apify, unsplash).
        status_code: HTTP status code when the provider answered.
    """

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
