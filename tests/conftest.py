"""Shared test fixtures and configuration.

Provides configs, fake HTTP transports and mocks for testing the
autoblog components. Coroutine collaborators are AsyncMocks so they can
be awaited like the real ones.
"""

from __future__ import annotations

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from autoblog.content.models import BlogPostDraft, ImageAttribution, ImageResult
from autoblog.providers.config import GenerationSettings, ProviderConfig

ENV_VARS = (
    "GOOGLE_GEMINI_API_KEY",
    "APIFY_API_TOKEN",
    "APIFY_DEFAULT_ACTOR_ID",
    "UNSPLASH_ACCESS_KEY",
    "DAILY_POST_COUNT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without credentials from the developer's shell or .env."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def gemini_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("GOOGLE_GEMINI_API_KEY", "test-gemini-key")
    return "test-gemini-key"


@pytest.fixture
def apify_token(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("APIFY_API_TOKEN", "test-apify-token")
    monkeypatch.setenv("APIFY_DEFAULT_ACTOR_ID", "apify/google-search-scraper")
    return "test-apify-token"


@pytest.fixture
def unsplash_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "test-unsplash-key")
    return "test-unsplash-key"


@pytest.fixture
def provider_config() -> ProviderConfig:
    """Default provider config with a zero batch delay."""
    return ProviderConfig(generation=GenerationSettings(batch_delay_seconds=0))


@pytest.fixture
def make_transport() -> Callable[..., tuple[httpx.MockTransport, list[httpx.Request]]]:
    """Build an httpx.MockTransport that records requests.

    Usage:
        transport, requests = make_transport(lambda request: httpx.Response(200, json=[]))
        client = httpx.AsyncClient(transport=transport)
    """
    def _make(handler: Callable[[httpx.Request], httpx.Response]):
        requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        return httpx.MockTransport(_record), requests

    return _make


def _stock_image(index: int = 1) -> ImageResult:
    return ImageResult(
        url=f"https://images.unsplash.com/photo-{index}",
        attribution=ImageAttribution(
            photographer=f"Photographer {index}",
            photographer_url=f"https://unsplash.com/@p{index}",
            source_url=f"https://unsplash.com/photos/{index}",
        ),
    )


@pytest.fixture
def mock_text_provider() -> MagicMock:
    """Mock TextProvider returning a draft with both placeholder tokens."""
    provider = MagicMock()
    provider.ensure_configured.return_value = "test-gemini-key"
    provider.generate_blog_post = AsyncMock(return_value=BlogPostDraft(
        title="AI trong y tế",
        content="Intro\n\n[IMAGE_PLACEHOLDER]\n\nBody\n\n[VIDEO_PLACEHOLDER]\n\nEnd",
        excerpt="Short excerpt",
        tags=["ai", "health"],
        model="gemini-2.5-flash",
    ))
    return provider


@pytest.fixture
def mock_image_provider() -> MagicMock:
    """Mock image provider returning two stock photos."""
    provider = MagicMock()
    provider.placeholder = ImageResult(url="/blog/images/placeholder.jpg")
    provider.fetch_images = AsyncMock(return_value=[_stock_image(1), _stock_image(2)])
    return provider


@pytest.fixture
def mock_discovery() -> MagicMock:
    """Mock discovery client that is not configured."""
    discovery = MagicMock()
    discovery.is_configured = False
    discovery.find_popular_posts = AsyncMock()
    return discovery


@pytest.fixture
def mock_media_scraper() -> MagicMock:
    scraper = MagicMock()
    scraper.find_video = AsyncMock(return_value=None)
    return scraper


@pytest.fixture
def make_image() -> Callable[[int], ImageResult]:
    """Factory for stock (non-placeholder) image results."""
    return _stock_image
