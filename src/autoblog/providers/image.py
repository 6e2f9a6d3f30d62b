"""Unsplash Image Provider.

Fetches landscape stock photos for post covers and inline images.
API Reference: https://unsplash.com/documentation#search-photos

Every slot the caller asks for is filled: when the API key is missing or
the search fails, the slot gets the placeholder image instead.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import httpx

from ..constants import (
    IMAGE_KEYWORD_COUNT,
    IMAGE_MAX_PER_PAGE,
    POST_IMAGE_COUNT,
    STOP_WORDS,
    TECH_KEYWORDS,
    TECH_QUERY_SUFFIX,
)
from ..content.models import ImageAttribution, ImageResult
from ..exceptions import ProviderError
from ..services.background import BackgroundTasks
from .config import ProviderConfig, load_provider_config

logger = logging.getLogger("content.pipeline")

_PUNCTUATION_RE = re.compile(r"[^\w\s]")


def extract_keywords(topic: str) -> str:
    """Build a short Unsplash query from a post topic.

    Keeps the first meaningful words and forces a technology context for
    tech topics, otherwise Unsplash tends to return unrelated photos.

    Args:
        topic: The blog topic string.

    Returns:
        Search query string.
    """
    topic_lower = topic.lower()
    is_tech_topic = any(keyword in topic_lower for keyword in TECH_KEYWORDS)

    words = [
        word
        for word in _PUNCTUATION_RE.sub(" ", topic_lower).split()
        if len(word) > 2 and word not in STOP_WORDS
    ]
    keywords = " ".join(words[:IMAGE_KEYWORD_COUNT])

    if not keywords:
        keywords = " ".join(_PUNCTUATION_RE.sub(" ", topic).split())

    if is_tech_topic:
        keywords = f"{keywords} {TECH_QUERY_SUFFIX}".strip()

    return keywords


def generate_attribution(photographer: str, photographer_url: str, app_name: str = "autoblog") -> str:
    """HTML credit line required by the Unsplash guidelines."""
    utm = f"utm_source={app_name}&utm_medium=referral"
    return (
        f'Photo by <a href="{photographer_url}?{utm}">{photographer}</a> '
        f'on <a href="https://unsplash.com/?{utm}">Unsplash</a>'
    )


class UnsplashImageProvider:
    """Unsplash stock photo provider.

    Usage:
        provider = UnsplashImageProvider()
        cover, inline = await provider.fetch_images("AI in healthcare", count=2)
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        client: Optional[httpx.AsyncClient] = None,
        background: Optional[BackgroundTasks] = None,
    ):
        """Initialize Unsplash provider.

        Args:
            config: Provider configuration. If None, loads from default config file.
            client: HTTP client to use. Created lazily when None.
            background: Queue for download tracking calls.
        """
        self.config = (config or load_provider_config()).images
        self._client = client
        self._owns_client = client is None
        self.background = background or BackgroundTasks()

    @property
    def provider_name(self) -> str:
        return "unsplash"

    @property
    def is_configured(self) -> bool:
        return self.config.get_access_key() is not None

    @property
    def placeholder(self) -> ImageResult:
        return ImageResult(url=self.config.placeholder_url)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=float(self.config.timeout))
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _headers(self, access_key: str) -> dict[str, str]:
        return {
            "Authorization": f"Client-ID {access_key}",
            "Accept-Version": "v1",
        }

    async def _search(self, query: str, per_page: int, access_key: str) -> list[dict[str, Any]]:
        """Run one photo search.

        Raises:
            ProviderError: Transport error, non-2xx response or malformed body.
        """
        client = await self._get_client()
        params = {
            "query": query,
            "orientation": "landscape",
            "per_page": str(per_page),
            "content_filter": "high",
        }
        try:
            response = await client.get(
                f"{self.config.base_url}/search/photos",
                params=params,
                headers=self._headers(access_key),
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"Unsplash request failed: {e}", provider="unsplash") from e

        if response.status_code != 200:
            raise ProviderError(
                f"Unsplash API error: {response.status_code} - {response.text[:200]}",
                provider="unsplash",
                status_code=response.status_code,
            )

        try:
            results = response.json()["results"]
        except (ValueError, KeyError, TypeError) as e:
            raise ProviderError(f"Unsplash returned a malformed body: {e}", provider="unsplash") from e
        return list(results or [])

    async def _track_download(self, download_location: str, access_key: str) -> None:
        """Report a photo as used, as the Unsplash API terms require."""
        client = await self._get_client()
        response = await client.get(download_location, headers=self._headers(access_key))
        response.raise_for_status()

    def _to_result(self, photo: dict[str, Any], access_key: str) -> ImageResult:
        download_location = (photo.get("links") or {}).get("download_location")
        if download_location:
            self.background.submit(
                self._track_download(download_location, access_key),
                name=f"unsplash_download_{photo.get('id')}",
            )

        user = photo.get("user") or {}
        return ImageResult(
            url=photo["urls"]["regular"],
            attribution=ImageAttribution(
                photographer=user.get("name") or "Unknown",
                photographer_url=(user.get("links") or {}).get("html", ""),
                source_url=f"https://unsplash.com/photos/{photo.get('id')}",
            ),
        )

    async def fetch_images(self, topic: str, count: int = POST_IMAGE_COUNT) -> list[ImageResult]:
        """Fetch distinct photos for a topic.

        Args:
            topic: The blog post topic.
            count: Number of slots to fill (cover first, then inline).

        Returns:
            Exactly ``count`` results; missing photos are placeholders.
        """
        if count <= 0:
            return []

        access_key = self.config.get_access_key()
        if not access_key:
            logger.info("Unsplash API key not configured, using placeholders")
            return [self.placeholder for _ in range(count)]

        keywords = extract_keywords(topic)
        per_page = min(count + self.config.overfetch, IMAGE_MAX_PER_PAGE)

        try:
            logger.info(f"IMAGES | searching Unsplash for {count} images: '{keywords}'")
            photos = await self._search(keywords, per_page, access_key)

            if not photos:
                fallback = (
                    self.config.ai_fallback_query
                    if "ai" in topic.lower()
                    else self.config.generic_fallback_query
                )
                logger.info(f"IMAGES | no results for '{keywords}', trying fallback '{fallback}'")
                photos = await self._search(fallback, per_page, access_key)

            images = [self._to_result(photo, access_key) for photo in photos[:count]]
        except Exception as e:
            logger.error(f"IMAGES | Unsplash fetch failed: {e}")
            return [self.placeholder for _ in range(count)]

        logger.info(f"IMAGES | found {len(images)} images")
        while len(images) < count:
            images.append(self.placeholder)
        return images

    async def fetch_cover_image(self, topic: str) -> ImageResult:
        """Fetch a single cover image."""
        images = await self.fetch_images(topic, 1)
        return images[0]
