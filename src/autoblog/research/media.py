"""Video scraping with hourly platform rotation, retry and fallback.

The primary platform rotates with the wall-clock hour so that posts
generated in the same hour prefer the same platform. Each platform gets
a bounded number of attempts; the universal fallback platform is always
tried last.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import quote_plus

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import MEDIA_RETRY_BASE_DELAY, MEDIA_RETRY_MAX_DELAY
from ..content.models import MediaPlatform, ScrapedMedia
from ..providers.config import MediaConfig, PlatformTaskConfig
from ..utils.timestamps import parse_timestamp_lenient
from .discovery import DiscoveryClient

logger = logging.getLogger("content.pipeline")

Scraper = Callable[[str, int], Awaitable[list[ScrapedMedia]]]


def _first(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def _as_text(value: Any) -> str | None:
    return str(value) if value is not None else None


def _text(raw: dict[str, Any], *keys: str) -> str:
    return _as_text(_first(raw, *keys)) or ""


def _optional_text(raw: dict[str, Any], *keys: str) -> str | None:
    return _as_text(_first(raw, *keys))


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _iso_from_epoch(value: Any) -> str | None:
    published = parse_timestamp_lenient(value)
    return published.isoformat() if published else None


class MediaScraper:
    """Find one embeddable video for a topic.

    Usage:
        scraper = MediaScraper(discovery)
        video = await scraper.find_video("AI agents")
    """

    def __init__(
        self,
        discovery: DiscoveryClient,
        config: MediaConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the media scraper.

        Args:
            discovery: Client used to run the scraping tasks.
            config: Platform set, fallback and attempt settings.
            clock: Source of the current local time for rotation.
            sleep: Awaitable used between retry attempts.
        """
        self.discovery = discovery
        self.config = config or MediaConfig()
        self._clock = clock
        self._sleep = sleep
        self._scrapers: dict[MediaPlatform, Scraper] = {
            MediaPlatform.YOUTUBE: self.scrape_youtube,
            MediaPlatform.TIKTOK: self.scrape_tiktok,
            MediaPlatform.TWITTER: self.scrape_twitter,
            MediaPlatform.REDDIT: self.scrape_reddit,
        }

    @property
    def platforms(self) -> list[MediaPlatform]:
        return list(self.config.platforms)

    @property
    def universal_fallback(self) -> MediaPlatform:
        return self.config.universal_fallback

    def _task(self, platform: MediaPlatform) -> PlatformTaskConfig:
        return self.config.tasks[platform.value]

    # =========================================================================
    # PLATFORM SCRAPERS
    # =========================================================================

    async def scrape_youtube(self, query: str, max_results: int = 5) -> list[ScrapedMedia]:
        """Search YouTube videos, skipping shorts."""
        task = self._task(MediaPlatform.YOUTUBE)
        items = await self.discovery.run_task(
            task.task_id,
            {"searchKeywords": query, "maxResults": max_results, "maxResultsShorts": 0},
            timeout=task.timeout,
            memory=task.memory,
        )

        results = []
        for item in items[:max_results]:
            video_id = _optional_text(item, "id", "videoId")
            url = _optional_text(item, "url", "videoUrl") or (
                f"https://www.youtube.com/watch?v={video_id}" if video_id else None
            )
            if not url:
                continue
            results.append(ScrapedMedia(
                platform=MediaPlatform.YOUTUBE,
                url=url,
                title=_text(item, "title", "text"),
                author=_optional_text(item, "channelName", "channelTitle", "author"),
                author_url=_optional_text(item, "channelUrl"),
                thumbnail_url=_optional_text(item, "thumbnailUrl", "thumbnail"),
                views=_as_int(_first(item, "viewCount", "views")),
                likes=_as_int(_first(item, "likeCount", "likes")),
                published_at=_optional_text(item, "publishedAt", "uploadDate", "date"),
            ))
        return results

    async def scrape_tiktok(self, query: str, max_results: int = 5) -> list[ScrapedMedia]:
        """Search TikTok videos without downloading media."""
        task = self._task(MediaPlatform.TIKTOK)
        items = await self.discovery.run_task(
            task.task_id,
            {
                "searchQueries": [query],
                "resultsPerPage": max_results,
                "shouldDownloadVideos": False,
                "shouldDownloadCovers": False,
            },
            timeout=task.timeout,
            memory=task.memory,
        )

        results = []
        for item in items[:max_results]:
            author_meta = item.get("authorMeta") or {}
            author = _as_text(author_meta.get("name") or item.get("author"))
            url = _optional_text(item, "webVideoUrl") or (
                f"https://www.tiktok.com/@{author}/video/{item['id']}"
                if author and item.get("id")
                else None
            )
            if not url:
                continue
            results.append(ScrapedMedia(
                platform=MediaPlatform.TIKTOK,
                url=url,
                title=_text(item, "text", "desc"),
                author=author,
                author_url=_optional_text(author_meta, "url")
                or (f"https://www.tiktok.com/@{author}" if author else None),
                thumbnail_url=_optional_text(item.get("covers") or {}, "default")
                or _optional_text(item.get("videoMeta") or {}, "cover"),
                views=_as_int(_first(item, "playCount", "views")),
                likes=_as_int(_first(item, "diggCount", "likes")),
                published_at=_iso_from_epoch(item.get("createTime")),
            ))
        return results

    async def scrape_twitter(self, query: str, max_results: int = 5) -> list[ScrapedMedia]:
        """Twitter/X requires login for public content, nothing to scrape."""
        logger.info("MEDIA | Twitter/X requires login, skipping")
        return []

    async def scrape_reddit(self, query: str, max_results: int = 5) -> list[ScrapedMedia]:
        """Search Reddit posts from the last month."""
        task = self._task(MediaPlatform.REDDIT)
        search_url = f"https://www.reddit.com/search/?q={quote_plus(query)}&sort=relevance&t=month"
        items = await self.discovery.run_task(
            task.task_id,
            {
                "startUrls": [{"url": search_url}],
                "maxItems": max_results,
                "proxy": {"useApifyProxy": True},
            },
            timeout=task.timeout,
            memory=task.memory,
        )

        results = []
        for item in items[:max_results]:
            permalink = item.get("permalink")
            url = _optional_text(item, "url", "postUrl") or (
                f"https://www.reddit.com{permalink}" if permalink else None
            )
            if not url:
                continue
            author = _optional_text(item, "author", "username")
            results.append(ScrapedMedia(
                platform=MediaPlatform.REDDIT,
                url=url,
                title=_text(item, "title", "postTitle"),
                author=author,
                author_url=f"https://www.reddit.com/user/{author}" if author else None,
                thumbnail_url=_optional_text(item, "thumbnail", "image"),
                views=0,
                likes=_as_int(_first(item, "score", "upvotes", "ups")),
                published_at=_iso_from_epoch(item.get("created_utc")) or _optional_text(item, "createdAt"),
            ))
        return results

    # =========================================================================
    # ROTATION AND RETRY
    # =========================================================================

    def primary_platform(self) -> MediaPlatform:
        """Platform preferred for the current hour."""
        platforms = self.platforms
        return platforms[self._clock().hour % len(platforms)]

    def platform_order(self) -> list[MediaPlatform]:
        """Trial order: primary, other platforms, universal fallback last.

        The universal fallback appears exactly once.
        """
        primary = self.primary_platform()
        universal = self.universal_fallback
        order = [primary]
        for platform in self.platforms:
            if platform != primary and platform != universal:
                order.append(platform)
        if primary != universal:
            order.append(universal)
        return order

    def _log_retry(self, platform: MediaPlatform) -> Callable[[RetryCallState], None]:
        def log(retry_state: RetryCallState) -> None:
            outcome = retry_state.outcome
            reason = (
                f"error: {outcome.exception()}"
                if outcome is not None and outcome.failed
                else "no results"
            )
            delay = retry_state.next_action.sleep if retry_state.next_action else 0
            logger.info(
                f"MEDIA | {platform.value} attempt {retry_state.attempt_number}/"
                f"{self.config.max_attempts} {reason}, waiting {delay:.0f}s"
            )
        return log

    async def scrape_platform_with_retry(
        self,
        query: str,
        platform: MediaPlatform,
    ) -> Optional[ScrapedMedia]:
        """Try one platform up to max_attempts times.

        An attempt succeeds on the first non-empty result. Empty results
        and errors are retried with backoff of 2s then 4s (capped at 10s),
        with no wait after the last attempt.

        Returns:
            The first scraped item, or None when every attempt failed.
        """
        scraper = self._scrapers[platform]
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(multiplier=MEDIA_RETRY_BASE_DELAY * 2, max=MEDIA_RETRY_MAX_DELAY),
            retry=retry_if_exception_type(Exception) | retry_if_result(lambda items: not items),
            sleep=self._sleep,
            before_sleep=self._log_retry(platform),
            retry_error_callback=lambda retry_state: None,
        )

        items = await retrying(scraper, query, self.config.results_per_platform)
        if not items:
            logger.info(f"MEDIA | {platform.value}: all {self.config.max_attempts} attempts failed")
            return None

        logger.info(f"MEDIA | {platform.value}: found {len(items)} items")
        return items[0]

    async def find_video(self, query: str) -> Optional[ScrapedMedia]:
        """Walk the platform order until one platform yields a video.

        Returns:
            The video, or None when every platform is exhausted.
        """
        if not self.discovery.is_configured:
            logger.info("MEDIA | discovery not configured, skipping video scrape")
            return None

        order = self.platform_order()
        logger.info(f"MEDIA | platform order: {' -> '.join(p.value for p in order)}")

        for platform in order:
            video = await self.scrape_platform_with_retry(query, platform)
            if video is not None:
                logger.info(f"MEDIA | got {platform.value} video: {video.title[:50]}")
                return video

        logger.info("MEDIA | all platforms exhausted, no video found")
        return None

    async def scrape_multi_platform(
        self,
        query: str,
        platforms: list[MediaPlatform] | None = None,
        max_per_platform: int = 2,
        preferred: MediaPlatform | None = None,
    ) -> list[ScrapedMedia]:
        """Scrape several platforms concurrently.

        Failing platforms are logged and skipped. Results are sorted with
        the preferred platform first, then by likes.
        """
        platforms = platforms or list(MediaPlatform)
        search_query = query if "ai" in query.lower() else f"{query} AI"

        results = await asyncio.gather(
            *(self._scrapers[platform](search_query, max_per_platform) for platform in platforms),
            return_exceptions=True,
        )

        media: list[ScrapedMedia] = []
        for platform, result in zip(platforms, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                logger.warning(f"MEDIA | {platform.value} scrape failed: {result}")
                continue
            media.extend(result)

        media.sort(key=lambda m: (m.platform != preferred, -(m.likes or 0)))
        logger.info(f"MEDIA | found {len(media)} media items across platforms")
        return media
