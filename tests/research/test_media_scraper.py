"""Tests for the media scraper rotation, retry and fallback."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from autoblog.content.models import MediaPlatform, ScrapedMedia
from autoblog.providers.config import MediaConfig
from autoblog.research.media import MediaScraper


def _video(platform: MediaPlatform = MediaPlatform.YOUTUBE, likes: int = 0, url: str = "") -> ScrapedMedia:
    return ScrapedMedia(
        platform=platform,
        url=url or "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        title="AI video",
        likes=likes,
    )


def _discovery(configured: bool = True) -> MagicMock:
    discovery = MagicMock()
    discovery.is_configured = configured
    discovery.run_task = AsyncMock(return_value=[])
    return discovery


def _scraper(hour: int = 0, configured: bool = True, **config) -> tuple[MediaScraper, AsyncMock]:
    sleep = AsyncMock()
    scraper = MediaScraper(
        _discovery(configured),
        MediaConfig(**config),
        clock=lambda: datetime(2025, 6, 15, hour, 30),
        sleep=sleep,
    )
    return scraper, sleep


# =============================================================================
# Platform order
# =============================================================================

class TestPlatformOrder:

    def test_even_hour_prefers_youtube(self):
        scraper, _ = _scraper(hour=10)
        assert scraper.platform_order() == [MediaPlatform.YOUTUBE, MediaPlatform.TIKTOK]

    def test_odd_hour_prefers_tiktok_and_ends_with_fallback(self):
        scraper, _ = _scraper(hour=11)
        assert scraper.platform_order() == [MediaPlatform.TIKTOK, MediaPlatform.YOUTUBE]

    def test_fallback_appears_once(self):
        scraper, _ = _scraper(
            hour=1,
            platforms=[MediaPlatform.YOUTUBE, MediaPlatform.TIKTOK, MediaPlatform.REDDIT],
        )
        order = scraper.platform_order()
        assert order == [MediaPlatform.TIKTOK, MediaPlatform.REDDIT, MediaPlatform.YOUTUBE]
        assert order.count(MediaPlatform.YOUTUBE) == 1

    def test_same_hour_same_order(self):
        first, _ = _scraper(hour=7)
        second, _ = _scraper(hour=7)
        assert first.platform_order() == second.platform_order()


# =============================================================================
# Retry
# =============================================================================

class TestScrapeWithRetry:

    @pytest.mark.asyncio
    async def test_backoff_between_attempts_only(self):
        scraper, sleep = _scraper()
        scraper._scrapers[MediaPlatform.YOUTUBE] = AsyncMock(return_value=[])

        result = await scraper.scrape_platform_with_retry("AI", MediaPlatform.YOUTUBE)

        assert result is None
        assert scraper._scrapers[MediaPlatform.YOUTUBE].await_count == 3
        assert [call.args[0] for call in sleep.await_args_list] == [2, 4]

    @pytest.mark.asyncio
    async def test_errors_are_retried(self):
        scraper, sleep = _scraper()
        video = _video()
        scraper._scrapers[MediaPlatform.YOUTUBE] = AsyncMock(
            side_effect=[RuntimeError("actor failed"), [video]]
        )

        result = await scraper.scrape_platform_with_retry("AI", MediaPlatform.YOUTUBE)

        assert result == video
        assert sleep.await_count == 1

    @pytest.mark.asyncio
    async def test_first_success_stops(self):
        scraper, sleep = _scraper()
        video = _video()
        scraper._scrapers[MediaPlatform.YOUTUBE] = AsyncMock(return_value=[video, _video(likes=9)])

        assert await scraper.scrape_platform_with_retry("AI", MediaPlatform.YOUTUBE) == video
        sleep.assert_not_awaited()


# =============================================================================
# find_video
# =============================================================================

class TestFindVideo:

    @pytest.mark.asyncio
    async def test_unconfigured_discovery_returns_none(self):
        scraper, _ = _scraper(configured=False)
        scraper._scrapers[MediaPlatform.YOUTUBE] = AsyncMock(return_value=[_video()])

        assert await scraper.find_video("AI") is None
        scraper._scrapers[MediaPlatform.YOUTUBE].assert_not_awaited()

    @pytest.mark.asyncio
    async def test_attempts_bounded_when_everything_fails(self):
        scraper, sleep = _scraper(hour=1)
        youtube = AsyncMock(side_effect=RuntimeError("down"))
        tiktok = AsyncMock(return_value=[])
        scraper._scrapers[MediaPlatform.YOUTUBE] = youtube
        scraper._scrapers[MediaPlatform.TIKTOK] = tiktok

        assert await scraper.find_video("AI") is None
        assert youtube.await_count + tiktok.await_count == len(scraper.platform_order()) * 3
        assert sleep.await_count == 4

    @pytest.mark.asyncio
    async def test_falls_through_to_next_platform(self):
        scraper, _ = _scraper(hour=1)
        video = _video()
        scraper._scrapers[MediaPlatform.TIKTOK] = AsyncMock(return_value=[])
        scraper._scrapers[MediaPlatform.YOUTUBE] = AsyncMock(return_value=[video])

        assert await scraper.find_video("AI") == video
        assert scraper._scrapers[MediaPlatform.TIKTOK].await_count == 3


# =============================================================================
# Platform scrapers
# =============================================================================

class TestPlatformScrapers:

    @pytest.mark.asyncio
    async def test_youtube_input_and_mapping(self):
        scraper, _ = _scraper()
        scraper.discovery.run_task.return_value = [
            {"id": "dQw4w9WgXcQ", "title": "AI explained", "channelName": "Chan", "viewCount": "100", "likeCount": 7},
            {"title": "no id or url"},
        ]

        results = await scraper.scrape_youtube("AI agents", max_results=5)

        task_id, task_input = scraper.discovery.run_task.await_args.args
        assert task_id == "streamers/youtube-scraper"
        assert task_input == {"searchKeywords": "AI agents", "maxResults": 5, "maxResultsShorts": 0}
        assert scraper.discovery.run_task.await_args.kwargs == {"timeout": 180, "memory": 512}
        assert len(results) == 1
        assert results[0].url == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
        assert results[0].author == "Chan"
        assert results[0].views == 100
        assert results[0].likes == 7

    @pytest.mark.asyncio
    async def test_non_string_fields_are_coerced(self):
        scraper, _ = _scraper()
        scraper.discovery.run_task.return_value = [
            {"id": "dQw4w9WgXcQ", "title": 2024, "channelName": 42, "date": 20240615, "thumbnail": 7},
        ]
        youtube = await scraper.scrape_youtube("AI")

        scraper.discovery.run_task.return_value = [
            {"permalink": "/r/ml/comments/abc/post/", "title": 1, "author": 99, "createdAt": 1718409600.5},
        ]
        reddit = await scraper.scrape_reddit("AI")

        assert (youtube[0].title, youtube[0].author, youtube[0].published_at) == ("2024", "42", "20240615")
        assert youtube[0].thumbnail_url == "7"
        assert (reddit[0].title, reddit[0].author) == ("1", "99")
        assert reddit[0].author_url == "https://www.reddit.com/user/99"
        assert reddit[0].published_at == "1718409600.5"

    @pytest.mark.asyncio
    async def test_tiktok_builds_url_and_iso_date(self):
        scraper, _ = _scraper()
        scraper.discovery.run_task.return_value = [
            {"id": "7300000000000000000", "authorMeta": {"name": "creator"}, "text": "AI demo",
             "diggCount": 3, "createTime": 1718409600},
        ]

        results = await scraper.scrape_tiktok("AI")

        assert results[0].url == "https://www.tiktok.com/@creator/video/7300000000000000000"
        assert results[0].likes == 3
        assert results[0].published_at.startswith("2024-06-15T00:00:00")

    @pytest.mark.asyncio
    async def test_twitter_is_skipped(self):
        scraper, _ = _scraper()
        assert await scraper.scrape_twitter("AI") == []
        scraper.discovery.run_task.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reddit_search_url(self):
        scraper, _ = _scraper()
        scraper.discovery.run_task.return_value = [
            {"permalink": "/r/ml/comments/abc/post/", "title": "Thread", "author": "u1", "score": 12},
        ]

        results = await scraper.scrape_reddit("AI agents")

        task_input = scraper.discovery.run_task.await_args.args[1]
        assert task_input["startUrls"] == [
            {"url": "https://www.reddit.com/search/?q=AI+agents&sort=relevance&t=month"}
        ]
        assert results[0].url == "https://www.reddit.com/r/ml/comments/abc/post/"
        assert results[0].likes == 12


class TestScrapeMultiPlatform:

    @pytest.mark.asyncio
    async def test_preferred_first_then_likes(self):
        scraper, _ = _scraper()
        scraper._scrapers[MediaPlatform.YOUTUBE] = AsyncMock(return_value=[_video(likes=5), _video(likes=50)])
        scraper._scrapers[MediaPlatform.TIKTOK] = AsyncMock(
            return_value=[_video(MediaPlatform.TIKTOK, likes=1, url="https://www.tiktok.com/@a/video/1")]
        )
        scraper._scrapers[MediaPlatform.REDDIT] = AsyncMock(side_effect=RuntimeError("blocked"))

        media = await scraper.scrape_multi_platform(
            "robots",
            platforms=[MediaPlatform.YOUTUBE, MediaPlatform.TIKTOK, MediaPlatform.REDDIT],
            preferred=MediaPlatform.TIKTOK,
        )

        assert [(m.platform, m.likes) for m in media] == [
            (MediaPlatform.TIKTOK, 1),
            (MediaPlatform.YOUTUBE, 50),
            (MediaPlatform.YOUTUBE, 5),
        ]
        assert scraper._scrapers[MediaPlatform.YOUTUBE].await_args.args[0] == "robots AI"
