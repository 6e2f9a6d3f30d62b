"""Tests for embed markup generation."""

import pytest

from autoblog.content.embeds import (
    extract_tiktok_id,
    extract_twitter_id,
    extract_youtube_id,
    generate_embed,
    generate_embed_from_url,
    generate_image_embed,
    generate_media_placeholder,
    generate_reddit_embed,
    generate_twitter_embed,
)
from autoblog.content.models import MediaPlatform, ScrapedMedia


class TestIdExtraction:

    @pytest.mark.parametrize("url", [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
    ])
    def test_youtube_forms(self, url):
        assert extract_youtube_id(url) == "dQw4w9WgXcQ"

    def test_youtube_invalid(self):
        assert extract_youtube_id("https://vimeo.com/123") is None

    def test_tiktok(self):
        assert extract_tiktok_id("https://www.tiktok.com/@creator/video/7300000000000000000") == (
            "creator",
            "7300000000000000000",
        )

    def test_twitter_with_user(self):
        assert extract_twitter_id("https://twitter.com/openai/status/123") == ("openai", "123")

    def test_twitter_undefined_user(self):
        assert extract_twitter_id("https://x.com/undefined/status/123") is None

    def test_twitter_status_only(self):
        assert extract_twitter_id("https://mobile.example/status/456") == ("i", "456")


class TestGenerateEmbed:

    def test_youtube_uses_privacy_domain(self):
        html = generate_embed(ScrapedMedia(
            platform=MediaPlatform.YOUTUBE,
            url="https://youtu.be/dQw4w9WgXcQ",
            title='Tom & "Jerry"',
        ))
        assert "https://www.youtube-nocookie.com/embed/dQw4w9WgXcQ" in html
        assert 'title="Tom &amp; &quot;Jerry&quot;"' in html

    def test_tiktok_iframe(self):
        html = generate_embed(ScrapedMedia(
            platform=MediaPlatform.TIKTOK,
            url="https://www.tiktok.com/@creator/video/42",
        ))
        assert "https://www.tiktok.com/embed/v2/42" in html
        assert "@creator" in html

    def test_invalid_url_renders_empty(self):
        media = ScrapedMedia(platform=MediaPlatform.YOUTUBE, url="https://example.com/video")
        assert generate_embed(media) == ""

    def test_twitter_normalizes_to_x(self):
        html = generate_twitter_embed("https://twitter.com/openai/status/123")
        assert 'href="https://x.com/openai/status/123"' in html
        assert "twitter-tweet" in html

    def test_reddit_requires_reddit_domain(self):
        assert generate_reddit_embed("https://example.com/r/ml") == ""
        assert "reddit-embed-bq" in generate_reddit_embed("https://www.reddit.com/r/ml/comments/1/")

    def test_from_url_detects_platform(self):
        assert "youtube-nocookie" in generate_embed_from_url("https://youtu.be/dQw4w9WgXcQ")
        assert generate_embed_from_url("https://vimeo.com/1") == ""


class TestImagesAndPlaceholders:

    def test_image_with_caption(self):
        html = generate_image_embed("https://img/1.jpg", "Hình minh họa", "Nguồn: Unsplash")
        assert 'src="https://img/1.jpg"' in html
        assert 'alt="Hình minh họa"' in html
        assert "<figcaption" in html

    def test_image_without_caption(self):
        assert "<figcaption" not in generate_image_embed("https://img/1.jpg", "alt")

    def test_media_placeholder_escapes_topic(self):
        html = generate_media_placeholder("<AI>")
        assert "&lt;AI&gt;" in html
        assert "media-placeholder" in html
