"""Tests for provider configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from autoblog.content.models import MediaPlatform, PostLength
from autoblog.providers.config import MediaConfig, PlatformTaskConfig, ProviderConfig, load_provider_config


def test_missing_file_returns_defaults(tmp_path: Path):
    config = load_provider_config(tmp_path / "missing.yaml")
    assert config == ProviderConfig()


def test_empty_file_returns_defaults(tmp_path: Path):
    path = tmp_path / "providers.yaml"
    path.write_text("", encoding="utf-8")
    assert load_provider_config(path) == ProviderConfig()


def test_yaml_overrides(tmp_path: Path):
    path = tmp_path / "providers.yaml"
    path.write_text(
        "media:\n"
        "  platforms: [tiktok, reddit]\n"
        "  universal_fallback: tiktok\n"
        "generation:\n"
        "  post_length: short\n"
        "  default_topics: [Edge AI]\n",
        encoding="utf-8",
    )

    config = load_provider_config(path)

    assert config.media.platforms == [MediaPlatform.TIKTOK, MediaPlatform.REDDIT]
    assert config.media.universal_fallback is MediaPlatform.TIKTOK
    assert config.media.tasks["youtube"].task_id == "streamers/youtube-scraper"
    assert config.generation.post_length is PostLength.SHORT
    assert config.generation.default_topics == ["Edge AI"]


def test_bundled_config_loads():
    config = load_provider_config()
    assert config.gemini.api_key_env == "GOOGLE_GEMINI_API_KEY"
    assert config.generation.language == "Vietnamese"


def test_blank_credentials_are_unset(monkeypatch):
    monkeypatch.setenv("GOOGLE_GEMINI_API_KEY", "   ")
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", " key ")

    providers = ProviderConfig().configured_providers()

    assert providers == {"gemini": False, "apify": False, "unsplash": True}
    assert ProviderConfig().images.get_access_key() == "key"


class TestMediaConfigValidation:

    def test_empty_platform_list_rejected(self):
        with pytest.raises(ValidationError):
            MediaConfig(platforms=[])

    def test_empty_platform_list_rejected_from_yaml(self, tmp_path: Path):
        path = tmp_path / "providers.yaml"
        path.write_text("media:\n  platforms: []\n", encoding="utf-8")

        with pytest.raises(ValidationError):
            load_provider_config(path)

    def test_platform_without_task_rejected(self):
        with pytest.raises(ValidationError, match="reddit"):
            MediaConfig(
                platforms=[MediaPlatform.REDDIT],
                tasks={"youtube": PlatformTaskConfig(task_id="streamers/youtube-scraper")},
            )

    def test_fallback_without_task_rejected(self):
        with pytest.raises(ValidationError, match="tiktok"):
            MediaConfig(
                platforms=[MediaPlatform.YOUTUBE],
                universal_fallback=MediaPlatform.TIKTOK,
                tasks={"youtube": PlatformTaskConfig(task_id="streamers/youtube-scraper")},
            )

    def test_twitter_needs_no_task(self):
        config = MediaConfig(
            platforms=[MediaPlatform.TWITTER, MediaPlatform.YOUTUBE],
            tasks={"youtube": PlatformTaskConfig(task_id="streamers/youtube-scraper")},
        )
        assert config.platforms[0] is MediaPlatform.TWITTER

    def test_non_positive_attempts_rejected(self):
        with pytest.raises(ValidationError):
            MediaConfig(max_attempts=0)
