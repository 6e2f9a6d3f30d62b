"""Provider configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from ..constants import (
    AI_FALLBACK_QUERY,
    BATCH_DELAY_SECONDS,
    DEFAULT_TOPICS,
    GENERIC_FALLBACK_QUERY,
    IMAGE_OVERFETCH,
    MEDIA_MAX_ATTEMPTS,
    MEDIA_RESULTS_PER_PLATFORM,
    MODEL_DEFAULT_MAX_TOKENS,
    MODEL_DEFAULT_TEMPERATURE,
)
from ..content.models import MediaPlatform, PostLength

# Load .env file
load_dotenv()


def _read_env(name: str | None) -> str | None:
    """Read an environment variable, treating blank values as unset."""
    if not name:
        return None
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


class GeminiConfig(BaseModel):
    """Configuration for the Gemini model client."""

    api_key_env: str = "GOOGLE_GEMINI_API_KEY"
    fast_model: str = "gemini-2.5-flash"
    deep_model: str = "gemini-2.5-pro"
    temperature: float = MODEL_DEFAULT_TEMPERATURE
    max_tokens: int = MODEL_DEFAULT_MAX_TOKENS

    def get_api_key(self) -> str | None:
        """Get API key from environment."""
        return _read_env(self.api_key_env)


class DiscoveryConfig(BaseModel):
    """Configuration for the Apify discovery client."""

    api_token_env: str = "APIFY_API_TOKEN"
    default_task_env: str = "APIFY_DEFAULT_ACTOR_ID"
    base_url: str = "https://api.apify.com/v2"
    timeout: int = 300
    # Extra task id -> kind mappings, merged over the built-in table
    task_kinds: dict[str, str] = Field(default_factory=dict)

    def get_api_token(self) -> str | None:
        """Get API token from environment."""
        return _read_env(self.api_token_env)

    def get_default_task_id(self) -> str | None:
        """Get the default discovery task id from environment."""
        return _read_env(self.default_task_env)


class PlatformTaskConfig(BaseModel):
    """Scraping task used for one media platform."""

    task_id: str
    timeout: int = 180
    memory: int = 512


def _default_platform_tasks() -> dict[str, PlatformTaskConfig]:
    return {
        MediaPlatform.YOUTUBE.value: PlatformTaskConfig(
            task_id="streamers/youtube-scraper", timeout=180, memory=512,
        ),
        MediaPlatform.TIKTOK.value: PlatformTaskConfig(
            task_id="clockworks/tiktok-scraper", timeout=120, memory=1024,
        ),
        MediaPlatform.REDDIT.value: PlatformTaskConfig(
            task_id="trudax/reddit-scraper-lite", timeout=180, memory=512,
        ),
    }


class MediaConfig(BaseModel):
    """Configuration for the video scraper rotation."""

    platforms: list[MediaPlatform] = Field(
        default_factory=lambda: [MediaPlatform.YOUTUBE, MediaPlatform.TIKTOK],
        min_length=1,
    )
    universal_fallback: MediaPlatform = MediaPlatform.YOUTUBE
    max_attempts: int = Field(default=MEDIA_MAX_ATTEMPTS, ge=1)
    results_per_platform: int = Field(default=MEDIA_RESULTS_PER_PLATFORM, ge=1)
    tasks: dict[str, PlatformTaskConfig] = Field(default_factory=_default_platform_tasks)

    @model_validator(mode="after")
    def check_platform_tasks(self) -> MediaConfig:
        # Twitter has no scraping task, its scraper returns nothing
        missing = sorted({
            platform.value
            for platform in [*self.platforms, self.universal_fallback]
            if platform != MediaPlatform.TWITTER and platform.value not in self.tasks
        })
        if missing:
            raise ValueError(f"No scraping task configured for: {', '.join(missing)}")
        return self


class ImagesConfig(BaseModel):
    """Configuration for the Unsplash image provider."""

    access_key_env: str = "UNSPLASH_ACCESS_KEY"
    base_url: str = "https://api.unsplash.com"
    placeholder_url: str = "/blog/images/placeholder.jpg"
    overfetch: int = IMAGE_OVERFETCH
    timeout: int = 30
    ai_fallback_query: str = AI_FALLBACK_QUERY
    generic_fallback_query: str = GENERIC_FALLBACK_QUERY

    def get_access_key(self) -> str | None:
        """Get access key from environment."""
        return _read_env(self.access_key_env)


class GenerationSettings(BaseModel):
    """Settings for the content generator."""

    author: str = "Autoblog AI"
    language: str = "Vietnamese"
    post_length: PostLength = PostLength.EXTENDED
    batch_delay_seconds: float = BATCH_DELAY_SECONDS
    default_topics: list[str] = Field(default_factory=lambda: list(DEFAULT_TOPICS))


class ProviderConfig(BaseModel):
    """Full provider configuration."""

    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)
    images: ImagesConfig = Field(default_factory=ImagesConfig)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)

    def configured_providers(self) -> dict[str, bool]:
        """Which providers have credentials available."""
        return {
            "gemini": self.gemini.get_api_key() is not None,
            "apify": self.discovery.get_api_token() is not None,
            "unsplash": self.images.get_access_key() is not None,
        }


def load_provider_config(config_path: Path | None = None) -> ProviderConfig:
    """Load provider configuration from YAML file."""
    if config_path is None:
        # Default to config/providers.yaml relative to project root
        config_path = Path(__file__).parent.parent.parent.parent / "config" / "providers.yaml"

    if not config_path.exists():
        # Return default config if file doesn't exist
        return ProviderConfig()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return ProviderConfig(**(data or {}))
