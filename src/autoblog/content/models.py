"""Data models for blog content generation."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MediaPlatform(str, Enum):
    """Platform a scraped media item comes from."""

    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    TWITTER = "twitter"
    REDDIT = "reddit"


class PostLength(str, Enum):
    """Target length of a generated post."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    EXTENDED = "extended"

    @property
    def word_range(self) -> str:
        """Word-count range used in the length directive."""
        return _LENGTH_WORDS[self]

    @property
    def max_tokens(self) -> int:
        """Output token budget for the body call."""
        return _LENGTH_TOKENS[self]


_LENGTH_WORDS = {
    PostLength.SHORT: "400-600",
    PostLength.MEDIUM: "800-1200",
    PostLength.LONG: "1400-1800",
    PostLength.EXTENDED: "1600-2000",
}

_LENGTH_TOKENS = {
    PostLength.SHORT: 1500,
    PostLength.MEDIUM: 3000,
    PostLength.LONG: 4500,
    PostLength.EXTENDED: 5500,
}


class PostSource(str, Enum):
    """Who produced the post body."""

    MODEL = "model"
    DISCOVERY = "discovery"
    MANUAL = "manual"


class ImageSource(str, Enum):
    """Where the cover image came from."""

    STOCK = "stock"
    DISCOVERY = "discovery"
    MODEL = "model"
    MANUAL = "manual"


# =============================================================================
# Provider results
# =============================================================================


class DiscoveredItem(BaseModel):
    """A content record returned by a discovery task."""

    title: str = ""
    content: str = ""
    url: str = ""
    author: str | None = None
    image_url: str | None = None
    published_at: str | None = None
    platform: str = "unknown"
    engagement: int = 0


class DiscoveryResult(BaseModel):
    """Items returned by one discovery run."""

    items: list[DiscoveredItem] = Field(default_factory=list)
    task_id: str


class ScrapedMedia(BaseModel):
    """A video or social post normalized across platforms."""

    platform: MediaPlatform
    url: str
    title: str = ""
    author: str | None = None
    author_url: str | None = None
    thumbnail_url: str | None = None
    views: int | None = None
    likes: int | None = None
    published_at: str | None = None


class ImageAttribution(BaseModel):
    """Credit for a stock photo."""

    photographer: str
    photographer_url: str
    source_url: str


class ImageResult(BaseModel):
    """An image slot, either a real photo or the placeholder."""

    url: str
    attribution: ImageAttribution | None = None

    @property
    def is_placeholder(self) -> bool:
        """Whether this slot was filled with the placeholder URL."""
        return self.attribution is None


class BlogPostDraft(BaseModel):
    """Model output for one post, possibly holding placeholder tokens."""

    title: str
    content: str
    excerpt: str
    tags: list[str] = Field(default_factory=list)
    model: str


# =============================================================================
# Post store boundary
# =============================================================================


class CreatePostInput(BaseModel):
    """Everything the post store needs to persist a generated post."""

    model_config = ConfigDict(frozen=True)

    title: str
    content: str
    excerpt: str = ""
    author: str = ""
    source: PostSource = PostSource.MODEL
    tags: list[str] = Field(default_factory=list)
    image_url: str = ""
    image_source: ImageSource = ImageSource.MANUAL
    discovery_source_url: str | None = None
    discovery_task_id: str | None = None
    model: str | None = None
    prompt: str | None = None
    deep_think_used: bool = False
    published: bool = False


class Post(CreatePostInput):
    """A stored post."""

    id: str
    slug: str
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None


# =============================================================================
# Orchestrator entry points
# =============================================================================


class GenerationOptions(BaseModel):
    """Options accepted by the single-post and batch entry points.

    camelCase aliases (``useDeepThink``, ``useApifyImages``,
    ``skipMediaScraping``) are accepted so request bodies can be passed
    through unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    use_deep_think: bool = Field(default=False, alias="useDeepThink")
    use_discovery: bool = Field(default=True, alias="useApifyImages")
    skip_media_scraping: bool = Field(default=False, alias="skipMediaScraping")
    count: int = Field(default=1, ge=0)


class GenerationResult(BaseModel):
    """Outcome of a single post generation."""

    success: bool
    post: CreatePostInput | None = None
    slug: str | None = None
    error: str | None = None


class BatchPostOutcome(BaseModel):
    """Per-topic entry in a batch result."""

    title: str
    slug: str
    success: bool
    error: str | None = None


class BatchResult(BaseModel):
    """Aggregate outcome of a batch run."""

    success: int = 0
    failed: int = 0
    posts: list[BatchPostOutcome] = Field(default_factory=list)
