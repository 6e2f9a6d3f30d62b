"""Content generator for creating complete blog posts.

One linear pass per post:

1. images   - cover and inline photo (placeholders on failure)
2. context  - popular posts folded into the prompt (empty on failure)
3. video    - one embeddable video (none on failure)
4. draft    - body, excerpt and tags from the model (fatal on failure)
5. insert   - placeholders replaced with embeds
6. persist  - hand the post to the post store

Steps 1-3 are independent and best-effort, so they run concurrently.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from ..constants import (
    BATCH_TOPIC_MIN_LENGTH,
    BATCH_TOPIC_MIN_WORD_LENGTH,
    BATCH_TOPIC_WORDS,
    CONTEXT_MAX_ITEMS,
    CONTEXT_SNIPPET_LENGTH,
    IMAGE_PLACEHOLDER,
    LEGACY_PLACEHOLDER_PATTERN,
    POPULAR_POSTS_CONTEXT_MAX,
    POST_IMAGE_COUNT,
    VIDEO_PLACEHOLDER,
)
from ..exceptions import ConfigError
from ..providers.config import GenerationSettings, ProviderConfig
from ..providers.image import UnsplashImageProvider
from ..providers.text import TextProvider
from ..research.discovery import DiscoveryClient
from ..research.media import MediaScraper
from ..services.background import BackgroundTasks
from ..storage.base import PostStore
from ..utils.text import slugify, strip_html
from .embeds import generate_embed, generate_image_embed, generate_media_placeholder
from .models import (
    BatchPostOutcome,
    BatchResult,
    CreatePostInput,
    DiscoveredItem,
    GenerationOptions,
    GenerationResult,
    ImageResult,
    ImageSource,
    PostSource,
    ScrapedMedia,
)

_logger = logging.getLogger("content.pipeline")


def _log_phase_start(topic: str, phase_num: int, phase_name: str, details: str = "") -> None:
    """Log the start of a generation phase."""
    _logger.info(f"TOPIC:{topic} | PHASE_START | phase:{phase_num} | name:{phase_name} | {details}")


def _log_phase_end(topic: str, phase_num: int, phase_name: str, duration: float, details: str = "") -> None:
    """Log the end of a generation phase."""
    _logger.info(
        f"TOPIC:{topic} | PHASE_END | phase:{phase_num} | name:{phase_name} | "
        f"duration:{duration:.2f}s | {details}"
    )


# =============================================================================
# PURE HELPERS
# =============================================================================

def build_context_from_discovery(items: list[DiscoveredItem]) -> str:
    """Fold the first discovered items into a reference block for the prompt."""
    if not items:
        return ""

    parts = []
    for index, item in enumerate(items[:CONTEXT_MAX_ITEMS], start=1):
        snippet = strip_html(item.content)[:CONTEXT_SNIPPET_LENGTH]
        parts.append(f"{index}. {item.title}\n   {snippet}...")
    return "Reference material from recent sources:\n" + "\n\n".join(parts)


def find_relevant_item(items: list[DiscoveredItem], topic: str) -> Optional[DiscoveredItem]:
    """First item mentioning the topic's first word, else the first item."""
    if not items:
        return None
    words = topic.lower().split()
    first_word = words[0] if words else ""
    for item in items:
        if first_word in item.title.lower() or first_word in item.content.lower():
            return item
    return items[0]


def insert_media_content(
    content: str,
    inline_image_url: str | None,
    video_embed: str | None,
    topic: str,
) -> str:
    """Replace placeholder tokens in a draft.

    The image token becomes a figure (or is removed when there is no
    image), the video token becomes the embed (or a "coming soon" block),
    and numbered legacy tokens are always stripped.
    """
    result = content

    if IMAGE_PLACEHOLDER in result:
        if inline_image_url:
            image_html = generate_image_embed(
                inline_image_url,
                f"Hình minh họa về {topic}",
                "Nguồn: Unsplash",
            )
            result = result.replace(IMAGE_PLACEHOLDER, image_html, 1)
        result = result.replace(IMAGE_PLACEHOLDER, "")

    if VIDEO_PLACEHOLDER in result:
        replacement = video_embed or generate_media_placeholder(topic)
        result = result.replace(VIDEO_PLACEHOLDER, replacement, 1)
        result = result.replace(VIDEO_PLACEHOLDER, "")

    return LEGACY_PLACEHOLDER_PATTERN.sub("", result)


def extract_batch_topics(items: list[DiscoveredItem], count: int) -> list[str]:
    """Derive short topics from discovered titles.

    Each topic is the first few long words of a title; short and
    duplicate topics are dropped.
    """
    topics: list[str] = []
    for item in items:
        words = [word for word in item.title.split(" ") if len(word) >= BATCH_TOPIC_MIN_WORD_LENGTH]
        topic = " ".join(words[:BATCH_TOPIC_WORDS])
        if len(topic) >= BATCH_TOPIC_MIN_LENGTH and topic not in topics:
            topics.append(topic)
    return topics[:count]


@dataclass
class _Context:
    text: str = ""
    source_url: str | None = None
    task_id: str | None = None


@dataclass
class _Media:
    images: list[ImageResult] = field(default_factory=list)
    context: _Context = field(default_factory=_Context)
    video: ScrapedMedia | None = None


class ContentGenerator:
    """Generate complete blog posts with images and a video embed.

    Orchestrates:
    - Stock photo lookup
    - Discovery context
    - Video scraping with platform rotation
    - Model generation
    - Media insertion and persistence

    Usage:
        generator = build_content_generator(load_provider_config(), InMemoryPostStore())

        result = await generator.generate_post_from_content("AI in healthcare")
        batch = await generator.generate_multiple_posts(GenerationOptions(count=3))
    """

    def __init__(
        self,
        text_provider: TextProvider,
        image_provider: UnsplashImageProvider,
        discovery: DiscoveryClient,
        media_scraper: MediaScraper,
        post_store: PostStore,
        settings: GenerationSettings | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: random.Random | None = None,
    ):
        """Initialize the content generator.

        Args:
            text_provider: Model client for the post text.
            image_provider: Stock photo provider.
            discovery: Discovery client for context and batch topics.
            media_scraper: Video scraper.
            post_store: Where finished posts go.
            settings: Author, language, length and batch settings.
            sleep: Awaitable used for the pause between batch posts.
            rng: Random source for shuffling default topics.
        """
        self.text_provider = text_provider
        self.image_provider = image_provider
        self.discovery = discovery
        self.media_scraper = media_scraper
        self.post_store = post_store
        self.settings = settings or GenerationSettings()
        self._sleep = sleep
        self._rng = rng or random.Random()

    # =========================================================================
    # BEST-EFFORT STEPS
    # =========================================================================

    async def _fetch_images(self, topic: str) -> list[ImageResult]:
        try:
            return await self.image_provider.fetch_images(topic, POST_IMAGE_COUNT)
        except Exception as e:
            _logger.error(f"IMAGES | fetch failed for '{topic}': {e}")
            return [self.image_provider.placeholder for _ in range(POST_IMAGE_COUNT)]

    async def _discover_context(self, topic: str) -> _Context:
        try:
            discovered = await self.discovery.find_popular_posts(max_results=POPULAR_POSTS_CONTEXT_MAX)
        except Exception as e:
            _logger.error(f"DISCOVERY | context lookup failed: {e}")
            return _Context()

        relevant = find_relevant_item(discovered.items, topic)
        if relevant is None:
            return _Context()

        _logger.info(f"DISCOVERY | got context from {len(discovered.items)} sources")
        return _Context(
            text=build_context_from_discovery(discovered.items),
            source_url=relevant.url or None,
            task_id=discovered.task_id or None,
        )

    async def _find_video(self, topic: str) -> ScrapedMedia | None:
        try:
            return await self.media_scraper.find_video(topic)
        except Exception as e:
            _logger.error(f"MEDIA | video scrape failed: {e}")
            return None

    async def _noop_context(self) -> _Context:
        return _Context()

    async def _noop_video(self) -> None:
        return None

    async def _gather_media(self, topic: str, options: GenerationOptions) -> _Media:
        discovery_enabled = options.use_discovery and self.discovery.is_configured
        video_enabled = discovery_enabled and not options.skip_media_scraping

        images, context, video = await asyncio.gather(
            self._fetch_images(topic),
            self._discover_context(topic) if discovery_enabled else self._noop_context(),
            self._find_video(topic) if video_enabled else self._noop_video(),
        )
        return _Media(images=images, context=context, video=video)

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    async def generate_post_from_content(
        self,
        topic: str,
        options: GenerationOptions | None = None,
    ) -> GenerationResult:
        """Generate and persist one post.

        Args:
            topic: Post topic.
            options: Deep think, discovery and media switches.

        Returns:
            GenerationResult; failures are reported, not raised.
        """
        options = options or GenerationOptions()
        topic = (topic or "").strip()
        if not topic:
            return GenerationResult(success=False, error="Topic is required")

        try:
            self.text_provider.ensure_configured()
        except ConfigError as e:
            return GenerationResult(success=False, error=str(e))

        _logger.info(f"TOPIC:{topic} | {'=' * 60}")
        _logger.info(f"TOPIC:{topic} | generation started | deep_think:{options.use_deep_think}")

        try:
            start = time.time()
            _log_phase_start(topic, 1, "media", "images, context and video")
            media = await self._gather_media(topic, options)

            cover, inline = media.images[0], media.images[1]
            cover_url = cover.url
            image_source = ImageSource.MANUAL if cover.is_placeholder else ImageSource.STOCK
            inline_url = None if inline.is_placeholder else inline.url
            video_embed = generate_embed(media.video) if media.video else ""
            _log_phase_end(
                topic, 1, "media", time.time() - start,
                f"cover:{'stock' if not cover.is_placeholder else 'placeholder'} | "
                f"inline:{bool(inline_url)} | video:{bool(video_embed)}",
            )

            has_image = inline_url is not None
            has_video = bool(video_embed)

            start = time.time()
            _log_phase_start(topic, 2, "draft")
            draft = await self.text_provider.generate_blog_post(
                topic,
                media.context.text or None,
                use_deep_think=options.use_deep_think,
                length=self.settings.post_length,
                include_media_placeholders=has_image or has_video,
                media_count=int(has_image) + int(has_video),
            )
            _log_phase_end(
                topic, 2, "draft", time.time() - start,
                f"title:{draft.title} | chars:{len(draft.content)}",
            )

            content = insert_media_content(draft.content, inline_url, video_embed or None, topic)

            post_input = CreatePostInput(
                title=draft.title,
                content=content,
                excerpt=draft.excerpt,
                author=self.settings.author,
                source=PostSource.MODEL,
                tags=draft.tags,
                image_url=cover_url,
                image_source=image_source,
                discovery_source_url=media.context.source_url,
                discovery_task_id=media.context.task_id,
                model=draft.model,
                prompt=f"Generate {self.settings.post_length.value} blog post about: {topic}",
                deep_think_used=options.use_deep_think,
                published=True,
            )

            post = await self.post_store.create(post_input)
        except Exception as e:
            _logger.error(f"TOPIC:{topic} | generation failed: {e}")
            return GenerationResult(success=False, error=str(e) or type(e).__name__)

        _logger.info(f"TOPIC:{topic} | saved as '{post.slug}'")
        return GenerationResult(success=True, post=post_input, slug=post.slug)

    async def _discover_topics(self, count: int) -> list[str]:
        if not self.discovery.is_configured:
            return []
        try:
            discovered = await self.discovery.find_popular_posts(max_results=count * 2)
        except Exception as e:
            _logger.error(f"DISCOVERY | topic discovery failed: {e}")
            return []
        topics = extract_batch_topics(discovered.items, count)
        _logger.info(f"DISCOVERY | discovered {len(topics)} topics")
        return topics

    async def generate_multiple_posts(self, options: GenerationOptions | None = None) -> BatchResult:
        """Generate several posts one after another.

        Topics come from discovery, padded with the shuffled default list.
        Posts are generated sequentially with a fixed pause in between;
        a failing topic is recorded and the batch continues.

        Raises:
            ConfigError: The model client is not configured.
        """
        options = options or GenerationOptions()
        count = options.count
        self.text_provider.ensure_configured()

        results = BatchResult()
        if count <= 0:
            return results

        topics = await self._discover_topics(count) if options.use_discovery else []
        if len(topics) < count:
            _logger.info("BATCH | padding with default topics")
            shuffled = [t for t in self.settings.default_topics if t not in topics]
            self._rng.shuffle(shuffled)
            topics = (topics + shuffled)[:count]

        _logger.info(f"BATCH | topics: {', '.join(topics)}")

        for index, topic in enumerate(topics):
            try:
                result = await self.generate_post_from_content(topic, options)
            except Exception as e:
                result = GenerationResult(success=False, error=str(e) or type(e).__name__)

            if result.success and result.post is not None:
                results.success += 1
                results.posts.append(BatchPostOutcome(
                    title=result.post.title,
                    slug=result.slug or slugify(result.post.title),
                    success=True,
                ))
            else:
                results.failed += 1
                results.posts.append(BatchPostOutcome(
                    title=topic,
                    slug=slugify(topic),
                    success=False,
                    error=result.error or "Unknown error",
                ))
                _logger.warning(f"BATCH | failed: {topic} - {result.error}")

            if index < len(topics) - 1:
                await self._sleep(self.settings.batch_delay_seconds)

        _logger.info(f"BATCH | complete: {results.success} success, {results.failed} failed")
        return results


def build_content_generator(
    config: ProviderConfig,
    post_store: PostStore,
    background: BackgroundTasks | None = None,
) -> ContentGenerator:
    """Wire the default collaborators once at startup."""
    discovery = DiscoveryClient(config)
    return ContentGenerator(
        text_provider=TextProvider(config),
        image_provider=UnsplashImageProvider(config, background=background),
        discovery=discovery,
        media_scraper=MediaScraper(discovery, config.media),
        post_store=post_store,
        settings=config.generation,
    )
