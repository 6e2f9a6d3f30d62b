"""Content models, embed rendering and the generation pipeline.

The orchestrator lives in ``autoblog.content.orchestrator`` and is not
imported here, since it depends on the provider packages which in turn
import these models.
"""

from .embeds import (
    generate_embed,
    generate_embed_from_url,
    generate_image_embed,
    generate_media_placeholder,
)
from .models import (
    BatchPostOutcome,
    BatchResult,
    BlogPostDraft,
    CreatePostInput,
    DiscoveredItem,
    DiscoveryResult,
    GenerationOptions,
    GenerationResult,
    ImageAttribution,
    ImageResult,
    ImageSource,
    MediaPlatform,
    Post,
    PostLength,
    PostSource,
    ScrapedMedia,
)

__all__ = [
    # Embeds
    "generate_embed",
    "generate_embed_from_url",
    "generate_image_embed",
    "generate_media_placeholder",
    # Models
    "BatchPostOutcome",
    "BatchResult",
    "BlogPostDraft",
    "CreatePostInput",
    "DiscoveredItem",
    "DiscoveryResult",
    "GenerationOptions",
    "GenerationResult",
    "ImageAttribution",
    "ImageResult",
    "ImageSource",
    "MediaPlatform",
    "Post",
    "PostLength",
    "PostSource",
    "ScrapedMedia",
]
