"""Embed markup for scraped media, inline images and placeholders.

Pure functions: an unrecognized URL renders as an empty string and logs
a warning, nothing here raises on bad input.

Usage:
    from autoblog.content.embeds import generate_embed

    html = generate_embed(video)  # "" when the URL is not embeddable
"""

from __future__ import annotations

import logging
import re
from html import escape
from typing import Callable

from .models import MediaPlatform, ScrapedMedia

logger = logging.getLogger("content.pipeline")

_YOUTUBE_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"youtube\.com/shorts/([a-zA-Z0-9_-]{11})"),
)
_TIKTOK_PATTERN = re.compile(r"tiktok\.com/@([^/]+)/video/(\d+)")
_TWITTER_PATTERN = re.compile(r"(?:twitter|x)\.com/([^/]+)/status/(\d+)")
_TWITTER_STATUS_PATTERN = re.compile(r"status/(\d+)")


# =============================================================================
# ID EXTRACTION
# =============================================================================

def extract_youtube_id(url: str) -> str | None:
    """Video id from watch, short-link, embed or shorts URLs."""
    for pattern in _YOUTUBE_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def extract_tiktok_id(url: str) -> tuple[str, str] | None:
    """(username, video id) from a ``tiktok.com/@user/video/<id>`` URL."""
    match = _TIKTOK_PATTERN.search(url)
    if match:
        return match.group(1), match.group(2)
    return None


def extract_twitter_id(url: str) -> tuple[str, str] | None:
    """(username, tweet id) from a status URL; ``i`` when the user is unknown."""
    # Scrapers emit ".../undefined/status/..." for records without a user
    if "undefined" in url:
        return None
    match = _TWITTER_PATTERN.search(url)
    if match:
        return match.group(1), match.group(2)
    match = _TWITTER_STATUS_PATTERN.search(url)
    if match:
        return "i", match.group(1)
    return None


# =============================================================================
# PLATFORM EMBEDS
# =============================================================================

def generate_youtube_embed(url: str, title: str | None = None) -> str:
    """Responsive privacy-enhanced YouTube iframe."""
    video_id = extract_youtube_id(url)
    if not video_id:
        logger.warning(f"EMBED | invalid YouTube URL: {url}")
        return ""

    return (
        '<div class="video-embed youtube-embed" style="position:relative;padding-bottom:56.25%;'
        'height:0;overflow:hidden;max-width:100%;margin:2rem 0;">\n'
        f'  <iframe\n'
        f'    src="https://www.youtube-nocookie.com/embed/{video_id}"\n'
        f'    title="{escape(title or "YouTube video")}"\n'
        '    style="position:absolute;top:0;left:0;width:100%;height:100%;border:0;"\n'
        '    allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; '
        'picture-in-picture; web-share"\n'
        '    allowfullscreen\n'
        '    loading="lazy"\n'
        '  ></iframe>\n'
        '</div>'
    )


def generate_tiktok_embed(url: str, author: str | None = None) -> str:
    """TikTok v2 iframe embed."""
    data = extract_tiktok_id(url)
    if not data:
        logger.warning(f"EMBED | invalid TikTok URL: {url}")
        return ""

    username, video_id = data
    return (
        '<div class="video-embed tiktok-embed" style="max-width:325px;margin:2rem auto;">\n'
        '  <iframe\n'
        f'    src="https://www.tiktok.com/embed/v2/{video_id}"\n'
        f'    title="TikTok video by @{escape(author or username)}"\n'
        '    style="width:100%;height:700px;border:0;"\n'
        '    allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; '
        'picture-in-picture"\n'
        '    allowfullscreen\n'
        '    loading="lazy"\n'
        '  ></iframe>\n'
        '</div>'
    )


def generate_twitter_embed(url: str) -> str:
    """Tweet blockquote rendered by the Twitter widget script."""
    data = extract_twitter_id(url)
    if not data:
        logger.warning(f"EMBED | invalid Twitter/X URL: {url}")
        return ""

    username, tweet_id = data
    normalized = f"https://x.com/{escape(username)}/status/{tweet_id}"
    return (
        '<div class="social-embed twitter-embed" style="margin:2rem 0;max-width:550px;">\n'
        '  <blockquote class="twitter-tweet" data-dnt="true">\n'
        f'    <a href="{normalized}"></a>\n'
        '  </blockquote>\n'
        '  <script async src="https://platform.twitter.com/widgets.js" charset="utf-8"></script>\n'
        '</div>'
    )


def generate_reddit_embed(url: str, title: str | None = None) -> str:
    """Reddit embed blockquote."""
    if "reddit.com" not in url:
        logger.warning(f"EMBED | invalid Reddit URL: {url}")
        return ""

    clean_url = url.rstrip("/")
    return (
        '<div class="social-embed reddit-embed" style="margin:2rem 0;">\n'
        '  <blockquote class="reddit-embed-bq" data-embed-height="500">\n'
        f'    <a href="{escape(clean_url)}">{escape(title or "View on Reddit")}</a>\n'
        '  </blockquote>\n'
        '  <script async src="https://embed.reddit.com/widgets.js" charset="utf-8"></script>\n'
        '</div>'
    )


_RENDERERS: dict[MediaPlatform, Callable[[ScrapedMedia], str]] = {
    MediaPlatform.YOUTUBE: lambda media: generate_youtube_embed(media.url, media.title),
    MediaPlatform.TIKTOK: lambda media: generate_tiktok_embed(media.url, media.author),
    MediaPlatform.TWITTER: lambda media: generate_twitter_embed(media.url),
    MediaPlatform.REDDIT: lambda media: generate_reddit_embed(media.url, media.title),
}


def generate_embed(media: ScrapedMedia) -> str:
    """Render embed markup for a scraped media item."""
    renderer = _RENDERERS.get(media.platform)
    if renderer is None:
        logger.warning(f"EMBED | unknown platform: {media.platform}")
        return ""
    return renderer(media)


def generate_embed_from_url(url: str, title: str | None = None) -> str:
    """Detect the platform from a URL and render its embed."""
    if "youtube.com" in url or "youtu.be" in url:
        return generate_youtube_embed(url, title)
    if "tiktok.com" in url:
        return generate_tiktok_embed(url)
    if "twitter.com" in url or "x.com" in url:
        return generate_twitter_embed(url)
    if "reddit.com" in url:
        return generate_reddit_embed(url, title)

    logger.warning(f"EMBED | unable to detect platform for URL: {url}")
    return ""


# =============================================================================
# IMAGES AND PLACEHOLDERS
# =============================================================================

def generate_image_embed(image_url: str, alt: str, caption: str | None = None) -> str:
    """Figure with a lazy-loaded image and optional caption."""
    figcaption = (
        f'\n  <figcaption style="margin-top:0.5rem;font-size:0.9rem;color:#666;">'
        f"{escape(caption)}</figcaption>"
        if caption
        else ""
    )
    return (
        '<figure style="margin:2rem 0;text-align:center;">\n'
        '  <img\n'
        f'    src="{escape(image_url)}"\n'
        f'    alt="{escape(alt)}"\n'
        '    style="max-width:100%;height:auto;border-radius:8px;"\n'
        '    loading="lazy"\n'
        f'  />{figcaption}\n'
        '</figure>'
    )


def generate_media_placeholder(topic: str) -> str:
    """Block shown where a video would go when none was found."""
    return (
        '<div class="media-placeholder" style="margin:2rem 0;padding:2rem;background:#f5f5f5;'
        'border-radius:8px;text-align:center;">\n'
        f'  <p style="color:#666;margin:0;">Nội dung video về "{escape(topic)}" '
        "sẽ được cập nhật sớm.</p>\n"
        '</div>'
    )
