"""Text helpers shared by the generation pipeline.

Usage:
    from autoblog.utils.text import slugify, strip_html, truncate

    slugify("Trí tuệ nhân tạo 2025")  # "tri-tue-nhan-tao-2025"
    strip_html("<p>Hello</p>")       # "Hello"
"""

from __future__ import annotations

import re
import unicodedata

# Letters NFKD does not decompose to ASCII
_TRANSLITERATIONS = str.maketrans({"đ": "d", "Đ": "D"})

_HTML_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


# =============================================================================
# SLUGS
# =============================================================================

def fold_diacritics(text: str) -> str:
    """Strip accents, folding Vietnamese letters to their ASCII base.

    Args:
        text: Any unicode string.

    Returns:
        The same string with combining marks removed.
    """
    text = text.translate(_TRANSLITERATIONS)
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def slugify(text: str) -> str:
    """Convert a title into a URL-safe slug.

    Args:
        text: Post title, possibly Vietnamese.

    Returns:
        Lower-case ASCII slug made of ``[a-z0-9-]``.
    """
    slug = fold_diacritics(text.lower())
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


# =============================================================================
# CLEANUP
# =============================================================================

def strip_html(text: str) -> str:
    """Remove HTML tags and collapse whitespace."""
    return _WHITESPACE_RE.sub(" ", _HTML_TAG_RE.sub("", text)).strip()


def truncate(text: str, max_length: int) -> str:
    """Cut text to at most max_length characters."""
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip()


def strip_quotes(text: str) -> str:
    """Remove one layer of surrounding quotes a model tends to add."""
    return re.sub(r'^["\']|["\']$', "", text.strip())
