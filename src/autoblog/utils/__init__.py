"""Utility modules for autoblog."""

from .text import (
    fold_diacritics,
    slugify,
    strip_html,
    strip_quotes,
    truncate,
)
from .timestamps import (
    now_utc,
    parse_timestamp,
    parse_timestamp_lenient,
)

__all__ = [
    # Text
    "fold_diacritics",
    "slugify",
    "strip_html",
    "strip_quotes",
    "truncate",
    # Timestamps
    "now_utc",
    "parse_timestamp",
    "parse_timestamp_lenient",
]
