"""Global constants package for autoblog.

PACKAGE STRUCTURE:
-----------------
- limits.py     : Token budgets, retry/backoff settings, text limits
- vocabulary.py : Placeholder tokens, stop words, canned queries, topics

USAGE EXAMPLES:
--------------
    from autoblog.constants import IMAGE_PLACEHOLDER, MEDIA_MAX_ATTEMPTS
"""

from .limits import (
    ANALYSIS_TEMPERATURE,
    BATCH_DELAY_SECONDS,
    BATCH_TOPIC_MIN_LENGTH,
    BATCH_TOPIC_MIN_WORD_LENGTH,
    BATCH_TOPIC_WORDS,
    BODY_TEMPERATURE,
    CONTEXT_MAX_ITEMS,
    CONTEXT_SNIPPET_LENGTH,
    DISCOVERY_DEFAULT_MAX_RESULTS,
    EXCERPT_MAX_LENGTH,
    EXCERPT_MAX_TOKENS,
    EXCERPT_TEMPERATURE,
    FOLLOWUP_SOURCE_CHARS,
    IMAGE_KEYWORD_COUNT,
    IMAGE_MAX_PER_PAGE,
    IMAGE_OVERFETCH,
    MEDIA_MAX_ATTEMPTS,
    MEDIA_RESULTS_PER_PLATFORM,
    MEDIA_RETRY_BASE_DELAY,
    MEDIA_RETRY_MAX_DELAY,
    MODEL_DEFAULT_MAX_TOKENS,
    MODEL_DEFAULT_TEMPERATURE,
    POPULAR_POSTS_CONTEXT_MAX,
    POPULAR_POSTS_DEFAULT_MAX,
    POST_IMAGE_COUNT,
    TAG_MAX_COUNT,
    TAG_MAX_LENGTH,
    TAG_MIN_LENGTH,
    TAGS_MAX_TOKENS,
    TAGS_TEMPERATURE,
)
from .vocabulary import (
    AI_FALLBACK_QUERY,
    DEFAULT_TOPICS,
    EXAMPLE_TASK_IDS,
    GENERIC_FALLBACK_QUERY,
    IMAGE_PLACEHOLDER,
    LEGACY_PLACEHOLDER_PATTERN,
    POPULAR_POST_QUERIES,
    STOP_WORDS,
    TECH_KEYWORDS,
    TECH_QUERY_SUFFIX,
    VIDEO_PLACEHOLDER,
)

__all__ = [
    # Limits
    "ANALYSIS_TEMPERATURE",
    "BATCH_DELAY_SECONDS",
    "BATCH_TOPIC_MIN_LENGTH",
    "BATCH_TOPIC_MIN_WORD_LENGTH",
    "BATCH_TOPIC_WORDS",
    "BODY_TEMPERATURE",
    "CONTEXT_MAX_ITEMS",
    "CONTEXT_SNIPPET_LENGTH",
    "DISCOVERY_DEFAULT_MAX_RESULTS",
    "EXCERPT_MAX_LENGTH",
    "EXCERPT_MAX_TOKENS",
    "EXCERPT_TEMPERATURE",
    "FOLLOWUP_SOURCE_CHARS",
    "IMAGE_KEYWORD_COUNT",
    "IMAGE_MAX_PER_PAGE",
    "IMAGE_OVERFETCH",
    "MEDIA_MAX_ATTEMPTS",
    "MEDIA_RESULTS_PER_PLATFORM",
    "MEDIA_RETRY_BASE_DELAY",
    "MEDIA_RETRY_MAX_DELAY",
    "MODEL_DEFAULT_MAX_TOKENS",
    "MODEL_DEFAULT_TEMPERATURE",
    "POPULAR_POSTS_CONTEXT_MAX",
    "POPULAR_POSTS_DEFAULT_MAX",
    "POST_IMAGE_COUNT",
    "TAG_MAX_COUNT",
    "TAG_MAX_LENGTH",
    "TAG_MIN_LENGTH",
    "TAGS_MAX_TOKENS",
    "TAGS_TEMPERATURE",
    # Vocabulary
    "AI_FALLBACK_QUERY",
    "DEFAULT_TOPICS",
    "EXAMPLE_TASK_IDS",
    "GENERIC_FALLBACK_QUERY",
    "IMAGE_PLACEHOLDER",
    "LEGACY_PLACEHOLDER_PATTERN",
    "POPULAR_POST_QUERIES",
    "STOP_WORDS",
    "TECH_KEYWORDS",
    "TECH_QUERY_SUFFIX",
    "VIDEO_PLACEHOLDER",
]
