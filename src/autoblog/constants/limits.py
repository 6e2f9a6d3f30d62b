"""Limit constants for the blog generation pipeline.

This module contains all limits and constraints:
- Model token budgets and temperatures
- Text post-processing limits (excerpt, tags)
- Retry and backoff settings for media scraping
- Image fetching and batch pacing settings

MODIFICATION GUIDE:
------------------
- MODEL_* values: Check the Gemini model documentation before raising
- MEDIA_* retry settings: The worst-case wait per platform is the sum of
  the backoff delays, keep it short since it blocks the generation
- BATCH_* pacing: Protects third-party quotas, do not lower casually
"""

from typing import Final

# =============================================================================
# MODEL LIMITS
# =============================================================================

MODEL_DEFAULT_TEMPERATURE: Final[float] = 0.7
"""Default sampling temperature for plain generate calls."""

MODEL_DEFAULT_MAX_TOKENS: Final[int] = 8192
"""Default output token budget for plain generate calls."""

BODY_TEMPERATURE: Final[float] = 0.75
"""Slightly lower temperature for coherent long-form bodies."""

EXCERPT_TEMPERATURE: Final[float] = 0.5
EXCERPT_MAX_TOKENS: Final[int] = 100

TAGS_TEMPERATURE: Final[float] = 0.3
TAGS_MAX_TOKENS: Final[int] = 80

ANALYSIS_TEMPERATURE: Final[float] = 0.3


# =============================================================================
# TEXT POST-PROCESSING
# =============================================================================

FOLLOWUP_SOURCE_CHARS: Final[int] = 800
"""Characters of the body fed to the excerpt and tag follow-up calls."""

EXCERPT_MAX_LENGTH: Final[int] = 160
"""Hard cap on the excerpt length after cleanup."""

TAG_MIN_LENGTH: Final[int] = 2
TAG_MAX_LENGTH: Final[int] = 29
TAG_MAX_COUNT: Final[int] = 6

CONTEXT_MAX_ITEMS: Final[int] = 3
"""Discovered items folded into the model context string."""

CONTEXT_SNIPPET_LENGTH: Final[int] = 200


# =============================================================================
# MEDIA SCRAPING
# =============================================================================

MEDIA_MAX_ATTEMPTS: Final[int] = 3
"""Attempts per platform before moving on to the next one."""

MEDIA_RETRY_BASE_DELAY: Final[float] = 1.0
"""Backoff base in seconds, delay is base * 2^attempt."""

MEDIA_RETRY_MAX_DELAY: Final[float] = 10.0

MEDIA_RESULTS_PER_PLATFORM: Final[int] = 3


# =============================================================================
# IMAGES
# =============================================================================

IMAGE_OVERFETCH: Final[int] = 3
"""Extra results requested so cover and inline images differ."""

IMAGE_MAX_PER_PAGE: Final[int] = 10

IMAGE_KEYWORD_COUNT: Final[int] = 3

POST_IMAGE_COUNT: Final[int] = 2
"""Cover plus one inline image."""


# =============================================================================
# BATCH
# =============================================================================

BATCH_DELAY_SECONDS: Final[float] = 5.0
"""Fixed pause between posts in batch mode."""

BATCH_TOPIC_WORDS: Final[int] = 5
BATCH_TOPIC_MIN_WORD_LENGTH: Final[int] = 4
BATCH_TOPIC_MIN_LENGTH: Final[int] = 11

DISCOVERY_DEFAULT_MAX_RESULTS: Final[int] = 10
POPULAR_POSTS_DEFAULT_MAX: Final[int] = 20
POPULAR_POSTS_CONTEXT_MAX: Final[int] = 5
