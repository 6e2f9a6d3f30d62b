"""Fixed vocabularies used by the generation pipeline.

This module contains:
- Placeholder tokens the model is told to embed in drafts
- Stop words and tech vocabulary for image keyword extraction
- Canned discovery queries and default topics for batch mode
"""

import re
from typing import Final

# =============================================================================
# PLACEHOLDER TOKENS
# =============================================================================

IMAGE_PLACEHOLDER: Final[str] = "[IMAGE_PLACEHOLDER]"
"""Marks where the inline image is spliced into the draft."""

VIDEO_PLACEHOLDER: Final[str] = "[VIDEO_PLACEHOLDER]"
"""Marks where the video embed is spliced into the draft."""

LEGACY_PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"\[MEDIA_PLACEHOLDER_\d+\]")
"""Numbered placeholders from the older prompt format, always stripped."""


# =============================================================================
# IMAGE KEYWORDS
# =============================================================================

TECH_KEYWORDS: Final[tuple[str, ...]] = (
    "ai", "artificial", "intelligence", "robot", "robotics", "automation",
    "machine", "learning", "neural", "deep", "computer", "vision",
    "software", "code", "programming", "algorithm", "data", "tech",
    "technology", "digital", "cloud", "api", "llm", "gpt", "chatgpt",
    "nlp", "ml", "testing", "devops", "blockchain", "crypto", "iot",
    "cybersecurity", "security", "network", "server", "database",
)

TECH_QUERY_SUFFIX: Final[str] = "technology computer"

# English and Vietnamese filler words
STOP_WORDS: Final[frozenset[str]] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "is", "are", "was", "were", "be", "been",
    "being", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "must", "shall", "can", "need",
    "về", "và", "hoặc", "nhưng", "trong", "trên", "tại", "để", "cho",
    "của", "với", "bởi", "từ", "là", "được", "có", "sẽ", "đã", "đang",
    "how", "what", "when", "where", "why", "which", "who", "whom",
    "this", "that", "these", "those", "it", "its", "their", "your", "our",
    "trends", "2024", "2025", "best", "top", "new", "latest", "guide",
})

AI_FALLBACK_QUERY: Final[str] = "artificial intelligence technology"
GENERIC_FALLBACK_QUERY: Final[str] = "technology innovation"


# =============================================================================
# DISCOVERY
# =============================================================================

POPULAR_POST_QUERIES: Final[tuple[str, ...]] = (
    "AI artificial intelligence trends 2025",
    "machine learning applications",
    "generative AI use cases",
    "AI automation business",
    "artificial intelligence news",
)

EXAMPLE_TASK_IDS: Final[tuple[str, ...]] = (
    "apify/google-search-scraper",
    "apify/google-news-scraper",
    "trudax/reddit-scraper-lite",
)

DEFAULT_TOPICS: Final[tuple[str, ...]] = (
    "AI Automation Trends 2025",
    "Machine Learning Best Practices",
    "Generative AI Applications in Business",
    "Computer Vision và ứng dụng thực tế",
    "Natural Language Processing trong doanh nghiệp",
    "AI Ethics và Responsible AI",
    "Large Language Models và ChatGPT",
    "AI trong Healthcare và Medical Imaging",
)
