"""Prompt templates for blog generation."""

from __future__ import annotations

from ..constants import IMAGE_PLACEHOLDER, VIDEO_PLACEHOLDER
from ..content.models import PostLength


BLOG_POST_PROMPT = """You are an expert AI blogger writing about the AI industry and technology trends.

Topic: {topic}
{context_block}
Write a {length_adjective} blog post ({word_range} words) about this topic.

REQUIREMENTS:
1. LANGUAGE: Write ENTIRELY in {language}
2. TONE: Engaging, professional, authoritative but accessible
3. STRUCTURE:
   - Strong opening hook (2-3 sentences)
   - 4-5 main sections with ## headings, concise and on point
   - Each section: 200-350 words
   - Include real examples and statistics where they help
   - Brief conclusion with 2-3 takeaways
4. SEO:
   - Include keywords naturally
   - Use bullet points and numbered lists
   - Bold the key terms
5. FOCUS:
   - Explain concepts clearly and briefly
   - Quality over quantity, every paragraph must add value
{media_block}
OUTPUT FORMAT: Valid Markdown with proper headings hierarchy.
DO NOT include the title as # heading - just start with the content."""


CONTEXT_BLOCK = """
Context and reference material:
{context}
"""


MEDIA_PLACEHOLDER_BLOCK = f"""
IMPORTANT - Media placeholders ({{media_count}} total):
- {IMAGE_PLACEHOLDER} - put it after the introduction or the first section (it becomes an illustration)
- {VIDEO_PLACEHOLDER} - put it after the main analysis or right before the conclusion (it becomes a video)
- Both placeholders MUST appear in the post and must NOT be adjacent
- Put each placeholder on its own line
"""


EXCERPT_PROMPT = """Write a short excerpt (2 sentences, at most 150 characters) in {language} for this blog post. Return only the excerpt, without quotes:

{content}"""


TAGS_PROMPT = """Extract 4-6 relevant tags (single words or short phrases) for this blog post. Return a comma-separated list, without brackets:

{content}"""


ANALYSIS_PROMPTS = {
    "summary": "Summarize the following content in 2-3 sentences:\n\n{content}",
    "key-points": "Extract the key points from the following content as a bulleted list:\n\n{content}",
    "sentiment": (
        "Analyze the sentiment of the following content (positive, negative, or neutral) "
        "and explain why:\n\n{content}"
    ),
    "topics": "Identify the main topics and themes in the following content:\n\n{content}",
}


_LENGTH_ADJECTIVES = {
    PostLength.SHORT: "concise",
    PostLength.MEDIUM: "comprehensive",
    PostLength.LONG: "in-depth",
    PostLength.EXTENDED: "detailed, comprehensive",
}


def build_blog_post_prompt(
    topic: str,
    context: str | None,
    length: PostLength,
    language: str,
    include_media_placeholders: bool,
    media_count: int,
) -> str:
    """Assemble the body prompt for one post."""
    context_block = CONTEXT_BLOCK.format(context=context) if context else ""
    media_block = (
        MEDIA_PLACEHOLDER_BLOCK.format(media_count=media_count)
        if include_media_placeholders
        else ""
    )
    return BLOG_POST_PROMPT.format(
        topic=topic,
        context_block=context_block,
        length_adjective=_LENGTH_ADJECTIVES[length],
        word_range=length.word_range,
        language=language,
        media_block=media_block,
    )
