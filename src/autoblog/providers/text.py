"""Text generation provider using Agno framework.

Wraps Gemini behind Agno's unified model interface and builds the
multi-call blog post flow (body, excerpt, tags) on top of it.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any

from ..constants import (
    ANALYSIS_TEMPERATURE,
    BODY_TEMPERATURE,
    EXCERPT_MAX_LENGTH,
    EXCERPT_MAX_TOKENS,
    EXCERPT_TEMPERATURE,
    FOLLOWUP_SOURCE_CHARS,
    IMAGE_PLACEHOLDER,
    TAG_MAX_COUNT,
    TAG_MAX_LENGTH,
    TAG_MIN_LENGTH,
    TAGS_MAX_TOKENS,
    TAGS_TEMPERATURE,
    VIDEO_PLACEHOLDER,
)
from ..content.models import BlogPostDraft, PostLength
from ..exceptions import ConfigError, ProviderError
from ..utils.text import strip_quotes, truncate
from .config import ProviderConfig, load_provider_config
from .prompts import ANALYSIS_PROMPTS, EXCERPT_PROMPT, TAGS_PROMPT, build_blog_post_prompt

_logger = logging.getLogger("ai_calls")

_TITLE_RE = re.compile(r"^#\s+(.+)$")


def _create_gemini_model(
    model_id: str,
    api_key: str,
    temperature: float,
    max_tokens: int,
) -> Any:
    """Create an Agno Gemini model instance."""
    # Import Agno models lazily to avoid import errors if not installed
    from agno.models.google import Gemini

    return Gemini(
        id=model_id,
        api_key=api_key,
        temperature=temperature,
        max_output_tokens=max_tokens,
    )


def extract_title(content: str, topic: str) -> tuple[str, str]:
    """Split a leading ``# `` heading off a generated body.

    Args:
        content: Raw model output.
        topic: Topic used as the title when there is no heading.

    Returns:
        Tuple of (title, body).
    """
    lines = content.splitlines()
    for index, line in enumerate(lines):
        if not line.strip():
            continue
        match = _TITLE_RE.match(line.strip())
        if match:
            body = "\n".join(lines[:index] + lines[index + 1:])
            return match.group(1).strip(), body.strip()
        break
    return topic, content.strip()


def clean_excerpt(raw: str) -> str:
    """Strip surrounding quotes and cap the excerpt length."""
    return truncate(strip_quotes(raw), EXCERPT_MAX_LENGTH)


def parse_tags(raw: str) -> list[str]:
    """Parse a comma-separated tag response.

    Tags are lower-cased with quotes removed; tokens outside
    ``[TAG_MIN_LENGTH, TAG_MAX_LENGTH]`` are dropped and at most
    ``TAG_MAX_COUNT`` are kept.
    """
    tags = []
    for part in raw.split(","):
        tag = re.sub(r"['\"]", "", part.strip().lower())
        if TAG_MIN_LENGTH <= len(tag) <= TAG_MAX_LENGTH:
            tags.append(tag)
    return tags[:TAG_MAX_COUNT]


def _is_error_status(response: Any) -> bool:
    status = getattr(response, "status", None)
    return getattr(status, "value", status) == "ERROR"


class TextProvider:
    """Gemini text generation through Agno.

    The API key is resolved on first use and kept for the lifetime of
    the provider. There is no retry at this layer: any failed call
    raises ProviderError.

    Usage:
        provider = TextProvider()
        draft = await provider.generate_blog_post("AI in healthcare")
    """

    def __init__(self, config: ProviderConfig | None = None):
        """Initialize the text provider.

        Args:
            config: Provider configuration. If None, loads from default config file.
        """
        self.config = config or load_provider_config()
        self._api_key: str | None = None
        self._total_calls = 0

    @property
    def total_calls(self) -> int:
        return self._total_calls

    def model_for(self, use_deep_think: bool = False) -> str:
        """Model id used for a call."""
        gemini = self.config.gemini
        return gemini.deep_model if use_deep_think else gemini.fast_model

    def ensure_configured(self) -> str:
        """Resolve the API key, raising ConfigError when it is missing."""
        if self._api_key is None:
            api_key = self.config.gemini.get_api_key()
            if not api_key:
                raise ConfigError(
                    f"{self.config.gemini.api_key_env} is not set in environment variables"
                )
            self._api_key = api_key
        return self._api_key

    @property
    def is_configured(self) -> bool:
        try:
            self.ensure_configured()
        except ConfigError:
            return False
        return True

    async def generate(
        self,
        prompt: str,
        *,
        use_deep_think: bool = False,
        temperature: float | None = None,
        max_tokens: int | None = None,
        task: str | None = None,
    ) -> str:
        """Generate text completion.

        Args:
            prompt: The user prompt to send to the model.
            use_deep_think: Use the deep reasoning model instead of the fast one.
            temperature: Sampling temperature, defaults to the configured value.
            max_tokens: Output token budget, defaults to the configured value.
            task: Optional task name for logging.

        Returns:
            Generated text response.

        Raises:
            ConfigError: The API key is not configured.
            ProviderError: The model call failed or returned nothing.
        """
        from agno.agent import Agent

        api_key = self.ensure_configured()
        model_id = self.model_for(use_deep_think)
        temperature = self.config.gemini.temperature if temperature is None else temperature
        max_tokens = self.config.gemini.max_tokens if max_tokens is None else max_tokens

        _logger.info(
            f"AI_REQUEST | provider:gemini | model:{model_id} | task:{task} | "
            f"temperature:{temperature} | max_tokens:{max_tokens}\n"
            f"--- PROMPT ---\n{prompt}\n"
            f"--- END REQUEST ---"
        )
        start_time = time.time()

        try:
            model = _create_gemini_model(model_id, api_key, temperature, max_tokens)
            agent = Agent(model=model, markdown=False)
            response = await agent.arun(prompt)
        except Exception as e:
            _logger.warning(f"AI_ERROR | provider:gemini | model:{model_id} | task:{task} | {e}")
            raise ProviderError(f"Failed to generate content: {e}", provider="gemini") from e

        if _is_error_status(response):
            message = response.content or "unknown error"
            _logger.warning(f"AI_ERROR | provider:gemini | model:{model_id} | task:{task} | {message}")
            raise ProviderError(f"Failed to generate content: {message}", provider="gemini")

        result = response.content or ""
        if not isinstance(result, str):
            result = str(result)
        if not result.strip():
            raise ProviderError("Failed to generate content: empty response", provider="gemini")

        duration = time.time() - start_time
        self._total_calls += 1

        _logger.info(
            f"AI_RESPONSE | provider:gemini | model:{model_id} | "
            f"task:{task} | duration:{duration:.2f}s\n"
            f"--- RESPONSE ---\n{result}\n"
            f"--- END RESPONSE ---"
        )
        return result

    async def generate_blog_post(
        self,
        topic: str,
        context: str | None = None,
        *,
        use_deep_think: bool = False,
        length: PostLength = PostLength.EXTENDED,
        include_media_placeholders: bool = False,
        media_count: int = 2,
    ) -> BlogPostDraft:
        """Generate a post body plus its excerpt and tags.

        Three sequential calls: the body (deep model when requested), then
        excerpt and tags on the fast model from the start of the raw body.
        Any failing call aborts the whole operation.

        Args:
            topic: Post topic; also the title when the body has no heading.
            context: Reference material folded into the body prompt.
            use_deep_think: Use the deep reasoning model for the body.
            length: Target length, selects the word range and token budget.
            include_media_placeholders: Ask for image and video placeholders.
            media_count: Number of media slots announced in the prompt.

        Returns:
            BlogPostDraft whose content may hold placeholder tokens.
        """
        language = self.config.generation.language
        prompt = build_blog_post_prompt(
            topic,
            context,
            length,
            language,
            include_media_placeholders,
            media_count,
        )

        content = await self.generate(
            prompt,
            use_deep_think=use_deep_think,
            temperature=BODY_TEMPERATURE,
            max_tokens=length.max_tokens,
            task="blog_body",
        )

        if include_media_placeholders:
            missing = [token for token in (IMAGE_PLACEHOLDER, VIDEO_PLACEHOLDER) if token not in content]
            if missing:
                _logger.warning(
                    f"PLACEHOLDER_MISMATCH | topic:{topic} | missing:{', '.join(missing)}"
                )

        title, body = extract_title(content, topic)
        followup_source = content[:FOLLOWUP_SOURCE_CHARS]

        excerpt = await self.generate(
            EXCERPT_PROMPT.format(language=language, content=followup_source),
            temperature=EXCERPT_TEMPERATURE,
            max_tokens=EXCERPT_MAX_TOKENS,
            task="blog_excerpt",
        )

        tags = await self.generate(
            TAGS_PROMPT.format(content=followup_source),
            temperature=TAGS_TEMPERATURE,
            max_tokens=TAGS_MAX_TOKENS,
            task="blog_tags",
        )

        return BlogPostDraft(
            title=title.strip(),
            content=body,
            excerpt=clean_excerpt(excerpt),
            tags=parse_tags(tags),
            model=self.model_for(use_deep_think),
        )

    async def analyze_content(self, content: str, analysis_type: str = "summary") -> str:
        """Run a short analysis prompt (summary, key-points, sentiment, topics)."""
        template = ANALYSIS_PROMPTS.get(analysis_type)
        if template is None:
            raise ValueError(
                f"Unknown analysis type: {analysis_type}. "
                f"Expected one of: {', '.join(ANALYSIS_PROMPTS)}"
            )
        return await self.generate(
            template.format(content=content),
            temperature=ANALYSIS_TEMPERATURE,
            task=f"analysis_{analysis_type}",
        )
