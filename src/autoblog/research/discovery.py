"""Apify discovery client.

Runs Apify actors ("tasks") synchronously and maps their heterogeneous
dataset records into DiscoveredItem. Each task kind registers one input
builder and one item mapper; known task ids are looked up in a closed
table, everything else uses the generic shape.

API Reference: https://docs.apify.com/api/v2#/reference/actors/run-actor-synchronously-and-get-dataset-items
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Optional

import httpx

from ..constants import (
    DISCOVERY_DEFAULT_MAX_RESULTS,
    EXAMPLE_TASK_IDS,
    POPULAR_POST_QUERIES,
    POPULAR_POSTS_DEFAULT_MAX,
)
from ..content.models import DiscoveredItem, DiscoveryResult
from ..exceptions import ConfigError, ProviderError
from ..providers.config import ProviderConfig, load_provider_config
from ..utils.timestamps import now_utc, parse_timestamp_lenient

logger = logging.getLogger("content.pipeline")


class TaskKind(str, Enum):
    """Input and output shape of a discovery task."""

    WEB_SEARCH = "web_search"
    NEWS = "news"
    RSS = "rss"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    REDDIT = "reddit"
    GENERIC = "generic"


KNOWN_TASKS: dict[str, TaskKind] = {
    "apify/google-search-scraper": TaskKind.WEB_SEARCH,
    "apify/google-news-scraper": TaskKind.NEWS,
    "apify/rss-reader": TaskKind.RSS,
    "apify/twitter-scraper": TaskKind.TWITTER,
    "apify/linkedin-posts-scraper": TaskKind.LINKEDIN,
    "apify/reddit-scraper": TaskKind.REDDIT,
    "trudax/reddit-scraper-lite": TaskKind.REDDIT,
}

TIME_RANGES: dict[str, timedelta] = {
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
    "month": timedelta(days=30),
}


# =============================================================================
# FIELD COALESCING
# =============================================================================

def _first(raw: dict[str, Any], *keys: str) -> Any:
    """Return the first truthy value among keys."""
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def _text(raw: dict[str, Any], *keys: str) -> str:
    value = _first(raw, *keys)
    return str(value) if value is not None else ""


def _optional_text(raw: dict[str, Any], *keys: str) -> str | None:
    value = _first(raw, *keys)
    return str(value) if value is not None else None


def _engagement(raw: dict[str, Any]) -> int:
    value = _first(raw, "engagement", "likes", "likeCount", "score", "upvotes", "retweetCount")
    try:
        return int(value) if value is not None else 0
    except (TypeError, ValueError):
        return 0


# =============================================================================
# INPUT BUILDERS
# =============================================================================

def _web_search_input(query: str, max_results: int) -> dict[str, Any]:
    # "queries" is a newline-separated string, not a list
    return {
        "queries": query,
        "maxPagesPerQuery": 1,
        "resultsPerPage": max_results,
        "countryCode": "vn",
        "languageCode": "vi",
        "mobileResults": False,
    }


def _news_input(query: str, max_results: int) -> dict[str, Any]:
    return {"query": query, "maxItems": max_results, "country": "VN", "language": "vi"}


def _rss_input(query: str, max_results: int) -> dict[str, Any]:
    # Feed URLs have to come from extra_params
    return {"feeds": [], "maxItems": max_results}


def _twitter_input(query: str, max_results: int) -> dict[str, Any]:
    return {"searchTerms": [query], "maxTweets": max_results, "addUserInfo": True}


def _linkedin_input(query: str, max_results: int) -> dict[str, Any]:
    return {"search": query, "maxResults": max_results}


def _reddit_input(query: str, max_results: int) -> dict[str, Any]:
    return {"searchKeywords": query, "maxItems": max_results}


def _generic_input(query: str, max_results: int) -> dict[str, Any]:
    return {"query": query, "maxResults": max_results}


# =============================================================================
# ITEM MAPPERS
# =============================================================================

def _map_web_search(raw: dict[str, Any]) -> DiscoveredItem:
    return DiscoveredItem(
        title=_text(raw, "title", "name"),
        content=_text(raw, "description", "snippet"),
        url=_text(raw, "url", "link"),
        author=_optional_text(raw, "author", "source"),
        image_url=_optional_text(raw, "image", "thumbnail"),
        published_at=_optional_text(raw, "publishedAt", "date"),
        platform="website",
        engagement=_engagement(raw),
    )


def _generic_mapper(default_platform: str) -> Callable[[dict[str, Any]], DiscoveredItem]:
    def mapper(raw: dict[str, Any]) -> DiscoveredItem:
        return DiscoveredItem(
            title=_text(raw, "title", "text", "tweetText", "postText", "name"),
            content=_text(raw, "content", "text", "description", "tweetText", "postText", "snippet"),
            url=_text(raw, "url", "link", "tweetUrl", "postUrl"),
            author=_optional_text(raw, "author", "username", "userName", "creator", "source"),
            image_url=_optional_text(raw, "imageUrl", "image", "thumbnail", "mediaUrl"),
            published_at=_optional_text(raw, "publishedAt", "date", "createdAt", "timestamp"),
            platform=_text(raw, "platform") or default_platform,
            engagement=_engagement(raw),
        )

    return mapper


@dataclass(frozen=True)
class TaskStrategy:
    """How to call one kind of task and read its records."""

    build_input: Callable[[str, int], dict[str, Any]]
    map_item: Callable[[dict[str, Any]], DiscoveredItem]


STRATEGIES: dict[TaskKind, TaskStrategy] = {
    TaskKind.WEB_SEARCH: TaskStrategy(_web_search_input, _map_web_search),
    TaskKind.NEWS: TaskStrategy(_news_input, _generic_mapper("website")),
    TaskKind.RSS: TaskStrategy(_rss_input, _generic_mapper("unknown")),
    TaskKind.TWITTER: TaskStrategy(_twitter_input, _generic_mapper("twitter")),
    TaskKind.LINKEDIN: TaskStrategy(_linkedin_input, _generic_mapper("linkedin")),
    TaskKind.REDDIT: TaskStrategy(_reddit_input, _generic_mapper("reddit")),
    TaskKind.GENERIC: TaskStrategy(_generic_input, _generic_mapper("unknown")),
}


def _sort_key(item: DiscoveredItem) -> tuple[int, float]:
    published = parse_timestamp_lenient(item.published_at)
    return item.engagement, published.timestamp() if published else 0.0


class DiscoveryClient:
    """Apify discovery client.

    Usage:
        client = DiscoveryClient()
        result = await client.discover("AI agents", task_id="apify/google-search-scraper")
        popular = await client.find_popular_posts(max_results=5)
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        """Initialize the discovery client.

        Args:
            config: Provider configuration. If None, loads from default config file.
            client: HTTP client to use. Created lazily when None.
            clock: Source of the current time for time range filtering.
        """
        self.config = (config or load_provider_config()).discovery
        self._client = client
        self._owns_client = client is None
        self._clock = clock
        self._task_kinds = dict(KNOWN_TASKS)
        for task_id, kind in self.config.task_kinds.items():
            self._task_kinds[task_id] = TaskKind(kind)

    @property
    def is_configured(self) -> bool:
        return self.config.get_api_token() is not None

    @property
    def default_task_id(self) -> str | None:
        return self.config.get_default_task_id()

    def task_kind(self, task_id: str) -> TaskKind:
        """Kind registered for a task id, generic when unknown."""
        return self._task_kinds.get(task_id, TaskKind.GENERIC)

    def _require_token(self) -> str:
        token = self.config.get_api_token()
        if not token:
            raise ConfigError(f"{self.config.api_token_env} is not set in environment variables")
        return token

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=float(self.config.timeout))
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def run_task(
        self,
        task_id: str,
        task_input: dict[str, Any],
        *,
        timeout: int | None = None,
        memory: int | None = None,
    ) -> list[dict[str, Any]]:
        """Run a task synchronously and return its dataset items.

        Args:
            task_id: Actor id in ``username/actor-name`` form.
            task_input: JSON input for the actor.
            timeout: Run timeout in seconds.
            memory: Run memory in megabytes.

        Raises:
            ConfigError: The API token is not configured.
            ProviderError: The run failed or returned a malformed body.
        """
        token = self._require_token()
        client = await self._get_client()

        url = f"{self.config.base_url}/acts/{task_id.replace('/', '~')}/run-sync-get-dataset-items"
        params: dict[str, Any] = {}
        if timeout is not None:
            params["timeout"] = timeout
        if memory is not None:
            params["memory"] = memory

        # The HTTP timeout has to outlive the run itself
        request_timeout = float((timeout or self.config.timeout) + 30)

        logger.info(f"DISCOVERY | running task {task_id}")
        try:
            response = await client.post(
                url,
                params=params,
                json=task_input,
                headers={"Authorization": f"Bearer {token}"},
                timeout=request_timeout,
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"Apify request failed: {e}", provider="apify") from e

        if response.status_code >= 400:
            raise ProviderError(
                f"Apify task {task_id} failed: {response.status_code} - {response.text[:200]}",
                provider="apify",
                status_code=response.status_code,
            )

        try:
            items = response.json()
        except ValueError as e:
            raise ProviderError(f"Apify returned a malformed body: {e}", provider="apify") from e

        if not isinstance(items, list):
            raise ProviderError("Apify returned a non-list dataset", provider="apify")

        return [item for item in items if isinstance(item, dict)]

    async def discover(
        self,
        query: str,
        *,
        task_id: str | None = None,
        max_results: int | None = None,
        extra_params: dict[str, Any] | None = None,
    ) -> DiscoveryResult:
        """Discover content for a query.

        Args:
            query: Search query.
            task_id: Task to run, defaults to the configured default task.
            max_results: Result count passed to the task input.
            extra_params: Complete task input, replaces the built one.

        Returns:
            DiscoveryResult with mapped items.

        Raises:
            ConfigError: Token or task id missing.
            ProviderError: The task run failed.
        """
        self._require_token()
        resolved = task_id or self.default_task_id
        if not resolved:
            raise ConfigError(
                f"Discovery task id not specified. Set {self.config.default_task_env} "
                f"or pass task_id.\nExample task ids: {', '.join(EXAMPLE_TASK_IDS)}\n"
                "Find more at: https://apify.com/store"
            )

        strategy = STRATEGIES[self.task_kind(resolved)]
        task_input = extra_params or strategy.build_input(
            query, max_results or DISCOVERY_DEFAULT_MAX_RESULTS
        )

        raw_items = await self.run_task(resolved, task_input)
        items = [strategy.map_item(raw) for raw in raw_items]
        logger.info(f"DISCOVERY | {resolved} returned {len(items)} items for '{query}'")
        return DiscoveryResult(items=items, task_id=resolved)

    async def find_popular_posts(
        self,
        *,
        max_results: int = POPULAR_POSTS_DEFAULT_MAX,
        time_range: str | None = None,
    ) -> DiscoveryResult:
        """Find popular AI posts across a fixed set of queries.

        Queries run one after another; a failing query is logged and
        skipped. Results are deduplicated by URL (first occurrence wins)
        and sorted by engagement, then recency.

        Args:
            max_results: Maximum items returned.
            time_range: Optional ``day``, ``week`` or ``month`` window.

        Raises:
            ConfigError: Token or default task id missing.
        """
        if time_range is not None and time_range not in TIME_RANGES:
            raise ValueError(f"Unknown time range: {time_range}")

        per_query = max(1, math.ceil(max_results / len(POPULAR_POST_QUERIES)))
        collected: list[DiscoveredItem] = []
        task_id = ""

        for query in POPULAR_POST_QUERIES:
            try:
                result = await self.discover(query, max_results=per_query)
            except ConfigError:
                raise
            except Exception as e:
                logger.warning(f"DISCOVERY | query '{query}' failed: {e}")
                continue
            task_id = result.task_id
            collected.extend(result.items)

        seen: set[str] = set()
        unique: list[DiscoveredItem] = []
        for item in collected:
            if item.url in seen:
                continue
            seen.add(item.url)
            unique.append(item)

        if time_range is not None:
            cutoff = self._clock() - TIME_RANGES[time_range]
            unique = [item for item in unique if not self._is_older(item, cutoff)]

        unique.sort(key=_sort_key, reverse=True)
        return DiscoveryResult(items=unique[:max_results], task_id=task_id or (self.default_task_id or ""))

    @staticmethod
    def _is_older(item: DiscoveredItem, cutoff: datetime) -> bool:
        published = parse_timestamp_lenient(item.published_at)
        if published is None:
            return False
        if cutoff.tzinfo is None:
            cutoff = cutoff.replace(tzinfo=timezone.utc)
        return published < cutoff

    @staticmethod
    def extract_images(items: list[DiscoveredItem], max_results: int = 10) -> list[dict[str, str]]:
        """Image URLs carried by discovered items, with their source page."""
        images = [
            {"url": item.image_url, "source_url": item.url}
            for item in items
            if item.image_url
        ]
        return images[:max_results]
