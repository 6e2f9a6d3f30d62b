"""In-memory post store."""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from ..content.models import CreatePostInput, Post
from ..utils.text import slugify
from ..utils.timestamps import now_utc
from .base import PostStore

logger = logging.getLogger("content.pipeline")


class InMemoryPostStore(PostStore):
    """Post store backed by a dict, used by the CLI and tests.

    Slugs are unique: a colliding title gets ``-2``, ``-3`` and so on.
    """

    def __init__(self, clock: Callable[[], datetime] = now_utc):
        self._posts: dict[str, Post] = {}
        self._clock = clock
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._posts)

    def _unique_slug(self, title: str) -> str:
        base = slugify(title) or "post"
        slug = base
        suffix = 2
        while slug in self._posts:
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    async def create(self, post_input: CreatePostInput) -> Post:
        async with self._lock:
            now = self._clock()
            post = Post(
                **post_input.model_dump(),
                id=str(uuid.uuid4()),
                slug=self._unique_slug(post_input.title),
                created_at=now,
                updated_at=now,
                published_at=now if post_input.published else None,
            )
            self._posts[post.slug] = post

        logger.info(f"STORE | created post '{post.slug}'")
        return post

    async def get_by_slug(self, slug: str) -> Optional[Post]:
        return self._posts.get(slug)

    async def list(self, published_only: bool = True) -> list[Post]:
        posts = [
            post for post in self._posts.values()
            if post.published or not published_only
        ]
        return sorted(
            posts,
            key=lambda post: post.published_at or post.created_at,
            reverse=True,
        )
