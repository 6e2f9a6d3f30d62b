"""Abstract base class for post stores.

Defines the interface the content generator hands finished posts to.
Concrete stores assign ids, slugs and timestamps.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..content.models import CreatePostInput, Post


class PostStore(ABC):
    """Abstract interface for post persistence."""

    @abstractmethod
    async def create(self, post_input: CreatePostInput) -> Post:
        """Persist a new post.

        Args:
            post_input: The generated post.

        Returns:
            The stored post with id, slug and timestamps assigned.
        """
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Post]:
        """Return the post with this slug, or None."""
        pass

    @abstractmethod
    async def list(self, published_only: bool = True) -> list[Post]:
        """Return posts, newest first."""
        pass
