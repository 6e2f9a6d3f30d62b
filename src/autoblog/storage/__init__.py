"""Post storage: the interface the generator writes to, plus an in-memory store."""

from .base import PostStore
from .memory import InMemoryPostStore

__all__ = [
    "PostStore",
    "InMemoryPostStore",
]
