"""Tests for the in-memory post store."""

from datetime import datetime, timedelta, timezone

import pytest

from autoblog.content.models import CreatePostInput
from autoblog.storage.memory import InMemoryPostStore


class _Clock:
    def __init__(self):
        self.now = datetime(2025, 6, 15, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


@pytest.mark.asyncio
async def test_create_assigns_slug_and_timestamps():
    store = InMemoryPostStore(clock=_Clock())

    post = await store.create(CreatePostInput(title="Trí tuệ nhân tạo 2025", content="x", published=True))

    assert post.slug == "tri-tue-nhan-tao-2025"
    assert post.id
    assert post.created_at == post.updated_at == post.published_at
    assert await store.get_by_slug(post.slug) == post


@pytest.mark.asyncio
async def test_colliding_titles_get_suffixes():
    store = InMemoryPostStore()

    slugs = [
        (await store.create(CreatePostInput(title="AI News", content="x"))).slug
        for _ in range(3)
    ]

    assert slugs == ["ai-news", "ai-news-2", "ai-news-3"]
    assert len(store) == 3


@pytest.mark.asyncio
async def test_untitled_slug():
    store = InMemoryPostStore()
    post = await store.create(CreatePostInput(title="!!!", content="x"))
    assert post.slug == "post"


@pytest.mark.asyncio
async def test_list_newest_first_and_filters_drafts():
    store = InMemoryPostStore(clock=_Clock())
    first = await store.create(CreatePostInput(title="First", content="x", published=True))
    draft = await store.create(CreatePostInput(title="Draft", content="x"))
    second = await store.create(CreatePostInput(title="Second", content="x", published=True))

    assert [p.slug for p in await store.list()] == [second.slug, first.slug]
    assert draft.published_at is None
    assert len(await store.list(published_only=False)) == 3
