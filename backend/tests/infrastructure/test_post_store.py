"""Post Store — verifies the transactional write path against an in-memory database.

Invariants:
    - create + get round-trips the durable post (server-assigned id and created_at)
    - A failing activity-log insert leaves no post behind (atomicity)
    - Cancellation inside the transaction rolls it back
    - update applies only supplied fields and rejects empty patches / missing ids
    - Tag search is containment, ordered by id descending
"""

import asyncio

import pytest
from sqlalchemy import func, select

from app.core.errors import DatabaseError, NotFoundError, ValidationError
from app.core.post_types import PostPatch
from app.infrastructure.post_store import SqlAlchemyPostStore
from app.models.activity_log import ActivityLog
from app.models.post import PostRow


async def _count(db_manager, model) -> int:
    async with db_manager.session() as db:
        result = await db.execute(select(func.count()).select_from(model))
        return result.scalar_one()


@pytest.mark.asyncio
async def test_create_then_get_round_trips(store):
    created = await store.create_post("A", "B", ["go"])

    assert created.id == 1
    assert created.tags == ["go"]
    assert created.created_at is not None
    assert await store.get_post(created.id) == created


@pytest.mark.asyncio
async def test_create_writes_one_activity_entry(store, db_manager):
    post = await store.create_post("A", "B", [])

    async with db_manager.session() as db:
        result = await db.execute(select(ActivityLog))
        entries = result.scalars().all()
    assert [(e.action, e.post_id) for e in entries] == [("new_post", post.id)]


@pytest.mark.asyncio
async def test_create_preserves_tag_order_and_duplicates(store):
    post = await store.create_post("A", "B", ["b", "a", "b"])
    assert (await store.get_post(post.id)).tags == ["b", "a", "b"]


@pytest.mark.parametrize("title,content", [("", "B"), ("A", ""), ("  ", "B")])
@pytest.mark.asyncio
async def test_create_rejects_empty_text(store, db_manager, title, content):
    with pytest.raises(ValidationError):
        await store.create_post(title, content, [])
    assert await _count(db_manager, PostRow) == 0


@pytest.mark.asyncio
async def test_failed_activity_insert_rolls_back_post(store, db_manager, monkeypatch):
    async def broken_append(self, db, action, post_id):
        db.add(ActivityLog(action=None, post_id=post_id))  # NOT NULL violation
        await db.flush()

    monkeypatch.setattr(SqlAlchemyPostStore, "_append_activity", broken_append)

    with pytest.raises(DatabaseError):
        await store.create_post("A", "B", ["go"])

    assert await _count(db_manager, PostRow) == 0
    assert await _count(db_manager, ActivityLog) == 0


@pytest.mark.asyncio
async def test_cancelled_transaction_rolls_back(store, db_manager, monkeypatch):
    async def cancelled_append(self, db, action, post_id):
        raise asyncio.CancelledError()

    monkeypatch.setattr(SqlAlchemyPostStore, "_append_activity", cancelled_append)

    with pytest.raises(asyncio.CancelledError):
        await store.create_post("A", "B", [])

    assert await _count(db_manager, PostRow) == 0


@pytest.mark.asyncio
async def test_get_missing_post_raises_not_found(store):
    with pytest.raises(NotFoundError):
        await store.get_post(99)


@pytest.mark.asyncio
async def test_search_by_tag_is_containment_ordered_desc(store):
    first = await store.create_post("one", "x", ["go", "db"])
    await store.create_post("two", "x", ["py"])
    third = await store.create_post("three", "x", ["go"])
    await store.create_post("four", "x", ["golang"])

    found = await store.search_by_tag("go")

    assert [p.id for p in found] == [third.id, first.id]


@pytest.mark.asyncio
async def test_search_by_unknown_tag_is_empty(store):
    await store.create_post("one", "x", ["go"])
    assert await store.search_by_tag("rust") == []


@pytest.mark.asyncio
async def test_update_applies_only_supplied_fields(store):
    post = await store.create_post("A", "B", ["go"])

    updated = await store.update_post(post.id, PostPatch(content="C"))

    assert updated.title == "A"
    assert updated.content == "C"
    assert updated.tags == ["go"]
    assert updated.created_at == post.created_at


@pytest.mark.asyncio
async def test_update_with_explicit_empty_tags_clears_them(store):
    post = await store.create_post("A", "B", ["go"])
    updated = await store.update_post(post.id, PostPatch(tags=[]))
    assert updated.tags == []


@pytest.mark.asyncio
async def test_update_rejects_empty_patch(store):
    post = await store.create_post("A", "B", [])
    with pytest.raises(ValidationError):
        await store.update_post(post.id, PostPatch())


@pytest.mark.asyncio
async def test_update_rejects_blank_title(store):
    post = await store.create_post("A", "B", [])
    with pytest.raises(ValidationError):
        await store.update_post(post.id, PostPatch(title=" "))
    assert (await store.get_post(post.id)).title == "A"


@pytest.mark.asyncio
async def test_update_missing_post_raises_not_found(store):
    with pytest.raises(NotFoundError):
        await store.update_post(404, PostPatch(title="T"))


@pytest.mark.asyncio
async def test_count_posts(store):
    assert await store.count_posts() == 0
    await store.create_post("A", "B", [])
    assert await store.count_posts() == 1
