"""Unit tests for the in-memory comment repository."""

from datetime import timedelta

import pytest

from remark.domain.error import DataIntegrityError, NotFoundError
from remark.domain.model import NewComment
from remark.domain.value import CommentId, PostId
from remark.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import StepClock, make_comment


def new_comment(parent_id: int = 0) -> NewComment:
    return NewComment.model_validate(
        {
            "parent_id": parent_id,
            "name": "Ada",
            "email": "ada@example.com",
            "text": "Hello",
        }
    )


class TestInsert:
    """Tests for insert."""

    @pytest.mark.asyncio
    async def test_assigns_sequential_ids_and_timestamps(self):
        clock = StepClock()
        repo = InMemoryCommentRepository(clock=clock)

        first = await repo.insert(PostId(5), new_comment())
        second = await repo.insert(PostId(5), new_comment(parent_id=first.id))

        assert (first.id, second.id) == (1, 2)
        assert first.created_at < second.created_at
        assert second.parent_id == first.id
        assert second.approved is False

    @pytest.mark.asyncio
    async def test_ids_continue_after_loaded_rows(self):
        repo = InMemoryCommentRepository()
        repo.load([make_comment(10)])

        saved = await repo.insert(PostId(5), new_comment())

        assert saved.id == 11


class TestQueries:
    """Tests for listing queries."""

    @pytest.mark.asyncio
    async def test_children_ordered_by_time_then_id(self):
        repo = InMemoryCommentRepository()
        repo.load(
            [
                make_comment(1),
                make_comment(4, parent_id=1, minutes=1),
                make_comment(3, parent_id=1, minutes=1),
                make_comment(2, parent_id=1, minutes=5),
            ]
        )

        children = await repo.find_children(CommentId(1))

        assert [c.id for c in children] == [3, 4, 2]

    @pytest.mark.asyncio
    async def test_find_by_post_returns_every_level(self):
        repo = InMemoryCommentRepository()
        repo.load(
            [
                make_comment(1),
                make_comment(2, parent_id=1, minutes=1),
                make_comment(3, parent_id=2, minutes=2),
                make_comment(4, post_id=6, minutes=3),
            ]
        )

        rows = await repo.find_by_post(PostId(5))

        assert [c.id for c in rows] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_top_level_only_returns_roots(self):
        repo = InMemoryCommentRepository()
        repo.load([make_comment(1), make_comment(2, parent_id=1, minutes=1)])

        roots = await repo.find_top_level()

        assert [c.id for c in roots] == [1]


class TestParentChain:
    """Tests for find_parent_chain."""

    @pytest.mark.asyncio
    async def test_walks_up_to_root(self):
        repo = InMemoryCommentRepository()
        repo.load(
            [
                make_comment(1),
                make_comment(2, parent_id=1),
                make_comment(3, parent_id=2),
            ]
        )

        assert await repo.find_parent_chain(CommentId(3), max_hops=4) == [3, 2, 1]
        assert await repo.find_parent_chain(CommentId(1), max_hops=4) == [1]

    @pytest.mark.asyncio
    async def test_root_exactly_at_bound_is_reached(self):
        repo = InMemoryCommentRepository()
        repo.load([make_comment(1), make_comment(2, parent_id=1)])

        assert await repo.find_parent_chain(CommentId(2), max_hops=1) == [2, 1]

    @pytest.mark.asyncio
    async def test_missing_start_raises_not_found(self):
        repo = InMemoryCommentRepository()

        with pytest.raises(NotFoundError):
            await repo.find_parent_chain(CommentId(1), max_hops=4)

    @pytest.mark.asyncio
    async def test_cycle_stops_at_bound(self):
        repo = InMemoryCommentRepository()
        repo.load([make_comment(1, parent_id=2), make_comment(2, parent_id=1)])

        with pytest.raises(DataIntegrityError, match="within 4 hops"):
            await repo.find_parent_chain(CommentId(1), max_hops=4)

    @pytest.mark.asyncio
    async def test_dangling_parent_is_reported(self):
        repo = InMemoryCommentRepository()
        repo.load([make_comment(2, parent_id=9)])

        with pytest.raises(DataIntegrityError, match="missing"):
            await repo.find_parent_chain(CommentId(2), max_hops=4)


class TestModeration:
    """Tests for set_approved."""

    @pytest.mark.asyncio
    async def test_only_flag_changes(self):
        repo = InMemoryCommentRepository()
        original = make_comment(1)
        repo.load([original])

        updated = await repo.set_approved(CommentId(1), True)

        assert updated is not None
        assert updated.approved is True
        assert updated.model_dump(exclude={"approved"}) == original.model_dump(
            exclude={"approved"}
        )

    @pytest.mark.asyncio
    async def test_unknown_id_returns_none(self):
        repo = InMemoryCommentRepository()

        assert await repo.set_approved(CommentId(1), True) is None


class TestTransaction:
    """Tests for transaction."""

    @pytest.mark.asyncio
    async def test_failure_discards_writes(self):
        repo = InMemoryCommentRepository(clock=StepClock(step=timedelta(0)))

        with pytest.raises(RuntimeError):
            async with repo.transaction():
                await repo.insert(PostId(5), new_comment())
                raise RuntimeError("boom")

        assert await repo.count() == 0
        saved = await repo.insert(PostId(5), new_comment())
        assert saved.id == 1

    @pytest.mark.asyncio
    async def test_success_keeps_writes(self):
        repo = InMemoryCommentRepository()

        async with repo.transaction():
            await repo.insert(PostId(5), new_comment())

        assert await repo.count() == 1
