"""In-memory comment repository for testing."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Callable, Iterable, Optional

from remark.domain.model.comment import Comment, NewComment
from remark.domain.repository.comment import CommentRepository
from remark.domain.value import CommentId, PostId
from remark.persistence.repository.comment import check_chain


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Mirrors the database: ids come from a sequence and created_at from a
    clock, which tests may replace to produce timestamp ties.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._next_id = 1
        self._clock = clock

    def load(self, comments: Iterable[Comment]) -> None:
        """Store rows exactly as given, bypassing every check.

        Used to seed fixtures, including corrupt data no insert could create.
        """
        for comment in comments:
            self._comments[comment.id] = comment
            self._next_id = max(self._next_id, comment.id + 1)

    def _ordered(self, comments: Iterable[Comment]) -> list[Comment]:
        return sorted(comments, key=lambda c: c.sort_key)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def exists(self, comment_id: CommentId) -> bool:
        """Check whether a comment exists."""
        return comment_id in self._comments

    async def find_top_level(
        self,
        post_id: Optional[PostId] = None,
        email: Optional[str] = None,
        approved: Optional[bool] = None,
    ) -> list[Comment]:
        """Find root comments matching every supplied filter."""
        comments = [c for c in self._comments.values() if c.is_root]

        if post_id is not None:
            comments = [c for c in comments if c.post_id == post_id]
        if email is not None:
            comments = [c for c in comments if c.email == email]
        if approved is not None:
            comments = [c for c in comments if c.approved == approved]

        return self._ordered(comments)

    async def find_children(self, parent_id: CommentId) -> list[Comment]:
        """Find direct children of a comment."""
        return self._ordered(
            c for c in self._comments.values() if c.parent_id == parent_id
        )

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find every comment of a post in sibling order."""
        return self._ordered(
            c for c in self._comments.values() if c.post_id == post_id
        )

    async def find_parent_chain(
        self, comment_id: CommentId, max_hops: int
    ) -> list[CommentId]:
        """Walk from a comment up to its root, following at most max_hops links."""
        links: list[tuple[int, int]] = []
        current = self._comments.get(comment_id)
        while current is not None:
            links.append((current.id, current.parent_id))
            if current.is_root or len(links) > max_hops:
                break
            current = self._comments.get(current.parent_id)
        return check_chain(comment_id, links, max_hops)

    async def insert(self, post_id: PostId, comment: NewComment) -> Comment:
        """Insert a comment with the next id and the clock's time."""
        saved = Comment(
            id=CommentId(self._next_id),
            post_id=post_id,
            parent_id=comment.parent_id,
            name=comment.name,
            email=comment.email.root,
            text=comment.text,
            approved=False,
            created_at=self._clock(),
        )
        self._next_id += 1
        self._comments[saved.id] = saved
        return saved

    async def set_approved(
        self, comment_id: CommentId, approved: bool
    ) -> Optional[Comment]:
        """Flip the moderation flag of a comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        # Comments are immutable, store an updated copy
        updated = comment.model_copy(update={"approved": approved})
        self._comments[comment_id] = updated
        return updated

    async def count(self) -> int:
        """Count all stored comments."""
        return len(self._comments)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Restore the previous state if the block raises."""
        snapshot = dict(self._comments)
        next_id = self._next_id
        try:
            yield
        except BaseException:
            self._comments = snapshot
            self._next_id = next_id
            raise
