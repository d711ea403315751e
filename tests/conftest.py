"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

from remark.domain.model import Comment
from remark.domain.value import ROOT_PARENT_ID, CommentId, PostId

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_comment(
    comment_id: int,
    parent_id: int = ROOT_PARENT_ID,
    post_id: int = 5,
    minutes: int = 0,
    approved: bool = False,
    email: str = "ada@example.com",
) -> Comment:
    """Build a stored comment for fixtures.

    Args:
        comment_id: Id of the row
        parent_id: Parent id (0 for a root)
        post_id: Post the comment belongs to
        minutes: Minutes after BASE_TIME the comment was created
        approved: Moderation flag
        email: Author email

    Returns:
        Comment as the store would return it
    """
    return Comment(
        id=CommentId(comment_id),
        post_id=PostId(post_id),
        parent_id=CommentId(parent_id),
        name=f"user {comment_id}",
        email=email,
        text=f"comment {comment_id}",
        approved=approved,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


class StepClock:
    """Clock that advances a fixed step on every call.

    Gives in-memory inserts distinct, increasing timestamps; a zero step
    produces ties so ordering falls back to ids.
    """

    def __init__(self, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = BASE_TIME
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        return current
