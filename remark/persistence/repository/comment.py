"""PostgreSQL implementation of Comment repository."""

import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, List, Optional

import logfire
from sqlalchemy import Integer, Select, func, insert, literal_column, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from remark.domain.error import DataIntegrityError, NotFoundError, StoreError
from remark.domain.model import Comment, NewComment
from remark.domain.repository import CommentRepository
from remark.domain.value import ROOT_PARENT_ID, CommentId, PostId
from remark.persistence.mappers import new_comment_to_dict, row_to_comment
from remark.persistence.tables import comments_table

# Sibling order for every listing
ORDERING = (comments_table.c.create_date.asc(), comments_table.c.id.asc())


@asynccontextmanager
async def _store_errors(operation: str, **context) -> AsyncIterator[None]:
    """Turn driver failures into StoreError.

    The full cause is logged here, once; callers only see a generic message.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logfire.error(
            "Comment store failure",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
            **context,
        )
        raise StoreError("The comment store is unavailable") from e


def top_level_query(
    post_id: Optional[PostId] = None,
    email: Optional[str] = None,
    approved: Optional[bool] = None,
) -> Select:
    """Build the root comment query.

    post_id and email are bound parameters; approved is a Python bool
    rendered as a SQL boolean literal. None means "don't filter".
    """
    stmt = select(comments_table).where(comments_table.c.parent_id == ROOT_PARENT_ID)
    if post_id is not None:
        stmt = stmt.where(comments_table.c.post_id == post_id)
    if email is not None:
        stmt = stmt.where(comments_table.c.email == email)
    if approved is not None:
        stmt = stmt.where(comments_table.c.is_approved == approved)
    return stmt.order_by(*ORDERING)


def parent_chain_query(comment_id: CommentId, max_hops: int) -> Select:
    """Build the parent chain walk as a recursive CTE.

    The hop counter stops the recursion after max_hops links, so a cycle
    in stored data yields a bounded result instead of an endless query.
    """
    chain = (
        select(
            comments_table.c.id,
            comments_table.c.parent_id,
            literal_column("0", Integer).label("hops"),
        )
        .where(comments_table.c.id == comment_id)
        .cte("chain", recursive=True)
    )
    parent = comments_table.alias("parent")
    chain = chain.union_all(
        select(parent.c.id, parent.c.parent_id, (chain.c.hops + 1).label("hops"))
        .where(parent.c.id == chain.c.parent_id)
        .where(chain.c.parent_id != ROOT_PARENT_ID)
        .where(chain.c.hops < max_hops)
    )
    return select(chain.c.id, chain.c.parent_id, chain.c.hops).order_by(chain.c.hops)


def check_chain(
    comment_id: CommentId, links: List[tuple[int, int]], max_hops: int
) -> List[CommentId]:
    """Validate a walked chain of (id, parent_id) links.

    Shared by every repository implementation.

    Raises:
        NotFoundError: If the walk found nothing at all
        DataIntegrityError: If the chain ends without reaching a root
    """
    if not links:
        raise NotFoundError("Comment", str(comment_id))

    last_id, last_parent = links[-1]
    if last_parent != ROOT_PARENT_ID:
        hops = len(links) - 1
        if hops >= max_hops:
            reason = f"no root within {max_hops} hops"
        else:
            reason = f"parent {last_parent} of comment {last_id} is missing"
        logfire.error(
            "Corrupt comment parent chain",
            comment_id=comment_id,
            chain=[link[0] for link in links],
            reason=reason,
        )
        raise DataIntegrityError(f"Parent chain of comment {comment_id}: {reason}")

    return [CommentId(link[0]) for link in links]


def _rows_to_comments(rows: Iterable) -> List[Comment]:
    return [row_to_comment(row._asdict()) for row in rows]


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        async with _store_errors("find_by_id", comment_id=comment_id):
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def exists(self, comment_id: CommentId) -> bool:
        """Check whether a comment exists."""
        stmt = select(
            select(comments_table.c.id)
            .where(comments_table.c.id == comment_id)
            .exists()
        )
        async with _store_errors("exists", comment_id=comment_id):
            result = await self.session.execute(stmt)
            return bool(result.scalar())

    async def find_top_level(
        self,
        post_id: Optional[PostId] = None,
        email: Optional[str] = None,
        approved: Optional[bool] = None,
    ) -> List[Comment]:
        """Find root comments matching every supplied filter."""
        stmt = top_level_query(post_id=post_id, email=email, approved=approved)
        async with _store_errors("find_top_level", post_id=post_id):
            result = await self.session.execute(stmt)
            return _rows_to_comments(result.fetchall())

    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies to a comment."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .order_by(*ORDERING)
        )
        async with _store_errors("find_children", parent_id=parent_id):
            result = await self.session.execute(stmt)
            return _rows_to_comments(result.fetchall())

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find every comment of a post in sibling order."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(*ORDERING)
        )
        async with _store_errors("find_by_post", post_id=post_id):
            result = await self.session.execute(stmt)
            return _rows_to_comments(result.fetchall())

    async def find_parent_chain(
        self, comment_id: CommentId, max_hops: int
    ) -> List[CommentId]:
        """Walk from a comment up to its root in a single query."""
        stmt = parent_chain_query(comment_id, max_hops)
        async with _store_errors("find_parent_chain", comment_id=comment_id):
            result = await self.session.execute(stmt)
            links = [(row.id, row.parent_id) for row in result.fetchall()]
        return check_chain(comment_id, links, max_hops)

    async def insert(self, post_id: PostId, comment: NewComment) -> Comment:
        """Insert a comment; the database assigns id and create_date."""
        stmt = (
            insert(comments_table)
            .values(**new_comment_to_dict(post_id, comment))
            .returning(comments_table)
        )
        async with _store_errors(
            "insert", post_id=post_id, parent_id=comment.parent_id
        ):
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()
        return row_to_comment(row._asdict())

    async def set_approved(
        self, comment_id: CommentId, approved: bool
    ) -> Optional[Comment]:
        """Flip the moderation flag; nothing else is updated."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(is_approved=approved)
            .returning(comments_table)
        )
        async with _store_errors("set_approved", comment_id=comment_id):
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if row is None:
                return None
            await self.session.flush()
        return row_to_comment(row._asdict())

    async def count(self) -> int:
        """Count all stored comments."""
        stmt = select(func.count()).select_from(comments_table)
        async with _store_errors("count"):
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Run the block inside a SAVEPOINT of the request session."""
        async with _store_errors("transaction"):
            async with self.session.begin_nested():
                yield
