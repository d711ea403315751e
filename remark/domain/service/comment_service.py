"""Comment domain service."""

import asyncio
from typing import Any, Mapping

import logfire
from pydantic import ValidationError as PydanticValidationError

from remark.config import ApprovalScope
from remark.domain.error import StoreError, ValidationError
from remark.domain.model.comment import Comment, CommentNode, NewComment
from remark.domain.repository import CommentRepository
from remark.domain.value import ROOT_PARENT_ID, CommentId, PostId

from .base import Service
from .depth_validator import DepthValidator
from .tree_assembler import TreeAssembler


class CommentService(Service):
    """Domain service for comment trees.

    The only entry point for reading and writing comments: validates
    input, enforces the depth limit and assembles reply trees.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        depth_validator: DepthValidator,
        tree_assembler: TreeAssembler,
        approval_scope: ApprovalScope = "roots",
        write_timeout_seconds: float = 5.0,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            depth_validator: Reply depth validator
            tree_assembler: Tree assembler
            approval_scope: Whether the approved filter applies to roots only
                or to every reply as well
            write_timeout_seconds: Bound on the validate-then-insert step
        """
        self.comment_repository = comment_repository
        self.depth_validator = depth_validator
        self.tree_assembler = tree_assembler
        self.approval_scope = approval_scope
        self.write_timeout_seconds = write_timeout_seconds

    async def list_comments(
        self,
        post_id: PostId | None = None,
        email: str | None = None,
        approved: bool | None = None,
    ) -> list[CommentNode]:
        """List root comments with their reply trees.

        Filters apply to the root comments. Replies are fetched in bulk,
        one query per matched post, and assembled in memory.

        Args:
            post_id: Only roots of this post
            email: Only roots written with this email
            approved: Only roots with this approval flag

        Returns:
            Root nodes ordered by (created_at, id), each with its replies
        """
        # Stored emails are trimmed, so the filter is too
        if email is not None:
            email = email.strip()

        with logfire.span(
            "comment_service.list_comments",
            post_id=post_id,
            email=email,
            approved=approved,
        ):
            roots = await self.comment_repository.find_top_level(
                post_id=post_id, email=email, approved=approved
            )
            if not roots:
                logfire.info("No comments matched", post_id=post_id)
                return []

            # Distinct posts in order of first appearance
            post_ids = list(dict.fromkeys(root.post_id for root in roots))
            rows: list[Comment] = []
            for pid in post_ids:
                rows.extend(await self.comment_repository.find_by_post(pid))

            rows = self._apply_approval_scope(rows, approved)
            nodes = self.tree_assembler.build(rows, roots=roots)

            logfire.info(
                "Comments listed",
                post_count=len(post_ids),
                root_count=len(roots),
                row_count=len(rows),
            )
            return nodes

    async def add_comment(
        self, post_id: Any, data: NewComment | Mapping[str, Any]
    ) -> CommentNode:
        """Add a root comment or a reply.

        Steps:
        1. Validate post_id and the comment fields (no store access yet)
        2. Check the parent is on the same post and can take a reply
        3. Insert the comment, unapproved, with a store-assigned timestamp

        Steps 2 and 3 run in one transaction bounded by a timeout; a
        rejection, timeout or cancellation leaves no row behind.

        Args:
            post_id: Post the comment belongs to (positive integer)
            data: parent_id, name, email and text

        Returns:
            The persisted comment with no replies

        Raises:
            ValidationError: If post_id or any field is invalid, or the
                parent belongs to another post
            NotFoundError: If the parent comment does not exist
            DepthExceededError: If the parent is already at maximum depth
            DataIntegrityError: If the stored parent chain is corrupt
            StoreError: If the store fails or the write times out
        """
        valid_post_id = self._validate_post_id(post_id)
        new_comment = self._validate_new_comment(data)

        with logfire.span(
            "comment_service.add_comment",
            post_id=valid_post_id,
            parent_id=new_comment.parent_id,
        ):
            try:
                saved, depth = await asyncio.wait_for(
                    self._validate_and_insert(valid_post_id, new_comment),
                    timeout=self.write_timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                logfire.error(
                    "Comment write timed out",
                    post_id=valid_post_id,
                    parent_id=new_comment.parent_id,
                    timeout_seconds=self.write_timeout_seconds,
                )
                raise StoreError("Timed out while saving the comment") from e

            logfire.info(
                "Comment created",
                comment_id=saved.id,
                post_id=saved.post_id,
                parent_id=saved.parent_id,
                depth=depth,
            )
            return CommentNode.from_comment(saved)

    async def _validate_and_insert(
        self, post_id: PostId, new_comment: NewComment
    ) -> tuple[Comment, int]:
        async with self.comment_repository.transaction():
            if new_comment.parent_id != ROOT_PARENT_ID:
                await self._check_same_post(post_id, new_comment.parent_id)
            depth = await self.depth_validator.validate(new_comment.parent_id)
            saved = await self.comment_repository.insert(post_id, new_comment)
        return saved, depth

    async def _check_same_post(self, post_id: PostId, parent_id: CommentId) -> None:
        """A reply must belong to the post of its parent.

        A missing parent is left to the depth validator.
        """
        parent = await self.comment_repository.find_by_id(parent_id)
        if parent is not None and parent.post_id != post_id:
            logfire.warn(
                "Reply rejected: parent belongs to another post",
                post_id=post_id,
                parent_id=parent_id,
                parent_post_id=parent.post_id,
            )
            raise ValidationError(
                f"Parent comment {parent_id} does not belong to post {post_id}"
            )

    def _apply_approval_scope(
        self, rows: list[Comment], approved: bool | None
    ) -> list[Comment]:
        """Drop replies that don't match the approved filter, if configured.

        Pruned replies take their subtrees with them since the assembler
        can no longer reach those rows.
        """
        if approved is None or self.approval_scope == "roots":
            return rows
        return [row for row in rows if row.is_root or row.approved == approved]

    @staticmethod
    def _validate_post_id(post_id: Any) -> PostId:
        # bool is an int subclass but never a valid id
        if isinstance(post_id, bool) or not isinstance(post_id, int) or post_id <= 0:
            logfire.warn("Comment rejected: invalid post_id", post_id=repr(post_id))
            raise ValidationError("post_id must be a positive integer")
        return PostId(post_id)

    @staticmethod
    def _validate_new_comment(data: NewComment | Mapping[str, Any]) -> NewComment:
        if isinstance(data, NewComment):
            return data
        if not isinstance(data, Mapping):
            logfire.warn("Comment rejected: input is not a mapping")
            raise ValidationError("Comment data must be an object")
        try:
            return NewComment.model_validate(dict(data))
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'comment'}: {err['msg']}"
                for err in e.errors()
            )
            logfire.warn("Comment rejected: invalid input", problems=problems)
            raise ValidationError(f"Invalid comment: {problems}") from e
