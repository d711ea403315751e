"""Reply depth validation."""

from enum import Enum

import logfire

from remark.domain.error import DepthExceededError, NotFoundError
from remark.domain.model.comment import MAX_REPLY_DEPTH
from remark.domain.repository import CommentRepository
from remark.domain.value import ROOT_PARENT_ID, CommentId

from .base import Service

DEFAULT_MAX_HOPS = 4


class ReplyEligibility(str, Enum):
    """Whether a comment may receive a new reply."""

    ACCEPTED = "accepted"
    DEPTH_EXCEEDED = "depth_exceeded"
    NOT_FOUND = "not_found"


class DepthValidator(Service):
    """Decides whether a parent comment can take another reply.

    The parent chain is walked iteratively with a hop bound strictly
    above the legal depth, so a cycle in stored data fails with
    DataIntegrityError instead of looping or being accepted.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        max_depth: int = MAX_REPLY_DEPTH,
        max_hops: int = DEFAULT_MAX_HOPS,
    ) -> None:
        """Initialize depth validator.

        Args:
            comment_repository: Comment repository
            max_depth: Deepest level a reply may land on
            max_hops: Bound on parent links followed during the walk
        """
        if max_hops <= max_depth:
            raise ValueError("max_hops must be greater than max_depth")
        self.comment_repository = comment_repository
        self.max_depth = max_depth
        self.max_hops = max_hops

    async def check(self, parent_id: CommentId) -> ReplyEligibility:
        """Report whether parent_id may receive a reply, without raising.

        Args:
            parent_id: Candidate parent (0 for a new root)

        Returns:
            The eligibility outcome

        Raises:
            DataIntegrityError: If the stored parent chain is corrupt
        """
        if parent_id == ROOT_PARENT_ID:
            return ReplyEligibility.ACCEPTED

        if not await self.comment_repository.exists(parent_id):
            return ReplyEligibility.NOT_FOUND

        chain = await self.comment_repository.find_parent_chain(
            parent_id, max_hops=self.max_hops
        )
        # Hops from the parent to its root; the new reply sits one below
        if len(chain) - 1 < self.max_depth:
            return ReplyEligibility.ACCEPTED
        return ReplyEligibility.DEPTH_EXCEEDED

    async def validate(self, parent_id: CommentId) -> int:
        """Validate a parent and return the depth a new reply would get.

        Args:
            parent_id: Candidate parent (0 for a new root)

        Returns:
            Depth of the new comment (0 for roots)

        Raises:
            NotFoundError: If parent_id does not exist
            DepthExceededError: If parent_id is already at maximum depth
            DataIntegrityError: If the stored parent chain is corrupt
        """
        if parent_id == ROOT_PARENT_ID:
            return 0

        with logfire.span("depth_validator.validate", parent_id=parent_id):
            if not await self.comment_repository.exists(parent_id):
                logfire.warn("Parent comment not found", parent_id=parent_id)
                raise NotFoundError("Comment", str(parent_id))

            chain = await self.comment_repository.find_parent_chain(
                parent_id, max_hops=self.max_hops
            )
            parent_depth = len(chain) - 1
            if parent_depth >= self.max_depth:
                logfire.warn(
                    "Reply rejected: maximum depth reached",
                    parent_id=parent_id,
                    parent_depth=parent_depth,
                    max_depth=self.max_depth,
                )
                raise DepthExceededError(parent_id, self.max_depth)

            return parent_depth + 1
