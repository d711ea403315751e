"""Comment repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import List, Optional

from remark.domain.model.comment import Comment, NewComment
from remark.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.

    Every listing is ordered by (created_at, id) ascending, so siblings
    always come back in the same order. Store failures surface as
    StoreError.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, comment_id: CommentId) -> bool:
        """Check whether a comment exists.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            True if a row with this id is stored
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        post_id: Optional[PostId] = None,
        email: Optional[str] = None,
        approved: Optional[bool] = None,
    ) -> List[Comment]:
        """Find root comments matching every supplied filter.

        Filters left as None are not applied.

        Args:
            post_id: Only roots of this post
            email: Only roots written with this email
            approved: Only roots with this approval flag

        Returns:
            Root comments ordered by (created_at, id)
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies to a comment.

        Args:
            parent_id: The parent comment ID

        Returns:
            Child comments ordered by (created_at, id)
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find every comment of a post, roots and replies alike.

        Args:
            post_id: The post ID

        Returns:
            Comments ordered by (created_at, id)
        """
        pass

    @abstractmethod
    async def find_parent_chain(
        self, comment_id: CommentId, max_hops: int
    ) -> List[CommentId]:
        """Walk from a comment up to its root.

        Args:
            comment_id: Where the walk starts
            max_hops: Most parent links that may be followed

        Returns:
            Ids from comment_id up to and including the root

        Raises:
            NotFoundError: If comment_id does not exist
            DataIntegrityError: If the root is not reached within max_hops
                or a parent row is missing
        """
        pass

    @abstractmethod
    async def insert(self, post_id: PostId, comment: NewComment) -> Comment:
        """Persist a new, unapproved comment.

        The store assigns id and created_at.

        Args:
            post_id: The post the comment belongs to
            comment: Validated caller input

        Returns:
            The persisted comment

        Raises:
            StoreError: On constraint violation or connectivity failure
        """
        pass

    @abstractmethod
    async def set_approved(
        self, comment_id: CommentId, approved: bool
    ) -> Optional[Comment]:
        """Flip the moderation flag of a comment.

        Args:
            comment_id: The comment ID
            approved: New flag value

        Returns:
            Updated comment, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all stored comments."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Group the enclosed reads and writes into one atomic unit.

        Leaving the block with an exception (including cancellation)
        discards every write made inside it.
        """
        pass
