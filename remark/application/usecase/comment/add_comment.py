"""Add comment use case."""

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.domain.service import CommentService
from remark.domain.value import ROOT_PARENT_ID

from .items import CommentNodeItem


class AddCommentRequest(BaseModel):
    """Add comment request.

    Fields are checked by the comment service, so malformed values reach
    it unchanged and fail with a domain ValidationError.
    """

    post_id: int
    parent_id: int = ROOT_PARENT_ID
    name: str
    email: str
    text: str


class AddCommentUseCase(BaseUseCase):
    """Use case for posting a comment or replying to one."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: AddCommentRequest) -> CommentNodeItem:
        """Execute add comment flow.

        Args:
            request: Post id and comment fields

        Returns:
            The created comment, unapproved and without replies

        Raises:
            ValidationError: If the input is invalid
            NotFoundError: If the parent comment does not exist
            DepthExceededError: If the parent is already at maximum depth
        """
        node = await self.comment_service.add_comment(
            request.post_id,
            {
                "parent_id": request.parent_id,
                "name": request.name,
                "email": request.email,
                "text": request.text,
            },
        )
        return CommentNodeItem.from_node(node)
