"""List comments use case."""

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.domain.service import CommentService
from remark.domain.value import PostId

from .items import CommentNodeItem, count_nodes


class ListCommentsRequest(BaseModel):
    """List comments request.

    Every filter is optional and applies to root comments.
    """

    post_id: int | None = None
    email: str | None = None
    approved: bool | None = None


class ListCommentsResponse(BaseModel):
    """List comments response."""

    comments: list[CommentNodeItem]
    total: int  # Every node, replies included


class ListCommentsUseCase(BaseUseCase):
    """Use case for listing comment trees."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize list comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Args:
            request: Root comment filters

        Returns:
            Root comments in (created_at, id) order with nested replies
        """
        nodes = await self.comment_service.list_comments(
            post_id=PostId(request.post_id) if request.post_id is not None else None,
            email=request.email,
            approved=request.approved,
        )

        items = [CommentNodeItem.from_node(node) for node in nodes]
        return ListCommentsResponse(comments=items, total=count_nodes(items))
