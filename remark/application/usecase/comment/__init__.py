"""Comment use cases."""

from .add_comment import AddCommentRequest, AddCommentUseCase
from .items import CommentNodeItem
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)

__all__ = [
    "AddCommentRequest",
    "AddCommentUseCase",
    "CommentNodeItem",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
]
