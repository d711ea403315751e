"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel

from remark.application.usecase.comment import (
    AddCommentRequest,
    AddCommentUseCase,
    CommentNodeItem,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from remark.domain.error import DomainError
from remark.domain.value import ROOT_PARENT_ID
from remark.interface.api.errors import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class AddCommentAPIRequest(BaseModel):
    """API request for adding a comment."""

    parent_id: int = ROOT_PARENT_ID  # 0 for a new thread
    name: str
    email: str
    text: str


@router.get("/comments", response_model=ListCommentsResponse)
async def list_comments(
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    post_id: int | None = None,
    email: str | None = None,
    approved: bool | None = None,
) -> ListCommentsResponse:
    """List root comments with their replies.

    Filters are optional and combined; they select root comments.

    Args:
        list_comments_use_case: List comments use case from DI
        post_id: Only threads of this post
        email: Only threads started with this email
        approved: Only threads whose root has this approval flag

    Returns:
        Comment trees and the total number of nodes
    """
    request = ListCommentsRequest(post_id=post_id, email=email, approved=approved)
    try:
        return await list_comments_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/posts/{post_id}/comments", response_model=ListCommentsResponse)
async def list_post_comments(
    post_id: int,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    approved: bool | None = None,
) -> ListCommentsResponse:
    """List the comment trees of one post."""
    request = ListCommentsRequest(post_id=post_id, approved=approved)
    try:
        return await list_comments_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentNodeItem,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: int,
    request: AddCommentAPIRequest,
    add_comment_use_case: FromDishka[AddCommentUseCase],
) -> CommentNodeItem:
    """Add a comment to a post or reply to a comment.

    New comments start unapproved.

    Args:
        post_id: Post ID
        request: Comment data
        add_comment_use_case: Add comment use case from DI

    Returns:
        The created comment with an empty reply list

    Raises:
        HTTPException: 400 for invalid input, 404 for an unknown parent,
            409 when the parent is already at maximum depth
    """
    use_case_request = AddCommentRequest(
        post_id=post_id,
        parent_id=request.parent_id,
        name=request.name,
        email=request.email,
        text=request.text,
    )
    try:
        return await add_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e) from e
