"""Domain model entities for comment trees."""

from remark.domain.model.comment import (
    MAX_REPLY_DEPTH,
    Comment,
    CommentNode,
    NewComment,
)

__all__ = [
    "Comment",
    "CommentNode",
    "NewComment",
    "MAX_REPLY_DEPTH",
]
