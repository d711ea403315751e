"""Domain value objects for comment trees."""

from remark.domain.value.identifiers import ROOT_PARENT_ID, CommentId, PostId
from remark.domain.value.types import EMAIL_PATTERN, EmailAddress

__all__ = [
    # Identifiers
    "PostId",
    "CommentId",
    "ROOT_PARENT_ID",
    # Types
    "EmailAddress",
    "EMAIL_PATTERN",
]
