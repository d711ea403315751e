"""Strongly typed identifiers for comment tree entities.

Identifiers are store-assigned integers. NewType keeps post and comment
ids from being mixed up without any runtime cost.
"""

from typing import NewType

PostId = NewType("PostId", int)
CommentId = NewType("CommentId", int)

# parent_id value marking a root comment
ROOT_PARENT_ID = CommentId(0)
