"""Mappers for converting between database rows and domain models.

Column names follow the legacy comments table (`comment`, `is_approved`,
`create_date`); the domain model uses its own field names.
"""

from typing import Any, Dict, Mapping

from remark.domain.model import Comment, NewComment
from remark.domain.value import CommentId, PostId


def row_to_comment(row: Mapping[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        parent_id=CommentId(row["parent_id"]),
        name=row["name"],
        email=row["email"],
        text=row["comment"],
        approved=row["is_approved"],
        created_at=row["create_date"],
    )


def new_comment_to_dict(post_id: PostId, comment: NewComment) -> Dict[str, Any]:
    """Convert validated input to an insert dict.

    id and create_date are left out so the database assigns them.

    Args:
        post_id: The post the comment belongs to
        comment: Validated caller input

    Returns:
        Dict suitable for database insertion
    """
    return {
        "post_id": post_id,
        "parent_id": comment.parent_id,
        "name": comment.name,
        "email": comment.email.root,
        "comment": comment.text,
        "is_approved": False,
    }
