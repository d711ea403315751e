"""Comment response items shared by the comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from remark.domain.model import CommentNode


class CommentNodeItem(BaseModel):
    """A comment with its nested replies, as returned to API callers."""

    id: int
    post_id: int
    parent_id: int
    name: str
    email: str
    text: str
    approved: bool
    created_at: datetime
    replies: list["CommentNodeItem"]

    @classmethod
    def from_node(cls, node: CommentNode) -> "CommentNodeItem":
        """Convert a domain node, replies included."""
        return cls(
            id=node.id,
            post_id=node.post_id,
            parent_id=node.parent_id,
            name=node.name,
            email=node.email,
            text=node.text,
            approved=node.approved,
            created_at=node.created_at,
            replies=[cls.from_node(reply) for reply in node.replies],
        )


def count_nodes(items: list[CommentNodeItem]) -> int:
    """Count every node of a forest, replies included."""
    return sum(1 + count_nodes(item.replies) for item in items)
