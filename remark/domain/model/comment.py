"""Comment entities.

Comments form trees per post. A root comment has parent_id 0; replies
point at their parent, and nesting stops two levels below the root.
The tree shape is never stored: it is assembled from flat rows on every
read (see TreeAssembler).
"""

from datetime import datetime
from typing import Annotated

from pydantic import ConfigDict, Field, StringConstraints

from remark.domain.model.common import DomainModel
from remark.domain.value import ROOT_PARENT_ID, CommentId, EmailAddress, PostId

# Maximum number of reply levels beneath a root comment
MAX_REPLY_DEPTH = 2

NonEmptyText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, strict=True)
]


class Comment(DomainModel):
    """A persisted comment.

    `id` and `created_at` are assigned by the store; `parent_id` never
    changes after insert. Moderation may flip `approved`, nothing else.
    """

    id: CommentId
    post_id: PostId = Field(gt=0)
    parent_id: CommentId = Field(default=ROOT_PARENT_ID, ge=0)
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    text: str = Field(min_length=1, max_length=10000)
    approved: bool = False
    created_at: datetime

    @property
    def is_root(self) -> bool:
        """Whether this comment starts a thread."""
        return self.parent_id == ROOT_PARENT_ID

    @property
    def sort_key(self) -> tuple[datetime, int]:
        """Sibling ordering: oldest first, id breaks ties."""
        return (self.created_at, self.id)


class NewComment(DomainModel):
    """Caller-supplied fields for a new comment.

    Deliberately has no id, approval flag or timestamp: those are never
    accepted from callers.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    parent_id: Annotated[int, Field(ge=0, strict=True)]
    name: Annotated[NonEmptyText, Field(max_length=255)]
    email: EmailAddress
    text: Annotated[NonEmptyText, Field(max_length=10000)]


class CommentNode(Comment):
    """A comment together with its ordered replies.

    Request-scoped view assembled from storage rows. `replies` is always a
    list, empty for leaves.
    """

    replies: list["CommentNode"] = Field(default_factory=list)

    @classmethod
    def from_comment(
        cls, comment: Comment, replies: list["CommentNode"] | None = None
    ) -> "CommentNode":
        """Wrap a persisted comment.

        Args:
            comment: The persisted comment
            replies: Already assembled child nodes (defaults to none)

        Returns:
            Comment node carrying the given replies
        """
        fields = comment.model_dump(exclude={"replies"})
        return cls(**fields, replies=replies or [])
