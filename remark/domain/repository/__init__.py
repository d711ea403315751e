"""Repository interfaces for the comment domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from remark.domain.repository.comment import CommentRepository

__all__ = [
    "CommentRepository",
]
