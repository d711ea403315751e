"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .depth_validator import DepthValidator, ReplyEligibility
from .tree_assembler import TreeAssembler

__all__ = [
    "CommentService",
    "DepthValidator",
    "ReplyEligibility",
    "Service",
    "TreeAssembler",
]
