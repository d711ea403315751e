"""Assembly of flat comment rows into reply trees."""

from collections import defaultdict
from typing import Iterable, Sequence

import logfire

from remark.domain.error import DataIntegrityError
from remark.domain.model.comment import MAX_REPLY_DEPTH, Comment, CommentNode
from remark.domain.value import ROOT_PARENT_ID, CommentId

from .base import Service


class TreeAssembler(Service):
    """Builds nested CommentNodes from the rows of a post in one pass.

    Algorithm:
    1. Group rows into a map of parent_id -> [children], keeping input order
    2. Start from the given roots (or the group keyed by 0)
    3. Recursively attach each comment's group, defaulting to no replies

    Input must already be ordered by (created_at, id); grouping keeps that
    order, so siblings need no re-sorting. Rows unreachable from the roots
    (orphans, cycles) never appear in the output.
    """

    def __init__(self, max_depth: int = MAX_REPLY_DEPTH) -> None:
        """Initialize tree assembler.

        Args:
            max_depth: Deepest reply level expected in stored data
        """
        self.max_depth = max_depth

    def build(
        self,
        rows: Iterable[Comment],
        roots: Sequence[Comment] | None = None,
    ) -> list[CommentNode]:
        """Assemble comment trees.

        Args:
            rows: Comments of one or more posts, ordered by (created_at, id)
            roots: Root comments to start from; defaults to every row with
                parent_id 0, in input order

        Returns:
            Root nodes in order, each with its replies attached

        Raises:
            DataIntegrityError: If a comment sits deeper than max_depth
        """
        children: dict[CommentId, list[Comment]] = defaultdict(list)
        for row in rows:
            children[row.parent_id].append(row)

        start = list(roots) if roots is not None else children.get(ROOT_PARENT_ID, [])

        def build_subtree(comment: Comment, depth: int) -> CommentNode:
            """Build a node and its replies."""
            group = children.get(comment.id, [])
            if group and depth >= self.max_depth:
                logfire.error(
                    "Comment tree deeper than allowed",
                    comment_id=comment.id,
                    post_id=comment.post_id,
                    depth=depth + 1,
                    max_depth=self.max_depth,
                )
                raise DataIntegrityError(
                    f"Comment {comment.id} has replies beyond the maximum depth"
                )
            replies = [build_subtree(child, depth + 1) for child in group]
            return CommentNode.from_comment(comment, replies)

        return [build_subtree(root, 0) for root in start]
