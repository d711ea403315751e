"""Unit tests for comment models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from remark.domain.model import CommentNode, NewComment
from remark.domain.value import EmailAddress
from tests.conftest import make_comment


class TestEmailAddress:
    """Tests for EmailAddress value object."""

    def test_trims_and_accepts_basic_address(self):
        assert EmailAddress(" ada@example.com ").root == "ada@example.com"

    @pytest.mark.parametrize(
        "value", ["", "ada", "ada@", "@example.com", "a b@example.com", "ada@example"]
    )
    def test_rejects_malformed_address(self, value):
        with pytest.raises(PydanticValidationError):
            EmailAddress(value)


class TestNewComment:
    """Tests for NewComment."""

    def test_ignores_store_assigned_fields(self):
        """Fields owned by the store are dropped from caller input."""
        new_comment = NewComment.model_validate(
            {
                "parent_id": 0,
                "name": "Ada",
                "email": "ada@example.com",
                "text": "Hello",
                "approved": True,
                "created_at": "2020-01-01T00:00:00Z",
            }
        )

        dumped = new_comment.model_dump()
        assert "approved" not in dumped
        assert "created_at" not in dumped

    def test_is_immutable(self):
        new_comment = NewComment.model_validate(
            {"parent_id": 0, "name": "Ada", "email": "ada@example.com", "text": "Hi"}
        )

        with pytest.raises(PydanticValidationError):
            new_comment.parent_id = 3


class TestCommentNode:
    """Tests for CommentNode."""

    def test_from_comment_defaults_to_no_replies(self):
        node = CommentNode.from_comment(make_comment(1))

        assert node.id == 1
        assert node.replies == []

    def test_from_comment_keeps_replies(self):
        child = CommentNode.from_comment(make_comment(2, parent_id=1))

        node = CommentNode.from_comment(make_comment(1), [child])

        assert node.replies == [child]
        assert node.is_root
        assert not child.is_root
