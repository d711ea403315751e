"""Unit tests for the SQL built by the PostgreSQL comment repository.

Statements are compiled with the PostgreSQL dialect; no database is needed.
"""

from sqlalchemy.dialects import postgresql

from remark.domain.model import NewComment
from remark.domain.value import CommentId, PostId
from remark.persistence.mappers import new_comment_to_dict, row_to_comment
from remark.persistence.repository.comment import (
    parent_chain_query,
    top_level_query,
)
from tests.conftest import BASE_TIME


def compile_pg(stmt):
    return stmt.compile(dialect=postgresql.dialect())


class TestTopLevelQuery:
    """Tests for top_level_query."""

    def test_filters_are_bound_parameters(self):
        hostile = "x' OR '1'='1"
        compiled = compile_pg(
            top_level_query(post_id=PostId(5), email=hostile, approved=True)
        )
        sql = str(compiled)

        assert hostile not in sql
        assert hostile in compiled.params.values()
        assert 5 in compiled.params.values()
        # A bool cannot carry SQL text; it renders as a boolean literal
        assert "comments.is_approved = true" in sql
        assert "comments.parent_id = %(parent_id_1)s" in sql

    def test_orders_by_create_date_then_id(self):
        sql = str(compile_pg(top_level_query()))

        assert sql.endswith("ORDER BY comments.create_date ASC, comments.id ASC")

    def test_unset_filters_are_left_out(self):
        sql = str(compile_pg(top_level_query()))

        assert "comments.post_id =" not in sql
        assert "comments.email =" not in sql
        assert "comments.is_approved =" not in sql


class TestParentChainQuery:
    """Tests for parent_chain_query."""

    def test_recursive_walk_is_bounded(self):
        compiled = compile_pg(parent_chain_query(CommentId(7), max_hops=4))
        sql = str(compiled)

        assert "WITH RECURSIVE chain" in sql
        assert "chain.hops <" in sql
        assert 7 in compiled.params.values()
        assert 4 in compiled.params.values()


class TestMappers:
    """Tests for row mapping."""

    def test_row_columns_map_to_domain_fields(self):
        comment = row_to_comment(
            {
                "id": 3,
                "post_id": 5,
                "parent_id": 1,
                "name": "Ada",
                "email": "ada@example.com",
                "comment": "Hello",
                "is_approved": True,
                "create_date": BASE_TIME,
            }
        )

        assert comment.text == "Hello"
        assert comment.approved is True
        assert comment.created_at == BASE_TIME

    def test_insert_dict_leaves_store_fields_out(self):
        values = new_comment_to_dict(
            PostId(5),
            NewComment.model_validate(
                {
                    "parent_id": 0,
                    "name": "Ada",
                    "email": "ada@example.com",
                    "text": "Hello",
                }
            ),
        )

        assert values == {
            "post_id": 5,
            "parent_id": 0,
            "name": "Ada",
            "email": "ada@example.com",
            "comment": "Hello",
            "is_approved": False,
        }
