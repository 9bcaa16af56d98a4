"""Tests for translating filter descriptors into SQLAlchemy clauses."""

import uuid
from datetime import datetime

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.sql.elements import False_

from bloghub.core.filters import Equals, InSet, MatchNone, PostFilter, Range, SortSpec, TextSearch
from bloghub.db.query import POST_QUERY
from bloghub.models.post import Post


def compiled(clause, dialect):
    return str(clause.compile(dialect=dialect))


class TestWhere:
    """Each condition variant maps onto one or more clauses"""

    def test_empty_filter_has_no_clauses(self):
        assert POST_QUERY.where(PostFilter()) == []

    def test_match_none_is_false(self):
        clauses = POST_QUERY.where(PostFilter((MatchNone(),)))
        assert len(clauses) == 1
        assert isinstance(clauses[0], False_)

    def test_equals_maps_logical_field_to_column(self):
        (clause,) = POST_QUERY.where(PostFilter((Equals("author", uuid.uuid4()),)))
        assert "posts.author_id" in compiled(clause, sqlite.dialect())

    def test_tags_use_tag_table_subquery(self):
        (clause,) = POST_QUERY.where(PostFilter((InSet("tags", ("a", "b")),)))
        sql = compiled(clause, sqlite.dialect())
        assert "post_tags.name IN" in sql
        assert "posts.id IN" in sql

    def test_range_emits_both_bounds(self):
        clauses = POST_QUERY.where(
            PostFilter((Range("createdAt", gte=datetime(2024, 1, 1), lte=datetime(2024, 2, 1)),))
        )
        assert len(clauses) == 2

    def test_open_range_emits_one_bound(self):
        clauses = POST_QUERY.where(PostFilter((Range("createdAt", gte=datetime(2024, 1, 1)),)))
        assert len(clauses) == 1

    def test_text_search_on_postgres_uses_tsvector(self):
        (clause,) = POST_QUERY.where(PostFilter((TextSearch("fastapi"),)), dialect="postgresql")
        sql = compiled(clause, postgresql.dialect())
        assert "to_tsvector" in sql
        assert "plainto_tsquery" in sql
        assert "@@" in sql

    def test_text_search_expression_matches_search_index(self):
        """Config and separator are inlined so PostgreSQL can use ix_posts_search"""
        (clause,) = POST_QUERY.where(PostFilter((TextSearch("fastapi"),)), dialect="postgresql")
        sql = compiled(clause, postgresql.dialect())
        assert "to_tsvector('english', posts.title || ' ' || posts.content)" in sql
        assert "plainto_tsquery('english', " in sql

    def test_text_search_elsewhere_uses_like(self):
        (clause,) = POST_QUERY.where(PostFilter((TextSearch("fastapi"),)), dialect="sqlite")
        sql = compiled(clause, sqlite.dialect())
        assert "LIKE" in sql
        assert "posts.title" in sql
        assert "posts.content" in sql


class TestOrderBy:
    def test_known_field(self):
        first, tiebreak = POST_QUERY.order_by(SortSpec("title", descending=False))
        assert str(first) == str(Post.title.asc())
        assert str(tiebreak) == str(Post.id.asc())

    def test_unknown_field_falls_back_to_created_at(self):
        first, _ = POST_QUERY.order_by(SortSpec("password_hash; drop", descending=True))
        assert str(first) == str(Post.created_at.desc())
