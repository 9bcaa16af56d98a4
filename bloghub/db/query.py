"""Translate filter/sort descriptors into SQLAlchemy clauses."""
import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select, String, false, func, literal_column, or_, select
from sqlalchemy.sql.elements import ColumnElement

from bloghub.core.filters import (
    DEFAULT_SORT_FIELD,
    Equals,
    InSet,
    MatchNone,
    PostFilter,
    Range,
    SortSpec,
    TextSearch,
)
from bloghub.models.post import Post, PostTag

logger = logging.getLogger(__name__)

# Inlined rather than bound so the expression matches the ix_posts_search index
TS_CONFIG = literal_column("'english'")
TS_SEPARATOR = literal_column("' '", String)


@dataclass(frozen=True)
class Collection:
    """A multi-valued field stored as rows in a child table."""

    owner_key: Any  # child column pointing at the parent id
    value: Any  # child column holding the value


@dataclass
class QueryTranslator:
    id_column: Any
    columns: dict[str, Any]
    text_columns: tuple = ()
    collections: dict[str, Collection] = field(default_factory=dict)

    def _column(self, name: str):
        try:
            return self.columns[name]
        except KeyError:
            raise ValueError(f"Unknown filter field: {name}")

    def _text_search(self, query: str, dialect: str) -> ColumnElement:
        if dialect == "postgresql":
            document = self.text_columns[0]
            for column in self.text_columns[1:]:
                document = document + TS_SEPARATOR + column
            return func.to_tsvector(TS_CONFIG, document).op("@@")(func.plainto_tsquery(TS_CONFIG, query))
        return or_(*(column.icontains(query, autoescape=True) for column in self.text_columns))

    def where(self, post_filter: PostFilter, dialect: str = "default") -> list[ColumnElement]:
        clauses: list[ColumnElement] = []
        for condition in post_filter.conditions:
            if isinstance(condition, MatchNone):
                clauses.append(false())
            elif isinstance(condition, Equals):
                clauses.append(self._column(condition.field) == condition.value)
            elif isinstance(condition, InSet):
                if condition.field in self.collections:
                    coll = self.collections[condition.field]
                    subq = select(coll.owner_key).where(coll.value.in_(condition.values))
                    clauses.append(self.id_column.in_(subq))
                else:
                    clauses.append(self._column(condition.field).in_(condition.values))
            elif isinstance(condition, TextSearch):
                clauses.append(self._text_search(condition.query, dialect))
            elif isinstance(condition, Range):
                column = self._column(condition.field)
                if condition.gte is not None:
                    clauses.append(column >= condition.gte)
                if condition.lte is not None:
                    clauses.append(column <= condition.lte)
        return clauses

    def order_by(self, sort: SortSpec) -> list[ColumnElement]:
        column = self.columns.get(sort.field)
        if column is None:
            logger.debug("Unsortable field %r, falling back to %s", sort.field, DEFAULT_SORT_FIELD)
            column = self.columns[DEFAULT_SORT_FIELD]
        if sort.descending:
            return [column.desc(), self.id_column.desc()]
        return [column.asc(), self.id_column.asc()]

    def apply(self, stmt: Select, post_filter: PostFilter, dialect: str = "default") -> Select:
        return stmt.where(*self.where(post_filter, dialect))


POST_QUERY = QueryTranslator(
    id_column=Post.id,
    columns={
        "id": Post.id,
        "author": Post.author_id,
        "title": Post.title,
        "isPublished": Post.is_published,
        "viewCount": Post.view_count,
        "createdAt": Post.created_at,
        "updatedAt": Post.updated_at,
    },
    text_columns=(Post.title, Post.content),
    collections={"tags": Collection(owner_key=PostTag.post_id, value=PostTag.name)},
)
