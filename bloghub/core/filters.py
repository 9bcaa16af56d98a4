"""Storage-agnostic filter and sort descriptors for list queries.

The builders here only decide *what* to match. Translating a ``PostFilter``
into SQL is the job of ``bloghub.db.query``.
"""
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Union
from uuid import UUID

DEFAULT_SORT_FIELD = "createdAt"
DEFAULT_SORT_ORDER = "desc"


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True)
class InSet:
    field: str
    values: tuple


@dataclass(frozen=True)
class TextSearch:
    query: str


@dataclass(frozen=True)
class Range:
    field: str
    gte: Any = None
    lte: Any = None


@dataclass(frozen=True)
class MatchNone:
    """Matches nothing; used when a filter value resolves to no entity."""


Condition = Union[Equals, InSet, TextSearch, Range, MatchNone]


@dataclass(frozen=True)
class PostFilter:
    conditions: tuple[Condition, ...] = field(default_factory=tuple)

    @property
    def matches_nothing(self) -> bool:
        return any(isinstance(c, MatchNone) for c in self.conditions)


@dataclass(frozen=True)
class SortSpec:
    field: str = DEFAULT_SORT_FIELD
    descending: bool = True


AuthorResolver = Callable[[str], Awaitable[UUID | None]]


def _naive_utc(value: datetime | None) -> datetime | None:
    # timestamps are stored as naive UTC
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_tags(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [tag.strip().lower() for tag in str(raw).split(",") if tag.strip()]


async def build_post_filters(
    *,
    resolve_author: AuthorResolver,
    author: str | None = None,
    tags: str | None = None,
    search: str | None = None,
    created_from: datetime | None = None,
    created_to: datetime | None = None,
    published_only: bool = True,
) -> PostFilter:
    conditions: list[Condition] = []
    if published_only:
        conditions.append(Equals("isPublished", True))

    if author:
        author_id = await resolve_author(author)
        conditions.append(Equals("author", author_id) if author_id is not None else MatchNone())

    tag_list = parse_tags(tags)
    if tag_list:
        conditions.append(InSet("tags", tuple(tag_list)))

    if search and search.strip():
        conditions.append(TextSearch(search.strip()))

    if created_from is not None or created_to is not None:
        conditions.append(Range("createdAt", gte=_naive_utc(created_from), lte=_naive_utc(created_to)))

    return PostFilter(tuple(conditions))


def build_sort(sort_by: str | None = None, sort_order: str | None = None) -> SortSpec:
    # field names pass through unchecked; the storage adapter decides what it can sort on
    order = str(sort_order or DEFAULT_SORT_ORDER).lower()
    return SortSpec(field=sort_by or DEFAULT_SORT_FIELD, descending=order == "desc")
