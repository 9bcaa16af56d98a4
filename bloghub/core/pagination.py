"""Page/limit normalization and pagination metadata for list endpoints."""
import math
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# OFFSET/LIMIT are bound as signed 64-bit integers by every supported driver
MAX_SQL_INT = 2**63 - 1


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int
    skip: int


class PaginationMeta(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool


def _to_int(value: str | int | None) -> int | None:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def resolve_page(
    page: str | int | None,
    limit: str | int | None,
    default_limit: int,
    max_limit: int | None = None,
) -> PageRequest:
    """Turn raw ``page``/``limit`` query values into an offset window.

    Bad, missing or out-of-range input never fails: it falls back to page 1
    and ``default_limit``. ``max_limit`` clamps the limit when configured.
    """
    limit_num = _to_int(limit)
    if limit_num is None or limit_num < 1:
        limit_num = default_limit
    elif limit_num > MAX_SQL_INT:
        limit_num = max_limit or default_limit
    if max_limit is not None and limit_num > max_limit:
        limit_num = max_limit

    page_num = _to_int(page)
    if page_num is None or page_num < 1 or (page_num - 1) * limit_num > MAX_SQL_INT:
        page_num = 1
    return PageRequest(page=page_num, limit=limit_num, skip=(page_num - 1) * limit_num)


def pagination_meta(total_items: int, current_page: int, items_per_page: int) -> PaginationMeta:
    total_pages = max(1, math.ceil(total_items / items_per_page))
    return PaginationMeta(
        current_page=current_page,
        total_pages=total_pages,
        total_items=total_items,
        items_per_page=items_per_page,
        has_next_page=current_page < total_pages,
        has_prev_page=current_page > 1,
    )
