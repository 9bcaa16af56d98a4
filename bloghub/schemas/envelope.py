"""Uniform response wrappers: every body is ``{success, message?, data}``."""
from typing import Generic, TypeVar

from pydantic import BaseModel

from bloghub.core.pagination import PaginationMeta

DataT = TypeVar("DataT")
ItemT = TypeVar("ItemT")


class Envelope(BaseModel, Generic[DataT]):
    success: bool = True
    message: str | None = None
    data: DataT


class Page(BaseModel, Generic[ItemT]):
    items: list[ItemT]
    pagination: PaginationMeta


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str
    errors: list[str] | None = None


class Empty(BaseModel):
    pass
