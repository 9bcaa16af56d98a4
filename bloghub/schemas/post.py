"""Pydantic schemas for Post."""
from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import ConfigDict, Field, StringConstraints

from bloghub.schemas.comment import CommentResponse
from bloghub.schemas.user import AuthorSummary, CamelModel

Tag = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, max_length=20)]


class PostInput(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class PostCreate(PostInput):
    title: str = Field(..., min_length=3, max_length=200)
    content: str = Field(..., min_length=10)
    tags: list[Tag] = Field(default_factory=list)
    is_published: bool = True


class PostUpdate(PostInput):
    title: str | None = Field(None, min_length=3, max_length=200)
    content: str | None = Field(None, min_length=10)
    tags: list[Tag] | None = None
    is_published: bool | None = None


class PostResponse(CamelModel):
    id: UUID
    title: str
    content: str
    tags: list[str] = []
    author: AuthorSummary
    is_published: bool = True
    view_count: int = 0
    created_at: datetime
    updated_at: datetime | None = None


class PostDetailResponse(PostResponse):
    comments: list[CommentResponse] = []
    comment_count: int = 0


class PostData(CamelModel):
    post: PostResponse


class PostDetailData(CamelModel):
    post: PostDetailResponse
