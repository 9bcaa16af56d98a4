"""Pydantic schemas for Comment."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from bloghub.schemas.user import AuthorSummary, CamelModel


class CommentInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., min_length=1, max_length=1000)


class CommentResponse(CamelModel):
    id: UUID
    content: str
    author: AuthorSummary
    post_id: UUID
    is_active: bool = True
    created_at: datetime
    updated_at: datetime | None = None


class PostSummary(CamelModel):
    id: UUID
    title: str


class MyCommentResponse(CommentResponse):
    post: PostSummary


class CommentData(CamelModel):
    comment: CommentResponse
