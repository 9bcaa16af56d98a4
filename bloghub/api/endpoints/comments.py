"""Comment endpoints, both under a post and standalone."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.api.deps import get_current_user, get_db, get_settings
from bloghub.core.config import Settings
from bloghub.core.pagination import pagination_meta, resolve_page
from bloghub.models.user import User
from bloghub.schemas.comment import CommentData, CommentInput, CommentResponse, MyCommentResponse
from bloghub.schemas.envelope import Empty, Envelope, Page
from bloghub.services.comment_service import (
    add_comment,
    comment_to_response,
    delete_comment,
    list_author_comments,
    list_post_comments,
    my_comment_to_response,
    update_comment,
)

router = APIRouter(tags=["comments"])


@router.post(
    "/posts/{post_id}/comments",
    response_model=Envelope[CommentData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    data: CommentInput,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await add_comment(db, post_id, current_user, data)
    await db.commit()
    return Envelope(message="Comment added successfully", data=CommentData(comment=comment_to_response(comment)))


@router.get(
    "/posts/{post_id}/comments",
    response_model=Envelope[Page[CommentResponse]],
    response_model_exclude_none=True,
)
async def list_comments(
    post_id: UUID,
    page: str | None = Query(None),
    limit: str | None = Query(None),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    page_req = resolve_page(page, limit, settings.COMMENTS_PAGE_SIZE, settings.MAX_PAGE_LIMIT)
    comments, total = await list_post_comments(db, post_id, page_req)
    return Envelope(
        data=Page(
            items=[comment_to_response(c) for c in comments],
            pagination=pagination_meta(total, page_req.page, page_req.limit),
        )
    )


@router.get(
    "/comments/my-comments",
    response_model=Envelope[Page[MyCommentResponse]],
    response_model_exclude_none=True,
)
async def my_comments(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    page_req = resolve_page(page, limit, settings.COMMENTS_PAGE_SIZE, settings.MAX_PAGE_LIMIT)
    comments, total = await list_author_comments(db, current_user, page_req)
    return Envelope(
        data=Page(
            items=[my_comment_to_response(c) for c in comments],
            pagination=pagination_meta(total, page_req.page, page_req.limit),
        )
    )


@router.put("/comments/{comment_id}", response_model=Envelope[CommentData], response_model_exclude_none=True)
async def update_comment_endpoint(
    comment_id: UUID,
    data: CommentInput,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await update_comment(db, comment_id, current_user, data)
    await db.commit()
    return Envelope(message="Comment updated successfully", data=CommentData(comment=comment_to_response(comment)))


@router.delete("/comments/{comment_id}", response_model=Envelope[Empty], response_model_exclude_none=True)
async def delete_comment_endpoint(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await delete_comment(db, comment_id, current_user)
    await db.commit()
    return Envelope(message="Comment deleted successfully", data=Empty())
