"""Posts CRUD and listing."""
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.api.deps import get_current_user, get_current_user_optional, get_db, get_settings
from bloghub.core.config import Settings
from bloghub.core.filters import build_post_filters, build_sort
from bloghub.core.pagination import pagination_meta, resolve_page
from bloghub.models.user import User
from bloghub.schemas.envelope import Empty, Envelope, Page
from bloghub.schemas.post import PostCreate, PostData, PostDetailData, PostResponse, PostUpdate
from bloghub.services.post_service import (
    create_post,
    delete_post,
    find_author_id,
    get_post_for_viewer,
    list_author_posts,
    list_posts,
    post_detail_to_response,
    post_to_response,
    update_post,
)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=Envelope[PostData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_post_endpoint(
    data: PostCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await create_post(db, current_user, data)
    await db.commit()
    return Envelope(message="Post created successfully", data=PostData(post=post_to_response(post)))


@router.get("", response_model=Envelope[Page[PostResponse]], response_model_exclude_none=True)
async def list_posts_endpoint(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    author: str | None = Query(None, description="Name or email fragment"),
    tags: str | None = Query(None, description="Comma-separated, matches any"),
    search: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    created_from: datetime | None = Query(None, alias="createdFrom"),
    created_to: datetime | None = Query(None, alias="createdTo"),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    page_req = resolve_page(page, limit, settings.POSTS_PAGE_SIZE, settings.MAX_PAGE_LIMIT)

    async def resolve_author(fragment: str) -> UUID | None:
        return await find_author_id(db, fragment)

    post_filter = await build_post_filters(
        resolve_author=resolve_author,
        author=author,
        tags=tags,
        search=search,
        created_from=created_from,
        created_to=created_to,
    )
    posts, total = await list_posts(db, post_filter, build_sort(sort_by, sort_order), page_req)
    return Envelope(
        data=Page(
            items=[post_to_response(p) for p in posts],
            pagination=pagination_meta(total, page_req.page, page_req.limit),
        )
    )


@router.get("/my-posts", response_model=Envelope[Page[PostResponse]], response_model_exclude_none=True)
async def my_posts(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    page_req = resolve_page(page, limit, settings.POSTS_PAGE_SIZE, settings.MAX_PAGE_LIMIT)
    posts, total = await list_author_posts(db, current_user, page_req)
    return Envelope(
        data=Page(
            items=[post_to_response(p) for p in posts],
            pagination=pagination_meta(total, page_req.page, page_req.limit),
        )
    )


@router.get("/{post_id}", response_model=Envelope[PostDetailData], response_model_exclude_none=True)
async def get_post(
    post_id: UUID,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    post, comments = await get_post_for_viewer(db, post_id, current_user)
    await db.commit()
    return Envelope(data=PostDetailData(post=post_detail_to_response(post, comments)))


@router.put("/{post_id}", response_model=Envelope[PostData], response_model_exclude_none=True)
async def update_post_endpoint(
    post_id: UUID,
    data: PostUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await update_post(db, post_id, current_user, data)
    await db.commit()
    return Envelope(message="Post updated successfully", data=PostData(post=post_to_response(post)))


@router.delete("/{post_id}", response_model=Envelope[Empty], response_model_exclude_none=True)
async def delete_post_endpoint(
    post_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await delete_post(db, post_id, current_user)
    await db.commit()
    return Envelope(message="Post deleted successfully", data=Empty())
