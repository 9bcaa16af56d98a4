"""Post lifecycle: create, list, read, update, delete."""
import logging
from uuid import UUID

from sqlalchemy import desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.core.exceptions import NotFoundError
from bloghub.core.filters import Equals, PostFilter, SortSpec
from bloghub.core.pagination import PageRequest
from bloghub.core.permissions import Action, authorize, can_view_post, enforce
from bloghub.db.query import POST_QUERY
from bloghub.models.comment import Comment
from bloghub.models.post import Post
from bloghub.models.user import User
from bloghub.schemas.comment import CommentResponse
from bloghub.schemas.post import PostCreate, PostDetailResponse, PostResponse, PostUpdate

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Post not found"


def _dialect(db: AsyncSession) -> str:
    return db.get_bind().dialect.name


async def find_author_id(db: AsyncSession, fragment: str) -> UUID | None:
    """First user whose name or email contains ``fragment`` (case-insensitive)."""
    result = await db.execute(
        select(User.id)
        .where(
            or_(
                User.name.icontains(fragment, autoescape=True),
                User.email.icontains(fragment, autoescape=True),
            )
        )
        .order_by(User.created_at)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_post(db: AsyncSession, post_id: UUID) -> Post | None:
    result = await db.execute(select(Post).where(Post.id == post_id))
    return result.scalar_one_or_none()


async def create_post(db: AsyncSession, author: User, data: PostCreate) -> Post:
    post = Post(
        author=author,
        title=data.title,
        content=data.content,
        is_published=data.is_published,
    )
    post.set_tags(data.tags)
    db.add(post)
    await db.flush()
    await db.refresh(post)
    logger.info("Post %s created by %s", post.id, author.id)
    return post


async def list_posts(
    db: AsyncSession,
    post_filter: PostFilter,
    sort: SortSpec,
    page: PageRequest,
) -> tuple[list[Post], int]:
    """One page of posts matching ``post_filter`` plus the total match count."""
    dialect = _dialect(db)
    q = POST_QUERY.apply(select(Post), post_filter, dialect)
    q = q.order_by(*POST_QUERY.order_by(sort)).offset(page.skip).limit(page.limit)
    count_q = POST_QUERY.apply(select(func.count(Post.id)), post_filter, dialect)

    result = await db.execute(q)
    posts = list(result.scalars().all())
    total = (await db.execute(count_q)).scalar() or 0
    return posts, total


async def list_author_posts(db: AsyncSession, author: User, page: PageRequest) -> tuple[list[Post], int]:
    # Own posts: published and drafts alike
    return await list_posts(db, PostFilter((Equals("author", author.id),)), SortSpec(), page)


async def get_post_for_viewer(db: AsyncSession, post_id: UUID, viewer: User | None) -> tuple[Post, list[Comment]]:
    """Load a post the viewer may see and count the view.

    Unpublished posts of other authors are reported as missing. The view
    counter is a plain read-modify-write; concurrent reads may lose updates.
    """
    post = await get_post(db, post_id)
    if post is None or not can_view_post(post, viewer):
        raise NotFoundError(POST_NOT_FOUND)

    post.view_count = (post.view_count or 0) + 1
    await db.flush()
    await db.refresh(post)

    result = await db.execute(
        select(Comment)
        .where(Comment.post_id == post.id, Comment.is_active.is_(True))
        .order_by(desc(Comment.created_at))
    )
    return post, list(result.scalars().all())


async def update_post(db: AsyncSession, post_id: UUID, actor: User, data: PostUpdate) -> Post:
    post = await get_post(db, post_id)
    enforce(
        authorize(actor.id, actor.role, post.author_id if post else None, Action.UPDATE_POST),
        "Not authorized to update this post",
        POST_NOT_FOUND,
    )
    if data.title is not None:
        post.title = data.title
    if data.content is not None:
        post.content = data.content
    if data.tags is not None:
        post.set_tags(data.tags)
    if data.is_published is not None:
        post.is_published = data.is_published
    await db.flush()
    await db.refresh(post)
    logger.info("Post %s updated by %s", post.id, actor.id)
    return post


async def delete_post(db: AsyncSession, post_id: UUID, actor: User) -> None:
    post = await get_post(db, post_id)
    enforce(
        authorize(actor.id, actor.role, post.author_id if post else None, Action.DELETE_POST),
        "Not authorized to delete this post",
        POST_NOT_FOUND,
    )
    await db.delete(post)
    await db.flush()
    logger.info("Post %s deleted by %s", post_id, actor.id)


def post_to_response(post: Post) -> PostResponse:
    return PostResponse.model_validate(post)


def post_detail_to_response(post: Post, comments: list[Comment]) -> PostDetailResponse:
    base = PostResponse.model_validate(post)
    return PostDetailResponse(
        **base.model_dump(),
        comments=[CommentResponse.model_validate(c) for c in comments],
        comment_count=len(comments),
    )
