"""Comment lifecycle: add, list, update, soft delete."""
import logging
from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bloghub.core.exceptions import NotFoundError
from bloghub.core.pagination import PageRequest
from bloghub.core.permissions import Action, authorize, enforce
from bloghub.models.comment import Comment
from bloghub.models.user import User
from bloghub.schemas.comment import CommentInput, CommentResponse, MyCommentResponse
from bloghub.services.auth_service import get_user_by_id
from bloghub.services.post_service import POST_NOT_FOUND, get_post

logger = logging.getLogger(__name__)

COMMENT_NOT_FOUND = "Comment not found"


async def get_comment(db: AsyncSession, comment_id: UUID) -> Comment | None:
    result = await db.execute(select(Comment).where(Comment.id == comment_id))
    return result.scalar_one_or_none()


async def add_comment(db: AsyncSession, post_id: UUID, author: User, data: CommentInput) -> Comment:
    """Create a comment on a published post.

    A draft post answers exactly like a missing one so its existence does
    not leak. Author and post are both checked before anything is written.
    """
    post = await get_post(db, post_id)
    if post is None or not post.is_published:
        raise NotFoundError(POST_NOT_FOUND)
    if await get_user_by_id(db, author.id) is None:
        raise NotFoundError("Author not found")

    comment = Comment(author=author, post_id=post.id, content=data.content)
    db.add(comment)
    await db.flush()
    await db.refresh(comment)
    logger.info("Comment %s added to post %s by %s", comment.id, post.id, author.id)
    return comment


async def _page_of_comments(db: AsyncSession, conditions: list, page: PageRequest, *options) -> tuple[list[Comment], int]:
    q = (
        select(Comment)
        .where(*conditions)
        .order_by(desc(Comment.created_at), desc(Comment.id))
        .offset(page.skip)
        .limit(page.limit)
    )
    if options:
        q = q.options(*options)
    result = await db.execute(q)
    total = (await db.execute(select(func.count(Comment.id)).where(*conditions))).scalar() or 0
    return list(result.scalars().all()), total


async def list_post_comments(db: AsyncSession, post_id: UUID, page: PageRequest) -> tuple[list[Comment], int]:
    if await get_post(db, post_id) is None:
        raise NotFoundError(POST_NOT_FOUND)
    return await _page_of_comments(
        db, [Comment.post_id == post_id, Comment.is_active.is_(True)], page
    )


async def list_author_comments(db: AsyncSession, author: User, page: PageRequest) -> tuple[list[Comment], int]:
    return await _page_of_comments(
        db,
        [Comment.author_id == author.id, Comment.is_active.is_(True)],
        page,
        selectinload(Comment.post),
    )


async def update_comment(db: AsyncSession, comment_id: UUID, actor: User, data: CommentInput) -> Comment:
    comment = await get_comment(db, comment_id)
    # Owner only: admins cannot rewrite other people's comments
    enforce(
        authorize(actor.id, actor.role, comment.author_id if comment else None, Action.UPDATE_COMMENT),
        "Not authorized to update this comment",
        COMMENT_NOT_FOUND,
    )
    comment.content = data.content
    await db.flush()
    await db.refresh(comment)
    return comment


async def delete_comment(db: AsyncSession, comment_id: UUID, actor: User) -> None:
    comment = await get_comment(db, comment_id)
    enforce(
        authorize(actor.id, actor.role, comment.author_id if comment else None, Action.DELETE_COMMENT),
        "Not authorized to delete this comment",
        COMMENT_NOT_FOUND,
    )
    comment.is_active = False
    await db.flush()
    logger.info("Comment %s deactivated by %s", comment.id, actor.id)


def comment_to_response(comment: Comment) -> CommentResponse:
    return CommentResponse.model_validate(comment)


def my_comment_to_response(comment: Comment) -> MyCommentResponse:
    return MyCommentResponse.model_validate(comment)
