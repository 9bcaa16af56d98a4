"""Ownership rules for posts and comments.

Mutations go through ``authorize``. Admins override ownership for post
update/delete and comment delete, but comment update stays owner-only.
Reading an unpublished post is a separate rule (``can_view_post``) and gives
admins nothing extra.
"""
from enum import Enum
from typing import Any
from uuid import UUID

from bloghub.core.exceptions import AuthorizationError, NotFoundError

ADMIN_ROLE = "admin"
USER_ROLE = "user"


class Decision(str, Enum):
    ALLOW = "allow"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


class Action(str, Enum):
    UPDATE_POST = "update_post"
    DELETE_POST = "delete_post"
    UPDATE_COMMENT = "update_comment"
    DELETE_COMMENT = "delete_comment"


ADMIN_OVERRIDE: dict[Action, bool] = {
    Action.UPDATE_POST: True,
    Action.DELETE_POST: True,
    Action.UPDATE_COMMENT: False,
    Action.DELETE_COMMENT: True,
}


def authorize(actor_id: UUID, actor_role: str, owner_id: UUID | None, action: Action) -> Decision:
    if owner_id is None:
        return Decision.NOT_FOUND
    if actor_role == ADMIN_ROLE and ADMIN_OVERRIDE[action]:
        return Decision.ALLOW
    if owner_id == actor_id:
        return Decision.ALLOW
    return Decision.FORBIDDEN


def enforce(decision: Decision, forbidden_message: str, not_found_message: str = "Resource not found") -> None:
    if decision is Decision.NOT_FOUND:
        raise NotFoundError(not_found_message)
    if decision is Decision.FORBIDDEN:
        raise AuthorizationError(forbidden_message)


def can_view_post(post: Any, actor: Any | None) -> bool:
    """Published posts are public; unpublished ones only for their author."""
    if post.is_published:
        return True
    return actor is not None and post.author_id == actor.id
