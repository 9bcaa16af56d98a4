"""SQLAlchemy declarative base and model imports for Alembic."""
from bloghub.db.session import Base  # noqa: F401
from bloghub.models.user import User  # noqa: F401
from bloghub.models.post import Post, PostTag  # noqa: F401
from bloghub.models.comment import Comment  # noqa: F401

__all__ = ["Base", "User", "Post", "PostTag", "Comment"]
