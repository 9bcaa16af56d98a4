from bloghub.models.user import User
from bloghub.models.post import Post, PostTag
from bloghub.models.comment import Comment

__all__ = ["User", "Post", "PostTag", "Comment"]
