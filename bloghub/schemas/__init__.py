from bloghub.schemas.user import (
    SignupRequest,
    LoginRequest,
    ProfileUpdate,
    UserResponse,
    AuthorSummary,
)
from bloghub.schemas.post import PostCreate, PostUpdate, PostResponse, PostDetailResponse
from bloghub.schemas.comment import CommentInput, CommentResponse, MyCommentResponse
from bloghub.schemas.envelope import Envelope, Page, ErrorEnvelope
