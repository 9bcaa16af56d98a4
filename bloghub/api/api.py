"""API router aggregation."""
from fastapi import APIRouter

from bloghub.api.endpoints import auth, comments, posts
from bloghub.schemas.envelope import ErrorEnvelope

# Documents the error body shared by every /api route
ERROR_RESPONSES = {
    code: {"model": ErrorEnvelope, "description": description}
    for code, description in (
        (400, "Validation or conflict error"),
        (401, "Missing, invalid or expired token"),
        (403, "Not allowed to modify this resource"),
        (404, "Resource not found"),
        (429, "Rate limit exceeded"),
        (500, "Server error"),
    )
}

api_router = APIRouter(responses=ERROR_RESPONSES)
api_router.include_router(auth.router)
api_router.include_router(posts.router)
api_router.include_router(comments.router)
