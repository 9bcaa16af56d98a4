"""API dependencies: settings, db session, auth."""
import logging
from collections.abc import AsyncGenerator
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.core.config import Settings
from bloghub.core.exceptions import AuthError, RateLimitExceeded
from bloghub.core.rate_limiter import FixedWindowRateLimiter
from bloghub.core.security import decode_token
from bloghub.db.session import Database
from bloghub.models.user import User
from bloghub.services.auth_service import get_user_by_id

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def enforce_rate_limit(request: Request) -> None:
    limiter: FixedWindowRateLimiter | None = request.app.state.rate_limiter
    if limiter is None:
        return
    client_ip = request.client.host if request.client else "unknown"
    allowed, retry_after = await limiter.hit(client_ip)
    if not allowed:
        logger.warning("Rate limit exceeded for %s on %s", client_ip, request.url.path)
        raise RateLimitExceeded(retry_after)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.db
    async with database.session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def _user_from_token(token: str, settings: Settings, db: AsyncSession) -> User:
    payload = decode_token(token, settings)
    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        raise AuthError("Invalid token")
    user = await get_user_by_id(db, user_id)
    if user is None:
        raise AuthError("User not found")
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
) -> User:
    if not credentials:
        raise AuthError("Not authorized, no token")
    try:
        return await _user_from_token(credentials.credentials, settings, db)
    except AuthError as exc:
        logger.warning("Rejected credential: %s", exc.message)
        raise


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Like get_current_user, but a missing or bad token just means anonymous."""
    if not credentials:
        return None
    try:
        return await _user_from_token(credentials.credentials, settings, db)
    except AuthError:
        return None
