"""Authentication and profile business logic."""
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.core.exceptions import AuthError, DomainConflict
from bloghub.core.permissions import ADMIN_ROLE, USER_ROLE
from bloghub.core.security import get_password_hash, verify_password
from bloghub.models.user import User
from bloghub.schemas.user import ProfileUpdate, SignupRequest, UserResponse

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, data: SignupRequest, role: str = USER_ROLE) -> User:
    if await get_user_by_email(db, data.email):
        raise DomainConflict("email already exists")
    user = User(
        name=data.name,
        email=data.email,
        password_hash=get_password_hash(data.password),
        role=role,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Login failed for %s", email)
        raise AuthError("Invalid credentials")
    return user


async def update_profile(db: AsyncSession, user: User, data: ProfileUpdate) -> User:
    if data.email is not None and data.email != user.email:
        if await get_user_by_email(db, data.email):
            raise DomainConflict("email already exists")
        user.email = data.email
    if data.name is not None:
        user.name = data.name
    await db.flush()
    await db.refresh(user)
    return user


async def promote_to_admin(db: AsyncSession, email: str) -> User | None:
    user = await get_user_by_email(db, email)
    if user is None:
        return None
    user.role = ADMIN_ROLE
    await db.flush()
    return user


def user_to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)
