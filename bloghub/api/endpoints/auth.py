"""Auth endpoints: signup, login, profile."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.api.deps import get_current_user, get_db, get_settings
from bloghub.core.config import Settings
from bloghub.core.security import create_access_token
from bloghub.models.user import User
from bloghub.schemas.envelope import Envelope
from bloghub.schemas.user import AuthData, LoginRequest, ProfileUpdate, SignupRequest, UserData
from bloghub.services.auth_service import authenticate_user, create_user, update_profile, user_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=Envelope[AuthData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    data: SignupRequest,
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    user = await create_user(db, data)
    await db.commit()
    logger.info("Signup success: %s", user.id)
    return Envelope(
        message="User registered successfully",
        data=AuthData(user=user_to_response(user), token=create_access_token(user.id, settings)),
    )


@router.post("/login", response_model=Envelope[AuthData], response_model_exclude_none=True)
async def login(
    data: LoginRequest,
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    user = await authenticate_user(db, data.email, data.password)
    logger.info("Login success: %s", user.id)
    return Envelope(
        message="Login successful",
        data=AuthData(user=user_to_response(user), token=create_access_token(user.id, settings)),
    )


@router.get("/me", response_model=Envelope[UserData], response_model_exclude_none=True)
async def me(current_user: User = Depends(get_current_user)):
    return Envelope(data=UserData(user=user_to_response(current_user)))


@router.put("/me", response_model=Envelope[UserData], response_model_exclude_none=True)
async def update_me(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await update_profile(db, current_user, data)
    await db.commit()
    return Envelope(message="Profile updated successfully", data=UserData(user=user_to_response(user)))
