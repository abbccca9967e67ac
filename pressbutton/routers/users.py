"""Users router – public profiles."""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pressbutton.config import settings
from pressbutton.database import get_sessionmaker
from pressbutton.models.user import User
from pressbutton.routers.auth import get_current_user
from pressbutton.schemas.user import UserOut
from pressbutton.services import auth as auth_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserOut)
async def read_me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's profile."""
    return current_user


@router.get("/{user_id}", response_model=UserOut)
async def read_user(
    user_id: int = Path(..., gt=0),
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
):
    """Get a public user profile by ID."""
    return await auth_service.get_user(
        sessions, user_id, timeout=settings.STORE_TIMEOUT_SECONDS
    )
