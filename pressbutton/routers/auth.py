"""
Authentication router — email/password accounts, guest accounts and
Bearer JWT resolution.

Endpoints:
    POST /auth/register      → create a regular account
    POST /auth/login         → exchange credentials for a token
    POST /auth/guest-signup  → create a guest account + token
    GET  /auth/profile       → the authenticated user
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pressbutton.config import settings
from pressbutton.database import get_sessionmaker
from pressbutton.models.user import User
from pressbutton.schemas.user import (
    AuthResponse,
    GuestCredentials,
    LoginRequest,
    RegisterRequest,
    UserOut,
)
from pressbutton.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["auth"])

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
) -> User:
    """Resolve the Bearer token to a User; 401 when absent or invalid."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return await auth_service.get_user_from_token(
        sessions, credentials.credentials, timeout=settings.STORE_TIMEOUT_SECONDS
    )


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
):
    return await auth_service.register(
        sessions,
        email=payload.email,
        password=payload.password,
        name=payload.name,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
):
    user, token = await auth_service.login(
        sessions,
        email=payload.email,
        password=payload.password,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )
    return AuthResponse(user=UserOut.model_validate(user), access_token=token)


@router.post("/guest-signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def guest_signup(sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker)):
    """Create a throwaway account so anonymous visitors can vote and comment."""
    user, password, token = await auth_service.guest_signup(
        sessions, timeout=settings.STORE_TIMEOUT_SECONDS
    )
    return AuthResponse(
        user=UserOut.model_validate(user),
        access_token=token,
        guest_credentials=GuestCredentials(email=user.email, password=password),
    )


@router.get("/profile", response_model=UserOut)
async def profile(current_user: User = Depends(get_current_user)):
    return current_user
