"""
Account management: password hashing, JWT issuance, registration, login
and throwaway guest accounts.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pressbutton.config import settings
from pressbutton.database import transaction
from pressbutton.models.user import AccountTypeEnum, User
from pressbutton.repositories import users as users_repo
from pressbutton.services.errors import AuthenticationError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

GUEST_EMAIL_DOMAIN = "guest.pressbutton.app"


# ═══════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════

def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise ValueError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT with an expiry claim."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"sub": str(user.id), "email": user.email, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> int:
    """Return the user id carried by a valid token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id = int(payload.get("sub", 0))
    except (JWTError, ValueError, TypeError) as exc:
        raise AuthenticationError("Invalid access token.", operation="decode_access_token") from exc
    if not user_id:
        raise AuthenticationError("Invalid access token subject.", operation="decode_access_token")
    return user_id


# ═══════════════════════════════════════════════════════════════
#  Account flows
# ═══════════════════════════════════════════════════════════════

async def register(
    sessions: async_sessionmaker[AsyncSession],
    *,
    email: str,
    password: str,
    name: Optional[str] = None,
    timeout: Optional[float] = None,
) -> User:
    # bcrypt is CPU-bound; keep it off the event loop.
    password_hash = await asyncio.to_thread(hash_password, password)

    async with transaction(sessions, timeout) as db:
        if await users_repo.get_user_by_email(db, email) is not None:
            raise ConflictError(
                "User with this email already exists", operation="register", email=email
            )
        user = await users_repo.create_user(
            db, email=email, password_hash=password_hash, name=name
        )

    logger.info(f"Registered user {user.id}")
    return user


async def login(
    sessions: async_sessionmaker[AsyncSession],
    *,
    email: str,
    password: str,
    timeout: Optional[float] = None,
) -> Tuple[User, str]:
    async with transaction(sessions, timeout) as db:
        user = await users_repo.get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User with this email does not exist", operation="login")

    valid = await asyncio.to_thread(verify_password, password, user.password_hash)
    if not valid:
        raise AuthenticationError("Invalid password", operation="login", user_id=user.id)

    logger.info(f"User {user.id} logged in")
    return user, create_access_token(user)


async def guest_signup(
    sessions: async_sessionmaker[AsyncSession], *, timeout: Optional[float] = None
) -> Tuple[User, str, str]:
    """Create a GUEST account; the generated password is only ever returned here."""
    tag = secrets.token_hex(6)
    password = secrets.token_urlsafe(12)
    password_hash = await asyncio.to_thread(hash_password, password)

    async with transaction(sessions, timeout) as db:
        user = await users_repo.create_user(
            db,
            email=f"guest_{tag}@{GUEST_EMAIL_DOMAIN}",
            password_hash=password_hash,
            name=f"Guest {tag[:4]}",
            account_type=AccountTypeEnum.GUEST,
        )

    logger.info(f"Created guest account {user.id}")
    return user, password, create_access_token(user)


async def get_user_from_token(
    sessions: async_sessionmaker[AsyncSession], token: str, *, timeout: Optional[float] = None
) -> User:
    user_id = decode_access_token(token)
    async with transaction(sessions, timeout) as db:
        user = await users_repo.get_user_by_id(db, user_id)
    if user is None:
        raise AuthenticationError("User not found", operation="get_user_from_token")
    return user


async def get_user(
    sessions: async_sessionmaker[AsyncSession], user_id: int, *, timeout: Optional[float] = None
) -> User:
    async with transaction(sessions, timeout) as db:
        user = await users_repo.get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError(
            f"User with ID {user_id} not found", operation="get_user", user_id=user_id
        )
    return user
