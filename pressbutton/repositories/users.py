"""User persistence helpers."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pressbutton.models.user import AccountTypeEnum, User


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(
        select(User).where(func.lower(User.email) == normalize_email(email))
    )
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    *,
    email: str,
    password_hash: str,
    name: Optional[str] = None,
    account_type: AccountTypeEnum = AccountTypeEnum.REGULAR,
) -> User:
    user = User(
        email=normalize_email(email),
        password_hash=password_hash,
        name=name,
        account_type=account_type,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user
