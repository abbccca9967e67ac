"""User model — registered and guest accounts."""

import enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pressbutton.database import Base


class AccountTypeEnum(str, enum.Enum):
    REGULAR = "REGULAR"
    GUEST = "GUEST"


class User(Base):
    __tablename__ = "users"

    # ── Identity ──
    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    name: Mapped[Optional[str]] = mapped_column(String(200))
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    account_type: Mapped[AccountTypeEnum] = mapped_column(
        Enum(AccountTypeEnum), default=AccountTypeEnum.REGULAR
    )

    # ── Timestamps ──
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # ── Relationships ──
    questions: Mapped[List["Question"]] = relationship(  # noqa: F821
        "Question", back_populates="author", passive_deletes=True
    )
