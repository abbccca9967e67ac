"""Question model — the two outcomes of pressing the button."""

from datetime import datetime
from typing import List

from sqlalchemy import DateTime, ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pressbutton.database import Base


class Question(Base):
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    positive_outcome: Mapped[str] = mapped_column(Text, nullable=False)
    negative_outcome: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # ── Relationships ──
    author: Mapped["User"] = relationship("User", back_populates="questions")  # noqa: F821
    # Children are removed explicitly by the delete cascade, never through the ORM.
    votes: Mapped[List["Vote"]] = relationship(  # noqa: F821
        "Vote", back_populates="question", passive_deletes=True
    )
    comments: Mapped[List["Comment"]] = relationship(  # noqa: F821
        "Comment", back_populates="question", passive_deletes=True
    )
