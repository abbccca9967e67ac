"""Vote model — one choice per user per question."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pressbutton.database import Base


class ButtonChoice(str, enum.Enum):
    PRESS = "PRESS"
    DONT_PRESS = "DONT_PRESS"


class Vote(Base):
    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("user_id", "question_id", name="uq_votes_user_question"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    choice: Mapped[ButtonChoice] = mapped_column(Enum(ButtonChoice), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    question: Mapped["Question"] = relationship("Question", back_populates="votes")  # noqa: F821
