"""Question and vote Pydantic schemas."""

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from pressbutton.models.vote import ButtonChoice
from pressbutton.schemas.common import CAMEL_CONFIG

OUTCOME_MIN_LENGTH = 5


class SortBy(str, enum.Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_VOTED = "most_voted"


class QuestionCreateAuth(BaseModel):
    """Outcomes submitted by an authenticated author."""
    positive_outcome: str = Field(..., min_length=OUTCOME_MIN_LENGTH)
    negative_outcome: str = Field(..., min_length=OUTCOME_MIN_LENGTH)

    model_config = CAMEL_CONFIG

    @field_validator("positive_outcome", "negative_outcome")
    @classmethod
    def _strip_outcome(cls, value: str) -> str:
        stripped = value.strip()
        if len(stripped) < OUTCOME_MIN_LENGTH:
            raise ValueError(
                f"Outcome must be at least {OUTCOME_MIN_LENGTH} characters long"
            )
        return stripped


class QuestionCreate(QuestionCreateAuth):
    """Outcomes plus an explicit author id (unauthenticated create)."""
    author_id: int = Field(..., gt=0)


class QuestionOut(BaseModel):
    id: int
    positive_outcome: str
    negative_outcome: str
    author_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = CAMEL_CONFIG


class QuestionListItem(QuestionOut):
    vote_count: int = 0
    comment_count: int = 0


class QuestionsQuery(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    search: Optional[str] = None
    author_id: Optional[int] = Field(None, ge=1)
    sort_by: SortBy = SortBy.NEWEST

    model_config = CAMEL_CONFIG

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class DeleteQuestionRequest(BaseModel):
    question_id: int = Field(..., gt=0)
    author_id: int = Field(..., gt=0)

    model_config = CAMEL_CONFIG


class VoteRequest(BaseModel):
    user_id: int = Field(..., gt=0)
    choice: ButtonChoice

    model_config = CAMEL_CONFIG


class VoteOut(BaseModel):
    id: int
    user_id: int
    question_id: int
    choice: ButtonChoice
    created_at: Optional[datetime] = None

    model_config = CAMEL_CONFIG


class VoteStatus(BaseModel):
    positive_votes: int
    negative_votes: int
    total_votes: int
    positive_percentage: float

    model_config = CAMEL_CONFIG
