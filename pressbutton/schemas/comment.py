"""Comment Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from pressbutton.schemas.common import CAMEL_CONFIG


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=1000)
    question_id: int = Field(..., gt=0)

    model_config = CAMEL_CONFIG


class CommentUser(BaseModel):
    id: int
    name: Optional[str] = None
    email: str

    model_config = CAMEL_CONFIG


class CommentOut(BaseModel):
    id: int
    content: str
    question_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: CommentUser

    model_config = CAMEL_CONFIG
