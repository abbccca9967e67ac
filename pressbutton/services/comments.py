"""Comments on questions."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pressbutton.database import transaction
from pressbutton.models.comment import Comment
from pressbutton.repositories import comments as comments_repo
from pressbutton.repositories import questions as questions_repo
from pressbutton.repositories import users as users_repo
from pressbutton.schemas.common import Pagination
from pressbutton.services.errors import NotFoundError

logger = logging.getLogger(__name__)


async def list_comments(
    sessions: async_sessionmaker[AsyncSession],
    question_id: int,
    *,
    page: int = 1,
    limit: int = 10,
    timeout: Optional[float] = None,
) -> Tuple[List[Comment], Pagination]:
    async with transaction(sessions, timeout) as db:
        if await questions_repo.get_question_by_id(db, question_id) is None:
            raise NotFoundError(
                f"Question with ID {question_id} not found",
                operation="list_comments",
                question_id=question_id,
            )
        total = await comments_repo.count_comments_for_question(db, question_id)
        comments = await comments_repo.list_comments_for_question(
            db, question_id, offset=(page - 1) * limit, limit=limit
        )
    return comments, Pagination.build(page=page, limit=limit, total=total)


async def create_comment(
    sessions: async_sessionmaker[AsyncSession],
    *,
    user_id: int,
    question_id: int,
    content: str,
    timeout: Optional[float] = None,
) -> Comment:
    async with transaction(sessions, timeout) as db:
        if await questions_repo.get_question_by_id(db, question_id) is None:
            raise NotFoundError(
                f"Question with ID {question_id} not found",
                operation="create_comment",
                question_id=question_id,
            )
        if await users_repo.get_user_by_id(db, user_id) is None:
            raise NotFoundError(
                f"User with ID {user_id} not found",
                operation="create_comment",
                user_id=user_id,
            )
        comment = await comments_repo.create_comment(
            db, user_id=user_id, question_id=question_id, content=content
        )

    logger.info(f"Comment {comment.id} added to question {question_id} by user {user_id}")
    return comment
