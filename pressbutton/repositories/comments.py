"""Comment persistence helpers."""

from __future__ import annotations

from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pressbutton.models.comment import Comment


async def create_comment(
    db: AsyncSession,
    *,
    user_id: int,
    question_id: int,
    content: str,
) -> Comment:
    comment = Comment(user_id=user_id, question_id=question_id, content=content)
    db.add(comment)
    await db.flush()
    result = await db.execute(
        select(Comment)
        .options(selectinload(Comment.user))
        .where(Comment.id == comment.id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def count_comments_for_question(db: AsyncSession, question_id: int) -> int:
    result = await db.execute(
        select(func.count(Comment.id)).where(Comment.question_id == question_id)
    )
    return int(result.scalar_one())


async def list_comments_for_question(
    db: AsyncSession,
    question_id: int,
    *,
    offset: int = 0,
    limit: int = 10,
) -> List[Comment]:
    """Newest comments first, each with its author loaded."""
    result = await db.execute(
        select(Comment)
        .options(selectinload(Comment.user))
        .where(Comment.question_id == question_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all())


async def delete_comments_by_question(db: AsyncSession, question_id: int) -> int:
    result = await db.execute(delete(Comment).where(Comment.question_id == question_id))
    return result.rowcount or 0
