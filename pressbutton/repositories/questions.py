"""Question persistence helpers: lookups, filtered listing and row deletion."""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from pressbutton.models.comment import Comment
from pressbutton.models.question import Question
from pressbutton.models.user import User
from pressbutton.models.vote import Vote
from pressbutton.schemas.question import SortBy


class QuestionWithCounts(NamedTuple):
    question: Question
    vote_count: int
    comment_count: int


async def create_question(
    db: AsyncSession,
    *,
    author_id: int,
    positive_outcome: str,
    negative_outcome: str,
) -> Question:
    question = Question(
        author_id=author_id,
        positive_outcome=positive_outcome,
        negative_outcome=negative_outcome,
    )
    db.add(question)
    await db.flush()
    await db.refresh(question)
    return question


async def get_question_by_id(db: AsyncSession, question_id: int) -> Optional[Question]:
    return await db.get(Question, question_id)


async def find_question_by_id_and_author(
    db: AsyncSession, question_id: int, author_id: int
) -> Optional[Question]:
    """Match id and author in one query so a foreign question looks missing."""
    result = await db.execute(
        select(Question).where(
            Question.id == question_id,
            Question.author_id == author_id,
        )
    )
    return result.scalar_one_or_none()


async def question_and_user_exist(
    db: AsyncSession, question_id: int, user_id: int
) -> Tuple[bool, bool]:
    """Probe both ids in a single round-trip."""
    result = await db.execute(
        select(
            select(Question.id).where(Question.id == question_id).exists(),
            select(User.id).where(User.id == user_id).exists(),
        )
    )
    question_found, user_found = result.one()
    return bool(question_found), bool(user_found)


async def delete_question_row(db: AsyncSession, question_id: int) -> int:
    result = await db.execute(delete(Question).where(Question.id == question_id))
    return result.rowcount or 0


def _filters(search: Optional[str], author_id: Optional[int]) -> list:
    clauses = []
    if search:
        clauses.append(
            or_(
                Question.positive_outcome.icontains(search, autoescape=True),
                Question.negative_outcome.icontains(search, autoescape=True),
            )
        )
    if author_id is not None:
        clauses.append(Question.author_id == author_id)
    return clauses


async def count_questions(
    db: AsyncSession,
    *,
    search: Optional[str] = None,
    author_id: Optional[int] = None,
) -> int:
    result = await db.execute(
        select(func.count(Question.id)).where(*_filters(search, author_id))
    )
    return int(result.scalar_one())


async def list_questions(
    db: AsyncSession,
    *,
    search: Optional[str] = None,
    author_id: Optional[int] = None,
    sort_by: SortBy = SortBy.NEWEST,
    offset: int = 0,
    limit: int = 10,
) -> List[QuestionWithCounts]:
    vote_counts = (
        select(Vote.question_id, func.count(Vote.id).label("n"))
        .group_by(Vote.question_id)
        .subquery()
    )
    comment_counts = (
        select(Comment.question_id, func.count(Comment.id).label("n"))
        .group_by(Comment.question_id)
        .subquery()
    )
    vote_count = func.coalesce(vote_counts.c.n, 0)
    comment_count = func.coalesce(comment_counts.c.n, 0)

    if sort_by == SortBy.OLDEST:
        order = (Question.created_at.asc(), Question.id.asc())
    elif sort_by == SortBy.MOST_VOTED:
        order = (vote_count.desc(), Question.created_at.desc(), Question.id.desc())
    else:
        order = (Question.created_at.desc(), Question.id.desc())

    result = await db.execute(
        select(Question, vote_count, comment_count)
        .outerjoin(vote_counts, vote_counts.c.question_id == Question.id)
        .outerjoin(comment_counts, comment_counts.c.question_id == Question.id)
        .where(*_filters(search, author_id))
        .order_by(*order)
        .offset(offset)
        .limit(limit)
    )
    return [
        QuestionWithCounts(question, int(votes), int(comments))
        for question, votes, comments in result.all()
    ]


async def random_unvoted_question(
    db: AsyncSession, user_id: Optional[int] = None
) -> Optional[Question]:
    stmt = select(Question)
    if user_id is not None:
        voted = select(Vote.question_id).where(Vote.user_id == user_id)
        stmt = stmt.where(Question.id.not_in(voted))
    result = await db.execute(stmt.order_by(func.random()).limit(1))
    return result.scalar_one_or_none()
