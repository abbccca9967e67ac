"""Vote persistence helpers."""

from __future__ import annotations

from typing import Dict

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pressbutton.models.vote import ButtonChoice, Vote

# Dialects with a native INSERT .. ON CONFLICT DO UPDATE.
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def upsert_vote(
    db: AsyncSession,
    *,
    user_id: int,
    question_id: int,
    choice: ButtonChoice,
) -> Vote:
    """
    Insert the vote or overwrite the choice of the existing (user, question) row.

    Uses the store's native upsert where available, so concurrent votes from
    the same user resolve inside the database: the last committed choice wins
    and a duplicate row is never created.
    """
    insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is None:
        return await _insert_or_update_vote(
            db, user_id=user_id, question_id=question_id, choice=choice
        )

    stmt = insert(Vote).values(user_id=user_id, question_id=question_id, choice=choice)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Vote.user_id, Vote.question_id],
        set_={"choice": stmt.excluded.choice},
    )
    result = await db.scalars(
        stmt.returning(Vote), execution_options={"populate_existing": True}
    )
    return result.one()


async def _insert_or_update_vote(
    db: AsyncSession,
    *,
    user_id: int,
    question_id: int,
    choice: ButtonChoice,
) -> Vote:
    """Portable fallback: insert in a savepoint, update on unique conflict."""
    try:
        async with db.begin_nested():
            vote = Vote(user_id=user_id, question_id=question_id, choice=choice)
            db.add(vote)
    except IntegrityError:
        await db.execute(
            update(Vote)
            .where(Vote.user_id == user_id, Vote.question_id == question_id)
            .values(choice=choice)
        )
        result = await db.execute(
            select(Vote)
            .where(Vote.user_id == user_id, Vote.question_id == question_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
    await db.refresh(vote)
    return vote


async def count_votes_by_choice(db: AsyncSession, question_id: int) -> Dict[ButtonChoice, int]:
    result = await db.execute(
        select(Vote.choice, func.count(Vote.id))
        .where(Vote.question_id == question_id)
        .group_by(Vote.choice)
    )
    return {choice: int(count) for choice, count in result.all()}


async def delete_votes_by_question(db: AsyncSession, question_id: int) -> int:
    result = await db.execute(delete(Vote).where(Vote.question_id == question_id))
    return result.rowcount or 0
