"""
Question lifecycle: creation, ownership-gated cascading delete,
one-vote-per-user voting and vote aggregates.

Every public function opens its own transactional unit through
``database.transaction``; a failure anywhere inside rolls the unit back.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pressbutton.database import transaction
from pressbutton.models.question import Question
from pressbutton.models.vote import ButtonChoice, Vote
from pressbutton.repositories import comments as comments_repo
from pressbutton.repositories import questions as questions_repo
from pressbutton.repositories import users as users_repo
from pressbutton.repositories import votes as votes_repo
from pressbutton.repositories.questions import QuestionWithCounts
from pressbutton.schemas.common import Pagination
from pressbutton.schemas.question import QuestionsQuery, VoteStatus
from pressbutton.services.errors import InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)

Sessions = async_sessionmaker[AsyncSession]

_TWO_PLACES = Decimal("0.01")


def positive_percentage(positive_votes: int, total_votes: int) -> float:
    """Share of PRESS votes as a percentage rounded half-up to two places; 0 with no votes."""
    if total_votes <= 0:
        return 0.0
    share = Decimal(positive_votes * 100) / Decimal(total_votes)
    return float(share.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


async def create_question(
    sessions: Sessions,
    *,
    author_id: int,
    positive_outcome: str,
    negative_outcome: str,
    timeout: Optional[float] = None,
) -> Question:
    positive_outcome = (positive_outcome or "").strip()
    negative_outcome = (negative_outcome or "").strip()
    if not positive_outcome:
        raise InvalidRequestError(
            "Positive outcome is required and cannot be empty", operation="create_question"
        )
    if not negative_outcome:
        raise InvalidRequestError(
            "Negative outcome is required and cannot be empty", operation="create_question"
        )

    async with transaction(sessions, timeout) as db:
        if await users_repo.get_user_by_id(db, author_id) is None:
            raise NotFoundError(
                f"User with ID {author_id} not found",
                operation="create_question",
                author_id=author_id,
            )
        question = await questions_repo.create_question(
            db,
            author_id=author_id,
            positive_outcome=positive_outcome,
            negative_outcome=negative_outcome,
        )

    logger.info(f"Question {question.id} created by user {author_id}")
    return question


async def get_question(
    sessions: Sessions, question_id: int, *, timeout: Optional[float] = None
) -> Question:
    async with transaction(sessions, timeout) as db:
        question = await questions_repo.get_question_by_id(db, question_id)
    if question is None:
        raise NotFoundError(
            f"Question with ID {question_id} not found",
            operation="get_question",
            question_id=question_id,
        )
    return question


async def get_random_question(
    sessions: Sessions, user_id: Optional[int] = None, *, timeout: Optional[float] = None
) -> Optional[Question]:
    """A random question the user has not voted on yet (any question when anonymous)."""
    async with transaction(sessions, timeout) as db:
        return await questions_repo.random_unvoted_question(db, user_id)


async def delete_question(
    sessions: Sessions,
    question_id: int,
    author_id: int,
    *,
    timeout: Optional[float] = None,
) -> bool:
    """
    Delete a question owned by ``author_id`` together with every comment and
    vote on it, whoever wrote them.

    A missing question and a question owned by someone else both raise the
    same NotFoundError. The three deletes commit together or not at all.
    """
    logger.info(f"Deleting question {question_id} requested by author {author_id}")
    try:
        async with transaction(sessions, timeout) as db:
            question = await questions_repo.find_question_by_id_and_author(
                db, question_id, author_id
            )
            if question is None:
                raise NotFoundError(
                    f"Question {question_id} not found or not owned by user {author_id}",
                    operation="delete_question",
                    question_id=question_id,
                    author_id=author_id,
                )

            # Children first so enforced foreign keys never see an orphan.
            deleted_comments = await comments_repo.delete_comments_by_question(db, question_id)
            deleted_votes = await votes_repo.delete_votes_by_question(db, question_id)
            await questions_repo.delete_question_row(db, question_id)
    except NotFoundError as e:
        logger.warning(f"Delete rejected: {e}")
        raise
    except Exception:
        logger.exception(f"Deleting question {question_id} failed; transaction rolled back")
        raise

    logger.info(
        f"Deleted question {question_id} with {deleted_comments} comments "
        f"and {deleted_votes} votes"
    )
    return True


async def vote_question(
    sessions: Sessions,
    question_id: int,
    user_id: int,
    choice: ButtonChoice,
    *,
    timeout: Optional[float] = None,
) -> Vote:
    """Record the user's choice, replacing any earlier vote on the same question."""
    choice = ButtonChoice(choice)
    logger.info(f"Vote {choice.value} on question {question_id} by user {user_id}")
    try:
        async with transaction(sessions, timeout) as db:
            question_found, user_found = await questions_repo.question_and_user_exist(
                db, question_id, user_id
            )
            if not question_found:
                raise NotFoundError(
                    f"Question with ID {question_id} not found",
                    operation="vote_question",
                    question_id=question_id,
                    user_id=user_id,
                )
            if not user_found:
                raise NotFoundError(
                    f"User with ID {user_id} not found",
                    operation="vote_question",
                    question_id=question_id,
                    user_id=user_id,
                )
            vote = await votes_repo.upsert_vote(
                db, user_id=user_id, question_id=question_id, choice=choice
            )
    except NotFoundError as e:
        logger.warning(f"Vote rejected: {e}")
        raise
    except Exception:
        logger.exception(f"Vote on question {question_id} by user {user_id} failed")
        raise

    logger.info(f"Vote {vote.id} stored: question {question_id}, user {user_id}, {vote.choice.value}")
    return vote


async def get_vote_status(
    sessions: Sessions, question_id: int, *, timeout: Optional[float] = None
) -> VoteStatus:
    async with transaction(sessions, timeout) as db:
        if await questions_repo.get_question_by_id(db, question_id) is None:
            raise NotFoundError(
                f"Question with ID {question_id} not found",
                operation="get_vote_status",
                question_id=question_id,
            )
        counts = await votes_repo.count_votes_by_choice(db, question_id)

    # Only the two known choices make up the denominator.
    positive_votes = counts.get(ButtonChoice.PRESS, 0)
    negative_votes = counts.get(ButtonChoice.DONT_PRESS, 0)
    total_votes = positive_votes + negative_votes
    return VoteStatus(
        positive_votes=positive_votes,
        negative_votes=negative_votes,
        total_votes=total_votes,
        positive_percentage=positive_percentage(positive_votes, total_votes),
    )


async def list_questions(
    sessions: Sessions, query: QuestionsQuery, *, timeout: Optional[float] = None
) -> Tuple[List[QuestionWithCounts], Pagination]:
    """One page of questions plus the total, read in the same transaction."""
    filters = {"search": query.search or None, "author_id": query.author_id}
    async with transaction(sessions, timeout) as db:
        rows = await questions_repo.list_questions(
            db,
            sort_by=query.sort_by,
            offset=query.offset,
            limit=query.limit,
            **filters,
        )
        total = await questions_repo.count_questions(db, **filters)

    pagination = Pagination.build(page=query.page, limit=query.limit, total=total)
    logger.info(
        f"Retrieved {len(rows)} questions (page {query.page}/{pagination.total_pages})"
    )
    return rows, pagination
