"""
Questions router — listing, creation, deletion, voting and vote status.

Endpoints:
    GET    /questions/all            → paginated list (search, authorId, sortBy)
    GET    /questions/author/{id}    → first 100 questions of an author
    GET    /questions/random         → a question the user has not voted on
    POST   /questions/create         → create with an explicit authorId
    POST   /questions                → create as the authenticated user
    DELETE /questions/delete         → author deletes a question and its children
    GET    /questions/{id}           → one question
    POST   /questions/{id}/vote      → PRESS / DONT_PRESS
    GET    /questions/{id}/status    → vote counts and percentage
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pressbutton.config import settings
from pressbutton.database import get_sessionmaker
from pressbutton.models.user import User
from pressbutton.repositories.questions import QuestionWithCounts
from pressbutton.routers.auth import get_current_user
from pressbutton.schemas.common import ApiResponse, PaginatedResponse
from pressbutton.schemas.question import (
    DeleteQuestionRequest,
    QuestionCreate,
    QuestionCreateAuth,
    QuestionListItem,
    QuestionOut,
    QuestionsQuery,
    SortBy,
    VoteOut,
    VoteRequest,
    VoteStatus,
)
from pressbutton.services import questions as questions_service

router = APIRouter(prefix="/questions", tags=["questions"])

Sessions = async_sessionmaker[AsyncSession]


def _to_list_item(row: QuestionWithCounts) -> QuestionListItem:
    base = QuestionOut.model_validate(row.question).model_dump()
    return QuestionListItem(**base, vote_count=row.vote_count, comment_count=row.comment_count)


async def _paginated(sessions: Sessions, query: QuestionsQuery) -> PaginatedResponse[QuestionListItem]:
    rows, pagination = await questions_service.list_questions(
        sessions, query, timeout=settings.STORE_TIMEOUT_SECONDS
    )
    return PaginatedResponse[QuestionListItem](
        items=[_to_list_item(row) for row in rows],
        pagination=pagination,
    )


@router.get("/all", response_model=PaginatedResponse[QuestionListItem])
async def get_all_questions(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None),
    author_id: Optional[int] = Query(None, ge=1, alias="authorId"),
    sort_by: SortBy = Query(SortBy.NEWEST, alias="sortBy"),
    sessions: Sessions = Depends(get_sessionmaker),
):
    query = QuestionsQuery(
        page=page, limit=limit, search=search, author_id=author_id, sort_by=sort_by
    )
    return await _paginated(sessions, query)


@router.get(
    "/author/{author_id}",
    response_model=PaginatedResponse[QuestionListItem],
    deprecated=True,
)
async def get_questions_by_author(
    author_id: int = Path(..., gt=0),
    sessions: Sessions = Depends(get_sessionmaker),
):
    """Use ``/questions/all?authorId=`` instead."""
    return await _paginated(sessions, QuestionsQuery(author_id=author_id, page=1, limit=100))


@router.get("/random", response_model=Optional[QuestionOut])
async def get_random_question(
    user_id: Optional[int] = Query(None, ge=1, alias="userId"),
    sessions: Sessions = Depends(get_sessionmaker),
):
    return await questions_service.get_random_question(
        sessions, user_id, timeout=settings.STORE_TIMEOUT_SECONDS
    )


@router.post(
    "/create",
    response_model=ApiResponse[QuestionOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_question(
    payload: QuestionCreate,
    sessions: Sessions = Depends(get_sessionmaker),
):
    question = await questions_service.create_question(
        sessions,
        author_id=payload.author_id,
        positive_outcome=payload.positive_outcome,
        negative_outcome=payload.negative_outcome,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )
    return ApiResponse[QuestionOut](
        data=QuestionOut.model_validate(question),
        message="Question created successfully",
    )


@router.post(
    "",
    response_model=ApiResponse[QuestionOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_question_as_user(
    payload: QuestionCreateAuth,
    current_user: User = Depends(get_current_user),
    sessions: Sessions = Depends(get_sessionmaker),
):
    question = await questions_service.create_question(
        sessions,
        author_id=current_user.id,
        positive_outcome=payload.positive_outcome,
        negative_outcome=payload.negative_outcome,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )
    return ApiResponse[QuestionOut](
        data=QuestionOut.model_validate(question),
        message="Question created successfully",
    )


@router.delete("/delete", response_model=bool)
async def delete_question(
    payload: DeleteQuestionRequest,
    sessions: Sessions = Depends(get_sessionmaker),
):
    """Delete a question owned by ``authorId`` with every comment and vote on it."""
    return await questions_service.delete_question(
        sessions,
        payload.question_id,
        payload.author_id,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )


@router.get("/{question_id}", response_model=QuestionOut)
async def get_question(
    question_id: int = Path(..., gt=0),
    sessions: Sessions = Depends(get_sessionmaker),
):
    return await questions_service.get_question(
        sessions, question_id, timeout=settings.STORE_TIMEOUT_SECONDS
    )


@router.post("/{question_id}/vote", response_model=VoteOut)
async def vote_on_question(
    payload: VoteRequest,
    question_id: int = Path(..., gt=0),
    sessions: Sessions = Depends(get_sessionmaker),
):
    """Users can change their vote at any time; one vote per user per question."""
    return await questions_service.vote_question(
        sessions,
        question_id,
        payload.user_id,
        payload.choice,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )


@router.get("/{question_id}/status", response_model=VoteStatus)
async def get_question_status(
    question_id: int = Path(..., gt=0),
    sessions: Sessions = Depends(get_sessionmaker),
):
    return await questions_service.get_vote_status(
        sessions, question_id, timeout=settings.STORE_TIMEOUT_SECONDS
    )
