"""Comments router — every endpoint requires a Bearer token (guests included)."""

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pressbutton.config import settings
from pressbutton.database import get_sessionmaker
from pressbutton.models.user import User
from pressbutton.routers.auth import get_current_user
from pressbutton.schemas.comment import CommentCreate, CommentOut
from pressbutton.schemas.common import ApiResponse, PaginatedResponse
from pressbutton.services import comments as comments_service

router = APIRouter(
    prefix="/comments",
    tags=["comments"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/question/{question_id}", response_model=PaginatedResponse[CommentOut])
async def get_question_comments(
    question_id: int = Path(..., gt=0),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
):
    comments, pagination = await comments_service.list_comments(
        sessions,
        question_id,
        page=page,
        limit=limit,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )
    return PaginatedResponse[CommentOut](
        items=[CommentOut.model_validate(c) for c in comments],
        pagination=pagination,
        message="Comments retrieved successfully",
    )


@router.post("", response_model=ApiResponse[CommentOut], status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: CommentCreate,
    current_user: User = Depends(get_current_user),
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
):
    comment = await comments_service.create_comment(
        sessions,
        user_id=current_user.id,
        question_id=payload.question_id,
        content=payload.content,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )
    return ApiResponse[CommentOut](
        data=CommentOut.model_validate(comment),
        message="Comment created successfully",
    )
