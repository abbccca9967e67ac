"""
PressButton — FastAPI application entry-point.

Run with:
    uvicorn pressbutton.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from pressbutton.config import settings
from pressbutton.database import get_db, init_models
from pressbutton.services.errors import (
    AuthenticationError,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    ServiceError,
)

# ── Import routers ──
from pressbutton.routers import auth, comments, questions, users

logger = logging.getLogger("pressbutton")


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """Set up the root handler and the package log level; called on startup, not on import."""
    logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logger.setLevel(level.upper())


# ── Lifespan: create tables on startup ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_models()
    logger.info(f"{settings.APP_NAME} started")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Would you press the button? Questions, votes and comments.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════
#  Error mapping
# ═══════════════════════════════════════════════════════════════

_SERVICE_STATUS = {
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
}


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    status_code = _SERVICE_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info(
        f"{request.method} {request.url.path} -> {status_code}: {exc.message} "
        f"(operation={exc.operation}, context={exc.context})"
    )
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content={"detail": exc.message}, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Register API routers ──
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(questions.router, prefix="/api")
app.include_router(comments.router, prefix="/api")


@app.get("/api/health")
async def health(db: AsyncSession = Depends(get_db)):
    await db.execute(text("SELECT 1"))
    return {"status": "ok", "ts": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
