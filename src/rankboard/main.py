# src/rankboard/main.py

"""Main FastAPI application for RankBoard."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .api import leaderboard, users
from .db.ranking_store import close_ranking_store
from .db.session import engine
from .exceptions import (
    LeaderboardTimeoutError,
    RankBoardError,
    StoreUnavailableError,
    ValidationError,
)
from .middleware.logging import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for startup and shutdown events."""
    # Startup: engine and Redis pool are created lazily on first use
    yield
    # Shutdown: release both stores' connection pools
    await engine.dispose()
    await close_ranking_store()


app = FastAPI(title="RankBoard API", lifespan=lifespan)

app.add_middleware(RequestLoggingMiddleware)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(ValidationError)
async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Handle all validation errors -> 422."""
    logger.warning("Validation error: %s", exc.message, extra=exc.details)
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "error_type": type(exc).__name__},
    )


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(
    request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    """Handle ranking index or database outages -> 503."""
    logger.error("Store unavailable: %s", exc.message, extra=exc.details)
    return JSONResponse(
        status_code=503,
        content={
            "detail": "Leaderboard data is temporarily unavailable",
            "error_type": type(exc).__name__,
        },
    )


@app.exception_handler(LeaderboardTimeoutError)
async def leaderboard_timeout_handler(
    request: Request, exc: LeaderboardTimeoutError
) -> JSONResponse:
    """Handle requests that exceeded their deadline -> 504."""
    logger.error("Leaderboard timeout: %s", exc.message, extra=exc.details)
    return JSONResponse(
        status_code=504,
        content={"detail": exc.message, "error_type": type(exc).__name__},
    )


@app.exception_handler(RankBoardError)
async def rankboard_error_handler(
    request: Request, exc: RankBoardError
) -> JSONResponse:
    """Catch-all for any other RankBoard errors -> 500."""
    logger.error("RankBoard error: %s", exc.message, extra=exc.details, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": exc.message, "error_type": type(exc).__name__},
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_error_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Catch-all for SQLAlchemy errors raised outside the services."""
    logger.error("Database error: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal database error occurred"},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal server error occurred"},
    )


app.include_router(leaderboard.router)
app.include_router(users.router)


@app.get("/", tags=["Root"])
async def read_root() -> dict[str, str]:
    """Provides a welcome message."""
    return {"message": "Welcome to the RankBoard API"}


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
