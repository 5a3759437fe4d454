# src/rankboard/api/leaderboard.py

"""API endpoints for reading the leaderboard."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rankboard.db.ranking_store import get_ranking_index
from rankboard.db.session import get_db
from rankboard.schemas.leaderboard import LeaderboardResponse
from rankboard.services.hydrator import RelationalHydrator
from rankboard.services.leaderboard_service import LeaderboardQuery, LeaderboardService
from rankboard.services.ranking_index import RankingIndex
from rankboard.variants import GameMode, Variant

# Create an APIRouter instance for the leaderboard
# - prefix="/leaderboard": All routes here will be prefixed with /leaderboard
# - tags=["Leaderboard"]: Groups these endpoints under "Leaderboard" in the API docs
router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


def get_leaderboard_service(
    db: AsyncSession = Depends(get_db),
    index: RankingIndex = Depends(get_ranking_index),
) -> LeaderboardService:
    """FastAPI dependency wiring both stores into the orchestrator."""
    return LeaderboardService(index=index, hydrator=RelationalHydrator(db))


@router.get("/", response_model=LeaderboardResponse)
async def get_leaderboard(
    mode: int = Query(0, description="Game mode (0 std, 1 taiko, 2 ctb, 3 mania)"),
    rx: int = Query(0, description="Variant (0 standard, 1 relax, 2 autopilot)"),
    country: str | None = Query(None, description="Two-letter country filter"),
    p: int | None = Query(None, description="1-based page number"),
    l: int | None = Query(None, description="Page size (1-500, default 50)"),  # noqa: E741
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> LeaderboardResponse:
    """
    Get a page of players ranked by performance points.

    - **mode**: Game mode; unknown values fall back to std
    - **rx**: Competitive variant; unknown values fall back to standard
    - **country**: Restrict the page to one country's ranking
    - **p**: Page number, starting at 1; lower values serve the first page
    - **l**: Page size; out-of-range values fall back to 50

    Each player carries their global rank and the rank within their own
    country for the chosen variant and mode, when they hold one.
    """
    result = await service.get_leaderboard(
        LeaderboardQuery(
            mode=GameMode.parse(mode),
            variant=Variant.parse(rx),
            country=country or None,
            page=p,
            page_size=l,
        )
    )
    return LeaderboardResponse(
        users=result.users,
        total=result.total,
        page=result.page.number + 1,
        page_size=result.page.size,
    )
