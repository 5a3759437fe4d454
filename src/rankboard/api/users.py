# src/rankboard/api/users.py

"""API endpoints for per-player score listings."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rankboard.db.session import get_db
from rankboard.schemas.first_place import FirstPlacesResponse
from rankboard.schemas.pagination import Page
from rankboard.services import first_place_service
from rankboard.variants import GameMode, Variant

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/first", response_model=FirstPlacesResponse)
async def get_user_first_places(
    id: int = Query(0, description="Player ID"),  # noqa: A002
    mode: int = Query(0, description="Game mode (0 std, 1 taiko, 2 ctb, 3 mania)"),
    rx: int = Query(0, description="Variant (0 standard, 1 relax, 2 autopilot)"),
    p: int | None = Query(None, description="1-based page number"),
    l: int | None = Query(None, description="Page size"),  # noqa: E741
    db: AsyncSession = Depends(get_db),
) -> FirstPlacesResponse:
    """
    Get the beatmaps on which a player currently holds first place.

    Raises:
        422 Unprocessable Entity: If no player ID is given.
    """
    result = await first_place_service.get_first_places(
        db,
        user_id=id,
        mode=GameMode.parse(mode),
        variant=Variant.parse(rx),
        page=Page.normalize(p, l),
    )
    return FirstPlacesResponse(total=result.total, scores=result.scores)
