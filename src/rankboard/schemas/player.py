# src/rankboard/schemas/player.py

"""Pydantic schemas for player identity fields."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ===============================================
# Read Schema: Identity fields shown beside any ranking
# ===============================================
class UserRead(BaseModel):
    """Player identity as returned to the client.

    Timestamps arrive from the database as unix seconds and are
    serialized as ISO-8601 datetimes.
    """

    id: int = Field(..., ge=1)
    username: str
    username_aka: str = ""
    registered_on: datetime
    privileges: int
    latest_activity: datetime
    country: str = Field(..., min_length=2, max_length=2)

    model_config = ConfigDict(from_attributes=True)
