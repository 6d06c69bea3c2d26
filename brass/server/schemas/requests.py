"""Pydantic request schemas for API endpoints."""

from pydantic import BaseModel, Field

from ...utils.constants import DEFAULT_SPAWN_QUANTITY, MAX_ROUNDS_PER_REQUEST


class SpawnShipsRequest(BaseModel):
    """Request to spawn ships for a faction."""

    typeName: str = Field(min_length=1, description="Ship template name")  # noqa: N815
    faction: str = Field(min_length=1, description="Faction the ships fight for")
    quantity: int = Field(
        default=DEFAULT_SPAWN_QUANTITY, gt=0, description="Number of ships to spawn"
    )


class RunRoundsRequest(BaseModel):
    """Request to run combat rounds immediately."""

    rounds: int = Field(
        default=1, gt=0, le=MAX_ROUNDS_PER_REQUEST, description="Number of rounds to run"
    )
