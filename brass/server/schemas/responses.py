"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel, Field

from ...engine.combat import RoundReport


class BattleStateResponse(BaseModel):
    """Response containing the current battlefield."""

    round: int
    winner: str | None
    fleets: list[dict]


class SpawnShipsResponse(BaseModel):
    """Response after spawning ships."""

    typeName: str  # noqa: N815
    faction: str
    quantity: int
    state: BattleStateResponse


class KillShipsResponse(BaseModel):
    """Response after clearing the battlefield."""

    removed: int


class CombatEventResponse(BaseModel):
    """One fleet firing on another."""

    attacker: str
    defender: str
    damageDealt: int  # noqa: N815
    defenderLosses: int  # noqa: N815


class RoundReportResponse(BaseModel):
    """Result of one combat round."""

    round: int = 0
    events: list[CombatEventResponse] = Field(default_factory=list)
    groupsDestroyed: int = 0  # noqa: N815
    eliminated: list[str] = Field(default_factory=list)
    survivors: dict[str, int] = Field(default_factory=dict)
    winner: str | None = None

    @classmethod
    def from_report(cls, report: RoundReport) -> "RoundReportResponse":
        return cls(
            round=report.round_number,
            events=[
                CombatEventResponse(
                    attacker=event.attacker,
                    defender=event.defender,
                    damageDealt=event.damage_dealt,
                    defenderLosses=event.defender_losses,
                )
                for event in report.events
            ],
            groupsDestroyed=report.groups_destroyed,
            eliminated=report.eliminated,
            survivors=report.survivors,
            winner=report.winner,
        )


class RunRoundsResponse(BaseModel):
    """Response after running combat rounds."""

    reports: list[RoundReportResponse]
    state: BattleStateResponse


class TemplatesResponse(BaseModel):
    """Template names known to the server."""

    loaded: list[str]
    available: list[str]
