"""Combat engine components."""

from .battlefield import BattleLoop, Battlefield
from .combat import CombatEvent, RoundReport, process_combat_round

__all__ = [
    "Battlefield",
    "BattleLoop",
    "CombatEvent",
    "RoundReport",
    "process_combat_round",
]
