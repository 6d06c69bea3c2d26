"""One round of combat between aligned fleets.

Every round runs in four steps:
1. Shields regenerate
2. Every living fleet computes its attack pool up front (fire is simultaneous)
3. Each attacker's pool is threaded through every hostile fleet in order
4. Dead groups and fleets are removed and a winner is reported
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import List, Optional

from ..models.faction import Faction
from ..models.fleet import AlignedFleet

logger = logging.getLogger(__name__)

HostilityCheck = Callable[[Faction, Faction], bool]


@dataclass
class CombatEvent:
    """Record of one fleet firing on another.

    Attributes:
        attacker: Faction name of the firing fleet
        defender: Faction name of the fleet fired upon
        attacker_index: Position of the firing fleet in the battle order
        defender_index: Position of the defending fleet in the battle order
        defender_ships_before: Defender ship count before this engagement
        defender_ships_after: Defender ship count after this engagement
        damage_dealt: Damage taken out of the attacker's pool by the defender
    """

    attacker: str
    defender: str
    attacker_index: int
    defender_index: int
    defender_ships_before: int
    defender_ships_after: int
    damage_dealt: int

    @property
    def defender_losses(self) -> int:
        return self.defender_ships_before - self.defender_ships_after


@dataclass
class RoundReport:
    """Result of one combat round.

    Attributes:
        events: Engagements in the order they were resolved
        groups_destroyed: Ship groups wiped out this round
        eliminated: Factions whose fleet was destroyed this round
        survivors: Ship count per faction still on the field
        winner: The only faction left with ships, if exactly one is
        round_number: Battlefield round this report belongs to, 0 outside one
    """

    events: List[CombatEvent] = field(default_factory=list)
    groups_destroyed: int = 0
    eliminated: List[str] = field(default_factory=list)
    survivors: dict[str, int] = field(default_factory=dict)
    winner: Optional[str] = None
    round_number: int = 0

    @property
    def total_damage(self) -> int:
        return sum(event.damage_dealt for event in self.events)

    @property
    def ships_destroyed(self) -> int:
        return sum(event.defender_losses for event in self.events)


def process_combat_round(fleets: List[AlignedFleet], is_hostile: HostilityCheck) -> RoundReport:
    """Run one round of combat, mutating ``fleets`` in place.

    Args:
        fleets: Aligned fleets in battle order (earlier fleets absorb fire first)
        is_hostile: Predicate telling whether the second faction is an enemy
            of the first

    Returns:
        RoundReport describing the round
    """
    report = RoundReport()

    for aligned in fleets:
        aligned.fleet.regenerate_shields()

    # Pools are fixed before any damage lands
    pools = [
        aligned.fleet.get_attacks() if aligned.fleet.is_alive else None for aligned in fleets
    ]

    for attacker_index, attacker in enumerate(fleets):
        pool = pools[attacker_index]
        if pool is None:
            continue

        for defender_index, defender in enumerate(fleets):
            if pool.is_exhausted():
                break
            if defender_index == attacker_index or not defender.fleet.is_alive:
                continue
            if not is_hostile(attacker.faction, defender.faction):
                continue

            damage_before = pool.total_damage()
            ships_before = defender.fleet.ship_count()
            defender.fleet.resolve_attacks(pool)
            damage_dealt = damage_before - pool.total_damage()

            if damage_dealt > 0:
                event = CombatEvent(
                    attacker=attacker.faction.name,
                    defender=defender.faction.name,
                    attacker_index=attacker_index,
                    defender_index=defender_index,
                    defender_ships_before=ships_before,
                    defender_ships_after=defender.fleet.ship_count(),
                    damage_dealt=damage_dealt,
                )
                report.events.append(event)
                logger.debug(
                    f"{event.attacker} hit {event.defender} for {damage_dealt} damage "
                    f"({event.defender_losses} ships destroyed)"
                )

    for aligned in fleets:
        report.groups_destroyed += aligned.fleet.remove_dead()

    report.eliminated = [aligned.faction.name for aligned in fleets if not aligned.fleet.is_alive]
    fleets[:] = [aligned for aligned in fleets if aligned.fleet.is_alive]

    for aligned in fleets:
        name = aligned.faction.name
        report.survivors[name] = report.survivors.get(name, 0) + aligned.fleet.ship_count()

    if len(report.survivors) == 1:
        (report.winner,) = report.survivors

    return report
