"""Fleet data model: an ordered line of ship groups facing fire together."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .attacks import ReducedAttacks
from .faction import Faction
from .reduced_ship import ReducedShip


class Fleet:
    """Ship groups in exposure order.

    The front group is hit first. An attack pool is threaded through the
    groups front to back, so later groups only see what the earlier ones
    failed to absorb.
    """

    def __init__(self, groups: Iterable[ReducedShip] = ()):
        self.groups = list(groups)

    @classmethod
    def canonical(cls, groups: Iterable[ReducedShip]) -> "Fleet":
        """Build a fleet with empty groups dropped and same-template groups merged.

        Merged groups keep the position of their first occurrence.
        """
        fleet = cls()
        for group in groups:
            fleet.add_group(group)
        return fleet

    def add_group(self, group: ReducedShip) -> None:
        """Merge a group into its live same-template group, or append it at the back."""
        if not group.is_alive:
            return
        for existing in self.groups:
            if existing.is_alive and existing.merge(group) is None:
                return
        self.groups.append(group)

    def resolve_attacks(self, attacks: ReducedAttacks) -> None:
        for group in self.groups:
            if group.is_alive:
                group.resolve_attacks(attacks)

    def regenerate_shields(self) -> None:
        for group in self.groups:
            group.regenerate_shields()

    def get_attacks(self) -> ReducedAttacks:
        """Combined attack pool of every live group."""
        pool = ReducedAttacks()
        for group in self.groups:
            if group.is_alive:
                pool.extend(group.get_attacks())
        return pool

    def remove_dead(self) -> int:
        """Drop empty groups.

        Returns:
            Number of groups removed
        """
        before = len(self.groups)
        self.groups = [group for group in self.groups if group.is_alive]
        return before - len(self.groups)

    def ship_count(self) -> int:
        return sum(group.count for group in self.groups)

    def effective_health(self) -> int:
        return sum(group.effective_health() for group in self.groups)

    @property
    def is_alive(self) -> bool:
        return any(group.is_alive for group in self.groups)

    def copy(self) -> "Fleet":
        return Fleet(group.copy() for group in self.groups)

    def __iter__(self) -> Iterator[ReducedShip]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def __repr__(self) -> str:
        return f"Fleet({self.groups!r})"


@dataclass
class AlignedFleet:
    """A fleet fighting for one faction."""

    faction: Faction
    fleet: Fleet
