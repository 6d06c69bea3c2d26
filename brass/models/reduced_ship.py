"""Aggregate ship groups: N identical ships simulated through one average ship.

A ReducedShip stands in for ``count`` ships of one template. Rather than
tracking every ship, it keeps a single representative whose hull, shield and
fuel are the (integer truncated) average of the ships it stands for. Incoming
damage is split between notional units and simulated against the
representative; units pushed to zero hull are removed from the count and the
survivors are re-averaged.
"""

from enum import Enum

from .attacks import ReducedAttacks
from .ship import Ship
from .ship_template import ShipTemplate


class DamageSpread(Enum):
    """How a lump of damage is shared between the ships of a group."""

    EVEN = "even"  # Every unit takes an equal share
    FOCUSED = "focused"  # Whole units are destroyed first, remainder shared evenly


class ReducedShip:
    """A representative Ship plus the number of live ships it stands for."""

    def __init__(self, representative: Ship, count: int, spread: DamageSpread = DamageSpread.EVEN):
        """Create a group.

        Args:
            representative: Ship holding the average state of the group
            count: Number of live ships in the group (0 means the group is dead)
            spread: How incoming damage is shared between the ships

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"Invalid count: {count} (must be >= 0)")
        self.representative = representative
        self.count = count
        self.spread = spread

    @classmethod
    def from_template(cls, template: ShipTemplate, count: int,
                      spread: DamageSpread = DamageSpread.EVEN) -> "ReducedShip":
        """Create a group of ``count`` undamaged ships."""
        return cls(Ship.from_template(template), count, spread)

    @property
    def template(self) -> ShipTemplate:
        return self.representative.template

    @property
    def size_class(self) -> int:
        return self.representative.size_class

    @property
    def is_alive(self) -> bool:
        return self.count != 0

    def same_template(self, other: "ReducedShip") -> bool:
        return self.representative.template == other.representative.template

    def effective_health(self) -> int:
        """Total hull plus shield across every ship in the group."""
        return (self.representative.hull_points + self.representative.shield_points) * self.count

    def resolve_damage(self, damage: int) -> int:
        """Distribute ``damage`` across the ships of this group.

        Returns:
            Damage left over once every ship is destroyed (0 otherwise)

        Raises:
            ValueError: If damage is negative
        """
        if damage < 0:
            raise ValueError(f"Invalid damage: {damage} (must be >= 0)")

        if self.spread is DamageSpread.FOCUSED:
            damage = self._destroy_whole_units(damage)
            if not self.is_alive:
                return damage
        return self._spread_evenly(damage)

    def _destroy_whole_units(self, damage: int) -> int:
        per_unit = self.representative.hull_points + self.representative.shield_points
        if per_unit == 0:
            return damage

        destroyed = min(self.count, damage // per_unit)
        self.count -= destroyed
        return damage - destroyed * per_unit

    def _spread_evenly(self, damage: int) -> int:
        ship = self.representative
        start_hull = ship.hull_points
        start_shield = ship.shield_points

        total_hull = 0
        total_shield = 0

        # Units not yet given a share of the damage
        remaining = self.count
        # Shrinks with the damage pool so each processed unit gets a positive share
        to_process = min(remaining, damage)

        while to_process > 0 and damage > 0:
            portion = damage // to_process
            damage -= portion

            hull, shield, leftover = ship.simulate_damage(portion)
            if hull == 0:
                self.count -= 1
                damage += leftover
            else:
                total_hull += hull
                total_shield += shield

            remaining -= 1
            to_process = min(to_process - 1, damage)

        if self.is_alive:
            total_hull += start_hull * remaining
            total_shield += start_shield * remaining
            ship.hull_points = total_hull // self.count
            ship.shield_points = total_shield // self.count

        return damage

    def resolve_attacks(self, attacks: ReducedAttacks) -> None:
        """Absorb attacks from a pool while the group has ships left.

        Each eligible entry's total damage is resolved against the group and
        rewritten to the unresolved remainder, expressed as attacks at the same
        damage per attack.
        """
        for attack in attacks.eligible(self.size_class):
            if not self.is_alive:
                break
            leftover = self.resolve_damage(attack.sum_damage())
            attack.parallel_attacks = leftover // attack.damage_per_attack

    def get_attacks(self) -> ReducedAttacks:
        """Attacks of every live ship in the group firing at once."""
        if not self.is_alive:
            return ReducedAttacks()
        return self.representative.get_attacks().scaled(self.count)

    def regenerate_shields(self) -> None:
        self.representative.regenerate_shields()

    def merge(self, other: "ReducedShip") -> "ReducedShip | None":
        """Merge another group of the same template into this one.

        The representative's fuel, hull and shield become the count-weighted
        average of both groups.

        Returns:
            None when merged, or ``other`` unchanged if the templates differ
        """
        if not self.same_template(other):
            return other

        total = self.count + other.count
        if total == 0:
            return None

        mine, theirs = self.representative, other.representative

        def weighted(a: int, b: int) -> int:
            return (a * self.count + b * other.count) // total

        self.representative = Ship._from_parts(
            mine.template,
            weighted(mine.fuel_units, theirs.fuel_units),
            weighted(mine.hull_points, theirs.hull_points),
            weighted(mine.shield_points, theirs.shield_points),
        )
        self.count = total
        return None

    def split(self, count: int) -> "ReducedShip":
        """Detach ``count`` ships into a new group with the same average state.

        Raises:
            ValueError: If count is negative or larger than this group
        """
        if not 0 <= count <= self.count:
            raise ValueError(f"Invalid split count: {count} (must be 0-{self.count})")
        self.count -= count
        return ReducedShip(self.representative.copy(), count, self.spread)

    def copy(self) -> "ReducedShip":
        return ReducedShip(self.representative.copy(), self.count, self.spread)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReducedShip):
            return NotImplemented
        return self.count == other.count and self.representative == other.representative

    __hash__ = None

    def __repr__(self) -> str:
        return f"ReducedShip({self.representative!r}, count={self.count})"
