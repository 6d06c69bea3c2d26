"""Ship data model: one instance's mutable state bound to a shared template."""

from .attacks import ReducedAttacks
from .errors import FuelError, HullError, ShieldError
from .ship_template import ShipTemplate


def _check_state(template: ShipTemplate, fuel_units: int, hull_points: int, shield_points: int):
    """Raise the matching capacity error if the state does not fit ``template``."""
    if not 0 <= fuel_units <= template.fuel_capacity:
        raise FuelError(
            f"Invalid fuel_units: {fuel_units} (must be 0-{template.fuel_capacity})"
        )
    if not 0 <= hull_points <= template.max_hull:
        raise HullError(f"Invalid hull_points: {hull_points} (must be 0-{template.max_hull})")
    if not 0 <= shield_points <= template.shield_capacity:
        raise ShieldError(
            f"Invalid shield_points: {shield_points} (must be 0-{template.shield_capacity})"
        )


class Ship:
    """A single ship instance.

    The template is shared and read-only; the ship owns only its current fuel,
    hull and shield values. Every setter re-validates against the template and
    leaves the old value in place when it raises. A ship with no hull left is
    dead; ships are never destroyed explicitly.
    """

    __slots__ = ("_template", "_fuel_units", "_hull_points", "_shield_points")

    def __init__(self, template: ShipTemplate, fuel_units: int, hull_points: int, shield_points: int):
        """Create a ship with explicit state.

        Raises:
            FuelError: fuel_units > template.fuel_capacity
            HullError: hull_points > template.max_hull
            ShieldError: shield_points > template.shield_capacity
        """
        _check_state(template, fuel_units, hull_points, shield_points)
        self._template = template
        self._fuel_units = fuel_units
        self._hull_points = hull_points
        self._shield_points = shield_points

    @classmethod
    def from_template(cls, template: ShipTemplate) -> "Ship":
        """Create a fully fuelled, undamaged ship with full shields."""
        return cls._from_parts(
            template, template.fuel_capacity, template.max_hull, template.shield_capacity
        )

    @classmethod
    def _from_parts(cls, template: ShipTemplate, fuel_units: int, hull_points: int,
                    shield_points: int) -> "Ship":
        """Build a ship whose state is already known to fit the template.

        Only for internal paths that established the invariant themselves
        (full state, count-weighted averages of valid ships).
        """
        ship = cls.__new__(cls)
        ship._template = template
        ship._fuel_units = fuel_units
        ship._hull_points = hull_points
        ship._shield_points = shield_points
        return ship

    @property
    def template(self) -> ShipTemplate:
        return self._template

    @template.setter
    def template(self, value: ShipTemplate) -> None:
        _check_state(value, self._fuel_units, self._hull_points, self._shield_points)
        self._template = value

    @property
    def fuel_units(self) -> int:
        return self._fuel_units

    @fuel_units.setter
    def fuel_units(self, value: int) -> None:
        if not 0 <= value <= self._template.fuel_capacity:
            raise FuelError(
                f"Invalid fuel_units: {value} (must be 0-{self._template.fuel_capacity})"
            )
        self._fuel_units = value

    @property
    def hull_points(self) -> int:
        return self._hull_points

    @hull_points.setter
    def hull_points(self, value: int) -> None:
        if not 0 <= value <= self._template.max_hull:
            raise HullError(f"Invalid hull_points: {value} (must be 0-{self._template.max_hull})")
        self._hull_points = value

    @property
    def shield_points(self) -> int:
        return self._shield_points

    @shield_points.setter
    def shield_points(self, value: int) -> None:
        if not 0 <= value <= self._template.shield_capacity:
            raise ShieldError(
                f"Invalid shield_points: {value} (must be 0-{self._template.shield_capacity})"
            )
        self._shield_points = value

    @property
    def size_class(self) -> int:
        return self._template.size_class

    @property
    def is_alive(self) -> bool:
        return self._hull_points != 0

    def copy(self) -> "Ship":
        return Ship._from_parts(
            self._template, self._fuel_units, self._hull_points, self._shield_points
        )

    def simulate_damage(self, damage: int) -> tuple[int, int, int]:
        """Work out the effect of ``damage`` without applying it.

        Shields absorb first, then hull. Damage beyond what destroys the ship
        is returned as leftover.

        Args:
            damage: Damage points leveled against this ship

        Returns:
            Tuple of (remaining hull, remaining shield, leftover damage)

        Raises:
            ValueError: If damage is negative
        """
        if damage < 0:
            raise ValueError(f"Invalid damage: {damage} (must be >= 0)")

        if damage < self._shield_points:
            return self._hull_points, self._shield_points - damage, 0

        damage -= self._shield_points
        if damage < self._hull_points:
            return self._hull_points - damage, 0, 0

        return 0, 0, damage - self._hull_points

    def resolve_damage(self, damage: int) -> int:
        """Apply damage to this ship.

        Returns:
            Damage left over after destroying the ship (0 if it survived)
        """
        self._hull_points, self._shield_points, leftover = self.simulate_damage(damage)
        return leftover

    def regenerate_shields(self) -> None:
        """Recover shields for one period, capped at the shield capacity."""
        self._shield_points = min(
            self._shield_points + self._template.shield_recovery,
            self._template.shield_capacity,
        )

    def resolve_attacks(self, attacks: ReducedAttacks) -> None:
        """Absorb attacks from a pool until this ship dies or the pool runs dry.

        Each eligible entry is resolved as one lump of damage; whatever is left
        over is written back to the entry as a smaller number of attacks, so the
        next target sees only the remainder.
        """
        for attack in attacks.eligible(self.size_class):
            if not self.is_alive:
                break
            leftover = self.resolve_damage(attack.sum_damage())
            attack.parallel_attacks = leftover // attack.damage_per_attack

    def get_attacks(self) -> ReducedAttacks:
        return self._template.attack_profile()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ship):
            return NotImplemented
        return (
            self._template == other._template
            and self._fuel_units == other._fuel_units
            and self._hull_points == other._hull_points
            and self._shield_points == other._shield_points
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Ship(template={self._template.name or self._template!r}, "
            f"fuel_units={self._fuel_units}, hull_points={self._hull_points}, "
            f"shield_points={self._shield_points})"
        )
