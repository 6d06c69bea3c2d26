"""Ship template data model: the immutable description of a ship type."""

from dataclasses import dataclass, field, replace

from .attacks import ReducedAttacks, TargetedAttack
from .errors import FuelError, HullError, ShieldError
from .weapons import DistinctWeapon, WeaponSet


@dataclass(frozen=True)
class ShipTemplate:
    """Capacities and attack profile shared by every ship of one type.

    Templates are never mutated after construction, so any number of ships
    and ship groups may hold the same instance. Two templates are the same
    ship type when their fields are equal; ``name`` is bookkeeping only.
    """

    size_class: int  # Ordinal size category
    fuel_capacity: int  # Maximum fuel units carried
    fuel_use: int  # Fuel units used per period
    max_hull: int  # Maximum hull points
    shield_capacity: int  # Maximum shield points
    shield_recovery: int  # Shield points regenerated per period
    cargo_capacity: int = 0  # Transport capacity, unused by combat
    smallest_target: int = 0  # Smallest size class the basic attack may hit
    attack_damage: int = 0  # Damage of the basic attack per period
    weapons: tuple[DistinctWeapon, ...] = ()  # Extra weapons, one per target size
    name: str = field(default="", compare=False)

    def __post_init__(self):
        """Validate capacity relations after initialization."""
        if self.fuel_capacity < 0 or self.fuel_use < 0:
            raise FuelError(
                f"Invalid fuel: capacity={self.fuel_capacity}, use={self.fuel_use} (must be >= 0)"
            )
        if self.fuel_use > self.fuel_capacity:
            raise FuelError(
                f"Invalid fuel_use: {self.fuel_use} (must be <= fuel_capacity {self.fuel_capacity})"
            )
        if self.max_hull < 0:
            raise HullError(f"Invalid max_hull: {self.max_hull} (must be >= 0)")
        if self.shield_capacity < 0 or self.shield_recovery < 0:
            raise ShieldError(
                f"Invalid shields: capacity={self.shield_capacity}, "
                f"recovery={self.shield_recovery} (must be >= 0)"
            )
        if self.shield_recovery > self.shield_capacity:
            raise ShieldError(
                f"Invalid shield_recovery: {self.shield_recovery} "
                f"(must be <= shield_capacity {self.shield_capacity})"
            )
        for label in ("size_class", "cargo_capacity", "smallest_target", "attack_damage"):
            if getattr(self, label) < 0:
                raise ValueError(f"Invalid {label}: {getattr(self, label)} (must be >= 0)")

        # Duplicate target sizes raise TargetError here
        object.__setattr__(self, "weapons", tuple(WeaponSet(self.weapons)))

    def with_changes(self, **changes) -> "ShipTemplate":
        """Return a copy with some fields replaced, re-validated."""
        return replace(self, **changes)

    def can_target(self, target: "ShipTemplate") -> bool:
        """True if this type's basic attack may hit ships of ``target``'s type."""
        return self.smallest_target <= target.size_class

    def attack_profile(self) -> ReducedAttacks:
        """Attacks one ship of this type makes per period."""
        pool = WeaponSet(self.weapons).to_attacks()
        if self.attack_damage > 0:
            pool.add_attack(
                TargetedAttack(
                    parallel_attacks=1,
                    damage_per_attack=self.attack_damage,
                    smallest_target=self.smallest_target,
                )
            )
        return pool
