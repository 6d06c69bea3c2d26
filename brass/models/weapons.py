"""Weapon definitions: single weapons and per-target-size weapon sets."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from ..utils.properties import read_properties, write_properties
from .attacks import ReducedAttacks, TargetedAttack
from .errors import AttacksError, DamageError, TargetError

TARGET_SIZE_KEY = "target_size"
DAMAGE_PER_ATTACK_KEY = "damage_per_attack"
SIMULTANEOUS_ATTACKS_KEY = "simultaneous_attacks"


@dataclass(frozen=True)
class DistinctWeapon:
    """A single weapon: its smallest target, damage per attack and attack count."""

    target_size: int
    damage_per_attack: int
    simultaneous_attacks: int

    def __post_init__(self):
        """Validate weapon data after initialization."""
        if self.damage_per_attack <= 0:
            raise DamageError(
                f"Invalid damage_per_attack: {self.damage_per_attack} (must be > 0)"
            )
        if self.simultaneous_attacks <= 0:
            raise AttacksError(
                f"Invalid simultaneous_attacks: {self.simultaneous_attacks} (must be > 0)"
            )

    def same_target(self, other: "DistinctWeapon") -> bool:
        return self.target_size == other.target_size

    def fold(self, other: "DistinctWeapon") -> "DistinctWeapon | None":
        """Combine this weapon with ``other`` into one weapon representing both.

        The attack counts are summed and the damage per attack becomes the
        attack-weighted average (integer truncated).

        Returns:
            The combined weapon, or None if the target sizes differ
        """
        if not self.same_target(other):
            return None

        total_damage = (
            self.damage_per_attack * self.simultaneous_attacks
            + other.damage_per_attack * other.simultaneous_attacks
        )
        attacks = self.simultaneous_attacks + other.simultaneous_attacks
        return replace(
            self, damage_per_attack=total_damage // attacks, simultaneous_attacks=attacks
        )

    def to_attack(self) -> TargetedAttack:
        return TargetedAttack(
            parallel_attacks=self.simultaneous_attacks,
            damage_per_attack=self.damage_per_attack,
            smallest_target=self.target_size,
        )

    def to_properties(self) -> dict[str, str]:
        """Flatten this weapon into a string key/value record."""
        return {
            TARGET_SIZE_KEY: str(self.target_size),
            DAMAGE_PER_ATTACK_KEY: str(self.damage_per_attack),
            SIMULTANEOUS_ATTACKS_KEY: str(self.simultaneous_attacks),
        }

    @classmethod
    def from_properties(cls, props: Mapping[str, str]) -> "DistinctWeapon":
        """Build a weapon from a key/value record.

        Raises:
            TargetError: If a field is missing or not an integer
            DamageError: If the damage per attack is zero
            AttacksError: If the attack count is zero
        """
        values = {}
        for key in (TARGET_SIZE_KEY, DAMAGE_PER_ATTACK_KEY, SIMULTANEOUS_ATTACKS_KEY):
            if key not in props:
                raise TargetError(f"Missing weapon field: '{key}'")
            try:
                values[key] = int(props[key])
            except (TypeError, ValueError):
                raise TargetError(
                    f"Invalid weapon field '{key}': {props[key]!r} is not an integer"
                ) from None
        return cls(**values)


def read_weapon(path: str | Path) -> tuple[str, DistinctWeapon]:
    """Read a weapon properties file.

    Returns:
        Tuple of (weapon name taken from the file stem, weapon)
    """
    path = Path(path)
    return path.stem, DistinctWeapon.from_properties(read_properties(path))


def write_weapon(weapon: DistinctWeapon, path: str | Path) -> None:
    write_properties(weapon.to_properties(), path)


class WeaponSet:
    """A collection of weapons with at most one weapon per target size."""

    def __init__(self, weapons: Iterable[DistinctWeapon] = ()):
        weapons = list(weapons)
        for i, weapon in enumerate(weapons):
            for other in weapons[i + 1 :]:
                if weapon.same_target(other):
                    raise TargetError(
                        f"Duplicate weapon target size: {weapon.target_size}"
                    )
        self._weapons = weapons

    def add(self, weapon: DistinctWeapon) -> None:
        """Fold a weapon into the one sharing its target size, or append it."""
        for index, existing in enumerate(self._weapons):
            folded = existing.fold(weapon)
            if folded is not None:
                self._weapons[index] = folded
                return
        self._weapons.append(weapon)

    def fold(self, weapons: Iterable[DistinctWeapon]) -> None:
        for weapon in weapons:
            self.add(weapon)

    def to_attacks(self) -> ReducedAttacks:
        return ReducedAttacks(weapon.to_attack() for weapon in self._weapons)

    def __iter__(self) -> Iterator[DistinctWeapon]:
        return iter(self._weapons)

    def __len__(self) -> int:
        return len(self._weapons)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeaponSet):
            return NotImplemented
        return self._weapons == other._weapons

    def __repr__(self) -> str:
        return f"WeaponSet({self._weapons!r})"
