"""Attack descriptors and the ordered attack pool consumed during combat."""

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace

from .errors import AttacksError, DamageError


@dataclass
class TargetedAttack:
    """A number of parallel attacks, each dealing the same damage.

    Only targets whose size class is at least ``smallest_target`` may be hit.
    ``parallel_attacks`` is rewritten in place as a pool is consumed, so an
    entry can end up spent (zero attacks) but never negative.
    """

    parallel_attacks: int
    damage_per_attack: int
    smallest_target: int = 0

    def __post_init__(self):
        """Reject descriptors that could never be resolved."""
        if self.damage_per_attack <= 0:
            raise DamageError(
                f"Invalid damage_per_attack: {self.damage_per_attack} (must be > 0)"
            )
        if self.parallel_attacks < 0:
            raise AttacksError(
                f"Invalid parallel_attacks: {self.parallel_attacks} (must be >= 0)"
            )

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.smallest_target, self.damage_per_attack, self.parallel_attacks)

    @property
    def bucket_key(self) -> tuple[int, int]:
        return (self.smallest_target, self.damage_per_attack)

    def sum_damage(self) -> int:
        """Total damage of every parallel attack."""
        return self.parallel_attacks * self.damage_per_attack

    def valid_target(self, size_class: int) -> bool:
        return self.smallest_target <= size_class

    def same_target(self, other: "TargetedAttack") -> bool:
        return self.smallest_target == other.smallest_target

    def same_damage(self, other: "TargetedAttack") -> bool:
        return self.damage_per_attack == other.damage_per_attack

    def merge(self, other: "TargetedAttack") -> "TargetedAttack | None":
        """Fold ``other`` into this attack when both share a bucket.

        Returns:
            None when merged, otherwise ``other`` unchanged
        """
        if self.same_target(other) and self.same_damage(other):
            self.parallel_attacks += other.parallel_attacks
            return None
        return other


class ReducedAttacks:
    """An ordered, deduplicated collection of TargetedAttacks.

    Entries are kept sorted by ``(smallest_target, damage_per_attack,
    parallel_attacks)``. Two entries sharing both target size and damage per
    attack are one bucket and are merged by summing their attacks; the same
    target size with different damage stays in separate buckets.

    The pool is consumed in place: ships and groups rewrite the attack count
    of the entries they resolve, so whoever receives the pool next only sees
    what is left.
    """

    def __init__(self, attacks: Iterable[TargetedAttack] = ()):
        entries = sorted((replace(attack) for attack in attacks), key=lambda a: a.sort_key)

        merged: list[TargetedAttack] = []
        for attack in entries:
            if merged and merged[-1].merge(attack) is None:
                continue
            merged.append(attack)

        self._attacks = merged

    @classmethod
    def _from_parts(cls, attacks: list[TargetedAttack]) -> "ReducedAttacks":
        """Wrap an already sorted and merged list without re-checking it."""
        pool = cls.__new__(cls)
        pool._attacks = attacks
        return pool

    def add_attack(self, attack: TargetedAttack) -> None:
        """Insert an attack in sorted position, merging into its bucket if present."""
        key = attack.bucket_key
        index = bisect_left(self._attacks, key, key=lambda a: a.bucket_key)

        if index < len(self._attacks) and self._attacks[index].bucket_key == key:
            self._attacks[index].parallel_attacks += attack.parallel_attacks
        else:
            self._attacks.insert(index, replace(attack))

    def add_attacks(self, attacks: Iterable[TargetedAttack]) -> None:
        for attack in attacks:
            self.add_attack(attack)

    def extend(self, other: "ReducedAttacks") -> None:
        """Add every entry of another pool to this one."""
        self.add_attacks(other._attacks)

    def clear_used_attacks(self) -> None:
        """Remove spent entries (no parallel attacks left)."""
        self._attacks = [a for a in self._attacks if a.parallel_attacks != 0]

    def eligible(self, size_class: int) -> Iterator[TargetedAttack]:
        """Yield live entries that may hit a target of ``size_class``.

        The entries are yielded by reference so the caller can consume them.
        """
        for attack in self._attacks:
            if attack.parallel_attacks != 0 and attack.valid_target(size_class):
                yield attack

    def total_damage(self) -> int:
        return sum(attack.sum_damage() for attack in self._attacks)

    def is_exhausted(self) -> bool:
        return all(attack.parallel_attacks == 0 for attack in self._attacks)

    def scaled(self, factor: int) -> "ReducedAttacks":
        """Return a copy with every attack count multiplied by ``factor``."""
        if factor < 0:
            raise ValueError(f"Invalid scale factor: {factor} (must be >= 0)")
        return ReducedAttacks._from_parts(
            [replace(a, parallel_attacks=a.parallel_attacks * factor) for a in self._attacks]
        )

    def copy(self) -> "ReducedAttacks":
        return ReducedAttacks._from_parts([replace(a) for a in self._attacks])

    def __iter__(self) -> Iterator[TargetedAttack]:
        return iter(self._attacks)

    def __len__(self) -> int:
        return len(self._attacks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReducedAttacks):
            return NotImplemented
        return self._attacks == other._attacks

    def __repr__(self) -> str:
        return f"ReducedAttacks({self._attacks!r})"
