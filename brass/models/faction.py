"""Factions and the relations between them.

Combat only ever asks one question of this module: is faction B hostile to
faction A? ``Diplomacy.is_hostile`` answers it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from .errors import FactionError

T = TypeVar("T")


def normalise_name(name: str) -> str:
    """Collapse whitespace and capitalise the first letter of every word."""
    words = name.split()
    return " ".join(word[0].upper() + word[1:] for word in words)


@dataclass(frozen=True, order=True)
class Faction:
    """A named faction. Names are normalised, so "red  fleet" is "Red Fleet"."""

    name: str

    def __post_init__(self):
        normalised = normalise_name(self.name)
        if not normalised:
            raise FactionError(f"Invalid faction name: {self.name!r} (must not be empty)")
        object.__setattr__(self, "name", normalised)

    def __str__(self) -> str:
        return self.name


class Relation(Enum):
    """How one faction regards another."""

    UNAWARE = "unaware"
    OWN_FACTION = "own_faction"
    ALLIED = "allied"
    AT_WAR = "at_war"


class FactionRelationships:
    """Relations from one core faction to every faction it knows about."""

    def __init__(self, core: Faction, relationships: dict[Faction, Relation] | None = None):
        self.core = core
        self._relationships = dict(relationships or {})
        self._relationships.pop(core, None)

    def get_relation(self, faction: Faction) -> Relation:
        if faction == self.core:
            return Relation.OWN_FACTION
        return self._relationships.get(faction, Relation.UNAWARE)

    def set_relation(self, faction: Faction, relation: Relation) -> Relation | None:
        """Set the core faction's relation to ``faction``.

        Setting UNAWARE forgets the faction.

        Returns:
            The previous relation (UNAWARE if there was none), or None if
            ``faction`` is the core faction, which is left unchanged
        """
        if faction == self.core:
            return None
        if relation is Relation.UNAWARE:
            return self._relationships.pop(faction, Relation.UNAWARE)
        previous = self._relationships.get(faction, Relation.UNAWARE)
        self._relationships[faction] = relation
        return previous

    @staticmethod
    def are_consistent(left: "FactionRelationships", right: "FactionRelationships") -> bool:
        """True unless both sides know each other and disagree on the relation."""
        relation = left.get_relation(right.core)
        if relation is Relation.UNAWARE:
            return True
        other = right.get_relation(left.core)
        return other is Relation.UNAWARE or relation is other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FactionRelationships):
            return NotImplemented
        return self.core == other.core and self._relationships == other._relationships

    __hash__ = None

    def __repr__(self) -> str:
        return f"FactionRelationships({self.core!r}, {self._relationships!r})"


class Diplomacy:
    """Pairwise relation table for every faction on the battlefield.

    Relations are symmetric. Pairs nobody has set are treated as at war.
    """

    def __init__(self):
        self._relations: dict[frozenset[Faction], Relation] = {}

    def set_relation(self, a: Faction, b: Faction, relation: Relation) -> None:
        if a == b:
            raise FactionError(f"Cannot set a relation between {a} and itself")
        key = frozenset((a, b))
        if relation is Relation.UNAWARE:
            self._relations.pop(key, None)
        else:
            self._relations[key] = relation

    def get_relation(self, a: Faction, b: Faction) -> Relation:
        if a == b:
            return Relation.OWN_FACTION
        return self._relations.get(frozenset((a, b)), Relation.UNAWARE)

    def is_hostile(self, actor: Faction, other: Faction) -> bool:
        """True if ``actor`` may attack ``other``."""
        relation = self.get_relation(actor, other)
        return relation in (Relation.AT_WAR, Relation.UNAWARE)

    def known_relations(self) -> list[tuple[Faction, Faction, Relation]]:
        """Every relation that has been set, as (faction, faction, relation)."""
        return [(*sorted(pair), relation) for pair, relation in self._relations.items()]

    def relationships_of(self, core: Faction) -> FactionRelationships:
        """The relations seen from one faction's side."""
        known = {}
        for pair, relation in self._relations.items():
            if core in pair:
                (other,) = pair - {core}
                known[other] = relation
        return FactionRelationships(core, known)


@dataclass
class Aligned(Generic[T]):
    """A value fighting for a faction."""

    faction: Faction
    value: T
