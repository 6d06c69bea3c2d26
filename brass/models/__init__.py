"""Data models for Brass combat."""

from .attacks import ReducedAttacks, TargetedAttack
from .faction import Aligned, Diplomacy, Faction, FactionRelationships, Relation
from .fleet import AlignedFleet, Fleet
from .reduced_ship import DamageSpread, ReducedShip
from .ship import Ship
from .ship_template import ShipTemplate
from .weapons import DistinctWeapon, WeaponSet

__all__ = [
    "TargetedAttack",
    "ReducedAttacks",
    "Faction",
    "Relation",
    "FactionRelationships",
    "Diplomacy",
    "Aligned",
    "Fleet",
    "AlignedFleet",
    "DamageSpread",
    "ReducedShip",
    "Ship",
    "ShipTemplate",
    "DistinctWeapon",
    "WeaponSet",
]
