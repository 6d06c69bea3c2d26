"""Battlefield serialization to/from JSON.

Snapshots are self-contained: each group carries its full template record,
so a saved battle can be restored without the ship records it was spawned
from.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..engine.battlefield import Battlefield
from ..models.faction import Diplomacy, Faction, Relation
from ..models.fleet import AlignedFleet, Fleet
from ..models.reduced_ship import DamageSpread, ReducedShip
from ..models.ship import Ship
from .template_loader import TemplateCache, TemplateRecord


def save_battlefield(battlefield: Battlefield, filepath: str | Path) -> None:
    """Save battlefield state to a JSON file.

    Args:
        battlefield: Battlefield to save
        filepath: Path to save file
    """
    data = {
        "round": battlefield.round,
        "relations": [
            {"a": a.name, "b": b.name, "relation": relation.value}
            for a, b, relation in battlefield.diplomacy.known_relations()
        ],
        "fleets": [_serialize_fleet(aligned) for aligned in battlefield.fleets()],
    }

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2)


def load_battlefield(filepath: str | Path, cache: TemplateCache) -> Battlefield:
    """Load battlefield state from a JSON file.

    Args:
        filepath: Path to saved battlefield
        cache: Template cache the restored battlefield spawns from

    Returns:
        Restored Battlefield

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If JSON is invalid or malformed
    """
    with open(filepath) as f:
        data = json.load(f)

    try:
        diplomacy = Diplomacy()
        for entry in data["relations"]:
            diplomacy.set_relation(
                Faction(entry["a"]), Faction(entry["b"]), Relation(entry["relation"])
            )
        fleets = [_deserialize_fleet(entry) for entry in data["fleets"]]
        round_number = data["round"]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed battlefield snapshot: {e!r}") from e

    battlefield = Battlefield(cache, diplomacy)
    battlefield.restore(fleets, round_number)
    return battlefield


def _serialize_fleet(aligned: AlignedFleet) -> dict[str, Any]:
    return {
        "faction": aligned.faction.name,
        "groups": [_serialize_group(group) for group in aligned.fleet],
    }


def _serialize_group(group: ReducedShip) -> dict[str, Any]:
    ship = group.representative
    return {
        "name": ship.template.name,
        "template": TemplateRecord.from_template(ship.template).model_dump(),
        "count": group.count,
        "spread": group.spread.value,
        "fuel_units": ship.fuel_units,
        "hull_points": ship.hull_points,
        "shield_points": ship.shield_points,
    }


def _deserialize_fleet(data: dict[str, Any]) -> AlignedFleet:
    groups = [_deserialize_group(entry) for entry in data["groups"]]
    return AlignedFleet(Faction(data["faction"]), Fleet(groups))


def _deserialize_group(data: dict[str, Any]) -> ReducedShip:
    try:
        record = TemplateRecord.model_validate(data["template"])
    except ValidationError as e:
        raise ValueError(f"Invalid template in snapshot: {e}") from e

    template = record.to_template(data.get("name", ""))
    ship = Ship(template, data["fuel_units"], data["hull_points"], data["shield_points"])
    if data["count"] > 0 and not ship.is_alive:
        raise ValueError(f"Invalid group: {data['count']} ships with no hull points")
    return ReducedShip(ship, data["count"], DamageSpread(data.get("spread", "even")))
