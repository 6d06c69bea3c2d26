"""Ship template records and the bounded template cache.

Each ship type lives in its own TOML record, ``<ships_dir>/<name>.ship``:

    size_class = 2
    fuel_capacity = 100
    fuel_use = 5
    max_hull = 400
    shield_capacity = 200
    shield_recovery = 20
    cargo_capacity = 0
    smallest_target = 1
    attack_damage = 30

    [[weapons]]
    target_size = 3
    damage_per_attack = 120
    simultaneous_attacks = 2

Templates are fetched by name through a TemplateCache, which holds a fixed
number of them and evicts the oldest load once full.
"""

import logging
import threading
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..models.errors import TemplateLoadError, TemplateParseError, TemplateReadError
from ..models.faction import Aligned, Faction
from ..models.ship import Ship
from ..models.ship_template import ShipTemplate
from ..models.weapons import DistinctWeapon
from .constants import MAX_LOADED_TEMPLATES, SHIPS_DIR, TEMPLATE_EXTENSION

logger = logging.getLogger(__name__)


class WeaponRecord(BaseModel):
    """One ``[[weapons]]`` table of a template record."""

    model_config = ConfigDict(extra="forbid")

    target_size: int = Field(ge=0)
    damage_per_attack: int = Field(gt=0)
    simultaneous_attacks: int = Field(gt=0)


class TemplateRecord(BaseModel):
    """The on-disk shape of a ship template."""

    model_config = ConfigDict(extra="forbid")

    size_class: int = Field(ge=0)
    fuel_capacity: int = Field(ge=0)
    fuel_use: int = Field(ge=0)
    max_hull: int = Field(ge=0)
    shield_capacity: int = Field(ge=0)
    shield_recovery: int = Field(ge=0)
    cargo_capacity: int = Field(ge=0)
    smallest_target: int = Field(ge=0)
    attack_damage: int = Field(ge=0)
    weapons: list[WeaponRecord] = Field(default_factory=list)

    def to_template(self, name: str = "") -> ShipTemplate:
        """Build the template, applying its capacity checks.

        Raises:
            ShipError: If a capacity relation does not hold
            WeaponError: If two weapons share a target size
        """
        fields = self.model_dump(exclude={"weapons"})
        weapons = tuple(DistinctWeapon(**weapon.model_dump()) for weapon in self.weapons)
        return ShipTemplate(name=name, weapons=weapons, **fields)

    @classmethod
    def from_template(cls, template: ShipTemplate) -> "TemplateRecord":
        return cls(
            size_class=template.size_class,
            fuel_capacity=template.fuel_capacity,
            fuel_use=template.fuel_use,
            max_hull=template.max_hull,
            shield_capacity=template.shield_capacity,
            shield_recovery=template.shield_recovery,
            cargo_capacity=template.cargo_capacity,
            smallest_target=template.smallest_target,
            attack_damage=template.attack_damage,
            weapons=[
                WeaponRecord(
                    target_size=weapon.target_size,
                    damage_per_attack=weapon.damage_per_attack,
                    simultaneous_attacks=weapon.simultaneous_attacks,
                )
                for weapon in template.weapons
            ],
        )


def parse_template(name: str, text: str) -> ShipTemplate:
    """Parse a template record.

    Raises:
        TemplateParseError: If the text is not valid TOML, a field is missing,
            unknown or negative, or the capacities are inconsistent
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise TemplateParseError(name, f"malformed record: {e}") from e

    try:
        record = TemplateRecord.model_validate(data)
    except ValidationError as e:
        raise TemplateParseError(name, f"invalid record: {e}") from e

    try:
        return record.to_template(name)
    except ValueError as e:
        raise TemplateParseError(name, str(e)) from e


def format_template(template: ShipTemplate) -> str:
    """Render a template as a TOML record."""
    record = TemplateRecord.from_template(template)
    lines = [f"{key} = {value}" for key, value in record.model_dump(exclude={"weapons"}).items()]
    for weapon in record.weapons:
        lines.append("")
        lines.append("[[weapons]]")
        lines.extend(f"{key} = {value}" for key, value in weapon.model_dump().items())
    return "\n".join(lines) + "\n"


def template_path(ships_dir: str | Path, name: str) -> Path:
    """Path of the record for ``name``.

    Raises:
        TemplateReadError: If ``name`` is empty or not a bare file name
    """
    if not name or Path(name).name != name:
        raise TemplateReadError(name, "invalid template name")
    return Path(ships_dir) / f"{name}{TEMPLATE_EXTENSION}"


def load_template(ships_dir: str | Path, name: str) -> ShipTemplate:
    """Read and parse the record for ``name``.

    Raises:
        TemplateReadError: If the record cannot be read
        TemplateParseError: If the record is malformed or incomplete
    """
    path = template_path(ships_dir, name)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateReadError(name, f"cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise TemplateParseError(name, f"record is not UTF-8 text: {e}") from e
    return parse_template(name, text)


def save_template(ships_dir: str | Path, template: ShipTemplate, name: str | None = None) -> Path:
    """Write a template record, returning its path."""
    path = template_path(ships_dir, name or template.name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_template(template), encoding="utf-8")
    return path


class TemplateCache:
    """Templates by name, at most ``max_loaded`` held at once.

    When full, loading another template evicts the oldest load (FIFO, not
    LRU: fetching a cached template does not refresh it). A failed load
    leaves the cache as it was. All methods are thread safe.
    """

    def __init__(self, ships_dir: str | Path = SHIPS_DIR, max_loaded: int = MAX_LOADED_TEMPLATES):
        if max_loaded < 1:
            raise ValueError(f"Invalid max_loaded: {max_loaded} (must be >= 1)")
        self.ships_dir = Path(ships_dir)
        self._max_loaded = max_loaded
        self._templates: dict[str, ShipTemplate] = {}
        self._lock = threading.Lock()

    @property
    def max_loaded(self) -> int:
        return self._max_loaded

    @max_loaded.setter
    def max_loaded(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"Invalid max_loaded: {value} (must be >= 1)")
        with self._lock:
            self._max_loaded = value
            self._evict_overflow()

    def load(self, name: str) -> ShipTemplate:
        """Return the template for ``name``, loading it if it is not cached.

        Raises:
            TemplateReadError: If the record cannot be read
            TemplateParseError: If the record is malformed or incomplete
        """
        with self._lock:
            template = self._templates.get(name)
            if template is not None:
                return template

            template = load_template(self.ships_dir, name)
            self._templates[name] = template
            logger.info(f"Loaded template '{name}' from {self.ships_dir}")
            self._evict_overflow()
            return template

    def get(self, name: str) -> ShipTemplate | None:
        """Like load(), but returns None when the template cannot be loaded."""
        try:
            return self.load(name)
        except TemplateLoadError as e:
            logger.warning(f"Failed to load template: {e}")
            return None

    def unload(self, name: str) -> bool:
        """Drop a template from the cache. Returns True if it was cached."""
        with self._lock:
            return self._templates.pop(name, None) is not None

    def loaded(self) -> list[str]:
        """Names of cached templates, oldest first."""
        with self._lock:
            return list(self._templates)

    def names(self) -> list[str]:
        """Names of every template record in the ships directory."""
        if not self.ships_dir.is_dir():
            return []
        return sorted(path.stem for path in self.ships_dir.glob(f"*{TEMPLATE_EXTENSION}"))

    def _evict_overflow(self) -> None:
        while len(self._templates) > self._max_loaded:
            oldest = next(iter(self._templates))
            del self._templates[oldest]
            logger.info(f"Evicted template '{oldest}' from cache")

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._templates

    def __len__(self) -> int:
        with self._lock:
            return len(self._templates)


def spawn_ship(cache: TemplateCache, typename: str, faction: Faction) -> Aligned[Ship] | None:
    """Create a full-strength ship of ``typename`` for ``faction``.

    Returns:
        The faction-tagged ship, or None if no such template can be loaded
    """
    template = cache.get(typename)
    if template is None:
        return None
    return Aligned(faction, Ship.from_template(template))
