"""Error types raised by the combat models.

Capacity and weapon errors are ``ValueError`` subclasses so callers can treat
them like any other rejected input and keep their prior state.
"""


class ShipError(ValueError):
    """A ship or template value exceeds the capacity that bounds it."""


class FuelError(ShipError):
    """Fuel units exceed fuel capacity (or fuel use exceeds capacity)."""


class HullError(ShipError):
    """Hull points exceed the template's maximum hull."""


class ShieldError(ShipError):
    """Shield points (or recovery) exceed the shield capacity."""


class WeaponError(ValueError):
    """A weapon definition that must never enter an attack pool."""


class DamageError(WeaponError):
    """A weapon or attack deals no damage per attack."""


class AttacksError(WeaponError):
    """A weapon produces no simultaneous attacks."""


class TargetError(WeaponError):
    """Duplicate target size in one weapon set, or an unreadable target field."""


class FactionError(ValueError):
    """A faction name is empty."""


class TemplateLoadError(Exception):
    """A ship template could not be loaded."""

    def __init__(self, name: str, message: str):
        self.name = name
        self.message = message
        super().__init__(f"Template '{name}': {message}")


class TemplateReadError(TemplateLoadError):
    """The template record could not be read from storage."""


class TemplateParseError(TemplateLoadError):
    """The template record was read but is malformed or incomplete."""
