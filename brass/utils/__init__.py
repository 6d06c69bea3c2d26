"""Utility functions and constants for Brass combat."""

from .constants import (
    DEFAULT_SPAWN_QUANTITY,
    MAX_LOADED_TEMPLATES,
    SHIPS_DIR,
    TEMPLATE_EXTENSION,
    TICK_DELAY,
)
from .properties import format_properties, parse_properties, read_properties, write_properties

__all__ = [
    "DEFAULT_SPAWN_QUANTITY",
    "MAX_LOADED_TEMPLATES",
    "SHIPS_DIR",
    "TEMPLATE_EXTENSION",
    "TICK_DELAY",
    "format_properties",
    "parse_properties",
    "read_properties",
    "write_properties",
]
