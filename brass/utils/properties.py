"""Flat ``key : value`` property records.

A properties file holds one pair per line, separated by ``" : "``. Lines
without a separator map the whole line to an empty value; blank lines are
ignored. Later keys overwrite earlier ones.
"""

from collections.abc import Iterable, Mapping
from pathlib import Path

SEPARATOR = " : "


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties text into a dictionary.

    Args:
        text: Raw properties text

    Returns:
        Mapping of key to value (both stripped)
    """
    props: dict[str, str] = {}
    for line in text.splitlines():
        if not line.strip():
            continue
        key, _, value = line.partition(SEPARATOR)
        props[key.strip()] = value.strip()
    return props


def format_properties(props: Mapping[str, str] | Iterable[tuple[str, str]]) -> str:
    """Render properties as text, one ``key : value`` pair per line."""
    pairs = props.items() if isinstance(props, Mapping) else props
    return "".join(f"{key}{SEPARATOR}{value}\n" for key, value in pairs)


def read_properties(path: str | Path) -> dict[str, str]:
    """Read a properties file.

    Raises:
        OSError: If the file cannot be read
    """
    return parse_properties(Path(path).read_text(encoding="utf-8"))


def write_properties(props: Mapping[str, str], path: str | Path) -> None:
    """Write properties to a file, replacing any existing content."""
    Path(path).write_text(format_properties(props), encoding="utf-8")
