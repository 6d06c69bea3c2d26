"""Text command parser for the battle console.

Parses lines like ``spawn_ship "heavy frigate" red 20`` into Command objects
that the console loop dispatches against the battlefield.
"""

import shlex
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..utils.constants import DEFAULT_SPAWN_QUANTITY

HELP_TEXT = """Commands:
    spawn_ship "<typename>" <faction> [quantity] --- Spawn ships of a type for a faction
    kill_ships                                   --- Remove every ship
    round [n]                                    --- Run n combat rounds now (default 1)
    status                                       --- Show every fleet
    help                                         --- Show this help
    kill | quit                                  --- Exit the program"""


class ErrorType(Enum):
    """Classification of command input errors."""
    UNKNOWN_COMMAND = "unknown_command"
    SYNTAX_ERROR = "syntax_error"


class CommandParseError(Exception):
    """Raised when command parsing fails with classification."""

    def __init__(self, error_type: ErrorType, message: str):
        """Initialize parse error.

        Args:
            error_type: Classification of the error
            message: Human-readable error message
        """
        self.error_type = error_type
        self.message = message
        super().__init__(message)


class CommandKind(Enum):
    SPAWN_SHIP = "spawn_ship"
    KILL_SHIPS = "kill_ships"
    ROUND = "round"
    STATUS = "status"
    HELP = "help"
    QUIT = "quit"


@dataclass
class Command:
    """A parsed console command.

    Only the fields relevant to ``kind`` are set.
    """

    kind: CommandKind
    typename: Optional[str] = None
    faction: Optional[str] = None
    quantity: int = DEFAULT_SPAWN_QUANTITY
    rounds: int = 1


_ALIASES = {
    "spawn_ship": CommandKind.SPAWN_SHIP,
    "kill_ships": CommandKind.KILL_SHIPS,
    "round": CommandKind.ROUND,
    "status": CommandKind.STATUS,
    "st": CommandKind.STATUS,
    "help": CommandKind.HELP,
    "h": CommandKind.HELP,
    "?": CommandKind.HELP,
    "kill": CommandKind.QUIT,
    "quit": CommandKind.QUIT,
    "exit": CommandKind.QUIT,
    "q": CommandKind.QUIT,
}

SPAWN_USAGE = 'Correct format: spawn_ship "<typename>" <faction> [quantity]'


class CommandParser:
    """Parse console lines into Commands."""

    def parse(self, line: str) -> Command:
        """Parse a command line.

        Args:
            line: Raw input line

        Returns:
            The parsed Command

        Raises:
            CommandParseError: If the command is unknown or malformed
        """
        try:
            parts = shlex.split(line)
        except ValueError as e:
            raise CommandParseError(ErrorType.SYNTAX_ERROR, f"Syntax error: {e}") from None

        if not parts:
            raise CommandParseError(ErrorType.SYNTAX_ERROR, "Syntax error: empty command")

        name, args = parts[0].lower(), parts[1:]
        kind = _ALIASES.get(name)
        if kind is None:
            raise CommandParseError(ErrorType.UNKNOWN_COMMAND, f"Unknown command: '{parts[0]}'")

        if kind is CommandKind.SPAWN_SHIP:
            return self._parse_spawn(args)
        if kind is CommandKind.ROUND:
            return self._parse_round(args)

        if args:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR, f"Syntax error: '{name}' takes no arguments"
            )
        return Command(kind)

    def _parse_spawn(self, args: list[str]) -> Command:
        if len(args) not in (2, 3):
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR,
                f"Syntax error: spawn_ship expects 2 or 3 arguments, got {len(args)}\n{SPAWN_USAGE}",
            )

        typename, faction = args[0], args[1]
        if not typename.strip():
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR, f"Syntax error: missing ship type name\n{SPAWN_USAGE}"
            )
        if not faction.strip():
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR, f"Syntax error: missing faction\n{SPAWN_USAGE}"
            )

        quantity = DEFAULT_SPAWN_QUANTITY
        if len(args) == 3:
            quantity = _positive_int(args[2], "quantity")

        return Command(CommandKind.SPAWN_SHIP, typename=typename, faction=faction, quantity=quantity)

    def _parse_round(self, args: list[str]) -> Command:
        if len(args) > 1:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR, "Syntax error: round takes at most one argument"
            )
        rounds = _positive_int(args[0], "round count") if args else 1
        return Command(CommandKind.ROUND, rounds=rounds)


def _positive_int(text: str, label: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise CommandParseError(
            ErrorType.SYNTAX_ERROR, f"Invalid {label}: '{text}' is not a number"
        ) from None
    if value <= 0:
        raise CommandParseError(
            ErrorType.SYNTAX_ERROR, f"Invalid {label}: must be positive (got {value})"
        )
    return value
