"""Console controller for the battlefield.

Reads command lines, dispatches them against a Battlefield and prints what
happened. Round reports from the background loop are printed the same way.
"""

import logging
from collections.abc import Callable

from ..engine.battlefield import Battlefield
from ..engine.combat import RoundReport
from ..models.errors import FactionError
from .command_parser import (
    HELP_TEXT,
    Command,
    CommandKind,
    CommandParseError,
    CommandParser,
    ErrorType,
)

logger = logging.getLogger(__name__)


def format_report(round_number: int, report: RoundReport) -> list[str]:
    """Render a round report as console lines; empty if nothing happened."""
    lines = []
    for event in report.events:
        line = f"    {event.attacker} attacked {event.defender} for {event.damage_dealt} damage"
        if event.defender_losses:
            line += f", {event.defender_losses} ships destroyed"
        lines.append(line)
    for faction in report.eliminated:
        lines.append(f"    {faction} has no ships left!!!")
    if report.winner is not None and report.events:
        survivors = report.survivors[report.winner]
        lines.append(f"    Fight won by {report.winner} with {survivors} ships left...")
    if lines:
        lines.insert(0, f"Round {round_number}:")
    return lines


def format_status(snapshot: dict) -> list[str]:
    """Render a battlefield snapshot as console lines."""
    if not snapshot["fleets"]:
        return ["No ships on the battlefield."]

    lines = [f"Round {snapshot['round']}:"]
    for fleet in snapshot["fleets"]:
        lines.append(f"  {fleet['faction']} ({fleet['ships']} ships)")
        for group in fleet["groups"]:
            lines.append(
                f"    {group['count']:>6} x {group['template'] or '?':<20} "
                f"hull {group['hull_points']:>6}  shield {group['shield_points']:>6}"
            )
    return lines


class BattleConsole:
    """Command-line controller for one battlefield."""

    def __init__(self, battlefield: Battlefield, output: Callable[[str], None] = print):
        """Initialize console.

        Args:
            battlefield: Battlefield the commands act on
            output: Where console lines are written
        """
        self.battlefield = battlefield
        self.output = output
        self.parser = CommandParser()

    def _format_error_message(self, error_type: ErrorType, message: str) -> str:
        formatted = f"Error: {message}"
        if error_type == ErrorType.UNKNOWN_COMMAND:
            formatted += f"\n\n{HELP_TEXT}"
        return formatted

    def handle(self, line: str) -> bool:
        """Run one command line.

        Returns:
            False once the user asked to quit, True otherwise
        """
        if not line.strip():
            return True

        try:
            command = self.parser.parse(line)
        except CommandParseError as e:
            self.output(self._format_error_message(e.error_type, e.message))
            return True

        return self.execute(command)

    def execute(self, command: Command) -> bool:
        if command.kind is CommandKind.QUIT:
            return False

        if command.kind is CommandKind.HELP:
            self.output(HELP_TEXT)
        elif command.kind is CommandKind.STATUS:
            self._print_lines(format_status(self.battlefield.snapshot()))
        elif command.kind is CommandKind.KILL_SHIPS:
            removed = self.battlefield.kill_ships()
            self.output(f"Removed {removed} ships.")
        elif command.kind is CommandKind.ROUND:
            for _ in range(command.rounds):
                self.show_report(self.battlefield.run_round())
        elif command.kind is CommandKind.SPAWN_SHIP:
            self._spawn(command)
        return True

    def _spawn(self, command: Command) -> None:
        try:
            spawned = self.battlefield.spawn_ships(
                command.typename, command.faction, command.quantity
            )
        except FactionError as e:
            self.output(f"Error: {e}")
            return

        if spawned is None:
            self.output(f"Error: could not load ship type \"{command.typename}\".")
            return
        self.output(
            f"Spawned {spawned.value.count} x \"{command.typename}\" for {spawned.faction}."
        )

    def show_report(self, report: RoundReport) -> None:
        self._print_lines(format_report(report.round_number, report))

    def run(self, read_line: Callable[[str], str] = input) -> None:
        """Read and run commands until quit or end of input."""
        while True:
            try:
                line = read_line("> ")
            except EOFError:
                break
            if not self.handle(line):
                break
        logger.info("Console closed")

    def _print_lines(self, lines: list[str]) -> None:
        for line in lines:
            self.output(line)
