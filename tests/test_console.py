"""Tests for the battle console."""

import pytest

from brass.engine.battlefield import Battlefield
from brass.interface.console import BattleConsole, format_report, format_status
from brass.engine.combat import CombatEvent, RoundReport
from brass.utils.template_loader import TemplateCache

FIGHTER = """
size_class = 1
fuel_capacity = 10
fuel_use = 1
max_hull = 100
shield_capacity = 0
shield_recovery = 0
cargo_capacity = 0
smallest_target = 0
attack_damage = 20
"""


@pytest.fixture
def console(tmp_path):
    (tmp_path / "fighter.ship").write_text(FIGHTER)
    lines = []
    console = BattleConsole(Battlefield(TemplateCache(tmp_path)), output=lines.append)
    console.lines = lines
    return console


def test_spawn_and_status(console):
    """Test spawned ships show up in the status listing."""
    assert console.handle('spawn_ship "fighter" red 12')
    assert console.lines[-1] == 'Spawned 12 x "fighter" for Red.'
    console.handle("status")
    assert "  Red (12 ships)" in console.lines


def test_spawn_unknown_type(console):
    """Test an unknown ship type is reported."""
    console.handle("spawn_ship ghost red 1")
    assert console.lines[-1] == 'Error: could not load ship type "ghost".'


def test_unknown_command_shows_help(console):
    """Test unknown commands print the help text."""
    console.handle("launch")
    assert console.lines[-1].startswith("Error: Unknown command: 'launch'")
    assert "spawn_ship" in console.lines[-1]


def test_syntax_error_has_no_help(console):
    """Test syntax errors only print the error."""
    console.handle("spawn_ship fighter")
    assert "Commands:" not in console.lines[-1]


def test_round_reports_fight(console):
    """Test running a round prints the engagements and the winner."""
    console.handle("spawn_ship fighter red 10")
    console.handle("spawn_ship fighter blue 1")
    console.handle("round")
    assert "Round 1:" in console.lines
    assert "    Blue has no ships left!!!" in console.lines
    assert console.lines[-1] == "    Fight won by Red with 10 ships left..."


def test_kill_ships(console):
    """Test clearing the battlefield."""
    console.handle("spawn_ship fighter red 3")
    console.handle("kill_ships")
    assert console.lines[-1] == "Removed 3 ships."


def test_quit(console):
    """Test quit ends the command loop."""
    assert not console.handle("kill")
    assert console.handle("")


def test_run_reads_until_quit(console):
    """Test the loop stops at quit without reading further."""
    lines = iter(["spawn_ship fighter red 2", "quit", "spawn_ship fighter red 2"])
    console.run(read_line=lambda prompt: next(lines))
    assert console.battlefield.ship_count() == 2


def test_run_stops_at_end_of_input(console):
    """Test the loop ends cleanly on end of input."""

    def read_line(prompt):
        raise EOFError

    console.run(read_line=read_line)


def test_format_status_empty():
    """Test an empty battlefield has a one-line status."""
    assert format_status({"round": 0, "winner": None, "fleets": []}) == [
        "No ships on the battlefield."
    ]


def test_format_quiet_report():
    """Test a round without fighting prints nothing."""
    assert format_report(3, RoundReport(survivors={"Red": 1, "Blue": 1})) == []


def test_format_report_losses():
    """Test losses are reported per engagement."""
    event = CombatEvent("Red", "Blue", 0, 1, 10, 7, 300)
    lines = format_report(2, RoundReport(events=[event], survivors={"Red": 4, "Blue": 7}))
    assert lines == ["Round 2:", "    Red attacked Blue for 300 damage, 3 ships destroyed"]


def test_report_uses_its_own_round(console):
    """Test a report printed after later rounds keeps its own round number."""
    console.handle("spawn_ship fighter red 1")
    report = console.battlefield.run_round()
    console.battlefield.run_round()
    report.events.append(CombatEvent("Red", "Blue", 0, 1, 1, 1, 20))
    console.show_report(report)
    assert console.lines[-3:] == [
        "Round 1:",
        "    Red attacked Blue for 20 damage",
        "    Fight won by Red with 1 ships left...",
    ]
