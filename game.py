#!/usr/bin/env python3
"""Brass combat - Main entry point.

Spawn fleets of ships for rival factions and watch them fight it out. A
background loop runs a combat round every tick while the console accepts
commands.
"""

import argparse
import logging
import sys

from brass.engine.battlefield import BattleLoop, Battlefield
from brass.interface.command_parser import HELP_TEXT
from brass.interface.console import BattleConsole
from brass.utils.constants import MAX_LOADED_TEMPLATES, SHIPS_DIR, TICK_DELAY
from brass.utils.serialization import load_battlefield, save_battlefield
from brass.utils.template_loader import TemplateCache


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Brass - aggregate fleet combat",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  # Start with ships from res/ships
  %(prog)s --ships-dir my/ships --tick 0.5  # Custom templates, faster rounds
  %(prog)s --no-loop                        # Only run rounds with the 'round' command
  %(prog)s --load battle.json               # Resume a saved battle
  %(prog)s --save battle.json               # Save the battle on exit
        """,
    )

    parser.add_argument(
        "--ships-dir",
        default=SHIPS_DIR,
        help=f"Directory of .ship template records (default: {SHIPS_DIR})",
    )
    parser.add_argument(
        "--cache-size",
        type=int,
        default=MAX_LOADED_TEMPLATES,
        help=f"Templates held in memory at once (default: {MAX_LOADED_TEMPLATES})",
    )
    parser.add_argument(
        "--tick",
        type=float,
        default=TICK_DELAY,
        help=f"Seconds between combat rounds (default: {TICK_DELAY})",
    )
    parser.add_argument(
        "--no-loop",
        action="store_true",
        help="Do not run rounds in the background",
    )
    parser.add_argument("--load", type=str, metavar="FILE", help="Load battle from JSON file")
    parser.add_argument(
        "--save",
        type=str,
        metavar="FILE",
        help="Save battle to JSON file on exit",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        cache = TemplateCache(args.ships_dir, args.cache_size)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.load:
        print(f"Loading battle from {args.load}...")
        try:
            battlefield = load_battlefield(args.load, cache)
            print(f"Battle loaded successfully (Round {battlefield.round})")
        except FileNotFoundError:
            print(f"Error: File {args.load} not found.")
            sys.exit(1)
        except ValueError as e:
            print(f"Error loading battle: {e}")
            sys.exit(1)
    else:
        battlefield = Battlefield(cache)

    console = BattleConsole(battlefield)
    print(HELP_TEXT)

    loop = None
    if not args.no_loop:
        loop = BattleLoop(battlefield, args.tick, on_report=console.show_report)
        loop.start()

    try:
        console.run()
    except KeyboardInterrupt:
        print()
    finally:
        if loop is not None:
            loop.stop()

    if args.save:
        save_battlefield(battlefield, args.save)
        print(f"Battle saved to {args.save}")


if __name__ == "__main__":
    main()
