"""The battlefield: every aligned fleet, guarded for use from several threads.

The command loop, the API server and the background round worker all share
one Battlefield. A single lock is held for the whole of a combat round, so
readers only ever see the state between rounds.
"""

import logging
import threading
from collections.abc import Callable

from ..models.faction import Aligned, Diplomacy, Faction
from ..models.fleet import AlignedFleet, Fleet
from ..models.reduced_ship import ReducedShip
from ..utils.constants import TICK_DELAY
from ..utils.template_loader import TemplateCache, spawn_ship
from .combat import RoundReport, process_combat_round

logger = logging.getLogger(__name__)


class Battlefield:
    """Fleets in battle order, one per faction, plus the diplomacy between them."""

    def __init__(self, cache: TemplateCache, diplomacy: Diplomacy | None = None):
        self.cache = cache
        self.diplomacy = diplomacy or Diplomacy()
        self.round = 0
        self.winner: str | None = None
        self._fleets: list[AlignedFleet] = []
        self._lock = threading.Lock()

    def spawn_ships(self, typename: str, faction: Faction | str,
                    quantity: int = 1) -> Aligned[ReducedShip] | None:
        """Add ``quantity`` fresh ships of ``typename`` to ``faction``'s fleet.

        Ships of a template the fleet already holds merge into that group.

        Returns:
            The spawned group, or None if the template cannot be loaded

        Raises:
            ValueError: If quantity is not positive
            FactionError: If the faction name is empty
        """
        if quantity < 1:
            raise ValueError(f"Invalid quantity: {quantity} (must be >= 1)")
        if not isinstance(faction, Faction):
            faction = Faction(faction)

        spawned = spawn_ship(self.cache, typename, faction)
        if spawned is None:
            return None

        group = ReducedShip(spawned.value, quantity)
        with self._lock:
            fleet = self._fleet_for(faction)
            fleet.add_group(group.copy())
            self.winner = None

        logger.info(f"Spawned {quantity} x '{typename}' for {faction}")
        return Aligned(faction, group)

    def kill_ships(self) -> int:
        """Remove every fleet. Returns the number of ships removed."""
        with self._lock:
            removed = sum(aligned.fleet.ship_count() for aligned in self._fleets)
            self._fleets.clear()
            self.winner = None
        logger.info(f"Removed {removed} ships from the battlefield")
        return removed

    def run_round(self) -> RoundReport:
        """Run one combat round over every fleet."""
        with self._lock:
            self.round += 1
            report = process_combat_round(self._fleets, self.diplomacy.is_hostile)
            report.round_number = self.round
            if report.winner is not None and report.events:
                self.winner = report.winner

        if report.events or report.eliminated:
            logger.info(
                f"Round {report.round_number}: {len(report.events)} engagements, "
                f"{report.ships_destroyed} ships destroyed, survivors {report.survivors}"
            )
            for faction in report.eliminated:
                logger.info(f"Round {report.round_number}: {faction} eliminated")
            if report.winner is not None and report.events:
                logger.info(f"Round {report.round_number}: {report.winner} wins")
        else:
            logger.debug(f"Round {report.round_number}: no engagements")
        return report

    def fleets(self) -> list[AlignedFleet]:
        """Copies of every fleet, safe to inspect outside the lock."""
        with self._lock:
            return [AlignedFleet(a.faction, a.fleet.copy()) for a in self._fleets]

    def restore(self, fleets: list[AlignedFleet], round_number: int = 0) -> None:
        """Replace the battlefield contents, e.g. from a saved snapshot."""
        with self._lock:
            self._fleets = list(fleets)
            self.round = round_number
            self.winner = None

    def snapshot(self) -> dict:
        """Plain-dict view of the battlefield for display and the API."""
        with self._lock:
            return {
                "round": self.round,
                "winner": self.winner,
                "fleets": [_serialize_fleet(aligned) for aligned in self._fleets],
            }

    def ship_count(self) -> int:
        with self._lock:
            return sum(aligned.fleet.ship_count() for aligned in self._fleets)

    def _fleet_for(self, faction: Faction) -> Fleet:
        for aligned in self._fleets:
            if aligned.faction == faction:
                return aligned.fleet
        aligned = AlignedFleet(faction, Fleet())
        self._fleets.append(aligned)
        return aligned.fleet


def _serialize_fleet(aligned: AlignedFleet) -> dict:
    return {
        "faction": aligned.faction.name,
        "ships": aligned.fleet.ship_count(),
        "groups": [
            {
                "template": group.template.name,
                "count": group.count,
                "size_class": group.size_class,
                "fuel_units": group.representative.fuel_units,
                "hull_points": group.representative.hull_points,
                "shield_points": group.representative.shield_points,
            }
            for group in aligned.fleet
        ],
    }


class BattleLoop(threading.Thread):
    """Background worker running combat rounds until stopped.

    A round that raises is logged and the loop carries on with the next one.
    """

    def __init__(self, battlefield: Battlefield, tick_delay: float = TICK_DELAY,
                 on_report: Callable[[RoundReport], None] | None = None):
        super().__init__(name="battle-loop", daemon=True)
        self.battlefield = battlefield
        self.tick_delay = tick_delay
        self.on_report = on_report
        self._stop_event = threading.Event()

    def run(self) -> None:
        logger.info(f"Battle loop started (tick every {self.tick_delay}s)")
        while not self._stop_event.wait(self.tick_delay):
            try:
                report = self.battlefield.run_round()
                if self.on_report is not None:
                    self.on_report(report)
            except Exception as e:
                logger.error(f"Combat round failed: {e}", exc_info=True)
        logger.info("Battle loop stopped")

    def stop(self, timeout: float | None = None) -> None:
        """Ask the loop to finish and wait for it."""
        self._stop_event.set()
        if self.is_alive():
            self.join(timeout)

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()
