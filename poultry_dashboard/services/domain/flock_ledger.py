"""
Domain service: per-flock running totals.

The ledger is the canonical owner of every flock's bird count and cumulative
mortality, feed and egg counters. Report submissions mutate it through one
``apply_*`` method per report kind.
"""
import logging
from typing import Iterable, Optional

from poultry_dashboard.domain.models import (
    DailyFeedReport,
    EggProductionReport,
    Flock,
    FlockCreate,
    MortalityReport,
)
from poultry_dashboard.domain.units import report_total_eggs

logger = logging.getLogger(__name__)

FLOCK_ID_PREFIX = "h"


class FlockLedger:
    """
    Registry of flocks and their running totals.

    Mutators skip reports naming an unknown flock and return
    ``False`` so callers can tell a skipped update from an applied one.
    """

    def __init__(self, flocks: Optional[Iterable[Flock]] = None):
        self._flocks: dict[str, Flock] = {}
        for flock in flocks or ():
            self._flocks[flock.id] = flock

    def __contains__(self, flock_id: str) -> bool:
        return flock_id in self._flocks

    def __len__(self) -> int:
        return len(self._flocks)

    def get(self, flock_id: str) -> Optional[Flock]:
        return self._flocks.get(flock_id)

    def flocks(self) -> list[Flock]:
        """Flocks in registration order."""
        return list(self._flocks.values())

    def total_birds(self) -> int:
        return sum(flock.current_bird_count for flock in self._flocks.values())

    def register_flock(self, data: FlockCreate) -> Flock:
        """
        Register a new flock with every counter at zero.

        Args:
            data: Registration input

        Returns:
            The stored flock
        """
        flock = Flock(
            **data.model_dump(),
            id=self._next_id(),
            current_bird_count=data.initial_bird_count,
        )
        self._flocks[flock.id] = flock
        logger.info(f"Registered flock {flock.id} ({flock.name}) with {flock.initial_bird_count} birds")
        return flock

    def apply_feed(self, report: DailyFeedReport) -> bool:
        """Add the report's feed usage (kg) to the flock's cumulative feed."""
        flock = self._resolve(report.flock_id, "feed")
        if flock is None:
            return False
        flock.total_feed += report.total_feed_used
        return True

    def apply_mortality(self, report: MortalityReport) -> bool:
        """Remove dead birds from the live count and add them to cumulative mortality."""
        flock = self._resolve(report.flock_id, "mortality")
        if flock is None:
            return False
        flock.current_bird_count -= report.total
        flock.total_mortality += report.total
        if flock.current_bird_count < 0:
            logger.warning(
                f"Flock {flock.id} bird count is negative ({flock.current_bird_count}) "
                f"after mortality report {report.id}"
            )
        return True

    def apply_egg_production(self, report: EggProductionReport) -> bool:
        """Add today's eggs across all size categories to the flock's cumulative eggs."""
        flock = self._resolve(report.flock_id, "egg production")
        if flock is None:
            return False
        flock.total_eggs += report_total_eggs(report)
        return True

    def _resolve(self, flock_id: str, kind: str) -> Optional[Flock]:
        flock = self._flocks.get(flock_id)
        if flock is None:
            logger.warning(f"Skipping {kind} ledger update for unknown flock '{flock_id}'")
        return flock

    def _next_id(self) -> str:
        number = len(self._flocks) + 1
        while f"{FLOCK_ID_PREFIX}{number}" in self._flocks:
            number += 1
        return f"{FLOCK_ID_PREFIX}{number}"
