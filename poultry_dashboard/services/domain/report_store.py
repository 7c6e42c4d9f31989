"""
Domain service: the farm's in-memory record store.

One ``ReportStore`` owns every report list, the inventory and the
``FlockLedger``. It is built once at application startup and handed to the
components that need it; nothing here is a module-level singleton.

Each ``record_*`` call assigns an identifier, computes derived fields, puts
the record at the front of its list (newest first) and applies the matching
ledger mutation, all under one lock.
"""
import logging
import threading
from datetime import date
from enum import Enum
from typing import Any, Iterable, Optional

from poultry_dashboard.domain.exceptions import UnknownFlockError
from poultry_dashboard.domain.models import (
    DailyEntry,
    DailyEntryCreate,
    DailyFeedReport,
    EggProductionReport,
    EggProductionReportCreate,
    FeedReportCreate,
    FinanceTransaction,
    FinanceTransactionCreate,
    Flock,
    FlockCreate,
    InventoryItem,
    InventoryItemCreate,
    MedicineReport,
    MedicineReportCreate,
    MortalityReport,
    MortalityReportCreate,
    SecurityLog,
    SecurityLogCreate,
)
from poultry_dashboard.infrastructure.clock import Clock, SystemClock
from poultry_dashboard.services.domain.flock_ledger import FlockLedger
from poultry_dashboard.utils.dates import in_range

logger = logging.getLogger(__name__)


class ReportKind(str, Enum):
    """Dated record collections that can be listed and filtered."""
    FEED = "feed"
    MORTALITY = "mortality"
    MEDICINE = "medicine"
    EGG_PRODUCTION = "egg-production"
    FINANCE = "finance"
    SECURITY = "security"


ID_PREFIXES = {
    ReportKind.FEED: "fr",
    ReportKind.MORTALITY: "mr",
    ReportKind.MEDICINE: "medr",
    ReportKind.EGG_PRODUCTION: "er",
    ReportKind.FINANCE: "ft",
    ReportKind.SECURITY: "sl",
}
INVENTORY_ID_PREFIX = "inv"


class IdSequence:
    """Generates ``<prefix><n>`` identifiers that skip any already in use."""

    def __init__(self, prefix: str, used: Iterable[str] = ()):
        self.prefix = prefix
        self._used = set(used)
        self._next = len(self._used) + 1

    def reserve(self, identifier: str) -> None:
        self._used.add(identifier)

    def next(self) -> str:
        while f"{self.prefix}{self._next}" in self._used:
            self._next += 1
        identifier = f"{self.prefix}{self._next}"
        self._used.add(identifier)
        return identifier


class ReportStore:
    """
    Append-only daily report collections plus the flock ledger.

    Args:
        clock: Resolves timestamps (gate logs) to farm calendar dates
        ledger: Flock ledger to own; a fresh one is created when omitted
        reject_unknown_flocks: Raise ``UnknownFlockError`` for per-flock
            reports naming an unregistered flock. When disabled such reports
            are stored and the ledger update is skipped.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        ledger: Optional[FlockLedger] = None,
        reject_unknown_flocks: bool = True,
    ):
        self.clock = clock or SystemClock()
        self.ledger = ledger or FlockLedger()
        self.reject_unknown_flocks = reject_unknown_flocks
        self._lock = threading.RLock()
        self._reports: dict[ReportKind, list[Any]] = {kind: [] for kind in ReportKind}
        self._inventory: list[InventoryItem] = []
        self._ids = {kind: IdSequence(prefix) for kind, prefix in ID_PREFIXES.items()}
        self._inventory_ids = IdSequence(INVENTORY_ID_PREFIX)

    # ------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------

    def load(self, kind: ReportKind, records: Iterable[Any]) -> None:
        """
        Load historical records as-is, without touching the ledger.

        Used for seed data whose flock totals already include the history.
        """
        with self._lock:
            for record in records:
                self._ids[kind].reserve(record.id)
                self._reports[kind].append(record)

    def load_inventory(self, items: Iterable[InventoryItem]) -> None:
        with self._lock:
            for item in items:
                self._inventory_ids.reserve(item.id)
                self._inventory.append(item)

    # ------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------

    def register_flock(self, data: FlockCreate) -> Flock:
        with self._lock:
            return self.ledger.register_flock(data)

    def register_inventory_item(self, data: InventoryItemCreate) -> InventoryItem:
        with self._lock:
            item = InventoryItem(**data.model_dump(), id=self._inventory_ids.next())
            self._inventory.insert(0, item)
            logger.info(f"Registered inventory item {item.id} ({item.name})")
            return item

    def record_feed_report(self, data: FeedReportCreate) -> DailyFeedReport:
        """
        Record a feed report.

        Feed used is computed here from grams per bird and the flock's live
        bird count, and both are snapshotted into the stored report. A flock
        whose count has gone negative consumes nothing.
        """
        with self._lock:
            flock = self._check_flock(data.flock_id)
            bird_count = flock.current_bird_count if flock else 0
            report = DailyFeedReport(
                **data.model_dump(),
                id=self._ids[ReportKind.FEED].next(),
                total_feed_used=data.feed_consumed_per_bird * max(bird_count, 0) / 1000,
                bird_count_snapshot=bird_count,
            )
            self._prepend(ReportKind.FEED, report)
            self.ledger.apply_feed(report)
            return report

    def record_mortality_report(self, data: MortalityReportCreate) -> MortalityReport:
        with self._lock:
            self._check_flock(data.flock_id)
            report = MortalityReport(
                **data.model_dump(),
                id=self._ids[ReportKind.MORTALITY].next(),
                total=data.night_mortality + data.hospital_mortality,
            )
            self._prepend(ReportKind.MORTALITY, report)
            self.ledger.apply_mortality(report)
            return report

    def record_medicine_report(self, data: MedicineReportCreate) -> MedicineReport:
        with self._lock:
            self._check_flock(data.flock_id)
            report = MedicineReport(**data.model_dump(), id=self._ids[ReportKind.MEDICINE].next())
            self._prepend(ReportKind.MEDICINE, report)
            return report

    def record_egg_production_report(self, data: EggProductionReportCreate) -> EggProductionReport:
        with self._lock:
            self._check_flock(data.flock_id)
            report = EggProductionReport(**data.model_dump(), id=self._ids[ReportKind.EGG_PRODUCTION].next())
            self._prepend(ReportKind.EGG_PRODUCTION, report)
            self.ledger.apply_egg_production(report)
            return report

    def record_finance_transaction(self, data: FinanceTransactionCreate) -> FinanceTransaction:
        with self._lock:
            transaction = FinanceTransaction(**data.model_dump(), id=self._ids[ReportKind.FINANCE].next())
            self._prepend(ReportKind.FINANCE, transaction)
            return transaction

    def record_security_log(self, data: SecurityLogCreate) -> SecurityLog:
        with self._lock:
            log = SecurityLog(**data.model_dump(), id=self._ids[ReportKind.SECURITY].next())
            self._prepend(ReportKind.SECURITY, log)
            return log

    def record_daily_entry(self, data: DailyEntryCreate) -> DailyEntry:
        """
        Record feed, mortality, medicine and egg reports for one flock and day.

        The flock is checked once up front so a rejected entry stores nothing.
        """
        with self._lock:
            self._check_flock(data.flock_id)
            header = {"date": data.date, "flock_id": data.flock_id}
            feed_report = self.record_feed_report(
                FeedReportCreate(**header, **data.feed.model_dump())
            )
            mortality_report = self.record_mortality_report(
                MortalityReportCreate(**header, **data.mortality.model_dump())
            )
            medicine_reports = [
                self.record_medicine_report(MedicineReportCreate(**header, **medicine.model_dump()))
                for medicine in data.medicines
                if medicine.medicine_name
            ]
            egg_report = self.record_egg_production_report(
                EggProductionReportCreate(**header, **data.eggs.model_dump())
            )
            return DailyEntry(
                feed_report=feed_report,
                mortality_report=mortality_report,
                medicine_reports=medicine_reports,
                egg_production_report=egg_report,
            )

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def list_flocks(self) -> list[Flock]:
        with self._lock:
            return self.ledger.flocks()

    def get_flock(self, flock_id: str) -> Optional[Flock]:
        with self._lock:
            return self.ledger.get(flock_id)

    def inventory(self) -> list[InventoryItem]:
        with self._lock:
            return list(self._inventory)

    def list_reports(
        self,
        kind: ReportKind,
        start: Optional[date] = None,
        end: Optional[date] = None,
        newest_first: bool = False,
    ) -> list[Any]:
        """
        List records of one kind whose calendar date lies in ``[start, end]``.

        Args:
            kind: Record collection
            start: Inclusive first day, open when omitted
            end: Inclusive last day, open when omitted
            newest_first: Sort by date descending; otherwise keep store order

        Returns:
            Matching records. An inverted range yields an empty list.
        """
        with self._lock:
            records = [
                record for record in self._reports[kind]
                if in_range(self.record_date(record), start, end)
            ]
        if newest_first:
            records.sort(key=self.record_date, reverse=True)
        return records

    def record_date(self, record: Any) -> date:
        """Farm calendar date of a record."""
        if isinstance(record, SecurityLog):
            return self.clock.local_date(record.timestamp)
        return record.date

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    def _check_flock(self, flock_id: str) -> Optional[Flock]:
        flock = self.ledger.get(flock_id)
        if flock is None and self.reject_unknown_flocks:
            raise UnknownFlockError(flock_id)
        return flock

    def _prepend(self, kind: ReportKind, record: Any) -> None:
        self._reports[kind].insert(0, record)
        logger.info(f"Recorded {kind.value} record {record.id}")
