"""
Application service: Orchestration layer for farm operations.
"""
import logging
from datetime import date
from typing import Any, Optional

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
    Page,
    Role,
    SecurityLog,
    SecurityLogCreate,
    TransactionType,
    User,
)
from poultry_dashboard.services.domain import role_policy
from poultry_dashboard.services.domain.metrics import (
    CashBalance,
    EggProductionRow,
    MetricsEngine,
    TodaySummary,
    Trend,
)
from poultry_dashboard.services.domain.report_store import ReportKind, ReportStore
from poultry_dashboard.services.domain.role_policy import Action

logger = logging.getLogger(__name__)


class FarmService:
    """
    Application service for farm operations.

    Every mutation is checked against the role policy before it reaches the
    store; queries delegate to the metrics engine. No business rules live here,
    only coordination between the policy, the store and the metrics.
    """

    def __init__(self, store: ReportStore, metrics: MetricsEngine):
        """
        Initialize the service with dependencies.

        Args:
            store: Farm record store
            metrics: Metrics engine bound to the same store
        """
        self.store = store
        self.metrics = metrics

    # ------------------------------------------------------------
    # Session
    # ------------------------------------------------------------

    def login(self, role: Role) -> User:
        user = role_policy.login(role)
        logger.info(f"Signed in {user.username}")
        return user

    def allowed_pages(self, role: Role) -> list[Page]:
        return role_policy.allowed_pages(role)

    def landing_page(self, role: Role) -> Page:
        return role_policy.landing_page(role)

    # ------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------

    def register_flock(self, role: Role, data: FlockCreate) -> Flock:
        role_policy.ensure_allowed(role, Action.REGISTER_FLOCK)
        return self.store.register_flock(data)

    def register_inventory_item(self, role: Role, data: InventoryItemCreate) -> InventoryItem:
        role_policy.ensure_allowed(role, Action.ADD_INVENTORY_ITEM)
        return self.store.register_inventory_item(data)

    def record_feed_report(self, role: Role, data: FeedReportCreate) -> DailyFeedReport:
        role_policy.ensure_allowed(role, Action.RECORD_FEED_REPORT)
        return self.store.record_feed_report(data)

    def record_mortality_report(self, role: Role, data: MortalityReportCreate) -> MortalityReport:
        role_policy.ensure_allowed(role, Action.RECORD_MORTALITY_REPORT)
        return self.store.record_mortality_report(data)

    def record_medicine_report(self, role: Role, data: MedicineReportCreate) -> MedicineReport:
        role_policy.ensure_allowed(role, Action.RECORD_MEDICINE_REPORT)
        return self.store.record_medicine_report(data)

    def record_egg_production_report(
        self,
        role: Role,
        data: EggProductionReportCreate,
    ) -> EggProductionReport:
        role_policy.ensure_allowed(role, Action.RECORD_EGG_PRODUCTION_REPORT)
        return self.store.record_egg_production_report(data)

    def record_daily_entry(self, role: Role, data: DailyEntryCreate) -> DailyEntry:
        role_policy.ensure_allowed(role, Action.RECORD_DAILY_ENTRY)
        return self.store.record_daily_entry(data)

    def record_finance_transaction(self, role: Role, data: FinanceTransactionCreate) -> FinanceTransaction:
        role_policy.ensure_allowed(role, Action.ADD_FINANCE_TRANSACTION)
        return self.store.record_finance_transaction(data)

    def record_security_log(self, role: Role, data: SecurityLogCreate) -> SecurityLog:
        role_policy.ensure_allowed(role, Action.RECORD_SECURITY_LOG)
        return self.store.record_security_log(data)

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def list_flocks(self) -> list[Flock]:
        return self.store.list_flocks()

    def get_flock(self, flock_id: str) -> Flock:
        """
        Look up one flock.

        Raises:
            UnknownFlockError: If no flock has the identifier
        """
        flock = self.store.get_flock(flock_id)
        if flock is None:
            raise UnknownFlockError(flock_id)
        return flock

    def flock_name(self, flock_id: str) -> str:
        """Display name of a flock, falling back to the identifier when unregistered."""
        flock = self.store.get_flock(flock_id)
        return flock.name if flock else flock_id

    def list_reports(
        self,
        kind: ReportKind,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[Any]:
        """Reports of one kind in an inclusive date range, newest first."""
        return self.store.list_reports(kind, start, end, newest_first=True)

    def list_transactions(self, transaction_type: Optional[TransactionType] = None) -> list[FinanceTransaction]:
        transactions = self.store.list_reports(ReportKind.FINANCE, newest_first=True)
        if transaction_type is None:
            return transactions
        return [t for t in transactions if t.type == transaction_type]

    def inventory(self) -> list[InventoryItem]:
        return self.store.inventory()

    def low_stock_items(self) -> list[InventoryItem]:
        return self.metrics.low_stock_items()

    def todays_summary(self) -> TodaySummary:
        return self.metrics.todays_summary()

    def trend(self, days: int) -> Trend:
        return self.metrics.trend(days)

    def cash_balance(self) -> CashBalance:
        return self.metrics.cash_balance()

    def egg_production_rows(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[EggProductionRow]:
        return self.metrics.egg_production_rows(start, end)
