"""
Domain service: derived dashboard and report metrics.

Every function here is pure: it reads the store (and the flock ledger the
store owns) plus an explicit date, and returns fresh values. Nothing is
cached, so low-stock status and today's totals always reflect the latest
submission.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from poultry_dashboard.domain.models import (
    EGG_CATEGORIES,
    EggStock,
    Flock,
    InventoryItem,
    TransactionType,
)
from poultry_dashboard.domain.units import closing_stock, report_total_eggs, total_eggs
from poultry_dashboard.infrastructure.clock import Clock
from poultry_dashboard.services.domain.report_store import ReportKind, ReportStore
from poultry_dashboard.utils.dates import group_by_day, last_n_days, weekday_label

DEFAULT_TREND_DAYS = 7


@dataclass
class TodaySummary:
    """Same-day totals shown on the dashboard cards and the daily report."""
    date: date
    total_birds: int
    eggs_today: int
    feed_today_kg: float
    mortality_today: int
    cash_inward_today: float
    cash_outward_today: float
    net_cash_flow: float
    low_stock_count: int


@dataclass
class EggTrendPoint:
    date: date
    label: str
    flocks: dict[str, int]
    total: int


@dataclass
class FeedTrendPoint:
    date: date
    label: str
    feed_kg: float


@dataclass
class Trend:
    """Daily series for a window ending today, oldest first."""
    days: int
    flock_names: dict[str, str]
    eggs: list[EggTrendPoint] = field(default_factory=list)
    feed: list[FeedTrendPoint] = field(default_factory=list)


@dataclass
class CashBalance:
    opening: float
    total_inward: float
    total_outward: float
    closing: float


@dataclass
class EggProductionRow:
    """One egg production report as shown in the production table."""
    report_id: str
    date: date
    flock_id: str
    flock_name: Optional[str]
    category_totals: dict[str, int]
    closing_stock: dict[str, EggStock]
    total_eggs: int
    production_percentage: Optional[float]


# ============================================================
# Single-value helpers
# ============================================================

def is_low_stock(item: InventoryItem) -> bool:
    """An item is low when its stock is at or below its threshold."""
    return item.stock <= item.low_stock_threshold


def low_stock_items(items: Iterable[InventoryItem]) -> list[InventoryItem]:
    return [item for item in items if is_low_stock(item)]


def production_percentage(eggs: int, flock: Optional[Flock]) -> Optional[float]:
    """
    Eggs laid per live bird, as a percentage rounded to 2 decimals.

    Returns None (not applicable) when the flock is unknown or has no live birds.
    """
    if flock is None or flock.current_bird_count <= 0:
        return None
    return round(eggs / flock.current_bird_count * 100, 2)


def cash_balance(store: ReportStore, opening_balance: float) -> CashBalance:
    """All-time balance: opening + every inward amount - every outward amount."""
    inward, outward = _cash_flow(store.list_reports(ReportKind.FINANCE))
    return CashBalance(
        opening=opening_balance,
        total_inward=inward,
        total_outward=outward,
        closing=opening_balance + inward - outward,
    )


# ============================================================
# Daily aggregates
# ============================================================

def eggs_on(store: ReportStore, day: date) -> int:
    return sum(report_total_eggs(r) for r in store.list_reports(ReportKind.EGG_PRODUCTION, day, day))


def feed_on(store: ReportStore, day: date) -> float:
    return sum(r.total_feed_used for r in store.list_reports(ReportKind.FEED, day, day))


def mortality_on(store: ReportStore, day: date) -> int:
    return sum(r.total for r in store.list_reports(ReportKind.MORTALITY, day, day))


def todays_summary(store: ReportStore, today: date) -> TodaySummary:
    inward, outward = _cash_flow(store.list_reports(ReportKind.FINANCE, today, today))
    return TodaySummary(
        date=today,
        total_birds=store.ledger.total_birds(),
        eggs_today=eggs_on(store, today),
        feed_today_kg=round(feed_on(store, today), 2),
        mortality_today=mortality_on(store, today),
        cash_inward_today=inward,
        cash_outward_today=outward,
        net_cash_flow=inward - outward,
        low_stock_count=len(low_stock_items(store.inventory())),
    )


def trend(store: ReportStore, today: date, days: int = DEFAULT_TREND_DAYS) -> Trend:
    """
    Egg and feed series for the ``days`` calendar days ending at ``today``.

    Every day has a point, and every registered flock has a value in each egg
    point; days or flocks without reports are zero.
    """
    window = last_n_days(today, days)
    flocks = store.list_flocks()
    result = Trend(days=days, flock_names={flock.id: flock.name for flock in flocks})
    if not window:
        return result

    egg_reports = group_by_day(
        store.list_reports(ReportKind.EGG_PRODUCTION, window[0], today), store.record_date
    )
    feed_reports = group_by_day(
        store.list_reports(ReportKind.FEED, window[0], today), store.record_date
    )

    for day in window:
        per_flock = {flock.id: 0 for flock in flocks}
        for report in egg_reports.get(day, []):
            if report.flock_id in per_flock:
                per_flock[report.flock_id] += report_total_eggs(report)
        result.eggs.append(EggTrendPoint(
            date=day,
            label=weekday_label(day),
            flocks=per_flock,
            total=sum(per_flock.values()),
        ))
        result.feed.append(FeedTrendPoint(
            date=day,
            label=weekday_label(day),
            feed_kg=round(sum(r.total_feed_used for r in feed_reports.get(day, [])), 2),
        ))
    return result


def egg_production_rows(
    store: ReportStore,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[EggProductionRow]:
    """Production table rows for reports in ``[start, end]``, newest first."""
    rows = []
    for report in store.list_reports(ReportKind.EGG_PRODUCTION, start, end, newest_first=True):
        flock = store.get_flock(report.flock_id)
        categories = report.categories()
        eggs = report_total_eggs(report)
        rows.append(EggProductionRow(
            report_id=report.id,
            date=report.date,
            flock_id=report.flock_id,
            flock_name=flock.name if flock else None,
            category_totals={name: total_eggs(categories[name].today) for name in EGG_CATEGORIES},
            closing_stock={name: closing_stock(categories[name]) for name in EGG_CATEGORIES},
            total_eggs=eggs,
            production_percentage=production_percentage(eggs, flock),
        ))
    return rows


def _cash_flow(transactions) -> tuple[float, float]:
    inward = outward = 0.0
    for transaction in transactions:
        if transaction.type == TransactionType.INWARD:
            inward += transaction.amount
        else:
            outward += transaction.amount
    return inward, outward


class MetricsEngine:
    """
    Binds the metric functions to a store and a clock.

    Holds references only; every call recomputes from the store.
    """

    def __init__(self, store: ReportStore, clock: Clock, opening_balance: float):
        self.store = store
        self.clock = clock
        self.opening_balance = opening_balance

    def todays_summary(self) -> TodaySummary:
        return todays_summary(self.store, self.clock.today())

    def trend(self, days: int = DEFAULT_TREND_DAYS) -> Trend:
        return trend(self.store, self.clock.today(), days)

    def low_stock_items(self) -> list[InventoryItem]:
        return low_stock_items(self.store.inventory())

    def cash_balance(self) -> CashBalance:
        return cash_balance(self.store, self.opening_balance)

    def egg_production_rows(self, start: Optional[date] = None, end: Optional[date] = None) -> list[EggProductionRow]:
        return egg_production_rows(self.store, start, end)
