"""
Unit tests for the derived metrics.

Tests cover:
- Low stock detection
- Today's summary over the seeded dataset
- Trend windows and zero filling
- Cash balance
- Egg production table rows and production percentage
"""
from datetime import timedelta

import pytest

from poultry_dashboard.domain.models import (
    EggCategoryProduction,
    EggProductionReportCreate,
    EggStock,
    FeedReportCreate,
    FinanceTransactionCreate,
    InventoryItem,
    InventoryItemCreate,
    MortalityReportCreate,
    TransactionType,
)
from poultry_dashboard.domain.units import total_eggs
from poultry_dashboard.infrastructure.seed_data import build_seeded_store
from poultry_dashboard.services.domain.metrics import (
    MetricsEngine,
    cash_balance,
    egg_production_rows,
    is_low_stock,
    production_percentage,
    todays_summary,
    trend,
)


def eggs_report(day, flock_id, trays):
    return EggProductionReportCreate(
        date=day, flock_id=flock_id, standard=EggCategoryProduction(today=EggStock(tray=trays)),
    )


# ============================================================
# Low Stock Tests
# ============================================================

class TestLowStock:
    """Tests for the stock <= threshold rule."""

    @pytest.mark.parametrize("stock,threshold,expected", [
        (50, 10, False),
        (10, 10, True),
        (9.5, 10, True),
        (0, 0, True),
    ])
    def test_threshold_is_inclusive(self, stock, threshold, expected):
        item = InventoryItem(id="inv-test", name="Calcium Vita", stock=stock, low_stock_threshold=threshold)

        assert is_low_stock(item) is expected

    def test_new_item_counted_immediately(self, seeded_store, today):
        assert todays_summary(seeded_store, today).low_stock_count == 0

        seeded_store.register_inventory_item(
            InventoryItemCreate(name="Vaccine", stock=10, low_stock_threshold=10)
        )

        assert todays_summary(seeded_store, today).low_stock_count == 1


# ============================================================
# Today's Summary Tests
# ============================================================

class TestTodaysSummary:
    """Tests for the dashboard summary cards."""

    def test_seeded_summary(self, seeded_store, today):
        summary = todays_summary(seeded_store, today)

        assert summary.date == today
        assert summary.total_birds == 4850 + 4910 + 4950
        assert summary.eggs_today == 5868
        assert summary.feed_today_kg == pytest.approx(1083.5)
        assert summary.mortality_today == 3
        assert summary.cash_inward_today == 55000
        assert summary.cash_outward_today == 125000
        assert summary.net_cash_flow == -70000

    def test_other_days_excluded(self, seeded_store, today):
        tomorrow = today + timedelta(days=1)
        seeded_store.record_mortality_report(
            MortalityReportCreate(date=tomorrow, flock_id="h2", night_mortality=7)
        )
        seeded_store.record_finance_transaction(
            FinanceTransactionCreate(date=tomorrow, type=TransactionType.INWARD, amount=1000)
        )

        summary = todays_summary(seeded_store, tomorrow)

        assert summary.mortality_today == 7
        assert summary.eggs_today == 0
        assert summary.feed_today_kg == 0
        assert summary.net_cash_flow == 1000
        assert summary.total_birds == 4850 + 4903 + 4950

    def test_empty_store(self, empty_store, today):
        summary = todays_summary(empty_store, today)

        assert summary.total_birds == 0
        assert summary.eggs_today == 0
        assert summary.low_stock_count == 0


# ============================================================
# Trend Tests
# ============================================================

class TestTrend:
    """Tests for the rolling egg and feed series."""

    def test_empty_store_has_full_zero_window(self, empty_store, today):
        result = trend(empty_store, today)

        assert len(result.eggs) == 7
        assert len(result.feed) == 7
        assert [point.date for point in result.eggs] == [today - timedelta(days=n) for n in range(6, -1, -1)]
        assert all(point.total == 0 for point in result.eggs)
        assert all(point.feed_kg == 0 for point in result.feed)
        assert result.eggs[-1].label == "Sat"

    def test_every_flock_present_every_day(self, seeded_store, today):
        seeded_store.record_egg_production_report(eggs_report(today - timedelta(days=2), "h3", trays=1))

        result = trend(seeded_store, today)

        for point in result.eggs:
            assert set(point.flocks) == {"h1", "h2", "h3"}
        assert result.eggs[-3].flocks == {"h1": 0, "h2": 0, "h3": 30}
        assert result.eggs[-1].flocks["h1"] == 5868
        assert result.flock_names == {"h1": "H1", "h2": "H2", "h3": "H3"}

    def test_same_day_reports_are_summed(self, empty_store, flock_input, today):
        flock = empty_store.register_flock(flock_input)
        empty_store.record_egg_production_report(eggs_report(today, flock.id, trays=2))
        empty_store.record_egg_production_report(eggs_report(today, flock.id, trays=3))

        result = trend(empty_store, today)

        assert result.eggs[-1].flocks[flock.id] == 150
        assert result.eggs[-1].total == 150

    def test_feed_series(self, seeded_store, today):
        seeded_store.record_feed_report(
            FeedReportCreate(date=today - timedelta(days=1), flock_id="h3", feed_consumed_per_bird=100)
        )

        result = trend(seeded_store, today)

        assert result.feed[-1].feed_kg == pytest.approx(1083.5)
        assert result.feed[-2].feed_kg == pytest.approx(495.0)

    def test_reports_outside_window_ignored(self, seeded_store, today):
        seeded_store.record_egg_production_report(eggs_report(today - timedelta(days=7), "h2", trays=5))
        seeded_store.record_egg_production_report(eggs_report(today + timedelta(days=1), "h2", trays=5))

        result = trend(seeded_store, today)

        assert sum(point.flocks["h2"] for point in result.eggs) == 0

    def test_custom_window(self, empty_store, today):
        assert len(trend(empty_store, today, days=30).eggs) == 30

    def test_engine_uses_clock_today(self, seeded_store, fixed_clock):
        engine = MetricsEngine(seeded_store, fixed_clock, opening_balance=0)

        assert engine.trend().eggs[-1].date == fixed_clock.today()


# ============================================================
# Cash Balance Tests
# ============================================================

class TestCashBalance:
    """Tests for opening + inward - outward."""

    def test_seeded_balance(self, seeded_store):
        balance = cash_balance(seeded_store, opening_balance=50000)

        assert balance.total_inward == 55000
        assert balance.total_outward == 125000
        assert balance.closing == -20000

    def test_balance_spans_all_dates(self, seeded_store, today):
        seeded_store.record_finance_transaction(
            FinanceTransactionCreate(date=today - timedelta(days=40), type=TransactionType.INWARD, amount=30000)
        )

        assert cash_balance(seeded_store, opening_balance=50000).closing == 10000


# ============================================================
# Egg Production Table Tests
# ============================================================

class TestEggProductionRows:
    """Tests for production table rows."""

    def test_seeded_row(self, seeded_store):
        rows = egg_production_rows(seeded_store)

        assert len(rows) == 1
        row = rows[0]
        assert row.flock_name == "H1"
        assert row.total_eggs == 5868
        assert row.category_totals["standard"] == 9 * 360 + 23 * 30 + 4
        assert row.category_totals["dirty"] == 0
        assert row.production_percentage == pytest.approx(120.99)

    def test_negative_closing_shown(self, seeded_store, today):
        seeded_store.record_egg_production_report(EggProductionReportCreate(
            date=today, flock_id="h2",
            jumbo=EggCategoryProduction(today=EggStock(tray=1), sale=EggStock(case=1)),
        ))

        row = egg_production_rows(seeded_store, today, today)[0]

        assert row.flock_id == "h2"
        assert total_eggs(row.closing_stock["jumbo"]) == 30 - 360

    def test_rows_newest_first(self, seeded_store, today):
        seeded_store.record_egg_production_report(eggs_report(today - timedelta(days=3), "h2", trays=1))
        seeded_store.record_egg_production_report(eggs_report(today + timedelta(days=1), "h3", trays=1))

        dates = [row.date for row in egg_production_rows(seeded_store)]

        assert dates == [today + timedelta(days=1), today, today - timedelta(days=3)]

    def test_unknown_flock_row(self, fixed_clock, today):
        store = build_seeded_store(fixed_clock, reject_unknown_flocks=False)
        store.record_egg_production_report(eggs_report(today, "h9", trays=1))

        row = egg_production_rows(store)[0]

        assert row.flock_name is None
        assert row.production_percentage is None


class TestProductionPercentage:
    """Tests for eggs per live bird."""

    def test_rounded_to_two_decimals(self, seeded_store):
        assert production_percentage(5868, seeded_store.get_flock("h1")) == 120.99

    def test_unknown_flock(self):
        assert production_percentage(100, None) is None

    def test_no_live_birds(self, seeded_store):
        flock = seeded_store.get_flock("h2").model_copy(update={"current_bird_count": 0})

        assert production_percentage(100, flock) is None
