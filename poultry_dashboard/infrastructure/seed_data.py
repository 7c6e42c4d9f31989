"""
Startup dataset.

The store is volatile, so every process starts from these records: three
flocks whose counters already include the historical reports below.
"""
from datetime import date, datetime

from poultry_dashboard.domain.models import (
    DailyFeedReport,
    EggCategoryProduction,
    EggProductionReport,
    EggStock,
    FinanceTransaction,
    Flock,
    GateMovementType,
    InventoryCategory,
    InventoryItem,
    InventoryUnit,
    MedicineReport,
    MortalityReport,
    SecurityLog,
    TransactionType,
)
from poultry_dashboard.infrastructure.clock import Clock
from poultry_dashboard.services.domain.flock_ledger import FlockLedger
from poultry_dashboard.services.domain.report_store import ReportKind, ReportStore

SEED_DATE = date(2024, 7, 27)


def _produced(case: int = 0, tray: int = 0, loose: int = 0) -> EggCategoryProduction:
    return EggCategoryProduction(today=EggStock(case=case, tray=tray, loose=loose))


def seed_flocks() -> list[Flock]:
    return [
        Flock(id="h1", name="H1", breed="Lohmann Brown", arrival_date=date(2023, 1, 15),
              initial_bird_count=5000, current_bird_count=4850, cost_per_chick=120,
              total_mortality=150, total_feed=55000, total_eggs=950000),
        Flock(id="h2", name="H2", breed="Hy-Line Brown", arrival_date=date(2023, 3, 20),
              initial_bird_count=5000, current_bird_count=4910, cost_per_chick=125,
              total_mortality=90, total_feed=52000, total_eggs=925000),
        Flock(id="h3", name="H3", breed="ISA Brown", arrival_date=date(2023, 6, 10),
              initial_bird_count=5000, current_bird_count=4950, cost_per_chick=122,
              total_mortality=50, total_feed=48000, total_eggs=890000),
    ]


def seed_reports() -> dict[ReportKind, list]:
    return {
        ReportKind.FEED: [
            DailyFeedReport(id="fr1", date=SEED_DATE, flock_id="h1", feed_consumed_per_bird=110,
                            water_consumed_normal=800, opening_stock_feed=1500, feed_received=500,
                            total_feed_used=533.5, bird_count_snapshot=4850, remarks="Normal consumption"),
            DailyFeedReport(id="fr2", date=SEED_DATE, flock_id="h2", feed_consumed_per_bird=112,
                            water_consumed_normal=810, opening_stock_feed=1800, feed_received=0,
                            total_feed_used=550, bird_count_snapshot=4910,
                            remarks="Slightly increased water intake"),
        ],
        ReportKind.MORTALITY: [
            MortalityReport(id="mr1", date=SEED_DATE, flock_id="h1", night_mortality=2,
                            hospital_mortality=1, total=3, remarks="Normal mortality rate"),
        ],
        ReportKind.MEDICINE: [
            MedicineReport(id="medr1", date=SEED_DATE, flock_id="h1", medicine_name="Kanamycin",
                           dose="1ml/L", medicine_used="4 Bottles", total_hours="2 hrs",
                           remarks="For respiratory issues"),
        ],
        ReportKind.EGG_PRODUCTION: [
            EggProductionReport(
                id="er1", date=SEED_DATE, flock_id="h1",
                starter=_produced(tray=3, loose=10),
                medium=_produced(case=2, tray=20),
                standard=_produced(case=9, tray=23, loose=4),
                jumbo=_produced(case=1, tray=3, loose=4),
                broken=_produced(tray=1, loose=20),
                liquid=_produced(loose=10),
            ),
        ],
        ReportKind.FINANCE: [
            FinanceTransaction(id="ft1", date=SEED_DATE, voucher_no="IN-001", type=TransactionType.INWARD,
                               source_or_expense_type="Egg Sales - Local Market", amount=55000,
                               remarks="Payment from Tariq Traders"),
            FinanceTransaction(id="ft2", date=SEED_DATE, voucher_no="OUT-001", type=TransactionType.OUTWARD,
                               source_or_expense_type="Feed Purchase", amount=120000,
                               remarks="Paid to Punjab Feeds"),
            FinanceTransaction(id="ft3", date=SEED_DATE, voucher_no="OUT-002", type=TransactionType.OUTWARD,
                               source_or_expense_type="Diesel", amount=5000, remarks="For generator"),
        ],
        ReportKind.SECURITY: [
            SecurityLog(id="sl1", timestamp=datetime(2024, 7, 28, 9, 15, 23), type=GateMovementType.INWARD,
                        vehicle_number="MNC-1234", driver_name="Ali Khan", material_type="Feed",
                        quantity="200 bags", photo_or_doc_url="https://picsum.photos/200"),
            SecurityLog(id="sl2", timestamp=datetime(2024, 7, 28, 11, 45, 5), type=GateMovementType.OUTWARD,
                        vehicle_number="LET-5678", driver_name="Bilal Ahmed", material_type="Eggs",
                        quantity="500 trays", photo_or_doc_url="https://picsum.photos/201"),
        ],
    }


def seed_inventory() -> list[InventoryItem]:
    return [
        InventoryItem(id="inv1", name="Layer Feed A", category=InventoryCategory.FEED, unit=InventoryUnit.KG,
                      stock=15000, low_stock_threshold=5000, supplier="Punjab Feeds"),
        InventoryItem(id="inv2", name="Calcium Vita", category=InventoryCategory.MEDICINE,
                      unit=InventoryUnit.BOTTLES, stock=50, low_stock_threshold=10, supplier="Pharma Solutions"),
        InventoryItem(id="inv3", name="Egg Trays", category=InventoryCategory.TRAYS, unit=InventoryUnit.UNITS,
                      stock=20000, low_stock_threshold=5000, supplier="Packaging Co."),
    ]


def build_seeded_store(clock: Clock, reject_unknown_flocks: bool = True) -> ReportStore:
    """Create a store loaded with the startup dataset."""
    store = ReportStore(
        clock=clock,
        ledger=FlockLedger(seed_flocks()),
        reject_unknown_flocks=reject_unknown_flocks,
    )
    for kind, records in seed_reports().items():
        store.load(kind, records)
    store.load_inventory(seed_inventory())
    return store
