"""
Domain models for flocks, daily reports and farm-wide records.

These models represent the core domain entities and should be independent
of any infrastructure concerns (HTTP, storage, clocks, etc.).

The ``*Create`` models describe a field-complete submission without the
generated identifier and derived fields; the stored models extend them.
"""
import datetime as dt
import math
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, Field, field_validator


def coerce_float(value: Any) -> float:
    """Coerce form input to a float, mapping blank or malformed values to 0."""
    if value is None or isinstance(value, bool):
        return float(bool(value))
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def coerce_int(value: Any) -> int:
    """Coerce form input to an int, truncating fractions like ``float`` input would."""
    return int(coerce_float(value))


def coerce_count(value: Any) -> int:
    """Coerce a headcount or egg count; negative entries become 0."""
    return max(coerce_int(value), 0)


def coerce_quantity(value: Any) -> float:
    """Coerce a consumed or received quantity; negative entries become 0."""
    return max(coerce_float(value), 0.0)


LenientFloat = Annotated[float, BeforeValidator(coerce_float)]
LenientInt = Annotated[int, BeforeValidator(coerce_int)]
LenientCount = Annotated[int, BeforeValidator(coerce_count)]
LenientQuantity = Annotated[float, BeforeValidator(coerce_quantity)]


class Role(str, Enum):
    """Dashboard user roles."""
    ADMIN = "Admin"
    MANAGER = "Manager"
    WORKER = "Worker"
    ACCOUNTANT = "Accountant"
    SECURITY_GUARD = "Security Guard"


class Page(str, Enum):
    """Navigable dashboard pages."""
    DASHBOARD = "Dashboard"
    DAILY_ENTRY_FORM = "Daily Entry Form"
    FLOCK_MANAGEMENT = "Flock Management"
    DAILY_FEED_AND_WATER = "Daily Feed & Water"
    MORTALITY_AND_HEALTH = "Mortality & Health"
    EGG_PRODUCTION = "Egg Production"
    FINANCE_LEDGER = "Finance Ledger"
    INVENTORY = "Inventory"
    SECURITY_GATE_LOG = "Security Gate Log"
    REPORTS = "Reports"


class TransactionType(str, Enum):
    INWARD = "Inward"
    OUTWARD = "Outward"


class GateMovementType(str, Enum):
    INWARD = "Inward"
    OUTWARD = "Outward"


class InventoryCategory(str, Enum):
    FEED = "Feed"
    MEDICINE = "Medicine"
    TRAYS = "Trays"
    PACKAGING = "Packaging"
    DIESEL = "Diesel"
    OTHER = "Other"


class InventoryUnit(str, Enum):
    KG = "kg"
    LITERS = "liters"
    UNITS = "units"
    BOTTLES = "bottles"


# ============================================================
# Flocks
# ============================================================

class FlockCreate(BaseModel):
    """Flock registration input."""
    name: str = Field(min_length=1)
    breed: str = Field(min_length=1)
    arrival_date: dt.date
    initial_bird_count: LenientInt = Field(gt=0)
    cost_per_chick: LenientFloat = 0.0


class Flock(FlockCreate):
    """One poultry shed with its running totals."""
    id: str
    current_bird_count: int
    total_mortality: int = 0
    total_feed: float = Field(default=0.0, description="Cumulative feed in kg")
    total_eggs: int = 0


# ============================================================
# Egg stock
# ============================================================

class EggStock(BaseModel):
    """A quantity of eggs in case (petti), tray and loose denominations."""
    case: LenientInt = Field(default=0, validation_alias=AliasChoices("case", "petti"))
    tray: LenientInt = 0
    loose: LenientInt = Field(default=0, validation_alias=AliasChoices("loose", "eggs"))


class EggCategoryProduction(BaseModel):
    """
    Opening stock, today's production and today's sales for one egg size.

    Entered components are never negative. Closing stock, which is derived
    from these, may still go negative when sales exceed supply.
    """
    opening: EggStock = Field(default_factory=EggStock)
    today: EggStock = Field(default_factory=EggStock)
    sale: EggStock = Field(default_factory=EggStock)

    @field_validator("opening", "today", "sale")
    @classmethod
    def clamp_negative_components(cls, stock: EggStock) -> EggStock:
        return EggStock(
            case=coerce_count(stock.case),
            tray=coerce_count(stock.tray),
            loose=coerce_count(stock.loose),
        )


EGG_CATEGORIES = ("starter", "medium", "standard", "jumbo", "dirty", "broken", "liquid")


# ============================================================
# Daily flock reports
# ============================================================

class FlockDated(BaseModel):
    """Fields shared by every per-flock daily report."""
    date: dt.date
    flock_id: str


class FeedEntry(BaseModel):
    feed_consumed_per_bird: LenientQuantity = Field(default=0.0, description="Grams per bird")
    water_consumed_normal: LenientQuantity = Field(default=0.0, description="Liters")
    water_consumed_medicated: LenientQuantity = Field(default=0.0, description="Liters")
    opening_stock_feed: LenientQuantity = Field(default=0.0, description="Kilograms")
    feed_received: LenientQuantity = Field(default=0.0, description="Kilograms")
    remarks: str = ""


class FeedReportCreate(FlockDated, FeedEntry):
    pass


class DailyFeedReport(FeedReportCreate):
    id: str
    total_feed_used: float = Field(description="Kilograms, computed at submission")
    bird_count_snapshot: int = Field(description="Live birds when the report was recorded")


class MortalityEntry(BaseModel):
    night_mortality: LenientCount = 0
    hospital_mortality: LenientCount = 0
    remarks: str = ""


class MortalityReportCreate(FlockDated, MortalityEntry):
    pass


class MortalityReport(MortalityReportCreate):
    id: str
    total: int


class MedicineEntry(BaseModel):
    medicine_name: str = ""
    dose: str = ""
    medicine_used: str = ""
    total_hours: str = ""
    remarks: str = ""


class MedicineReportCreate(FlockDated, MedicineEntry):
    medicine_name: str = Field(min_length=1)


class MedicineReport(MedicineReportCreate):
    id: str


class EggCategories(BaseModel):
    """Production for every egg size category."""
    starter: EggCategoryProduction = Field(default_factory=EggCategoryProduction)
    medium: EggCategoryProduction = Field(default_factory=EggCategoryProduction)
    standard: EggCategoryProduction = Field(default_factory=EggCategoryProduction)
    jumbo: EggCategoryProduction = Field(default_factory=EggCategoryProduction)
    dirty: EggCategoryProduction = Field(default_factory=EggCategoryProduction)
    broken: EggCategoryProduction = Field(default_factory=EggCategoryProduction)
    liquid: EggCategoryProduction = Field(default_factory=EggCategoryProduction)

    def categories(self) -> dict[str, EggCategoryProduction]:
        """Category name to production, in display order."""
        return {name: getattr(self, name) for name in EGG_CATEGORIES}


class EggProductionReportCreate(FlockDated, EggCategories):
    pass


class EggProductionReport(EggProductionReportCreate):
    id: str


class DailyEntryCreate(FlockDated):
    """
    One flock's whole day in a single submission.

    Medicine rows without a medicine name are ignored.
    """
    feed: FeedEntry = Field(default_factory=FeedEntry)
    mortality: MortalityEntry = Field(default_factory=MortalityEntry)
    medicines: list[MedicineEntry] = Field(default_factory=list)
    eggs: EggCategories = Field(default_factory=EggCategories)


class DailyEntry(BaseModel):
    """Reports created by a daily entry submission."""
    feed_report: DailyFeedReport
    mortality_report: MortalityReport
    medicine_reports: list[MedicineReport]
    egg_production_report: EggProductionReport


# ============================================================
# Farm-wide records
# ============================================================

class FinanceTransactionCreate(BaseModel):
    date: dt.date
    voucher_no: str = ""
    type: TransactionType
    source_or_expense_type: str = ""
    amount: LenientFloat = 0.0
    remarks: str = ""


class FinanceTransaction(FinanceTransactionCreate):
    id: str


class InventoryItemCreate(BaseModel):
    name: str = Field(min_length=1)
    category: InventoryCategory = InventoryCategory.FEED
    unit: InventoryUnit = InventoryUnit.KG
    stock: LenientFloat = 0.0
    low_stock_threshold: LenientFloat = 0.0
    supplier: str = ""


class InventoryItem(InventoryItemCreate):
    id: str


class SecurityLogCreate(BaseModel):
    timestamp: dt.datetime
    type: GateMovementType
    vehicle_number: str = ""
    driver_name: str = ""
    material_type: str = ""
    quantity: str = Field(default="", description="Free text, e.g. '200 bags'")
    photo_or_doc_url: Optional[str] = None


class SecurityLog(SecurityLogCreate):
    id: str


class User(BaseModel):
    """Simulated signed-in user."""
    username: str
    role: Role
