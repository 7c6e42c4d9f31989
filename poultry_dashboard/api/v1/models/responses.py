"""
API response models using Pydantic.
"""
from datetime import date
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from poultry_dashboard.domain.models import EggStock, InventoryItem, Page, Role, User

T = TypeVar("T")


class RecordedResponse(BaseModel, Generic[T]):
    """Response for a successful submission."""
    message: str = Field(
        description="Confirmation suitable for a transient notification banner"
    )
    record: T


class SessionResponse(BaseModel):
    """Simulated sign-in result."""
    user: User
    allowed_pages: List[Page]
    landing_page: Page

    class Config:
        json_schema_extra = {
            "example": {
                "user": {"username": "manager@aafarm.com", "role": "Manager"},
                "allowed_pages": ["Dashboard", "Daily Entry Form", "Flock Management"],
                "landing_page": "Dashboard",
            }
        }


class RolePagesResponse(BaseModel):
    role: Role
    allowed_pages: List[Page]
    landing_page: Page


class TodaySummaryResponse(BaseModel):
    """Same-day dashboard totals."""
    date: date
    total_birds: int = Field(description="Live birds across all flocks")
    eggs_today: int
    feed_today_kg: float
    mortality_today: int
    cash_inward_today: float
    cash_outward_today: float
    net_cash_flow: float
    low_stock_count: int

    class Config:
        from_attributes = True


class EggTrendPointResponse(BaseModel):
    date: date
    label: str = Field(description="Short weekday name", examples=["Mon"])
    flocks: dict[str, int] = Field(description="Eggs per flock id, zero when not reported")
    total: int

    class Config:
        from_attributes = True


class FeedTrendPointResponse(BaseModel):
    date: date
    label: str
    feed_kg: float

    class Config:
        from_attributes = True


class TrendResponse(BaseModel):
    """Daily series ending today, oldest first."""
    days: int
    flock_names: dict[str, str]
    eggs: List[EggTrendPointResponse]
    feed: List[FeedTrendPointResponse]

    class Config:
        from_attributes = True


class CashBalanceResponse(BaseModel):
    opening: float
    total_inward: float
    total_outward: float
    closing: float

    class Config:
        from_attributes = True


class EggProductionRowResponse(BaseModel):
    report_id: str
    date: date
    flock_id: str
    flock_name: Optional[str]
    category_totals: dict[str, int]
    closing_stock: dict[str, EggStock]
    total_eggs: int
    production_percentage: Optional[float] = Field(
        description="Eggs per live bird in percent; null when not applicable"
    )

    class Config:
        from_attributes = True


class LowStockResponse(BaseModel):
    count: int
    items: List[InventoryItem]
