"""
API router for dashboard metrics.
"""
from typing import Annotated

from fastapi import APIRouter, Query

from poultry_dashboard.api.dependencies import FarmServiceDep
from poultry_dashboard.api.v1.models.responses import TodaySummaryResponse, TrendResponse
from poultry_dashboard.config import settings


router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get(
    "/summary",
    response_model=TodaySummaryResponse,
    summary="Today's totals",
    description="""
    Same-day totals for the farm calendar day: live birds, eggs, feed (kg),
    mortality, cash in and out, net cash flow and the number of low-stock
    inventory items.
    """,
)
async def todays_summary(farm_service: FarmServiceDep) -> TodaySummaryResponse:
    return TodaySummaryResponse.model_validate(farm_service.todays_summary(), from_attributes=True)


@router.get(
    "/trend",
    response_model=TrendResponse,
    summary="Egg and feed trend",
    description="""
    One point per day for the window ending today, oldest first. Egg points
    carry a value for every flock; missing days and flocks are zero.
    """,
)
async def trend(
    farm_service: FarmServiceDep,
    days: Annotated[
        int,
        Query(ge=1, le=settings.max_trend_window_days, description="Window length in days"),
    ] = settings.trend_window_days,
) -> TrendResponse:
    return TrendResponse.model_validate(farm_service.trend(days), from_attributes=True)
