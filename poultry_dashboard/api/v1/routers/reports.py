"""
API router for daily flock reports and report listings.
"""
from typing import Any, List

from fastapi import APIRouter

from poultry_dashboard.api.dependencies import CurrentRoleDep, FarmServiceDep
from poultry_dashboard.api.v1.models.queries import EndDate, StartDate
from poultry_dashboard.api.v1.models.responses import EggProductionRowResponse, RecordedResponse
from poultry_dashboard.domain.models import (
    DailyEntry,
    DailyEntryCreate,
    DailyFeedReport,
    EggProductionReport,
    EggProductionReportCreate,
    FeedReportCreate,
    FinanceTransaction,
    MedicineReport,
    MedicineReportCreate,
    MortalityReport,
    MortalityReportCreate,
    SecurityLog,
)
from poultry_dashboard.services.domain.report_store import ReportKind


router = APIRouter(tags=["reports"])

SUBMISSION_ERRORS = {
    401: {"description": "Role header missing"},
    403: {"description": "Role may not submit this report"},
    404: {"description": "Flock not found"},
}


REPORT_MODELS = {
    ReportKind.FEED: DailyFeedReport,
    ReportKind.MORTALITY: MortalityReport,
    ReportKind.MEDICINE: MedicineReport,
    ReportKind.EGG_PRODUCTION: EggProductionReport,
    ReportKind.FINANCE: FinanceTransaction,
    ReportKind.SECURITY: SecurityLog,
}


def add_listing_route(kind: ReportKind, model: type) -> None:
    """Register ``GET /reports/<kind>`` returning that kind's stored model."""

    async def list_reports(
        farm_service: FarmServiceDep,
        start: StartDate = None,
        end: EndDate = None,
    ) -> List[Any]:
        return farm_service.list_reports(kind, start, end)

    router.add_api_route(
        f"/reports/{kind.value}",
        list_reports,
        methods=["GET"],
        response_model=List[model],
        name=f"list_{kind.name.lower()}_reports",
        summary=f"List {kind.value.replace('-', ' ')} records",
        description="""
        Records whose date falls within ``[start, end]`` (both inclusive,
        either optional), newest first. An inverted range returns an empty
        list.
        """,
    )


for report_kind, report_model in REPORT_MODELS.items():
    add_listing_route(report_kind, report_model)


@router.post(
    "/reports/feed",
    response_model=RecordedResponse[DailyFeedReport],
    status_code=201,
    summary="Submit a feed & water report",
    description="""
    Feed used (kg) is computed from grams per bird and the flock's live bird
    count at submission; both are stored with the report and the feed is
    added to the flock's cumulative total.
    """,
    responses=SUBMISSION_ERRORS,
)
async def submit_feed_report(
    data: FeedReportCreate,
    role: CurrentRoleDep,
    farm_service: FarmServiceDep,
) -> RecordedResponse[DailyFeedReport]:
    report = farm_service.record_feed_report(role, data)
    return RecordedResponse[DailyFeedReport](message="Feed & Water report added successfully!", record=report)


@router.post(
    "/reports/mortality",
    response_model=RecordedResponse[MortalityReport],
    status_code=201,
    summary="Submit a mortality report",
    responses=SUBMISSION_ERRORS,
)
async def submit_mortality_report(
    data: MortalityReportCreate,
    role: CurrentRoleDep,
    farm_service: FarmServiceDep,
) -> RecordedResponse[MortalityReport]:
    report = farm_service.record_mortality_report(role, data)
    return RecordedResponse[MortalityReport](message="Mortality report added successfully!", record=report)


@router.post(
    "/reports/medicine",
    response_model=RecordedResponse[MedicineReport],
    status_code=201,
    summary="Submit a medicine report",
    responses=SUBMISSION_ERRORS,
)
async def submit_medicine_report(
    data: MedicineReportCreate,
    role: CurrentRoleDep,
    farm_service: FarmServiceDep,
) -> RecordedResponse[MedicineReport]:
    report = farm_service.record_medicine_report(role, data)
    return RecordedResponse[MedicineReport](message="Medicine report added successfully!", record=report)


@router.post(
    "/reports/egg-production",
    response_model=RecordedResponse[EggProductionReport],
    status_code=201,
    summary="Submit an egg production report",
    responses=SUBMISSION_ERRORS,
)
async def submit_egg_production_report(
    data: EggProductionReportCreate,
    role: CurrentRoleDep,
    farm_service: FarmServiceDep,
) -> RecordedResponse[EggProductionReport]:
    report = farm_service.record_egg_production_report(role, data)
    return RecordedResponse[EggProductionReport](
        message="Egg production report added successfully!",
        record=report,
    )


@router.post(
    "/reports/daily-entry",
    response_model=RecordedResponse[DailyEntry],
    status_code=201,
    summary="Submit a whole day for one flock",
    description="""
    Records a feed report, a mortality report, one medicine report per row
    that names a medicine, and an egg production report, all for the same
    flock and date.
    """,
    responses=SUBMISSION_ERRORS,
)
async def submit_daily_entry(
    data: DailyEntryCreate,
    role: CurrentRoleDep,
    farm_service: FarmServiceDep,
) -> RecordedResponse[DailyEntry]:
    entry = farm_service.record_daily_entry(role, data)
    flock_name = farm_service.flock_name(data.flock_id)
    return RecordedResponse[DailyEntry](
        message=f"Daily report for Flock {flock_name} on {data.date.isoformat()} submitted successfully!",
        record=entry,
    )


@router.get(
    "/egg-production",
    response_model=List[EggProductionRowResponse],
    summary="Egg production table",
    description="""
    One row per egg production report in the date range, newest first, with
    per-category totals, closing stock and production percentage.
    """,
)
async def egg_production_table(
    farm_service: FarmServiceDep,
    start: StartDate = None,
    end: EndDate = None,
) -> List[EggProductionRowResponse]:
    return [
        EggProductionRowResponse.model_validate(row, from_attributes=True)
        for row in farm_service.egg_production_rows(start, end)
    ]
