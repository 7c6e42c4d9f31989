"""
API router for the security gate log.
"""
from typing import List

from fastapi import APIRouter

from poultry_dashboard.api.dependencies import CurrentRoleDep, FarmServiceDep
from poultry_dashboard.api.v1.models.queries import EndDate, StartDate
from poultry_dashboard.api.v1.models.responses import RecordedResponse
from poultry_dashboard.domain.models import SecurityLog, SecurityLogCreate
from poultry_dashboard.services.domain.report_store import ReportKind


router = APIRouter(
    prefix="/security",
    tags=["security"],
)


@router.get("/logs", response_model=List[SecurityLog], summary="List gate movements")
async def list_logs(
    farm_service: FarmServiceDep,
    start: StartDate = None,
    end: EndDate = None,
) -> List[SecurityLog]:
    return farm_service.list_reports(ReportKind.SECURITY, start, end)


@router.post(
    "/logs",
    response_model=RecordedResponse[SecurityLog],
    status_code=201,
    summary="Record a gate movement",
    responses={
        401: {"description": "Role header missing"},
        403: {"description": "Role may not record gate movements"},
    },
)
async def record_log(
    data: SecurityLogCreate,
    role: CurrentRoleDep,
    farm_service: FarmServiceDep,
) -> RecordedResponse[SecurityLog]:
    log = farm_service.record_security_log(role, data)
    return RecordedResponse[SecurityLog](message=f"{log.type.value} entry recorded successfully!", record=log)
