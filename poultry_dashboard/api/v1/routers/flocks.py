"""
API router for flock endpoints.
"""
from typing import Annotated, List

from fastapi import APIRouter, Path

from poultry_dashboard.api.dependencies import CurrentRoleDep, FarmServiceDep
from poultry_dashboard.api.v1.models.responses import RecordedResponse
from poultry_dashboard.domain.models import Flock, FlockCreate


router = APIRouter(
    prefix="/flocks",
    tags=["flocks"],
)


@router.get("", response_model=List[Flock], summary="List flocks")
async def list_flocks(farm_service: FarmServiceDep) -> List[Flock]:
    return farm_service.list_flocks()


@router.post(
    "",
    response_model=RecordedResponse[Flock],
    status_code=201,
    summary="Register a flock",
    description="""
    Register a new flock. The live bird count starts at the initial bird count
    and every cumulative counter starts at zero.

    Only Admin and Manager may register flocks.
    """,
    responses={
        401: {"description": "Role header missing"},
        403: {"description": "Role may not register flocks"},
    },
)
async def register_flock(
    data: FlockCreate,
    role: CurrentRoleDep,
    farm_service: FarmServiceDep,
) -> RecordedResponse[Flock]:
    flock = farm_service.register_flock(role, data)
    return RecordedResponse[Flock](message=f"Flock {flock.name} added successfully!", record=flock)


@router.get(
    "/{flock_id}",
    response_model=Flock,
    summary="Get a flock",
    responses={404: {"description": "Flock not found"}},
)
async def get_flock(
    flock_id: Annotated[str, Path(description="Flock identifier, e.g. 'h1'")],
    farm_service: FarmServiceDep,
) -> Flock:
    return farm_service.get_flock(flock_id)
