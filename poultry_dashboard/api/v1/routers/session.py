"""
API router for simulated sign-in and role navigation.
"""
from typing import Annotated

from fastapi import APIRouter, Body, Path

from poultry_dashboard.api.dependencies import FarmServiceDep
from poultry_dashboard.api.v1.models.responses import RolePagesResponse, SessionResponse
from poultry_dashboard.domain.models import Role


router = APIRouter(tags=["session"])


@router.post(
    "/auth/login",
    response_model=SessionResponse,
    summary="Sign in as a role",
    description="""
    Simulated sign-in. Any role is accepted; the response lists the pages the
    role may open and the page to land on. Credentials are not checked.
    """,
)
async def login(
    role: Annotated[Role, Body(embed=True)],
    farm_service: FarmServiceDep,
) -> SessionResponse:
    return SessionResponse(
        user=farm_service.login(role),
        allowed_pages=farm_service.allowed_pages(role),
        landing_page=farm_service.landing_page(role),
    )


@router.get(
    "/roles/{role}/pages",
    response_model=RolePagesResponse,
    summary="Pages available to a role",
)
async def role_pages(
    role: Annotated[Role, Path(description="Role name, e.g. 'Security Guard'")],
    farm_service: FarmServiceDep,
) -> RolePagesResponse:
    return RolePagesResponse(
        role=role,
        allowed_pages=farm_service.allowed_pages(role),
        landing_page=farm_service.landing_page(role),
    )
