"""
Dependency injection for FastAPI.

The store and clock are created once per application in the lifespan
handler and live on ``app.state``; everything else is built per request
from them.
"""
from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from poultry_dashboard.config import settings
from poultry_dashboard.domain.exceptions import MissingRoleError
from poultry_dashboard.domain.models import Role
from poultry_dashboard.infrastructure.clock import Clock
from poultry_dashboard.services.application.farm_service import FarmService
from poultry_dashboard.services.domain.metrics import MetricsEngine
from poultry_dashboard.services.domain.report_store import ReportStore


def get_store(request: Request) -> ReportStore:
    return request.app.state.store


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_metrics_engine(
    store: Annotated[ReportStore, Depends(get_store)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> MetricsEngine:
    """
    Dependency factory for MetricsEngine.

    Args:
        store: Farm record store (injected)
        clock: Farm clock (injected)

    Returns:
        MetricsEngine instance
    """
    return MetricsEngine(store=store, clock=clock, opening_balance=settings.opening_cash_balance)


def get_farm_service(
    store: Annotated[ReportStore, Depends(get_store)],
    metrics: Annotated[MetricsEngine, Depends(get_metrics_engine)],
) -> FarmService:
    """
    Dependency factory for FarmService.

    Args:
        store: Farm record store (injected)
        metrics: Metrics engine (injected)

    Returns:
        FarmService instance
    """
    return FarmService(store=store, metrics=metrics)


def get_current_role(
    x_farm_role: Annotated[Optional[Role], Header(description="Role of the signed-in user")] = None,
) -> Role:
    """
    Role asserted by the caller for a mutating request.

    Raises:
        MissingRoleError: If the header is absent
    """
    if x_farm_role is None:
        raise MissingRoleError("X-Farm-Role header is required for this action")
    return x_farm_role


# Type aliases for cleaner route signatures
FarmServiceDep = Annotated[FarmService, Depends(get_farm_service)]
CurrentRoleDep = Annotated[Role, Depends(get_current_role)]
