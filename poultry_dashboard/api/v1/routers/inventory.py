"""
API router for inventory endpoints.
"""
from typing import List

from fastapi import APIRouter

from poultry_dashboard.api.dependencies import CurrentRoleDep, FarmServiceDep
from poultry_dashboard.api.v1.models.responses import LowStockResponse, RecordedResponse
from poultry_dashboard.domain.models import InventoryItem, InventoryItemCreate


router = APIRouter(
    prefix="/inventory",
    tags=["inventory"],
)


@router.get("", response_model=List[InventoryItem], summary="List inventory items")
async def list_inventory(farm_service: FarmServiceDep) -> List[InventoryItem]:
    return farm_service.inventory()


@router.post(
    "",
    response_model=RecordedResponse[InventoryItem],
    status_code=201,
    summary="Add an inventory item",
    responses={
        401: {"description": "Role header missing"},
        403: {"description": "Role may not manage inventory"},
    },
)
async def add_inventory_item(
    data: InventoryItemCreate,
    role: CurrentRoleDep,
    farm_service: FarmServiceDep,
) -> RecordedResponse[InventoryItem]:
    item = farm_service.register_inventory_item(role, data)
    return RecordedResponse[InventoryItem](message=f"Item {item.name} added to inventory.", record=item)


@router.get(
    "/low-stock",
    response_model=LowStockResponse,
    summary="Items at or below their low stock threshold",
)
async def low_stock(farm_service: FarmServiceDep) -> LowStockResponse:
    items = farm_service.low_stock_items()
    return LowStockResponse(count=len(items), items=items)
