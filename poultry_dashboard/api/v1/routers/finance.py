"""
API router for the finance ledger.
"""
from typing import Annotated, List, Optional

from fastapi import APIRouter, Query

from poultry_dashboard.api.dependencies import CurrentRoleDep, FarmServiceDep
from poultry_dashboard.api.v1.models.responses import CashBalanceResponse, RecordedResponse
from poultry_dashboard.domain.models import FinanceTransaction, FinanceTransactionCreate, TransactionType


router = APIRouter(
    prefix="/finance",
    tags=["finance"],
)


@router.get(
    "/transactions",
    response_model=List[FinanceTransaction],
    summary="List transactions",
)
async def list_transactions(
    farm_service: FarmServiceDep,
    type: Annotated[Optional[TransactionType], Query(description="Only this direction")] = None,
) -> List[FinanceTransaction]:
    return farm_service.list_transactions(type)


@router.post(
    "/transactions",
    response_model=RecordedResponse[FinanceTransaction],
    status_code=201,
    summary="Add a transaction",
    description="Only Admin and Accountant may add transactions.",
    responses={
        401: {"description": "Role header missing"},
        403: {"description": "Role may not add transactions"},
    },
)
async def add_transaction(
    data: FinanceTransactionCreate,
    role: CurrentRoleDep,
    farm_service: FarmServiceDep,
) -> RecordedResponse[FinanceTransaction]:
    transaction = farm_service.record_finance_transaction(role, data)
    return RecordedResponse[FinanceTransaction](message="Transaction added successfully!", record=transaction)


@router.get(
    "/balance",
    response_model=CashBalanceResponse,
    summary="Cash balance",
    description="""
    Opening balance plus every inward amount minus every outward amount,
    over the whole transaction history.
    """,
)
async def cash_balance(farm_service: FarmServiceDep) -> CashBalanceResponse:
    return CashBalanceResponse.model_validate(farm_service.cash_balance(), from_attributes=True)
