"""Schedule report routes: debt by company, amortization, depreciation."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from fleetfin.api.auth import get_current_user_id
from fleetfin.api.deps import get_as_of, get_repository
from fleetfin.api.schemas import (
    AmortizationScheduleItem,
    DebtScheduleItem,
    DepreciationScheduleItem,
)
from fleetfin.data.repository import FleetRepository
from fleetfin.engine.schedules import amortization_report, debt_summary, depreciation_report

router = APIRouter(prefix="/api/v1/schedules", tags=["schedules"])


@router.get("/debt", response_model=list[DebtScheduleItem])
async def get_debt_schedule(
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    """Outstanding debt and monthly obligation per company."""
    companies = await repo.list_companies(user_id)
    loans = await repo.list_loans(user_id)
    vehicles = await repo.list_vehicles(user_id)
    return [
        DebtScheduleItem.model_validate(row, from_attributes=True)
        for row in debt_summary(companies, loans, vehicles)
    ]


@router.get("/amortization", response_model=list[AmortizationScheduleItem])
async def get_amortization_schedule(
    loan_id: str | None = None,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    """Projected payment table for every active loan, or for one loan."""
    if loan_id is not None:
        loan = await repo.get_loan(user_id, loan_id)
        if loan is None:
            raise HTTPException(status_code=404, detail="Loan not found")
        loans = [loan]
    else:
        loans = await repo.list_loans(user_id)

    return [
        AmortizationScheduleItem.model_validate(row, from_attributes=True)
        for row in amortization_report(loans, loan_id=loan_id)
    ]


@router.get("/depreciation", response_model=list[DepreciationScheduleItem])
async def get_depreciation_schedule(
    company_id: str | None = None,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
    as_of: datetime = Depends(get_as_of),
):
    """Current book value of each vehicle, optionally for a single company."""
    if company_id is not None and not await repo.owns_company(user_id, company_id):
        raise HTTPException(status_code=404, detail="Company not found")

    vehicles = await repo.list_vehicles(user_id)
    return [
        DepreciationScheduleItem.model_validate(row, from_attributes=True)
        for row in depreciation_report(vehicles, as_of, company_id=company_id)
    ]
