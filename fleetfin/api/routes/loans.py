"""Loan routes. Monthly payment is always computed server-side from the terms."""

from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException

from fleetfin.api.auth import get_current_user_id
from fleetfin.api.deps import get_repository
from fleetfin.api.schemas import LoanCreate, LoanResponse, LoanUpdate
from fleetfin.data.repository import FleetRepository
from fleetfin.engine.errors import LoanClosedError
from fleetfin.engine.loans import open_loan, revise_terms
from fleetfin.models.fleet import Loan

router = APIRouter(prefix="/api/v1/loans", tags=["loans"])


def loan_to_response(loan: Loan) -> LoanResponse:
    return LoanResponse(
        id=loan.id,
        company_id=loan.company_id,
        vehicle_id=loan.vehicle_id,
        lender=loan.lender,
        principal_amount=loan.principal_amount,
        interest_rate=loan.interest_rate,
        term_months=loan.term_months,
        start_date=loan.start_date,
        monthly_payment=loan.monthly_payment,
        remaining_balance=loan.remaining_balance,
        status=loan.status.value,
    )


@router.get("", response_model=list[LoanResponse])
async def list_loans(
    company_id: str | None = None,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    loans = await repo.list_loans(user_id)
    return [loan_to_response(loan) for loan in loans if company_id is None or loan.company_id == company_id]


@router.post("", response_model=LoanResponse, status_code=201)
async def create_loan(
    req: LoanCreate,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    if not await repo.owns_company(user_id, req.company_id):
        raise HTTPException(status_code=403, detail="Company not found or access denied")

    loan = open_loan(
        id=str(uuid4()),
        company_id=req.company_id,
        vehicle_id=req.vehicle_id,
        lender=req.lender,
        principal_amount=req.principal_amount,
        interest_rate=req.interest_rate,
        term_months=req.term_months,
        start_date=req.start_date,
    )
    return loan_to_response(await repo.add_loan(loan))


@router.put("/{loan_id}", response_model=LoanResponse)
async def update_loan(
    loan_id: str,
    req: LoanUpdate,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    loan = await repo.get_loan(user_id, loan_id)
    if loan is None:
        raise HTTPException(status_code=404, detail="Loan not found")

    try:
        revised = revise_terms(loan, **req.model_dump(exclude_none=True))
    except LoanClosedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return loan_to_response(await repo.update_loan(revised))


@router.delete("/{loan_id}")
async def delete_loan(
    loan_id: str,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    """Delete a loan and its payment history."""
    if not await repo.delete_loan(user_id, loan_id):
        raise HTTPException(status_code=404, detail="Loan not found")
    return {"message": "Loan deleted"}
