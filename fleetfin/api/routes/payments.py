"""Payment routes: record a payment against a loan, list payment history."""

from fastapi import APIRouter, Depends, HTTPException

from fleetfin.api.auth import get_current_user_id
from fleetfin.api.deps import get_repository
from fleetfin.api.schemas import PaymentCreate, PaymentResponse
from fleetfin.data.repository import FleetRepository
from fleetfin.engine.errors import InvalidPaymentError, LoanClosedError
from fleetfin.engine.loans import record_payment

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])


@router.post("", response_model=PaymentResponse, status_code=201)
async def create_payment(
    req: PaymentCreate,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    """Split a payment into interest and principal and reduce the loan balance."""
    loan = await repo.get_loan(user_id, req.loan_id)
    if loan is None:
        raise HTTPException(status_code=404, detail="Loan not found")

    try:
        updated, payment = record_payment(loan, req.total_paid, req.payment_date)
    except LoanClosedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidPaymentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    stored = await repo.add_payment(payment, updated)
    return PaymentResponse.model_validate(stored, from_attributes=True)


@router.get("", response_model=list[PaymentResponse])
async def list_payments(
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    payments = await repo.list_payments(user_id)
    return [PaymentResponse.model_validate(p, from_attributes=True) for p in payments]


@router.get("/loan/{loan_id}", response_model=list[PaymentResponse])
async def list_loan_payments(
    loan_id: str,
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
):
    if await repo.get_loan(user_id, loan_id) is None:
        raise HTTPException(status_code=404, detail="Loan not found")
    payments = await repo.list_payments(user_id, loan_id=loan_id)
    return [PaymentResponse.model_validate(p, from_attributes=True) for p in payments]
