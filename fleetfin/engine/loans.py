"""Loan lifecycle: opening a loan, revising its terms, recording payments.

Pure functions returning new Loan instances; persistence is the caller's job.
"""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from fleetfin.engine.errors import InvalidPaymentError, LoanClosedError
from fleetfin.engine.financial import TWO_PLACES, ZERO, apply_payment, monthly_payment
from fleetfin.models.fleet import Loan, LoanStatus, Payment

logger = logging.getLogger(__name__)


def open_loan(
    id: str,
    company_id: str,
    principal_amount: Decimal,
    interest_rate: Decimal,
    term_months: int,
    start_date: date,
    vehicle_id: str | None = None,
    lender: str = "",
) -> Loan:
    """New active loan with its payment fixed from the terms and nothing repaid yet."""
    return Loan(
        id=id,
        company_id=company_id,
        vehicle_id=vehicle_id,
        lender=lender,
        principal_amount=principal_amount,
        interest_rate=interest_rate,
        term_months=term_months,
        start_date=start_date,
        monthly_payment=monthly_payment(principal_amount, interest_rate, term_months),
        remaining_balance=principal_amount,
        status=LoanStatus.ACTIVE,
    )


def revise_terms(
    loan: Loan,
    principal_amount: Decimal | None = None,
    interest_rate: Decimal | None = None,
    term_months: int | None = None,
    start_date: date | None = None,
    lender: str | None = None,
    remaining_balance: Decimal | None = None,
) -> Loan:
    """Apply an explicit edit and recompute the monthly payment from the new terms.

    Balance and status only change when remaining_balance is given; an edited
    balance of zero closes the loan. A paid-off loan cannot be reopened by
    giving it a positive balance.
    """
    if remaining_balance is not None and remaining_balance > 0 and loan.status is LoanStatus.PAID_OFF:
        raise LoanClosedError(f"Loan {loan.id} is paid off; its balance cannot be reopened")

    revised = replace(
        loan,
        principal_amount=loan.principal_amount if principal_amount is None else principal_amount,
        interest_rate=loan.interest_rate if interest_rate is None else interest_rate,
        term_months=loan.term_months if term_months is None else term_months,
        start_date=loan.start_date if start_date is None else start_date,
        lender=loan.lender if lender is None else lender,
    )
    revised = replace(
        revised,
        monthly_payment=monthly_payment(
            revised.principal_amount, revised.interest_rate, revised.term_months
        ),
    )
    if remaining_balance is not None:
        status = LoanStatus.PAID_OFF if remaining_balance <= 0 else loan.status
        revised = replace(revised, remaining_balance=max(ZERO, remaining_balance), status=status)
    return revised


def record_payment(loan: Loan, total_paid: Decimal, payment_date: date) -> tuple[Loan, Payment]:
    """Book a payment against the loan's current balance.

    Returns the updated loan and the payment record. The loan is marked paid
    off once its balance reaches zero.
    """
    total_paid = total_paid.quantize(TWO_PLACES, ROUND_HALF_UP)
    if total_paid <= 0:
        raise InvalidPaymentError(f"Payment amount must be positive, got {total_paid}")
    if loan.status is LoanStatus.PAID_OFF:
        raise LoanClosedError(f"Loan {loan.id} is already paid off")

    split = apply_payment(loan.remaining_balance, total_paid, loan.interest_rate)
    payment = Payment(
        loan_id=loan.id,
        payment_date=payment_date,
        total_paid=total_paid,
        principal_paid=split.principal_paid,
        interest_paid=split.interest_paid,
        remaining_balance=split.new_balance,
    )

    status = loan.status
    if split.new_balance <= 0:
        status = LoanStatus.PAID_OFF
        logger.info("Loan %s paid off on %s", loan.id, payment_date)

    return replace(loan, remaining_balance=split.new_balance, status=status), payment
