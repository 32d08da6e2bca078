"""Report aggregation over already-fetched fleet records.

Pure computation. Callers supply companies, vehicles and loans (scoped and
authorized elsewhere) plus an explicit as_of timestamp; results are plain
dataclasses recomputed on every call.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from dateutil.relativedelta import relativedelta

from fleetfin.engine.financial import (
    ZERO,
    asset_age,
    depreciation,
    interest_portion,
    remaining_balance,
    useful_life,
)
from fleetfin.models.fleet import (
    AmortizationEntry,
    Company,
    DashboardStats,
    DebtSummary,
    DepreciationEntry,
    Loan,
    Vehicle,
    VehicleStatus,
)

logger = logging.getLogger(__name__)


def amortization_table(loan: Loan) -> list[AmortizationEntry]:
    """Project the remaining payments of a loan from its current balance.

    Numbering and dates run from the loan's start date, so a partially repaid
    loan is re-projected over its original term. The last scheduled payment
    absorbs a rounding leftover of at most one payment; anything larger stays
    owed after the final row instead of turning it into a balloon.
    """
    balance = loan.remaining_balance
    entries: list[AmortizationEntry] = []

    for n in range(1, loan.term_months + 1):
        if balance <= 0:
            break
        interest = interest_portion(balance, loan.interest_rate)
        principal = min(balance, max(ZERO, loan.monthly_payment - interest))

        # Final payment adjustment
        if n == loan.term_months and balance - principal <= loan.monthly_payment:
            principal = balance

        balance = remaining_balance(balance, principal)
        entries.append(AmortizationEntry(
            payment_number=n,
            payment_date=loan.start_date + relativedelta(months=n - 1),
            principal_payment=principal,
            interest_payment=interest,
            total_payment=principal + interest,
            remaining_balance=balance,
        ))

    if balance > 0:
        logger.debug(
            "Loan %s: %s still owed after %d scheduled payments of %s",
            loan.id, balance, loan.term_months, loan.monthly_payment,
        )
    logger.debug("Loan %s: projected %d payments", loan.id, len(entries))
    return entries


def amortization_report(loans: Iterable[Loan], loan_id: str | None = None) -> list[AmortizationEntry]:
    """Concatenated amortization tables for active loans, optionally one loan only."""
    rows: list[AmortizationEntry] = []
    for loan in loans:
        if not loan.is_active:
            continue
        if loan_id is not None and loan.id != loan_id:
            continue
        rows.extend(amortization_table(loan))
    return rows


def debt_summary(
    companies: Iterable[Company],
    loans: Iterable[Loan],
    vehicles: Iterable[Vehicle],
) -> list[DebtSummary]:
    """Outstanding debt, monthly obligation and active fleet size per company.

    Paid-off loans and non-active vehicles are excluded.
    """
    debt: dict[str, Decimal] = {}
    payments: dict[str, Decimal] = {}
    fleet: dict[str, int] = {}

    for loan in loans:
        if not loan.is_active:
            continue
        debt[loan.company_id] = debt.get(loan.company_id, ZERO) + loan.remaining_balance
        payments[loan.company_id] = payments.get(loan.company_id, ZERO) + loan.monthly_payment

    for vehicle in vehicles:
        if vehicle.status is VehicleStatus.ACTIVE:
            fleet[vehicle.company_id] = fleet.get(vehicle.company_id, 0) + 1

    return [
        DebtSummary(
            company_name=c.name,
            total_debt=debt.get(c.id, ZERO),
            monthly_payment=payments.get(c.id, ZERO),
            vehicles_count=fleet.get(c.id, 0),
        )
        for c in companies
    ]


def vehicle_depreciation(vehicle: Vehicle, as_of: date | datetime) -> DepreciationEntry:
    age = asset_age(vehicle.purchase_date, as_of)
    amount = depreciation(vehicle.purchase_price, useful_life(vehicle.type), age)
    return DepreciationEntry(
        vehicle_id=vehicle.id,
        vehicle_name=vehicle.display_name,
        purchase_price=vehicle.purchase_price,
        current_value=max(ZERO, vehicle.purchase_price - amount),
        depreciation_amount=amount,
        age_years=age,
    )


def depreciation_report(
    vehicles: Iterable[Vehicle],
    as_of: date | datetime,
    company_id: str | None = None,
) -> list[DepreciationEntry]:
    """Book value of every vehicle as of a given moment, regardless of status."""
    return [
        vehicle_depreciation(v, as_of)
        for v in vehicles
        if company_id is None or v.company_id == company_id
    ]


def dashboard_stats(
    companies: Iterable[Company],
    vehicles: Iterable[Vehicle],
    loans: Iterable[Loan],
    as_of: date | datetime,
) -> DashboardStats:
    """Portfolio-wide rollup.

    Debt and payments cover active loans only; asset value covers every
    vehicle. total_payments_year is monthly_payments * 12 and does not
    account for loans maturing within the year.
    """
    companies = list(companies)
    vehicles = list(vehicles)
    active_loans = [loan for loan in loans if loan.is_active]

    if not companies:
        return DashboardStats()

    total_debt = sum((loan.remaining_balance for loan in active_loans), ZERO)
    monthly = sum((loan.monthly_payment for loan in active_loans), ZERO)
    asset_value = sum(
        (vehicle_depreciation(v, as_of).current_value for v in vehicles), ZERO
    )

    return DashboardStats(
        total_companies=len(companies),
        total_vehicles=len(vehicles),
        total_active_loans=len(active_loans),
        total_debt=total_debt,
        monthly_payments=monthly,
        total_asset_value=asset_value,
        total_payments_year=monthly * 12,
    )
