"""Loan and asset arithmetic: payments, interest split, straight-line depreciation.

Pure functions: Decimal in, Decimal out. No I/O, no clock reads.
Rates are annual percentages (6 means 6%). Every monetary result is rounded
to the cent.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP

from fleetfin.engine.errors import (
    InvalidRateError,
    InvalidTermError,
    InvalidUsefulLifeError,
)
from fleetfin.models.fleet import VehicleType

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

DAYS_PER_YEAR = Decimal("365.25")
TRUCK_USEFUL_LIFE_YEARS = 10
TRAILER_USEFUL_LIFE_YEARS = 15


@dataclass(frozen=True)
class PaymentSplit:
    principal_paid: Decimal
    interest_paid: Decimal
    new_balance: Decimal


def _round(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def _monthly_rate(annual_rate_pct: Decimal) -> Decimal:
    if annual_rate_pct < 0:
        raise InvalidRateError(f"Interest rate cannot be negative: {annual_rate_pct}")
    return Decimal(annual_rate_pct) / 100 / 12


def monthly_payment(principal: Decimal, annual_rate_pct: Decimal, term_months: int) -> Decimal:
    """Fixed monthly payment for a fully amortizing loan."""
    if term_months <= 0:
        raise InvalidTermError(f"Loan term must be at least one month, got {term_months}")
    r = _monthly_rate(annual_rate_pct)
    if r == 0:
        return _round(Decimal(principal) / term_months)

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** term_months
    payment = principal * (r * factor) / (factor - 1)
    return _round(payment)


def interest_portion(balance: Decimal, annual_rate_pct: Decimal) -> Decimal:
    """One month of interest on the balance outstanding before a payment."""
    return _round(balance * _monthly_rate(annual_rate_pct))


def remaining_balance(balance: Decimal, principal_paid: Decimal) -> Decimal:
    return max(ZERO, _round(balance - principal_paid))


def apply_payment(balance: Decimal, total_paid: Decimal, annual_rate_pct: Decimal) -> PaymentSplit:
    """Split a payment into interest and principal and reduce the balance.

    Interest accrues first. A payment that does not cover the accrued
    interest is booked entirely as interest and leaves the balance as is.
    """
    interest = interest_portion(balance, annual_rate_pct)
    principal = _round(total_paid - interest)
    if principal < 0:
        principal = ZERO
        interest = _round(total_paid)

    return PaymentSplit(
        principal_paid=principal,
        interest_paid=interest,
        new_balance=remaining_balance(balance, principal),
    )


def useful_life(vehicle_type: VehicleType) -> int:
    """Depreciation horizon in years for an asset class."""
    if vehicle_type is VehicleType.TRAILER:
        return TRAILER_USEFUL_LIFE_YEARS
    return TRUCK_USEFUL_LIFE_YEARS


def depreciation(purchase_price: Decimal, useful_life_years: int, age_years: Decimal) -> Decimal:
    """Accumulated straight-line depreciation, capped at the purchase price."""
    if useful_life_years <= 0:
        raise InvalidUsefulLifeError(
            f"Useful life must be a positive number of years, got {useful_life_years}"
        )
    if age_years <= 0:
        return ZERO

    annual = purchase_price / useful_life_years
    total = annual * age_years
    if total >= purchase_price:
        return _round(purchase_price)
    return _round(total)


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def asset_age(purchase_date: date | datetime, as_of: date | datetime) -> Decimal:
    """Age in fractional years between purchase and as_of (365.25-day years)."""
    start = _as_datetime(purchase_date)
    end = _as_datetime(as_of)
    if (start.tzinfo is None) != (end.tzinfo is None):
        # Compare wall-clock values when only one side carries a zone
        start = start.replace(tzinfo=None)
        end = end.replace(tzinfo=None)

    hours = Decimal(str((end - start).total_seconds())) / 3600
    return _round(hours / 24 / DAYS_PER_YEAR)
