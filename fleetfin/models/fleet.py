"""Fleet finance records: companies, vehicles, loans, payments, and report rows.

Plain frozen dataclasses. The engine never mutates them; state changes go
through dataclasses.replace().
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class LoanStatus(Enum):
    ACTIVE = "active"
    PAID_OFF = "paid_off"


class VehicleType(Enum):
    TRUCK = "truck"
    TRAILER = "trailer"


class VehicleStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SOLD = "sold"


@dataclass(frozen=True)
class Company:
    id: str
    name: str
    ein: str = ""
    address: str = ""


@dataclass(frozen=True)
class Vehicle:
    id: str
    company_id: str
    type: VehicleType
    make: str
    model: str
    year: int
    purchase_price: Decimal
    purchase_date: date | datetime
    vin: str = ""
    status: VehicleStatus = VehicleStatus.ACTIVE

    @property
    def display_name(self) -> str:
        return f"{self.make} {self.model} ({self.year})"


@dataclass(frozen=True)
class Loan:
    """Loan terms plus the running state derived from them.

    interest_rate is an annual percentage (6 means 6%), not a fraction.
    """
    id: str
    company_id: str
    principal_amount: Decimal
    interest_rate: Decimal
    term_months: int
    start_date: date
    monthly_payment: Decimal
    remaining_balance: Decimal
    status: LoanStatus = LoanStatus.ACTIVE
    vehicle_id: str | None = None
    lender: str = ""

    @property
    def is_active(self) -> bool:
        return self.status is LoanStatus.ACTIVE


@dataclass(frozen=True)
class Payment:
    loan_id: str
    payment_date: date
    total_paid: Decimal
    principal_paid: Decimal
    interest_paid: Decimal
    remaining_balance: Decimal
    id: str | None = None


@dataclass(frozen=True)
class AmortizationEntry:
    payment_number: int
    payment_date: date
    principal_payment: Decimal
    interest_payment: Decimal
    total_payment: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class DepreciationEntry:
    vehicle_id: str
    vehicle_name: str
    purchase_price: Decimal
    current_value: Decimal
    depreciation_amount: Decimal
    age_years: Decimal


@dataclass(frozen=True)
class DebtSummary:
    company_name: str
    total_debt: Decimal
    monthly_payment: Decimal
    vehicles_count: int


@dataclass(frozen=True)
class DashboardStats:
    total_companies: int = 0
    total_vehicles: int = 0
    total_active_loans: int = 0
    total_debt: Decimal = Decimal("0")
    monthly_payments: Decimal = Decimal("0")
    total_asset_value: Decimal = Decimal("0")
    total_payments_year: Decimal = Decimal("0")  # monthly_payments * 12, not maturity-adjusted
