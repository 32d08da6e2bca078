"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from fleetfin.models.fleet import VehicleStatus, VehicleType


# ---- Request schemas ----

class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=1)
    ein: str = Field(..., min_length=1, max_length=20)
    address: str = ""


class CompanyUpdate(BaseModel):
    """Omitted fields keep their stored values."""
    name: str | None = Field(None, min_length=1)
    ein: str | None = Field(None, min_length=1, max_length=20)
    address: str | None = None


class VehicleCreate(BaseModel):
    company_id: str
    type: VehicleType
    vin: str = Field(..., min_length=1, max_length=17)
    make: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    year: int = Field(..., ge=1900, le=2100)
    purchase_price: Decimal = Field(..., ge=0)
    purchase_date: date
    status: VehicleStatus = VehicleStatus.ACTIVE


class VehicleUpdate(BaseModel):
    """Omitted fields keep their stored values. A vehicle cannot change company."""
    type: VehicleType | None = None
    vin: str | None = Field(None, min_length=1, max_length=17)
    make: str | None = Field(None, min_length=1)
    model: str | None = Field(None, min_length=1)
    year: int | None = Field(None, ge=1900, le=2100)
    purchase_price: Decimal | None = Field(None, ge=0)
    purchase_date: date | None = None
    status: VehicleStatus | None = None

class LoanCreate(BaseModel):
    company_id: str
    vehicle_id: str | None = None
    lender: str = Field(..., min_length=1)
    principal_amount: Decimal = Field(..., ge=0)
    interest_rate: Decimal = Field(..., ge=0, le=100, description="Annual rate in percent")
    term_months: int = Field(..., ge=1)
    start_date: date


class LoanUpdate(BaseModel):
    """Explicit edit of loan terms. Omitted fields keep their stored values."""
    lender: str | None = None
    principal_amount: Decimal | None = Field(None, ge=0)
    interest_rate: Decimal | None = Field(None, ge=0, le=100)
    term_months: int | None = Field(None, ge=1)
    start_date: date | None = None
    remaining_balance: Decimal | None = Field(None, ge=0)


class PaymentCreate(BaseModel):
    loan_id: str
    total_paid: Decimal = Field(..., gt=0)
    payment_date: date


# ---- Response schemas ----

class CompanyResponse(BaseModel):
    id: str
    name: str
    ein: str
    address: str


class VehicleResponse(BaseModel):
    id: str
    company_id: str
    type: str
    vin: str
    make: str
    model: str
    year: int
    purchase_price: Decimal
    purchase_date: date
    status: str

class LoanResponse(BaseModel):
    id: str
    company_id: str
    vehicle_id: str | None = None
    lender: str
    principal_amount: Decimal
    interest_rate: Decimal
    term_months: int
    start_date: date
    monthly_payment: Decimal
    remaining_balance: Decimal
    status: str


class PaymentResponse(BaseModel):
    id: str | None = None
    loan_id: str
    payment_date: date
    principal_paid: Decimal
    interest_paid: Decimal
    total_paid: Decimal
    remaining_balance: Decimal


class DebtScheduleItem(BaseModel):
    company_name: str
    total_debt: Decimal
    monthly_payment: Decimal
    vehicles_count: int


class AmortizationScheduleItem(BaseModel):
    payment_number: int
    payment_date: date
    principal_payment: Decimal
    interest_payment: Decimal
    total_payment: Decimal
    remaining_balance: Decimal


class DepreciationScheduleItem(BaseModel):
    vehicle_id: str
    vehicle_name: str
    purchase_price: Decimal
    current_value: Decimal
    depreciation_amount: Decimal
    age_years: Decimal


class DashboardStatsResponse(BaseModel):
    total_companies: int
    total_vehicles: int
    total_active_loans: int
    total_debt: Decimal
    monthly_payments: Decimal
    total_asset_value: Decimal
    total_payments_year: Decimal
