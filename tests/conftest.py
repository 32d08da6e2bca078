"""Canonical fixtures shared by engine and API tests.

Fixture fleet: one company ("Acme Haulage") with a truck, a trailer and a
sold truck; a $24K truck loan at 6% over 24 months plus a paid-off loan.
"""

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from fleetfin.engine.loans import open_loan
from fleetfin.models.fleet import (
    Company,
    Loan,
    LoanStatus,
    Payment,
    Vehicle,
    VehicleStatus,
    VehicleType,
)

AS_OF = datetime(2024, 1, 1)


@pytest.fixture
def as_of() -> datetime:
    return AS_OF


@pytest.fixture
def acme() -> Company:
    return Company(id="c-acme", name="Acme Haulage", ein="12-3456789")


@pytest.fixture
def globex() -> Company:
    return Company(id="c-globex", name="Globex Freight", ein="98-7654321")


@pytest.fixture
def truck() -> Vehicle:
    """$100K truck bought five years before AS_OF."""
    return Vehicle(
        id="v-truck",
        company_id="c-acme",
        type=VehicleType.TRUCK,
        make="Volvo",
        model="VNL",
        year=2019,
        purchase_price=Decimal("100000"),
        purchase_date=date(2019, 1, 1),
    )


@pytest.fixture
def trailer() -> Vehicle:
    """$150K trailer bought five years before AS_OF (15-year life)."""
    return Vehicle(
        id="v-trailer",
        company_id="c-acme",
        type=VehicleType.TRAILER,
        make="Utility",
        model="4000D-X",
        year=2019,
        purchase_price=Decimal("150000"),
        purchase_date=date(2019, 1, 1),
    )


@pytest.fixture
def sold_truck() -> Vehicle:
    """Fully depreciated truck that has since been sold."""
    return Vehicle(
        id="v-old",
        company_id="c-acme",
        type=VehicleType.TRUCK,
        make="Freightliner",
        model="Cascadia",
        year=2005,
        purchase_price=Decimal("80000"),
        purchase_date=date(2005, 6, 1),
        status=VehicleStatus.SOLD,
    )


@pytest.fixture
def truck_loan() -> Loan:
    return open_loan(
        id="l-truck",
        company_id="c-acme",
        vehicle_id="v-truck",
        lender="First Fleet Bank",
        principal_amount=Decimal("24000"),
        interest_rate=Decimal("6"),
        term_months=24,
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def paid_off_loan() -> Loan:
    loan = open_loan(
        id="l-paid",
        company_id="c-acme",
        vehicle_id="v-trailer",
        lender="Trailer Credit",
        principal_amount=Decimal("10000"),
        interest_rate=Decimal("5"),
        term_months=12,
        start_date=date(2022, 1, 1),
    )
    return replace(loan, remaining_balance=Decimal("0"), status=LoanStatus.PAID_OFF)


class FakeRepository:
    """In-memory stand-in for FleetRepository, keyed by owning user."""

    def __init__(self):
        self.owners: dict[str, str] = {}
        self.companies: dict[str, Company] = {}
        self.vehicles: dict[str, Vehicle] = {}
        self.loans: dict[str, Loan] = {}
        self.payments: list[Payment] = []

    def seed(self, user_id, companies=(), vehicles=(), loans=()):
        for c in companies:
            self.owners[c.id] = user_id
            self.companies[c.id] = c
        for v in vehicles:
            self.vehicles[v.id] = v
        for loan in loans:
            self.loans[loan.id] = loan

    def _owned(self, user_id: str) -> set[str]:
        return {cid for cid, owner in self.owners.items() if owner == user_id}

    async def list_companies(self, user_id):
        owned = self._owned(user_id)
        return [c for c in self.companies.values() if c.id in owned]

    async def owns_company(self, user_id, company_id):
        return self.owners.get(company_id) == user_id

    async def get_company(self, user_id, company_id):
        if self.owners.get(company_id) != user_id:
            return None
        return self.companies[company_id]

    async def add_company(self, user_id, company):
        self.seed(user_id, companies=[company])
        return company

    async def update_company(self, company):
        self.companies[company.id] = company
        return company

    async def delete_company(self, user_id, company_id):
        if self.owners.get(company_id) != user_id:
            return False
        loan_ids = {lid for lid, loan in self.loans.items() if loan.company_id == company_id}
        self.payments = [p for p in self.payments if p.loan_id not in loan_ids]
        self.loans = {lid: loan for lid, loan in self.loans.items() if lid not in loan_ids}
        self.vehicles = {vid: v for vid, v in self.vehicles.items() if v.company_id != company_id}
        del self.companies[company_id]
        del self.owners[company_id]
        return True

    async def list_vehicles(self, user_id):
        owned = self._owned(user_id)
        return [v for v in self.vehicles.values() if v.company_id in owned]

    async def get_vehicle(self, user_id, vehicle_id):
        vehicle = self.vehicles.get(vehicle_id)
        if vehicle is None or vehicle.company_id not in self._owned(user_id):
            return None
        return vehicle

    async def add_vehicle(self, vehicle):
        self.vehicles[vehicle.id] = vehicle
        return vehicle

    async def update_vehicle(self, vehicle):
        self.vehicles[vehicle.id] = vehicle
        return vehicle

    async def delete_vehicle(self, user_id, vehicle_id):
        if await self.get_vehicle(user_id, vehicle_id) is None:
            return False
        for lid, loan in self.loans.items():
            if loan.vehicle_id == vehicle_id:
                self.loans[lid] = replace(loan, vehicle_id=None)
        del self.vehicles[vehicle_id]
        return True

    async def list_loans(self, user_id):
        owned = self._owned(user_id)
        return [loan for loan in self.loans.values() if loan.company_id in owned]

    async def get_loan(self, user_id, loan_id):
        loan = self.loans.get(loan_id)
        if loan is None or loan.company_id not in self._owned(user_id):
            return None
        return loan

    async def add_loan(self, loan):
        self.loans[loan.id] = loan
        return loan

    async def update_loan(self, loan):
        self.loans[loan.id] = loan
        return loan

    async def delete_loan(self, user_id, loan_id):
        if await self.get_loan(user_id, loan_id) is None:
            return False
        self.payments = [p for p in self.payments if p.loan_id != loan_id]
        del self.loans[loan_id]
        return True

    async def add_payment(self, payment, loan):
        stored = replace(payment, id=f"p-{len(self.payments) + 1}")
        self.payments.append(stored)
        self.loans[loan.id] = loan
        return stored

    async def list_payments(self, user_id, loan_id=None):
        loan_ids = {loan.id for loan in await self.list_loans(user_id)}
        return [
            p for p in self.payments
            if p.loan_id in loan_ids and (loan_id is None or p.loan_id == loan_id)
        ]


@pytest.fixture
def fake_repo(acme, globex, truck, trailer, sold_truck, truck_loan, paid_off_loan) -> FakeRepository:
    repo = FakeRepository()
    repo.seed("user-1", companies=[acme], vehicles=[truck, trailer, sold_truck],
              loans=[truck_loan, paid_off_loan])
    # Another tenant's data must never leak into user-1's reports
    other_truck = replace(truck, id="v-globex", company_id="c-globex")
    other_loan = replace(truck_loan, id="l-globex", company_id="c-globex")
    repo.seed("user-2", companies=[globex], vehicles=[other_truck], loans=[other_loan])
    return repo
