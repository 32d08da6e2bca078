"""Async storage access for fleet records.

Every query is scoped to the companies owned by one user. ORM rows are
converted to engine dataclasses on the way out, so nothing above this layer
sees SQLAlchemy objects.
"""

import logging
import uuid
from datetime import date, datetime, time

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fleetfin.models.db import CompanyRecord, LoanRecord, PaymentRecord, VehicleRecord
from fleetfin.models.fleet import (
    Company,
    Loan,
    LoanStatus,
    Payment,
    Vehicle,
    VehicleStatus,
    VehicleType,
)

logger = logging.getLogger(__name__)


def _uuid(value: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(value)
    except (TypeError, ValueError):
        return None


def _as_timestamp(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


def _company(row: CompanyRecord) -> Company:
    return Company(id=str(row.id), name=row.name, ein=row.ein, address=row.address)


def _vehicle(row: VehicleRecord) -> Vehicle:
    return Vehicle(
        id=str(row.id),
        company_id=str(row.company_id),
        type=VehicleType(row.type),
        vin=row.vin,
        make=row.make,
        model=row.model,
        year=row.year,
        purchase_price=row.purchase_price,
        purchase_date=row.purchase_date,
        status=VehicleStatus(row.status),
    )


def _loan(row: LoanRecord) -> Loan:
    return Loan(
        id=str(row.id),
        company_id=str(row.company_id),
        vehicle_id=str(row.vehicle_id) if row.vehicle_id else None,
        lender=row.lender,
        principal_amount=row.principal_amount,
        interest_rate=row.interest_rate,
        term_months=row.term_months,
        start_date=row.start_date,
        monthly_payment=row.monthly_payment,
        remaining_balance=row.remaining_balance,
        status=LoanStatus(row.status),
    )


def _payment(row: PaymentRecord) -> Payment:
    return Payment(
        id=str(row.id),
        loan_id=str(row.loan_id),
        payment_date=row.payment_date,
        total_paid=row.total_paid,
        principal_paid=row.principal_paid,
        interest_paid=row.interest_paid,
        remaining_balance=row.remaining_balance,
    )


class FleetRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _company_ids(self, user_id: str):
        return select(CompanyRecord.id).where(CompanyRecord.user_id == _uuid(user_id))

    async def list_companies(self, user_id: str) -> list[Company]:
        rows = await self.session.scalars(
            select(CompanyRecord).where(CompanyRecord.user_id == _uuid(user_id))
        )
        return [_company(r) for r in rows]

    async def owns_company(self, user_id: str, company_id: str) -> bool:
        cid = _uuid(company_id)
        if cid is None:
            return False
        row = await self.session.scalar(
            select(CompanyRecord.id).where(
                CompanyRecord.id == cid,
                CompanyRecord.user_id == _uuid(user_id),
            )
        )
        return row is not None

    async def get_company(self, user_id: str, company_id: str) -> Company | None:
        cid = _uuid(company_id)
        if cid is None:
            return None
        row = await self.session.scalar(
            select(CompanyRecord).where(
                CompanyRecord.id == cid,
                CompanyRecord.user_id == _uuid(user_id),
            )
        )
        return _company(row) if row is not None else None

    async def add_company(self, user_id: str, company: Company) -> Company:
        self.session.add(CompanyRecord(
            id=uuid.UUID(company.id),
            user_id=uuid.UUID(user_id),
            name=company.name,
            ein=company.ein,
            address=company.address,
        ))
        await self.session.commit()
        return company

    async def update_company(self, company: Company) -> Company:
        row = await self.session.get(CompanyRecord, uuid.UUID(company.id))
        if row is None:
            raise LookupError(f"Company {company.id} not found")
        row.name = company.name
        row.ein = company.ein
        row.address = company.address
        await self.session.commit()
        return company

    async def delete_company(self, user_id: str, company_id: str) -> bool:
        """Delete a company together with its vehicles, loans and their payments."""
        cid = _uuid(company_id)
        if cid is None or not await self.owns_company(user_id, company_id):
            return False

        loan_ids = select(LoanRecord.id).where(LoanRecord.company_id == cid)
        await self.session.execute(delete(PaymentRecord).where(PaymentRecord.loan_id.in_(loan_ids)))
        await self.session.execute(delete(LoanRecord).where(LoanRecord.company_id == cid))
        await self.session.execute(delete(VehicleRecord).where(VehicleRecord.company_id == cid))
        await self.session.execute(delete(CompanyRecord).where(CompanyRecord.id == cid))
        await self.session.commit()
        logger.info("Deleted company %s", company_id)
        return True

    async def list_vehicles(self, user_id: str) -> list[Vehicle]:
        rows = await self.session.scalars(
            select(VehicleRecord).where(VehicleRecord.company_id.in_(self._company_ids(user_id)))
        )
        return [_vehicle(r) for r in rows]

    async def get_vehicle(self, user_id: str, vehicle_id: str) -> Vehicle | None:
        vid = _uuid(vehicle_id)
        if vid is None:
            return None
        row = await self.session.scalar(
            select(VehicleRecord).where(
                VehicleRecord.id == vid,
                VehicleRecord.company_id.in_(self._company_ids(user_id)),
            )
        )
        return _vehicle(row) if row is not None else None

    async def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        self.session.add(VehicleRecord(
            id=uuid.UUID(vehicle.id),
            company_id=uuid.UUID(vehicle.company_id),
            type=vehicle.type.value,
            vin=vehicle.vin,
            make=vehicle.make,
            model=vehicle.model,
            year=vehicle.year,
            purchase_price=vehicle.purchase_price,
            purchase_date=_as_timestamp(vehicle.purchase_date),
            status=vehicle.status.value,
        ))
        await self.session.commit()
        return vehicle

    async def update_vehicle(self, vehicle: Vehicle) -> Vehicle:
        row = await self.session.get(VehicleRecord, uuid.UUID(vehicle.id))
        if row is None:
            raise LookupError(f"Vehicle {vehicle.id} not found")
        row.type = vehicle.type.value
        row.vin = vehicle.vin
        row.make = vehicle.make
        row.model = vehicle.model
        row.year = vehicle.year
        row.purchase_price = vehicle.purchase_price
        row.purchase_date = _as_timestamp(vehicle.purchase_date)
        row.status = vehicle.status.value
        await self.session.commit()
        return vehicle

    async def delete_vehicle(self, user_id: str, vehicle_id: str) -> bool:
        """Delete a vehicle. Loans that financed it stay, detached from the vehicle."""
        if await self.get_vehicle(user_id, vehicle_id) is None:
            return False
        vid = uuid.UUID(vehicle_id)
        await self.session.execute(
            update(LoanRecord).where(LoanRecord.vehicle_id == vid).values(vehicle_id=None)
        )
        await self.session.execute(delete(VehicleRecord).where(VehicleRecord.id == vid))
        await self.session.commit()
        return True

    async def list_loans(self, user_id: str) -> list[Loan]:
        rows = await self.session.scalars(
            select(LoanRecord).where(LoanRecord.company_id.in_(self._company_ids(user_id)))
        )
        return [_loan(r) for r in rows]

    async def get_loan(self, user_id: str, loan_id: str) -> Loan | None:
        lid = _uuid(loan_id)
        if lid is None:
            return None
        row = await self.session.scalar(
            select(LoanRecord).where(
                LoanRecord.id == lid,
                LoanRecord.company_id.in_(self._company_ids(user_id)),
            )
        )
        return _loan(row) if row is not None else None

    async def add_loan(self, loan: Loan) -> Loan:
        self.session.add(LoanRecord(
            id=uuid.UUID(loan.id),
            company_id=uuid.UUID(loan.company_id),
            vehicle_id=_uuid(loan.vehicle_id) if loan.vehicle_id else None,
            lender=loan.lender,
            principal_amount=loan.principal_amount,
            interest_rate=loan.interest_rate,
            term_months=loan.term_months,
            start_date=loan.start_date,
            monthly_payment=loan.monthly_payment,
            remaining_balance=loan.remaining_balance,
            status=loan.status.value,
        ))
        await self.session.commit()
        return loan

    async def update_loan(self, loan: Loan) -> Loan:
        row = await self.session.get(LoanRecord, uuid.UUID(loan.id))
        if row is None:
            raise LookupError(f"Loan {loan.id} not found")
        row.lender = loan.lender
        row.principal_amount = loan.principal_amount
        row.interest_rate = loan.interest_rate
        row.term_months = loan.term_months
        row.start_date = loan.start_date
        row.monthly_payment = loan.monthly_payment
        row.remaining_balance = loan.remaining_balance
        row.status = loan.status.value
        await self.session.commit()
        return loan

    async def delete_loan(self, user_id: str, loan_id: str) -> bool:
        """Delete a loan and its payment history."""
        if await self.get_loan(user_id, loan_id) is None:
            return False
        lid = uuid.UUID(loan_id)
        await self.session.execute(delete(PaymentRecord).where(PaymentRecord.loan_id == lid))
        await self.session.execute(delete(LoanRecord).where(LoanRecord.id == lid))
        await self.session.commit()
        return True

    async def add_payment(self, payment: Payment, loan: Loan) -> Payment:
        """Store a payment and the loan state it produced in one transaction."""
        record = PaymentRecord(
            id=uuid.uuid4(),
            loan_id=uuid.UUID(payment.loan_id),
            payment_date=payment.payment_date,
            total_paid=payment.total_paid,
            principal_paid=payment.principal_paid,
            interest_paid=payment.interest_paid,
            remaining_balance=payment.remaining_balance,
        )
        self.session.add(record)

        row = await self.session.get(LoanRecord, uuid.UUID(loan.id))
        if row is None:
            raise LookupError(f"Loan {loan.id} not found")
        row.remaining_balance = loan.remaining_balance
        row.status = loan.status.value

        await self.session.commit()
        logger.debug("Stored payment %s for loan %s", record.id, loan.id)
        return _payment(record)

    async def list_payments(self, user_id: str, loan_id: str | None = None) -> list[Payment]:
        loan_ids = select(LoanRecord.id).where(
            LoanRecord.company_id.in_(self._company_ids(user_id))
        )
        stmt = select(PaymentRecord).where(PaymentRecord.loan_id.in_(loan_ids))
        if loan_id is not None:
            stmt = stmt.where(PaymentRecord.loan_id == _uuid(loan_id))
        rows = await self.session.scalars(stmt.order_by(PaymentRecord.payment_date))
        return [_payment(r) for r in rows]
