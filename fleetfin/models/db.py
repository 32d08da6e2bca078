"""SQLAlchemy ORM models for PostgreSQL persistence."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class CompanyRecord(Base):
    __tablename__ = "companies"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # Owning user; users themselves live with the auth service
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), index=True)

    name: Mapped[str] = mapped_column(String(255))
    ein: Mapped[str] = mapped_column(String(20))
    address: Mapped[str] = mapped_column(String(255), default="")

    vehicles: Mapped[list["VehicleRecord"]] = relationship(back_populates="company")
    loans: Mapped[list["LoanRecord"]] = relationship(back_populates="company")


class VehicleRecord(Base):
    __tablename__ = "vehicles"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    company_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("companies.id"), index=True)

    type: Mapped[str] = mapped_column(String(20))  # "truck" | "trailer"
    vin: Mapped[str] = mapped_column(String(17))
    make: Mapped[str] = mapped_column(String(100))
    model: Mapped[str] = mapped_column(String(100))
    year: Mapped[int] = mapped_column(Integer)
    purchase_price: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    purchase_date: Mapped[datetime] = mapped_column(DateTime)
    status: Mapped[str] = mapped_column(String(20), default="active")

    company: Mapped["CompanyRecord"] = relationship(back_populates="vehicles")


class LoanRecord(Base):
    __tablename__ = "loans"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    company_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("companies.id"), index=True)
    vehicle_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("vehicles.id"), nullable=True)

    lender: Mapped[str] = mapped_column(String(255))
    principal_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    interest_rate: Mapped[Decimal] = mapped_column(Numeric(6, 3))  # Annual percent
    term_months: Mapped[int] = mapped_column(Integer)
    start_date: Mapped[date] = mapped_column(Date)

    # Derived state
    monthly_payment: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    remaining_balance: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    status: Mapped[str] = mapped_column(String(20), default="active", index=True)

    company: Mapped["CompanyRecord"] = relationship(back_populates="loans")
    payments: Mapped[list["PaymentRecord"]] = relationship(back_populates="loan")


class PaymentRecord(Base):
    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    loan_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("loans.id"), index=True)
    payment_date: Mapped[date] = mapped_column(Date)
    total_paid: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    principal_paid: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    interest_paid: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    remaining_balance: Mapped[Decimal] = mapped_column(Numeric(12, 2))

    loan: Mapped["LoanRecord"] = relationship(back_populates="payments")
