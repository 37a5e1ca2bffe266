"""SQLAlchemy ORM models for the lending store"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    Float,
    Date,
    DateTime,
    ForeignKey,
    CheckConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Lender(Base):
    """Tenant business"""

    __tablename__ = "lenders"
    __table_args__ = (
        CheckConstraint(
            "interest_rate_percent >= 0 AND interest_rate_percent <= 100",
            name="ck_lenders_interest_rate_range",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    business_name = Column(Text, nullable=False)
    phone_number = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    interest_rate_percent = Column(Float, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    accounts = relationship("Account", back_populates="lender", cascade="all, delete-orphan", passive_deletes=True)


class Account(Base):
    """Login credential owned by a lender"""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lender_id = Column(Integer, ForeignKey("lenders.id", ondelete="CASCADE"), nullable=False, index=True)
    username = Column(String(255), nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
    last_login = Column(DateTime(timezone=True), nullable=True)
    is_locked = Column(Boolean, nullable=False, default=False)

    lender = relationship("Lender", back_populates="accounts")


class Borrower(Base):
    """Individual receiving loans"""

    __tablename__ = "borrowers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_names = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    phone_number = Column(Text, nullable=False)
    residence = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class Plan(Base):
    """Subscription plan a lender can be billed under"""

    __tablename__ = "plans"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_plans_price_non_negative"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    plan = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class LenderLedger(Base):
    """Lender subscription history"""

    __tablename__ = "lender_ledger"
    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'inactive', 'suspended', 'expired')",
            name="ck_lender_ledger_status",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    lender_id = Column(Integer, ForeignKey("lenders.id", ondelete="CASCADE"), nullable=False, index=True)
    plan_id = Column(Integer, ForeignKey("plans.id", ondelete="RESTRICT"), nullable=False)
    status = Column(Text, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    end_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class Loan(Base):
    """Loan issued by a lender to a borrower"""

    __tablename__ = "loans"
    __table_args__ = (
        CheckConstraint("months_to_pay > 0", name="ck_loans_months_positive"),
        CheckConstraint("amount > 0", name="ck_loans_amount_positive"),
        CheckConstraint("interest_rate >= 0", name="ck_loans_interest_non_negative"),
        CheckConstraint(
            "payment_status IN ('pending', 'active', 'paid', 'defaulted', 'cancelled')",
            name="ck_loans_payment_status",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    borrower_id = Column(Integer, ForeignKey("borrowers.id", ondelete="RESTRICT"), nullable=False, index=True)
    lender_id = Column(Integer, ForeignKey("lenders.id", ondelete="RESTRICT"), nullable=False)
    months_to_pay = Column(Integer, nullable=False)
    payment_status = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    interest_rate = Column(Float, nullable=False)  # per-loan rate, distinct from lender base rate
    monthly_payment = Column(Float, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    receipts = relationship("Receipt", back_populates="loan", cascade="all, delete-orphan", passive_deletes=True)


class Receipt(Base):
    """Payment recorded against a loan"""

    __tablename__ = "receipts"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_receipts_amount_positive"),
        CheckConstraint("status IN ('paid', 'pending', 'failed', 'refunded')", name="ck_receipts_status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    loan_id = Column(Integer, ForeignKey("loans.id", ondelete="CASCADE"), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    status = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    payment_method = Column(Text, nullable=True)
    transaction_reference = Column(Text, nullable=True, unique=True)
    notes = Column(Text, nullable=True)

    loan = relationship("Loan", back_populates="receipts")


class LenderFile(Base):
    """Uploaded document reference owned by a lender"""

    __tablename__ = "files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lender_id = Column(Integer, ForeignKey("lenders.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(Text, nullable=False)  # storage path or URL
    file_type = Column(Text, nullable=True)
    file_size = Column(Integer, nullable=True)
    original_filename = Column(Text, nullable=True)
    uploaded_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class LenderText(Base):
    """Free-form text value stored for a lender"""

    __tablename__ = "texts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lender_id = Column(Integer, ForeignKey("lenders.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class LenderNumber(Base):
    """Numeric value stored for a lender"""

    __tablename__ = "numbers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lender_id = Column(Integer, ForeignKey("lenders.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
