"""SQLAlchemy ORM models for customers, loans and repayments"""

from sqlalchemy import Column, String, Integer, Numeric, DateTime, Date, ForeignKey, Text, Index
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

MONEY = Numeric(12, 2, asdecimal=True)


class CustomerRow(Base):
    """Customer buying on credit, owned by one shopkeeper"""

    __tablename__ = "customer"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    phone = Column(String(32), nullable=True)
    address = Column(Text, nullable=True)
    trust_score = Column(Integer, nullable=True)
    credit_limit = Column(MONEY, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    loans = relationship("LoanRow", back_populates="customer", passive_deletes=True)


class LoanRow(Base):
    """Credit sale; survives deletion of its customer with customer_id set to NULL"""

    __tablename__ = "loan"
    __table_args__ = (Index("ix_loan_owner_due", "owner_id", "due_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customer.id", ondelete="SET NULL"), nullable=True)
    owner_id = Column(Text, nullable=False, index=True)
    item_description = Column(Text, nullable=False)
    loan_amount = Column(MONEY, nullable=False)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    frequency = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    customer = relationship("CustomerRow", back_populates="loans")
    repayments = relationship("RepaymentRow", back_populates="loan", passive_deletes=True)


class RepaymentRow(Base):
    """Append-only repayment against a loan"""

    __tablename__ = "repayment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    loan_id = Column(Integer, ForeignKey("loan.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(MONEY, nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    loan = relationship("LoanRow", back_populates="repayments")
