"""Data access layer for customers, loans and repayments

Every query filters on the owning shopkeeper. Writes lock and re-check the
rows they reference inside the same transaction.
"""

import functools
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from credit_ledger.domain.exceptions import RepositoryFailureError
from credit_ledger.domain.models import (
    Customer,
    CustomerFields,
    Loan,
    LoanFields,
    LoanRecord,
    Repayment,
)
from credit_ledger.infrastructure.database.models import CustomerRow, LoanRow, RepaymentRow
from credit_ledger.infrastructure.observability.metrics import repository_failure_counter


def _storage_errors(method):
    """Surface SQLAlchemy failures as RepositoryFailureError, without retrying"""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except SQLAlchemyError as e:
            repository_failure_counter.inc()
            raise RepositoryFailureError(f"Storage error in {method.__name__}") from e

    return wrapper


def _to_customer(row: CustomerRow) -> Customer:
    return Customer(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        phone=row.phone,
        address=row.address,
        trust_score=row.trust_score,
        credit_limit=row.credit_limit,
        created_at=row.created_at,
    )


def _to_loan(row: LoanRow) -> Loan:
    return Loan(
        id=row.id,
        customer_id=row.customer_id,
        owner_id=row.owner_id,
        item_description=row.item_description,
        loan_amount=row.loan_amount,
        issue_date=row.issue_date,
        due_date=row.due_date,
        frequency=row.frequency,
        created_at=row.created_at,
    )


def _to_repayment(row: RepaymentRow) -> Repayment:
    return Repayment(
        id=row.id,
        loan_id=row.loan_id,
        amount=row.amount,
        date=row.date,
        created_at=row.created_at,
    )


class SqlLedgerRepository:
    """SQLAlchemy-backed ledger storage bound to one session"""

    def __init__(self, db: Session):
        self.db = db

    # Customers

    def _owned_customer(self, customer_id: int, owner_id: str, lock: bool = False) -> Optional[CustomerRow]:
        query = self.db.query(CustomerRow).filter(
            CustomerRow.id == customer_id,
            CustomerRow.owner_id == owner_id,
        )
        if lock:
            query = query.with_for_update()
        return query.first()

    @_storage_errors
    def get_customer(self, customer_id: int, owner_id: str) -> Optional[Customer]:
        row = self._owned_customer(customer_id, owner_id)
        return _to_customer(row) if row else None

    @_storage_errors
    def list_customers(self, owner_id: str) -> List[Customer]:
        rows = (
            self.db.query(CustomerRow)
            .filter(CustomerRow.owner_id == owner_id)
            .order_by(CustomerRow.id)
            .all()
        )
        return [_to_customer(row) for row in rows]

    @_storage_errors
    def create_customer(self, owner_id: str, fields: CustomerFields) -> Customer:
        row = CustomerRow(
            owner_id=owner_id,
            name=fields.name,
            phone=fields.phone,
            address=fields.address,
            trust_score=fields.trust_score,
            credit_limit=fields.credit_limit,
        )
        self.db.add(row)
        self.db.flush()  # Get ID without committing
        self.db.refresh(row)
        return _to_customer(row)

    @_storage_errors
    def update_customer(self, customer_id: int, owner_id: str, fields: CustomerFields) -> Optional[Customer]:
        row = self._owned_customer(customer_id, owner_id, lock=True)
        if row is None:
            return None

        row.name = fields.name
        row.phone = fields.phone
        row.address = fields.address
        row.trust_score = fields.trust_score
        row.credit_limit = fields.credit_limit
        self.db.flush()
        return _to_customer(row)

    @_storage_errors
    def delete_customer(self, customer_id: int, owner_id: str) -> bool:
        row = self._owned_customer(customer_id, owner_id, lock=True)
        if row is None:
            return False

        # Loans outlive their customer and keep counting toward the owner's totals
        (
            self.db.query(LoanRow)
            .filter(LoanRow.customer_id == customer_id, LoanRow.owner_id == owner_id)
            .update({LoanRow.customer_id: None}, synchronize_session=False)
        )
        self.db.delete(row)
        self.db.flush()
        return True

    # Loans

    @_storage_errors
    def create_loan(self, owner_id: str, customer_id: int, fields: LoanFields) -> Optional[Loan]:
        """Insert a loan only if the customer is owned by owner_id at write time"""
        customer = self._owned_customer(customer_id, owner_id, lock=True)
        if customer is None:
            return None

        row = LoanRow(
            customer_id=customer.id,
            owner_id=owner_id,
            item_description=fields.item_description,
            loan_amount=fields.loan_amount,
            issue_date=fields.issue_date,
            due_date=fields.due_date,
            frequency=fields.frequency,
        )
        self.db.add(row)
        self.db.flush()
        self.db.refresh(row)
        return _to_loan(row)

    def _loan_rows(self, owner_id: str, loan_id: Optional[int] = None):
        """Loans joined with their customer and repayments in a single statement"""
        query = (
            self.db.query(LoanRow, CustomerRow, RepaymentRow)
            .outerjoin(CustomerRow, CustomerRow.id == LoanRow.customer_id)
            .outerjoin(RepaymentRow, RepaymentRow.loan_id == LoanRow.id)
            .filter(LoanRow.owner_id == owner_id)
        )
        if loan_id is not None:
            query = query.filter(LoanRow.id == loan_id)
        return query.order_by(LoanRow.id, RepaymentRow.id).all()

    @staticmethod
    def _group_records(rows) -> List[LoanRecord]:
        records: Dict[int, LoanRecord] = {}
        for loan_row, customer_row, repayment_row in rows:
            record = records.get(loan_row.id)
            if record is None:
                record = LoanRecord(
                    loan=_to_loan(loan_row),
                    customer=_to_customer(customer_row) if customer_row else None,
                )
                records[loan_row.id] = record
            if repayment_row is not None:
                record.repayments.append(_to_repayment(repayment_row))
        return list(records.values())

    @_storage_errors
    def get_loan(self, loan_id: int, owner_id: str) -> Optional[LoanRecord]:
        records = self._group_records(self._loan_rows(owner_id, loan_id=loan_id))
        return records[0] if records else None

    @_storage_errors
    def list_loans(self, owner_id: str) -> List[LoanRecord]:
        return self._group_records(self._loan_rows(owner_id))

    # Repayments

    @_storage_errors
    def create_repayment(self, loan_id: int, owner_id: str, amount: Decimal, paid_on: date) -> Optional[Repayment]:
        """Append a repayment only if the loan is owned by owner_id at write time"""
        loan = (
            self.db.query(LoanRow)
            .filter(LoanRow.id == loan_id, LoanRow.owner_id == owner_id)
            .with_for_update()
            .first()
        )
        if loan is None:
            return None

        row = RepaymentRow(loan_id=loan.id, amount=amount, date=paid_on)
        self.db.add(row)
        self.db.flush()
        self.db.refresh(row)
        return _to_repayment(row)

    @_storage_errors
    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
