"""Portfolio aggregation across one shopkeeper's loans"""

from datetime import date
from typing import Iterable, List

from credit_ledger.domain.access import scoped_records
from credit_ledger.domain.ledger import ZERO, outstanding_balance, status_and_repaid
from credit_ledger.domain.models import LoanRecord, LoanStatus, OverdueAccount, PortfolioSummary
from credit_ledger.domain.repository import LedgerRepository


def summarize(records: Iterable[LoanRecord], today: date) -> PortfolioSummary:
    """
    Compute portfolio totals from already-scoped loan records.

    - total_loaned: sum of principals
    - total_collected: sum of every repayment
    - overdue_amount: outstanding (not full principal) on loans past due and not repaid;
      a loan repaid in full contributes nothing even after its due date
    """
    total_loaned = ZERO
    total_collected = ZERO
    overdue_amount = ZERO

    for record in records:
        repaid, status = status_and_repaid(record.loan, record.repayments, today)
        total_loaned += record.loan.loan_amount
        total_collected += repaid
        if status is LoanStatus.OVERDUE:
            overdue_amount += record.loan.loan_amount - repaid

    return PortfolioSummary(
        total_loaned=total_loaned,
        total_collected=total_collected,
        overdue_amount=overdue_amount,
    )


def find_overdue(records: Iterable[LoanRecord], today: date) -> List[OverdueAccount]:
    """One row per overdue loan, so a customer with two overdue loans appears twice"""
    accounts = []
    for record in records:
        repaid, status = status_and_repaid(record.loan, record.repayments, today)
        if status is not LoanStatus.OVERDUE:
            continue

        customer = record.customer
        accounts.append(
            OverdueAccount(
                customer_id=customer.id if customer else None,
                customer_name=customer.name if customer else None,
                phone=customer.phone if customer else None,
                loan_id=record.loan.id,
                due_date=record.loan.due_date,
                outstanding=outstanding_balance(record.loan, repaid),
            )
        )

    return sorted(accounts, key=lambda a: (a.due_date, a.loan_id))


def summary(repository: LedgerRepository, shopkeeper_id: str, today: date) -> PortfolioSummary:
    """Total loaned, total collected and overdue exposure for one shopkeeper"""
    records = scoped_records(repository.list_loans(shopkeeper_id), shopkeeper_id)
    return summarize(records, today)


def overdue_accounts(repository: LedgerRepository, shopkeeper_id: str, today: date) -> List[OverdueAccount]:
    """(customer, loan) pairs that are past due with a balance still owed"""
    records = scoped_records(repository.list_loans(shopkeeper_id), shopkeeper_id)
    return find_overdue(records, today)
