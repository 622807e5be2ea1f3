"""Write-boundary validation for ledger inputs

Anything rejected here never reaches the read path, so a bad amount can't
quietly count as zero in a total later.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from credit_ledger.domain.exceptions import ValidationError
from credit_ledger.domain.models import CustomerFields, LoanFields

MONEY_PLACES = Decimal("0.01")
# Largest value a NUMERIC(12, 2) column holds
MAX_MONEY = Decimal("9999999999.99")
MAX_TRUST_SCORE = 100


def parse_money(value: Any, field: str, allow_zero: bool = False) -> Decimal:
    """Coerce a monetary value to Decimal, rejecting negative, non-finite or sub-cent amounts"""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} is required")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError(f"{field} must be positive")
    if amount > MAX_MONEY:
        raise ValidationError(f"{field} cannot exceed {MAX_MONEY}")
    if amount != amount.quantize(MONEY_PLACES):
        raise ValidationError(f"{field} must have at most two decimal places")
    return amount


def parse_date(value: Any, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} is required")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")


def _required_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def validate_customer_fields(fields: CustomerFields) -> CustomerFields:
    """Return a normalized copy of customer fields"""
    credit_limit = None
    if fields.credit_limit is not None:
        credit_limit = parse_money(fields.credit_limit, "credit_limit", allow_zero=True)

    if fields.trust_score is not None and not 0 <= fields.trust_score <= MAX_TRUST_SCORE:
        raise ValidationError(f"trust_score must be between 0 and {MAX_TRUST_SCORE}")

    return CustomerFields(
        name=_required_text(fields.name, "name"),
        phone=fields.phone,
        address=fields.address,
        trust_score=fields.trust_score,
        credit_limit=credit_limit,
    )


def validate_loan_fields(fields: LoanFields) -> LoanFields:
    """Return a normalized copy of loan fields"""
    issue_date = parse_date(fields.issue_date, "issue_date")
    due_date = parse_date(fields.due_date, "due_date")
    if due_date < issue_date:
        raise ValidationError("due_date cannot be before issue_date")

    return LoanFields(
        item_description=_required_text(fields.item_description, "item_description"),
        loan_amount=parse_money(fields.loan_amount, "loan_amount"),
        issue_date=issue_date,
        due_date=due_date,
        frequency=fields.frequency,
    )
