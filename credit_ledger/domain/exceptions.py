"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Entity is absent or owned by another shopkeeper.

    Both cases carry the same message so callers cannot tell them apart.
    """

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity


class ValidationError(DomainException):
    """Monetary amount, date or required field is invalid"""

    pass


class TenantViolationError(DomainException):
    """Loan references a customer owned by a different shopkeeper"""

    def __init__(self, loan_id: int, loan_owner_id: str, customer_owner_id: str):
        super().__init__(
            f"Loan {loan_id} owned by {loan_owner_id!r} references customer owned by {customer_owner_id!r}"
        )
        self.loan_id = loan_id
        self.loan_owner_id = loan_owner_id
        self.customer_owner_id = customer_owner_id


class RepositoryFailureError(DomainException):
    """Storage is unreachable or returned an inconsistent result"""

    pass


class UnauthenticatedError(DomainException):
    """No shopkeeper identity accompanied the call"""

    pass
