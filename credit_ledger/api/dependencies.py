"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from credit_ledger.config import settings
from credit_ledger.domain.service import LedgerService
from credit_ledger.infrastructure.database.repositories import SqlLedgerRepository
from credit_ledger.infrastructure.database.session import get_db
from credit_ledger.utils.date_utils import current_date


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_shopkeeper_id(request: Request) -> str:
    """Authenticated shopkeeper identity forwarded by the auth gateway"""
    shopkeeper_id = request.headers.get(settings.shopkeeper_header, "").strip()
    if not shopkeeper_id:
        raise HTTPException(status_code=401, detail="Missing shopkeeper identity")
    return shopkeeper_id


def get_today() -> date:
    """Today's date in the ledger's timezone; overridden in tests"""
    return current_date(settings.ledger_timezone)


def get_ledger_service(
    db: Session = Depends(get_db),
    shopkeeper_id: str = Depends(get_shopkeeper_id),
) -> LedgerService:
    """Provide a ledger service scoped to the calling shopkeeper"""
    return LedgerService(SqlLedgerRepository(db), shopkeeper_id)
