"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from credit_ledger.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_mutation(
    request_id: str,
    shopkeeper_id: str,
    entity: str,
    action: str,
    entity_id: Optional[int],
) -> None:
    """Log a ledger write for audit"""
    logging.info(
        "Ledger updated",
        extra={
            "request_id": request_id,
            "shopkeeper_id": shopkeeper_id,
            "step": f"{entity}_{action}",
            "entity": entity,
            "entity_id": entity_id,
        },
    )


def log_tenant_violation(loan_id: int, loan_owner_id: str, customer_owner_id: str) -> None:
    """Log a loan excluded from results because its customer has another owner"""
    logging.error(
        "Tenant violation: loan excluded from ledger results",
        extra={
            "step": "tenant_check",
            "loan_id": loan_id,
            "loan_owner_id": loan_owner_id,
            "customer_owner_id": customer_owner_id,
        },
    )
