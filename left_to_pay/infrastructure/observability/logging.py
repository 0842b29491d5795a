"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from left_to_pay.config import settings


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


def log_report(
    request_id: str,
    account_uid: str,
    pay_date: Optional[datetime],
    row_count: int,
    total_due_minor_units: int,
    remaining_minor_units: int,
    duration_ms: float,
) -> None:
    """Log structured report outcome for analysis"""
    logging.info(
        "Report completed",
        extra={
            "request_id": request_id,
            "account_uid": account_uid,
            "step": "report_complete",
            "pay_date_known": pay_date is not None,
            "pay_date": pay_date.isoformat() if pay_date else None,
            "obligations_due": row_count,
            "total_due_minor_units": total_due_minor_units,
            "remaining_minor_units": remaining_minor_units,
            "duration_ms": duration_ms,
        },
    )
