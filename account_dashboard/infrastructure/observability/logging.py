"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from account_dashboard.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_review(
    account_id: str,
    decision_id: str,
    status: str,
    reviewer: str,
    notes: Optional[str] = None,
) -> None:
    """Log structured review outcome for team-lead audits"""
    logging.info(
        "Decision reviewed",
        extra={
            "account_id": account_id,
            "decision_id": decision_id,
            "step": "review_complete",
            "review_status": status,
            "reviewed_by": reviewer,
            "has_notes": bool(notes),
        },
    )


def log_import(success: bool, collections: list) -> None:
    """Log backup import outcome"""
    if success:
        logging.info(
            "Backup imported",
            extra={"step": "backup_import", "collections": collections},
        )
    else:
        logging.warning(
            "Backup import rejected",
            extra={"step": "backup_import", "collections": collections},
        )
