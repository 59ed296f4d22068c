"""JSON log output and per-event log helpers for registrations, logins and loan bookings"""

import logging
import sys
from datetime import datetime
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from loan_origination.config import settings


class ServiceJsonFormatter(jsonlogger.JsonFormatter):
    """Stamps every record with UTC time, level name and the configured service name"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.utcnow().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Route all records through a single stdout handler emitting one JSON object per line"""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ServiceJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)


def log_user_registered(request_id: str, user_id: str) -> None:
    logging.info(
        "User registered",
        extra={"request_id": request_id, "user_id": user_id, "step": "user_registered"},
    )


def log_login_attempt(request_id: str, aadhar_num: int, outcome: str) -> None:
    """Log credential check outcome; the aadhar number is masked to its last 4 digits"""
    logging.info(
        "Login attempt",
        extra={
            "request_id": request_id,
            "aadhar_last4": str(aadhar_num)[-4:],
            "step": "login",
            "login_outcome": outcome,
        },
    )


def log_loan_event(
    request_id: str,
    loan_id: str,
    step: str,
    **fields: Any,
) -> None:
    """Log structured loan booking lifecycle event"""
    logging.info(
        "Loan booking event",
        extra={"request_id": request_id, "loan_id": loan_id, "step": step, **fields},
    )
