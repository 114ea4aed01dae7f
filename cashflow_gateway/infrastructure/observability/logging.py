"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "cashflow-gateway"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


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


def log_forecast(
    request_id: str,
    user_id: str,
    horizon_months: int,
    pattern_count: int,
    risk_kind: Optional[str],
    duration_ms: float,
) -> None:
    """Log structured forecast outcome for analysis"""
    logging.info(
        "Forecast completed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "forecast_complete",
            "horizon_months": horizon_months,
            "pattern_count": pattern_count,
            "risk": risk_kind or "none",
            "duration_ms": duration_ms,
        },
    )


def log_recurring_listing(
    request_id: str,
    user_id: str,
    pattern_count: int,
    estimated_monthly_budget_cents: int,
    duration_ms: float,
) -> None:
    """Log structured recurring-bill listing outcome"""
    logging.info(
        "Recurring expenses listed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "recurring_listing_complete",
            "pattern_count": pattern_count,
            "estimated_monthly_budget_cents": estimated_monthly_budget_cents,
            "duration_ms": duration_ms,
        },
    )
