"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from cashflow_gateway.config import settings
from cashflow_gateway.domain.config import ForecastConfig
from cashflow_gateway.infrastructure.database.repositories import TransactionRepository
from cashflow_gateway.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Reference date for forecasts; overridden in tests for deterministic output"""
    return date.today()


def get_forecast_config() -> ForecastConfig:
    """Thresholds and scoring profiles from settings"""
    return settings.forecast_config()


def get_transaction_repository(db: Session = Depends(get_db)) -> TransactionRepository:
    """Provide the ledger repository bound to the request session"""
    return TransactionRepository(db)
