"""GET /v1/leaks - small recurring expenses with their yearly impact"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cashflow_gateway.api.dependencies import (
    get_forecast_config,
    get_request_id,
    get_today,
    get_transaction_repository,
)
from cashflow_gateway.api.v1.schemas import FinancialLeakSchema, LeaksResponse, cents_to_units
from cashflow_gateway.domain.config import ForecastConfig
from cashflow_gateway.domain.exceptions import DataUnavailableError
from cashflow_gateway.domain.leaks import summarize_financial_leaks
from cashflow_gateway.domain.models import EXPENSE
from cashflow_gateway.infrastructure.database.repositories import TransactionRepository
from cashflow_gateway.infrastructure.observability.metrics import repository_fetch_failures_counter
from cashflow_gateway.utils.date_utils import months_ago

router = APIRouter()


@router.get("/leaks", response_model=LeaksResponse)
def get_financial_leaks(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    months: int = Query(3, ge=1, le=24, description="Lookback in months"),
    min_occurrences: Optional[int] = Query(None, ge=2, description="Minimum occurrences per series"),
    today: date = Depends(get_today),
    config: ForecastConfig = Depends(get_forecast_config),
    repository: TransactionRepository = Depends(get_transaction_repository),
):
    """
    Small expenses (at or below the configured threshold) that repeat often enough to matter.

    Returns:
        Leaks sorted by yearly impact, largest first, with period totals
    """
    request_id = get_request_id(request)
    start = months_ago(today, months)

    try:
        transactions = repository.find_transactions(user_id, start, today, type_filter=EXPENSE)
    except DataUnavailableError as e:
        repository_fetch_failures_counter.inc()
        logging.error(f"Transaction repository error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Transaction data unavailable")

    report = summarize_financial_leaks(transactions, start, today, config, min_occurrences)

    return LeaksResponse(
        user_id=user_id,
        period_start=report.period_start,
        period_end=report.period_end,
        total_small_transactions=report.total_small_transactions,
        total_leaks_found=report.total_leaks_found,
        total_yearly_impact=cents_to_units(report.total_yearly_impact_cents),
        leaks=[FinancialLeakSchema.model_validate(leak) for leak in report.leaks],
    )
