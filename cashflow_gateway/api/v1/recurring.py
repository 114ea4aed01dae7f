"""GET /v1/recurring-expenses - recurring bill listing and per-payee history"""

import logging
import time
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cashflow_gateway.api.dependencies import (
    get_forecast_config,
    get_request_id,
    get_today,
    get_transaction_repository,
)
from cashflow_gateway.api.v1.schemas import PayeeHistoryResponse, RecurringExpensesResponse
from cashflow_gateway.domain.config import ForecastConfig
from cashflow_gateway.domain.exceptions import (
    DataUnavailableError,
    InvalidForecastRequestError,
    PayeeNotFoundError,
)
from cashflow_gateway.domain.models import EXPENSE
from cashflow_gateway.domain.recurring import list_recurring_bills, summarize_payee_history, validate_date_range
from cashflow_gateway.infrastructure.database.repositories import TransactionRepository
from cashflow_gateway.infrastructure.observability.logging import log_recurring_listing
from cashflow_gateway.infrastructure.observability.metrics import (
    record_recurring_listing,
    repository_fetch_failures_counter,
)
from cashflow_gateway.utils.date_utils import months_ago

router = APIRouter()


@router.get("/recurring-expenses", response_model=RecurringExpensesResponse)
def get_recurring_expenses(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    months: Optional[int] = Query(None, ge=1, le=120, description="Lookback in months (default 12)"),
    start_date: Optional[date] = Query(None, description="Explicit window start, overrides months"),
    end_date: Optional[date] = Query(None, description="Explicit window end (default today)"),
    today: date = Depends(get_today),
    config: ForecastConfig = Depends(get_forecast_config),
    repository: TransactionRepository = Depends(get_transaction_repository),
):
    """
    List recurring expenses detected in the lookback window.

    Flow:
    1. Resolve the window (explicit dates, else the last `months` months)
    2. Fetch expenses in the window
    3. Group, score and classify with the bill-classification profile
    4. Return patterns (highest confidence first) with frequency totals
    """
    start_time = time.time()
    request_id = get_request_id(request)

    end = end_date or today
    start = start_date or months_ago(end, months or config.recurring_lookback_months)

    try:
        validate_date_range(start, end)
        transactions = repository.find_transactions(user_id, start, end, type_filter=EXPENSE)
        report = list_recurring_bills(transactions, start, end, config)

    except InvalidForecastRequestError as e:
        logging.warning(f"Invalid recurring listing request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except DataUnavailableError as e:
        repository_fetch_failures_counter.inc()
        logging.error(f"Transaction repository error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Transaction data unavailable")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_recurring_listing(len(report.recurring_expenses))
    log_recurring_listing(
        request_id,
        user_id,
        len(report.recurring_expenses),
        report.statistics.estimated_monthly_budget_cents,
        duration_ms,
    )

    return RecurringExpensesResponse.model_validate(report)


@router.get("/recurring-expenses/{description}", response_model=PayeeHistoryResponse)
def get_recurring_expense_details(
    description: str,
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    repository: TransactionRepository = Depends(get_transaction_repository),
):
    """
    Full expense history for one description (case and punctuation insensitive).

    Returns:
        Every matching expense with totals and first/last dates
    """
    request_id = get_request_id(request)

    try:
        transactions = repository.find_transactions(user_id, type_filter=EXPENSE)
        history = summarize_payee_history(transactions, description)

    except PayeeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    except DataUnavailableError as e:
        repository_fetch_failures_counter.inc()
        logging.error(f"Transaction repository error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Transaction data unavailable")

    return PayeeHistoryResponse.model_validate(history)
