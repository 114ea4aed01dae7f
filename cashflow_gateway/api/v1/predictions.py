"""GET /v1/predictions/cash-flow - day-by-day cash-flow forecast with overdraft risk"""

import logging
import time
from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cashflow_gateway.api.dependencies import (
    get_forecast_config,
    get_request_id,
    get_today,
    get_transaction_repository,
)
from cashflow_gateway.api.v1.schemas import CashFlowResponse
from cashflow_gateway.config import settings
from cashflow_gateway.domain.config import ForecastConfig
from cashflow_gateway.domain.exceptions import DataUnavailableError, InvalidForecastRequestError
from cashflow_gateway.domain.forecasting import forecast_cash_flow, validate_horizon
from cashflow_gateway.infrastructure.database.repositories import TransactionRepository
from cashflow_gateway.infrastructure.observability.logging import log_forecast
from cashflow_gateway.infrastructure.observability.metrics import record_forecast, repository_fetch_failures_counter
from cashflow_gateway.utils.date_utils import add_months

router = APIRouter()


@router.get("/predictions/cash-flow", response_model=CashFlowResponse)
def get_cash_flow_prediction(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    months: int = Query(settings.default_horizon_months, description="Forecast horizon in months"),
    today: date = Depends(get_today),
    config: ForecastConfig = Depends(get_forecast_config),
    repository: TransactionRepository = Depends(get_transaction_repository),
):
    """
    Forecast daily balances over the next `months` months.

    Flow:
    1. Validate the horizon before touching the ledger
    2. Fetch history (lookback window) plus future-dated entries up to the horizon
    3. Read the current balance
    4. Detect, project, simulate, flag first low-balance/overdraft day
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        validate_horizon(months, config.max_horizon_months)

        window_start = today - timedelta(days=config.forecast_lookback_days)
        transactions = repository.find_transactions(user_id, window_start, add_months(today, months))
        balance_cents = repository.current_balance_cents(user_id, today)

        forecast = forecast_cash_flow(transactions, balance_cents, today, months, config)

    except InvalidForecastRequestError as e:
        logging.warning(f"Invalid forecast request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except DataUnavailableError as e:
        repository_fetch_failures_counter.inc()
        logging.error(f"Transaction repository error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Transaction data unavailable")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    risk_kind = forecast.overdraft_risk.kind if forecast.overdraft_risk else None
    duration_ms = (time.time() - start_time) * 1000
    record_forecast(len(forecast.patterns), risk_kind)
    log_forecast(request_id, user_id, months, len(forecast.patterns), risk_kind, duration_ms)

    return CashFlowResponse.model_validate(forecast)
