"""Cash-flow forecast - the full pipeline from ledger history to overdraft risk"""

from datetime import date, timedelta
from typing import Iterable, List, Set, Tuple

from cashflow_gateway.domain.config import DEFAULT_CONFIG, ForecastConfig
from cashflow_gateway.domain.exceptions import InvalidForecastRequestError
from cashflow_gateway.domain.grouping import normalize_description, select_window
from cashflow_gateway.domain.models import CashFlowForecast, GroupKey, PredictedTransaction, Transaction
from cashflow_gateway.domain.projection import project_patterns
from cashflow_gateway.domain.recurring import detect_recurring_patterns
from cashflow_gateway.domain.risk import detect_overdraft_risk
from cashflow_gateway.domain.simulation import simulate_cash_flow
from cashflow_gateway.utils.date_utils import add_months


def validate_horizon(horizon_months: int, max_horizon_months: int) -> None:
    if isinstance(horizon_months, bool) or not isinstance(horizon_months, int):
        raise InvalidForecastRequestError("Forecast horizon must be a whole number of months")
    if not 1 <= horizon_months <= max_horizon_months:
        raise InvalidForecastRequestError(
            f"Forecast horizon must be between 1 and {max_horizon_months} months, got {horizon_months}"
        )


def scheduled_predictions(transactions: Iterable[Transaction], today: date, horizon_end: date) -> List[PredictedTransaction]:
    """Future-dated ledger entries inside (today, horizon_end], treated as certain"""
    return [
        PredictedTransaction(
            date=t.date,
            description=t.description,
            category=t.category,
            amount_cents=t.amount_cents,
            type=t.type,
            confidence=100.0,
            scheduled=True,
        )
        for t in transactions
        if today < t.date <= horizon_end
    ]


def _prediction_key(prediction: PredictedTransaction) -> GroupKey:
    return GroupKey(
        description=normalize_description(prediction.description),
        category=prediction.category,
        type=prediction.type,
    )


def merge_scheduled(
    projected: List[PredictedTransaction], scheduled: List[PredictedTransaction]
) -> List[PredictedTransaction]:
    """
    Combine projections with scheduled entries.

    A projection is dropped when a scheduled entry of the same series already
    falls in the same calendar month: the user recorded that occurrence.
    """
    booked: Set[Tuple[GroupKey, int, int]] = {
        (_prediction_key(s), s.date.year, s.date.month) for s in scheduled
    }
    kept = [
        p for p in projected
        if (_prediction_key(p), p.date.year, p.date.month) not in booked
    ]
    merged = kept + scheduled
    merged.sort(key=lambda p: (p.date, p.description))
    return merged


def forecast_cash_flow(
    transactions: Iterable[Transaction],
    current_balance_cents: int,
    today: date,
    horizon_months: int,
    config: ForecastConfig = DEFAULT_CONFIG,
) -> CashFlowForecast:
    """
    Main entry point: detect patterns, project them, simulate balances, flag risk.

    Flow:
    1. Validate the horizon (1..max_horizon_months)
    2. Detect patterns in the lookback window ending today (forecast profile)
    3. Project them into (today, today + horizon_months]
    4. Merge future-dated ledger entries, dropping duplicated projections
    5. Simulate daily balances from current_balance_cents
    6. Report the first low-balance or overdraft day

    Raises:
        InvalidForecastRequestError: horizon out of bounds
    """
    validate_horizon(horizon_months, config.max_horizon_months)

    ledger = list(transactions)
    horizon_end = add_months(today, horizon_months)

    history = select_window(ledger, today - timedelta(days=config.forecast_lookback_days), today)
    patterns = detect_recurring_patterns(history, config.forecast_profile)

    projected = project_patterns(patterns, today, horizon_end + timedelta(days=1))
    predictions = merge_scheduled(projected, scheduled_predictions(ledger, today, horizon_end))

    entries = simulate_cash_flow(predictions, current_balance_cents, today, horizon_end)
    risk = detect_overdraft_risk(entries, config.low_balance_threshold_cents, config.overdraft_threshold_cents)

    return CashFlowForecast(predictions=entries, overdraft_risk=risk, patterns=patterns)
