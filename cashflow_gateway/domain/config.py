"""Thresholds and scoring profiles the forecasting pipelines run with"""

from dataclasses import dataclass, field

from cashflow_gateway.domain.risk import DEFAULT_LOW_BALANCE_THRESHOLD_CENTS, DEFAULT_OVERDRAFT_THRESHOLD_CENTS
from cashflow_gateway.domain.statistics import BILL_PROFILE, FORECAST_PROFILE, ScoringProfile


@dataclass(frozen=True)
class ForecastConfig:
    """
    Everything the pure pipelines need besides the ledger and the date.

    Built from Settings by the API layer; the domain never reads the environment.
    """

    forecast_lookback_days: int = 180
    recurring_lookback_months: int = 12
    max_horizon_months: int = 12
    low_balance_threshold_cents: int = DEFAULT_LOW_BALANCE_THRESHOLD_CENTS
    overdraft_threshold_cents: int = DEFAULT_OVERDRAFT_THRESHOLD_CENTS
    bill_profile: ScoringProfile = field(default=BILL_PROFILE)
    forecast_profile: ScoringProfile = field(default=FORECAST_PROFILE)
    small_transaction_threshold_cents: int = 5_000
    leak_min_occurrences: int = 3
    leak_min_yearly_impact_cents: int = 5_000


DEFAULT_CONFIG = ForecastConfig()
