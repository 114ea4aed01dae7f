"""Domain models - pure Python dataclasses representing ledger data and derived forecasts

All money is held as integer cents.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

INCOME = "income"
EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction fetched from the transaction repository"""

    transaction_id: str
    user_id: str
    date: date
    description: str
    amount_cents: int  # unsigned magnitude, sign carried by type
    type: str  # "income" or "expense"
    category: str

    @property
    def signed_amount_cents(self) -> int:
        return self.amount_cents if self.type == INCOME else -self.amount_cents


@dataclass(frozen=True, order=True)
class GroupKey:
    """Identity of a candidate recurring series"""

    description: str
    category: str
    type: str


@dataclass
class TransactionGroup:
    """Transactions sharing a GroupKey, sorted by date ascending"""

    key: GroupKey
    transactions: List[Transaction]

    @property
    def size(self) -> int:
        return len(self.transactions)


@dataclass
class IntervalStatistics:
    """Interval and amount statistics for one group"""

    intervals: List[int]
    mean_interval: float
    average_interval_days: int
    interval_std_dev: float
    amount_mean: float  # cents
    amount_std_dev: float  # cents
    occurrence_count: int


@dataclass
class RecurringPattern:
    """Accepted recurring series. Recomputed on every request, never stored."""

    group_key: GroupKey
    description: str
    category: str
    type: str
    average_interval_days: int
    average_amount_cents: int
    amount_std_dev_cents: int
    occurrence_count: int
    confidence_score: float
    frequency_label: str  # "monthly" | "quarterly" | "annual" | "custom"
    first_occurrence_date: date
    last_occurrence_date: date
    next_payment_date: date
    total_amount_cents: int
    transactions: List[Transaction] = field(default_factory=list)


@dataclass
class PredictedTransaction:
    """Single future occurrence inside a forecast horizon"""

    date: date
    description: str
    category: str
    amount_cents: int
    type: str
    confidence: float
    scheduled: bool = False  # True for future entries already recorded in the ledger


@dataclass
class DailyBalanceEntry:
    """Simulated balance at the end of one calendar day"""

    date: date
    running_balance_cents: int
    income_cents: int
    expenses_cents: int
    transactions: List[PredictedTransaction] = field(default_factory=list)


@dataclass
class OverdraftRiskEvent:
    """First simulated day breaching the low-balance or overdraft threshold"""

    date: date
    balance_cents: int
    message: str
    kind: str  # "overdraft" or "low_balance"


@dataclass
class RecurringBillStatistics:
    total_recurring_expenses: int
    total_monthly_recurring_cents: int
    total_quarterly_recurring_cents: int
    total_annual_recurring_cents: int
    estimated_monthly_budget_cents: int


@dataclass
class RecurringBillReport:
    """Output of the recurring-bill listing"""

    recurring_expenses: List[RecurringPattern]
    statistics: RecurringBillStatistics


@dataclass
class CashFlowForecast:
    """Output of the cash-flow forecast"""

    predictions: List[DailyBalanceEntry]
    overdraft_risk: Optional[OverdraftRiskEvent]
    patterns: List[RecurringPattern] = field(default_factory=list)


@dataclass
class PayeeHistory:
    """All expense transactions recorded under one description"""

    description: str
    transactions: List[Transaction]
    total_spent_cents: int
    average_amount_cents: int
    transaction_count: int
    first_transaction_date: date
    last_transaction_date: date


@dataclass
class FinancialLeak:
    """Small, frequent expense whose yearly impact adds up"""

    description: str
    category: str
    transaction_count: int
    average_amount_cents: int
    total_spent_cents: int
    average_frequency_days: float
    monthly_impact_cents: int
    yearly_impact_cents: int
    first_transaction_date: date
    last_transaction_date: date
    sample_transactions: List[Transaction] = field(default_factory=list)


@dataclass
class FinancialLeakReport:
    """Leaks found in one period, with the totals they add up to"""

    leaks: List[FinancialLeak]
    total_small_transactions: int
    period_start: date
    period_end: date

    @property
    def total_leaks_found(self) -> int:
        return len(self.leaks)

    @property
    def total_yearly_impact_cents(self) -> int:
        return sum(leak.yearly_impact_cents for leak in self.leaks)
