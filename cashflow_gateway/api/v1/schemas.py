"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel, model_validator


def cents_to_units(cents: int) -> float:
    return round(cents / 100, 2)


class LedgerSchema(BaseModel):
    """
    Response model read from a domain object.

    The domain keeps money in integer cents: a field `amount` is filled from the
    object's `amount_cents` and presented in currency units. Plain dicts are
    taken as already converted and pass through untouched.
    """

    @model_validator(mode="before")
    @classmethod
    def from_domain(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return data
        values = {}
        for name in cls.model_fields:
            if hasattr(data, f"{name}_cents"):
                values[name] = cents_to_units(getattr(data, f"{name}_cents"))
            elif hasattr(data, name):
                values[name] = getattr(data, name)
        return values


class TransactionSchema(LedgerSchema):
    """Ledger transaction as shown in listings"""

    transaction_id: str
    date: date
    description: str
    amount: float
    type: str
    category: str


class RecurringExpenseSchema(LedgerSchema):
    """Single detected recurring pattern"""

    description: str
    category: str
    type: str
    frequency_label: str
    average_interval_days: int
    average_amount: float
    amount_std_dev: float
    occurrence_count: int
    confidence_score: float
    first_occurrence_date: date
    last_occurrence_date: date
    next_payment_date: date
    total_amount: float
    transactions: List[TransactionSchema]


class RecurringStatisticsSchema(LedgerSchema):
    total_recurring_expenses: int
    total_monthly_recurring: float
    total_quarterly_recurring: float
    total_annual_recurring: float
    estimated_monthly_budget: float


class RecurringExpensesResponse(LedgerSchema):
    """Response for GET /v1/recurring-expenses"""

    recurring_expenses: List[RecurringExpenseSchema]
    statistics: RecurringStatisticsSchema


class PayeeHistoryResponse(LedgerSchema):
    """Response for GET /v1/recurring-expenses/{description}"""

    description: str
    transactions: List[TransactionSchema]
    total_spent: float
    average_amount: float
    transaction_count: int
    first_transaction_date: date
    last_transaction_date: date


class PredictedTransactionSchema(LedgerSchema):
    date: date
    description: str
    category: str
    amount: float
    type: str
    confidence: float
    scheduled: bool = False


class DailyBalanceSchema(LedgerSchema):
    """Simulated end-of-day balance"""

    date: date
    running_balance: float
    income: float
    expenses: float
    transactions: List[PredictedTransactionSchema]


class OverdraftRiskSchema(LedgerSchema):
    date: date
    balance: float
    message: str
    kind: str


class CashFlowResponse(LedgerSchema):
    """Response for GET /v1/predictions/cash-flow"""

    predictions: List[DailyBalanceSchema]
    overdraft_risk: Optional[OverdraftRiskSchema] = None


class FinancialLeakSchema(LedgerSchema):
    description: str
    category: str
    transaction_count: int
    average_amount: float
    total_spent: float
    average_frequency_days: float
    monthly_impact: float
    yearly_impact: float
    first_transaction_date: date
    last_transaction_date: date
    sample_transactions: List[TransactionSchema]


class LeaksResponse(LedgerSchema):
    """Response for GET /v1/leaks"""

    user_id: str
    period_start: date
    period_end: date
    total_small_transactions: int
    total_leaks_found: int
    total_yearly_impact: float
    leaks: List[FinancialLeakSchema]
