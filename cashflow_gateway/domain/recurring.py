"""Recurring-bill listing - grouping, scoring and classification without projection"""

from datetime import date
from typing import Iterable, List

from cashflow_gateway.domain.classifier import classify_groups
from cashflow_gateway.domain.config import DEFAULT_CONFIG, ForecastConfig
from cashflow_gateway.domain.exceptions import InvalidForecastRequestError, PayeeNotFoundError
from cashflow_gateway.domain.grouping import group_transactions, normalize_description, select_window
from cashflow_gateway.domain.models import (
    EXPENSE,
    PayeeHistory,
    RecurringBillReport,
    RecurringBillStatistics,
    RecurringPattern,
    Transaction,
)
from cashflow_gateway.domain.statistics import (
    ANNUAL,
    MONTHLY,
    QUARTERLY,
    ConfidenceScorer,
    ScoringProfile,
    round_half_up,
)


def detect_recurring_patterns(transactions: Iterable[Transaction], profile: ScoringProfile) -> List[RecurringPattern]:
    """Group, score and classify. The shared first half of both pipelines."""
    groups = group_transactions(transactions)
    return classify_groups(groups, ConfidenceScorer(profile))


def validate_date_range(start: date | None, end: date | None) -> None:
    if start is None or end is None:
        raise InvalidForecastRequestError("Both start and end dates are required")
    if start > end:
        raise InvalidForecastRequestError(f"Start date {start} is after end date {end}")


def summarize_recurring_bills(patterns: List[RecurringPattern]) -> RecurringBillStatistics:
    """
    Totals by frequency and the monthly budget they imply, in cents.

    estimated_monthly_budget = monthly + quarterly / 3 + annual / 12. Custom
    cadences are listed but left out of the totals.
    """

    def total(label: str) -> int:
        return sum(p.average_amount_cents for p in patterns if p.frequency_label == label)

    monthly = total(MONTHLY)
    quarterly = total(QUARTERLY)
    annual = total(ANNUAL)

    return RecurringBillStatistics(
        total_recurring_expenses=len(patterns),
        total_monthly_recurring_cents=monthly,
        total_quarterly_recurring_cents=quarterly,
        total_annual_recurring_cents=annual,
        estimated_monthly_budget_cents=round_half_up(monthly + quarterly / 3 + annual / 12),
    )


def list_recurring_bills(
    transactions: Iterable[Transaction],
    start: date,
    end: date,
    config: ForecastConfig = DEFAULT_CONFIG,
) -> RecurringBillReport:
    """
    List recurring expenses found in [start, end] with the bill-classification profile.

    Raises:
        InvalidForecastRequestError: missing or inverted date range
    """
    validate_date_range(start, end)
    expenses = [t for t in select_window(transactions, start, end) if t.type == EXPENSE]
    patterns = detect_recurring_patterns(expenses, config.bill_profile)
    return RecurringBillReport(recurring_expenses=patterns, statistics=summarize_recurring_bills(patterns))


def summarize_payee_history(transactions: Iterable[Transaction], description: str) -> PayeeHistory:
    """
    Collect every expense recorded under a description, across categories.

    Raises:
        PayeeNotFoundError: nothing matches the normalized description
    """
    wanted = normalize_description(description)
    matches = sorted(
        (t for t in transactions if t.type == EXPENSE and normalize_description(t.description) == wanted),
        key=lambda t: (t.date, t.transaction_id),
    )
    if not matches:
        raise PayeeNotFoundError(f"No expenses recorded for '{description}'")

    total_spent = sum(t.amount_cents for t in matches)
    return PayeeHistory(
        description=matches[-1].description,
        transactions=matches,
        total_spent_cents=total_spent,
        average_amount_cents=round_half_up(total_spent / len(matches)),
        transaction_count=len(matches),
        first_transaction_date=matches[0].date,
        last_transaction_date=matches[-1].date,
    )
