"""Financial leak detection - small frequent expenses that add up over a year"""

from datetime import date
from statistics import fmean
from typing import Iterable, List

from cashflow_gateway.domain.config import DEFAULT_CONFIG, ForecastConfig
from cashflow_gateway.domain.grouping import group_transactions, select_window
from cashflow_gateway.domain.models import EXPENSE, FinancialLeak, FinancialLeakReport, Transaction
from cashflow_gateway.domain.statistics import round_half_up

DAYS_PER_MONTH = 30
SAMPLE_SIZE = 3


def small_expenses(transactions: Iterable[Transaction], config: ForecastConfig = DEFAULT_CONFIG) -> List[Transaction]:
    """Expenses at or below small_transaction_threshold_cents"""
    return [
        t for t in transactions
        if t.type == EXPENSE and t.amount_cents <= config.small_transaction_threshold_cents
    ]


def detect_financial_leaks(
    transactions: Iterable[Transaction],
    config: ForecastConfig = DEFAULT_CONFIG,
    min_occurrences: int | None = None,
) -> List[FinancialLeak]:
    """
    Find series of small expenses and estimate what they cost per month and year.

    Only expenses at or below small_transaction_threshold_cents are considered.
    A series needs min_occurrences members (config.leak_min_occurrences by
    default) and a yearly impact of at least leak_min_yearly_impact_cents.

    monthly_impact = average amount * 30 / average gap in days
    """
    threshold = config.leak_min_occurrences if min_occurrences is None else min_occurrences

    leaks = []
    for group in group_transactions(small_expenses(transactions, config), min_size=threshold):
        txns = group.transactions
        gaps = [(txns[i + 1].date - txns[i].date).days for i in range(len(txns) - 1)]
        average_frequency = fmean(gaps)
        if average_frequency <= 0:
            continue

        total_spent = sum(t.amount_cents for t in txns)
        average_amount = total_spent / len(txns)
        monthly_impact = average_amount * (DAYS_PER_MONTH / average_frequency)
        yearly_impact = monthly_impact * 12
        if yearly_impact < config.leak_min_yearly_impact_cents:
            continue

        leaks.append(
            FinancialLeak(
                description=txns[-1].description,
                category=group.key.category,
                transaction_count=len(txns),
                average_amount_cents=round_half_up(average_amount),
                total_spent_cents=total_spent,
                average_frequency_days=round(average_frequency, 1),
                monthly_impact_cents=round_half_up(monthly_impact),
                yearly_impact_cents=round_half_up(yearly_impact),
                first_transaction_date=txns[0].date,
                last_transaction_date=txns[-1].date,
                sample_transactions=txns[:SAMPLE_SIZE],
            )
        )

    leaks.sort(key=lambda leak: (-leak.yearly_impact_cents, leak.description))
    return leaks


def summarize_financial_leaks(
    transactions: Iterable[Transaction],
    start: date,
    end: date,
    config: ForecastConfig = DEFAULT_CONFIG,
    min_occurrences: int | None = None,
) -> FinancialLeakReport:
    """Leaks within [start, end] plus how many small expenses the period held"""
    in_period = select_window(transactions, start, end)
    return FinancialLeakReport(
        leaks=detect_financial_leaks(in_period, config, min_occurrences),
        total_small_transactions=len(small_expenses(in_period, config)),
        period_start=start,
        period_end=end,
    )
