"""Cash-flow simulator - day-by-day running balance over a forecast horizon"""

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List

from cashflow_gateway.domain.models import INCOME, DailyBalanceEntry, PredictedTransaction
from cashflow_gateway.utils.date_utils import generate_date_range


def simulate_cash_flow(
    predictions: Iterable[PredictedTransaction],
    opening_balance_cents: int,
    start: date,
    end: date,
) -> List[DailyBalanceEntry]:
    """
    Walk every calendar day from start through end (inclusive).

    Requirements:
    - One entry per day, including days without activity
    - balance(day n) = balance(day n-1) + income(day n) - expenses(day n)
    - Day 0 starts from opening_balance_cents (the current real balance)
    - Predictions outside [start, end] are ignored
    - Integer cents throughout, so balances never drift off whole cents
    """
    by_day: Dict[date, List[PredictedTransaction]] = defaultdict(list)
    for prediction in predictions:
        by_day[prediction.date].append(prediction)

    running_balance = opening_balance_cents
    entries = []

    for day in generate_date_range(start, end):
        day_predictions = by_day.get(day, [])
        income = sum(p.amount_cents for p in day_predictions if p.type == INCOME)
        expenses = sum(p.amount_cents for p in day_predictions if p.type != INCOME)
        running_balance = running_balance + income - expenses

        entries.append(
            DailyBalanceEntry(
                date=day,
                running_balance_cents=running_balance,
                income_cents=income,
                expenses_cents=expenses,
                transactions=list(day_predictions),
            )
        )

    return entries
