"""Pattern classifier - turns scored groups into labelled recurring patterns"""

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from cashflow_gateway.domain.exceptions import DegeneratePatternError
from cashflow_gateway.domain.models import RecurringPattern, TransactionGroup
from cashflow_gateway.domain.statistics import (
    ANNUAL,
    CUSTOM,
    MONTHLY,
    QUARTERLY,
    ConfidenceScorer,
    compute_interval_statistics,
    match_frequency_band,
    round_half_up,
)
from cashflow_gateway.utils.date_utils import add_months

logger = logging.getLogger(__name__)

MONTHS_PER_PERIOD = {
    MONTHLY: 1,
    QUARTERLY: 3,
    ANNUAL: 12,
}


def next_payment_date(last_occurrence: date, frequency_label: str, average_interval_days: int) -> date:
    """Advance one canonical period: 1 month, 3 months, 1 year, or the average gap for custom series"""
    months = MONTHS_PER_PERIOD.get(frequency_label)
    if months is not None:
        return add_months(last_occurrence, months)
    return last_occurrence + timedelta(days=average_interval_days)


def classify_group(group: TransactionGroup, scorer: ConfidenceScorer) -> Optional[RecurringPattern]:
    """
    Score a group and build its RecurringPattern.

    Returns None when the group is degenerate or the scorer's profile rejects it.
    """
    try:
        stats = compute_interval_statistics(group)
    except DegeneratePatternError as e:
        logger.debug(f"Dropping degenerate group: {e}")
        return None

    accepted, confidence = scorer.accepts(stats)
    if not accepted:
        return None

    frequency_label = match_frequency_band(stats) or CUSTOM
    first = group.transactions[0]
    last = group.transactions[-1]

    return RecurringPattern(
        group_key=group.key,
        description=last.description,
        category=group.key.category,
        type=group.key.type,
        average_interval_days=stats.average_interval_days,
        average_amount_cents=round_half_up(stats.amount_mean),
        amount_std_dev_cents=round_half_up(stats.amount_std_dev),
        occurrence_count=stats.occurrence_count,
        confidence_score=round(confidence, 2),
        frequency_label=frequency_label,
        first_occurrence_date=first.date,
        last_occurrence_date=last.date,
        next_payment_date=next_payment_date(last.date, frequency_label, stats.average_interval_days),
        total_amount_cents=sum(t.amount_cents for t in group.transactions),
        transactions=list(group.transactions),
    )


def classify_groups(groups: Iterable[TransactionGroup], scorer: ConfidenceScorer) -> List[RecurringPattern]:
    """Classify every group, keeping accepted patterns sorted by confidence (highest first)"""
    patterns = [p for p in (classify_group(g, scorer) for g in groups) if p is not None]
    patterns.sort(key=lambda p: (-p.confidence_score, p.group_key))
    return patterns
