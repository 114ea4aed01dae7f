"""Projector - advances recurring patterns into a future window"""

from datetime import date, timedelta
from typing import Iterable, List

from cashflow_gateway.domain.models import PredictedTransaction, RecurringPattern


def project_pattern(pattern: RecurringPattern, window_start: date, window_end: date) -> List[PredictedTransaction]:
    """
    Emit one prediction per occurrence last + k * interval (k >= 1) strictly inside (window_start, window_end).

    A pattern whose last occurrence is long before window_start skips straight to
    the first step that can land in the window instead of walking every period.
    Patterns with a non-positive interval produce nothing.
    """
    interval = pattern.average_interval_days
    if interval <= 0 or window_end <= window_start:
        return []

    last = pattern.last_occurrence_date
    step = 1
    if last < window_start:
        step = max(1, (window_start - last).days // interval)

    predictions = []
    candidate = last + timedelta(days=step * interval)
    while candidate < window_end:
        if candidate > window_start:
            predictions.append(
                PredictedTransaction(
                    date=candidate,
                    description=pattern.description,
                    category=pattern.category,
                    amount_cents=pattern.average_amount_cents,
                    type=pattern.type,
                    confidence=pattern.confidence_score,
                )
            )
        step += 1
        candidate = last + timedelta(days=step * interval)

    return predictions


def project_patterns(
    patterns: Iterable[RecurringPattern], window_start: date, window_end: date
) -> List[PredictedTransaction]:
    """Project every pattern and merge the results in date order"""
    predictions = []
    for pattern in patterns:
        predictions.extend(project_pattern(pattern, window_start, window_end))
    predictions.sort(key=lambda p: (p.date, p.description))
    return predictions
