"""Interval statistics and confidence scoring for candidate recurring series"""

import math
from dataclasses import dataclass
from statistics import fmean, pstdev
from typing import Dict, Optional, Tuple

from cashflow_gateway.domain.exceptions import DegeneratePatternError
from cashflow_gateway.domain.models import IntervalStatistics, TransactionGroup

MONTHLY = "monthly"
QUARTERLY = "quarterly"
ANNUAL = "annual"
CUSTOM = "custom"

# Inclusive bounds on the mean interval in days
FREQUENCY_BANDS: Dict[str, Tuple[int, int]] = {
    MONTHLY: (25, 35),
    QUARTERLY: (85, 95),
    ANNUAL: (350, 380),
}

# A series outside every band is still "custom" when its gaps barely move
CUSTOM_MAX_INTERVAL_STD_DEV = 5.0
CUSTOM_MIN_INTERVALS = 3

# Occurrences needed for full occurrence confidence
FULL_CONFIDENCE_OCCURRENCES = 6

INTERVAL_REGULARITY = "interval_regularity"
OCCURRENCE_AMOUNT = "occurrence_amount"


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_interval_statistics(group: TransactionGroup) -> IntervalStatistics:
    """
    Measure the gaps and amounts of a date-sorted group.

    Raises:
        DegeneratePatternError: fewer than 2 members, a rounded mean gap of 0 days
            (same-day duplicates) or a zero mean amount
    """
    txns = group.transactions
    if len(txns) < 2:
        raise DegeneratePatternError(f"{group.key.description}: fewer than 2 occurrences")

    intervals = [(txns[i + 1].date - txns[i].date).days for i in range(len(txns) - 1)]
    mean_interval = fmean(intervals)
    average_interval_days = round_half_up(mean_interval)
    if average_interval_days <= 0:
        raise DegeneratePatternError(f"{group.key.description}: zero average interval")

    amounts = [t.amount_cents for t in txns]
    amount_mean = fmean(amounts)
    if amount_mean == 0:
        raise DegeneratePatternError(f"{group.key.description}: zero mean amount")

    return IntervalStatistics(
        intervals=intervals,
        mean_interval=mean_interval,
        average_interval_days=average_interval_days,
        interval_std_dev=pstdev(intervals),
        amount_mean=amount_mean,
        amount_std_dev=pstdev(amounts),
        occurrence_count=len(txns),
    )


def match_frequency_band(stats: IntervalStatistics) -> Optional[str]:
    """Return monthly/quarterly/annual for a banded mean interval, custom for a tight unbanded one, else None"""
    for label, (low, high) in FREQUENCY_BANDS.items():
        if low <= stats.mean_interval <= high:
            return label
    if stats.interval_std_dev < CUSTOM_MAX_INTERVAL_STD_DEV and len(stats.intervals) >= CUSTOM_MIN_INTERVALS:
        return CUSTOM
    return None


def interval_regularity_confidence(stats: IntervalStatistics) -> float:
    """
    100 - coefficient of variation of the gaps, as a percentage, clamped to [0, 100].

    Left unrounded: acceptance compares the raw score, display rounds it.
    """
    raw = 100 - (stats.interval_std_dev / stats.mean_interval * 100)
    return min(100.0, max(0.0, raw))


def occurrence_amount_confidence(stats: IntervalStatistics) -> float:
    """
    Mean of two components, rounded half up:
    - occurrence: min(100, count / 6 * 100)
    - amount stability: max(0, 100 - amount_std_dev / |amount_mean| * 100)
    """
    occurrence = min(100.0, stats.occurrence_count / FULL_CONFIDENCE_OCCURRENCES * 100)
    amount = max(0.0, 100 - (stats.amount_std_dev / abs(stats.amount_mean) * 100))
    return float(round_half_up((occurrence + amount) / 2))


@dataclass(frozen=True)
class ScoringProfile:
    """Which confidence formula to apply and where to draw the acceptance line"""

    name: str
    method: str
    min_confidence: float = 0.0
    strict_threshold: bool = False  # True: score must exceed min_confidence
    min_occurrences: int = 2

    def accepts(self, confidence: Optional[float], occurrence_count: int) -> bool:
        if confidence is None or occurrence_count < self.min_occurrences:
            return False
        if self.strict_threshold:
            return confidence > self.min_confidence
        return confidence >= self.min_confidence


BILL_PROFILE = ScoringProfile(
    name="bill_classification",
    method=INTERVAL_REGULARITY,
    min_confidence=60.0,
    strict_threshold=True,
)

FORECAST_PROFILE = ScoringProfile(
    name="forecast",
    method=OCCURRENCE_AMOUNT,
    min_confidence=0.0,
)


class ConfidenceScorer:
    """
    Score how likely a group is a genuine recurring obligation (0-100).

    interval_regularity (canonical): only series whose mean gap falls in a
    frequency band, or whose gaps are tight enough to be a custom cadence, get a
    score; everything else scores None.

    occurrence_amount: every group gets a score blending how many times it was
    seen with how stable its amount is. Used by forecasting, where missing a
    real obligation costs more than projecting a doubtful one.
    """

    def __init__(self, profile: ScoringProfile = BILL_PROFILE):
        if profile.method not in (INTERVAL_REGULARITY, OCCURRENCE_AMOUNT):
            raise ValueError(f"Unknown scoring method: {profile.method}")
        self.profile = profile

    def score(self, stats: IntervalStatistics) -> Optional[float]:
        if self.profile.method == INTERVAL_REGULARITY:
            if match_frequency_band(stats) is None:
                return None
            return interval_regularity_confidence(stats)
        return occurrence_amount_confidence(stats)

    def accepts(self, stats: IntervalStatistics) -> Tuple[bool, Optional[float]]:
        confidence = self.score(stats)
        return self.profile.accepts(confidence, stats.occurrence_count), confidence
