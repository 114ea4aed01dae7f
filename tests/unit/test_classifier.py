"""Unit tests for pattern classification"""

from datetime import date, timedelta

from cashflow_gateway.domain.classifier import classify_group, classify_groups, next_payment_date
from cashflow_gateway.domain.grouping import group_transactions
from cashflow_gateway.domain.models import GroupKey, TransactionGroup
from cashflow_gateway.domain.statistics import BILL_PROFILE, FORECAST_PROFILE, ConfidenceScorer


def test_monthly_constant_series_is_classified_monthly(make_transaction):
    """Test ~30-day spacing with a constant amount scores >= 60 and labels monthly"""
    start = date(2025, 10, 1)
    transactions = [make_transaction(start + timedelta(days=30 * i), 4500, "Phone") for i in range(5)]
    [group] = group_transactions(transactions)

    pattern = classify_group(group, ConfidenceScorer(BILL_PROFILE))

    assert pattern is not None
    assert pattern.frequency_label == "monthly"
    assert pattern.confidence_score >= 60
    assert pattern.average_interval_days == 30
    assert pattern.average_amount_cents == 4500
    assert pattern.amount_std_dev_cents == 0
    assert pattern.occurrence_count == 5
    assert pattern.last_occurrence_date == start + timedelta(days=120)
    assert pattern.total_amount_cents == 22_500


def test_single_transaction_group_never_yields_pattern(make_transaction):
    """Test a size-1 group produces nothing under either profile"""
    group = TransactionGroup(
        key=GroupKey("car", "transport", "expense"),
        transactions=[make_transaction(date(2026, 1, 1), 2_500_000, "Car")],
    )

    assert classify_group(group, ConfidenceScorer(BILL_PROFILE)) is None
    assert classify_group(group, ConfidenceScorer(FORECAST_PROFILE)) is None


def test_irregular_series_rejected_by_bill_profile(make_transaction):
    """Test a banded mean with erratic gaps stays below the 60 threshold"""
    dates = [date(2026, 1, 1), date(2026, 1, 11), date(2026, 3, 2)]  # gaps 10, 50
    [group] = group_transactions([make_transaction(d, 2000, "Taxi") for d in dates])

    assert classify_group(group, ConfidenceScorer(BILL_PROFILE)) is None


def test_degenerate_group_dropped_silently(make_transaction):
    """Test same-day duplicates are skipped, not raised"""
    [group] = group_transactions([
        make_transaction(date(2026, 1, 1), 999, "App Store"),
        make_transaction(date(2026, 1, 1), 999, "App Store"),
    ])

    assert classify_group(group, ConfidenceScorer(FORECAST_PROFILE)) is None


def test_forecast_profile_labels_unbanded_series_custom(make_transaction):
    """Test weekly groceries are kept by forecasting with a custom label"""
    start = date(2026, 1, 3)
    [group] = group_transactions([make_transaction(start + timedelta(weeks=i), 8000, "Grocer") for i in range(3)])

    pattern = classify_group(group, ConfidenceScorer(FORECAST_PROFILE))

    assert pattern is not None
    assert pattern.frequency_label == "custom"
    assert pattern.average_interval_days == 7
    assert pattern.confidence_score == 75.0
    assert pattern.next_payment_date == start + timedelta(weeks=3)


def test_quarterly_and_annual_labels(make_transaction):
    """Test quarterly and annual bands flow through to the label"""
    quarterly = [date(2025, 3, 1), date(2025, 6, 1), date(2025, 9, 1)]
    annual = [date(2024, 4, 10), date(2025, 4, 10)]
    transactions = [make_transaction(d, 9000, "Insurance", category="insurance") for d in quarterly]
    transactions += [make_transaction(d, 12_000, "Domain Renewal", category="web") for d in annual]

    patterns = classify_groups(group_transactions(transactions), ConfidenceScorer(BILL_PROFILE))

    labels = {p.description: p.frequency_label for p in patterns}
    assert labels == {"Insurance": "quarterly", "Domain Renewal": "annual"}


def test_classify_groups_sorted_by_confidence(make_transaction):
    """Test highest confidence comes first"""
    steady = [date(2026, 1, 1) + timedelta(days=30 * i) for i in range(4)]
    wobbly = [date(2026, 1, 5), date(2026, 2, 7), date(2026, 3, 4), date(2026, 4, 8)]
    transactions = [make_transaction(d, 1000, "Steady") for d in steady]
    transactions += [make_transaction(d, 1000, "Wobbly") for d in wobbly]

    patterns = classify_groups(group_transactions(transactions), ConfidenceScorer(BILL_PROFILE))

    assert [p.description for p in patterns] == ["Steady", "Wobbly"]
    assert patterns[0].confidence_score > patterns[1].confidence_score


def test_next_payment_date_by_label():
    """Test one canonical period per label, clamped to month end"""
    assert next_payment_date(date(2026, 1, 31), "monthly", 30) == date(2026, 2, 28)
    assert next_payment_date(date(2026, 1, 15), "quarterly", 91) == date(2026, 4, 15)
    assert next_payment_date(date(2024, 2, 29), "annual", 365) == date(2025, 2, 28)
    assert next_payment_date(date(2026, 1, 1), "custom", 14) == date(2026, 1, 15)


def test_confidence_rounded_for_display(make_transaction):
    """Test the pattern carries the score rounded to 2 places (gaps 31, 28 -> 94.92)"""
    dates = [date(2026, 1, 1), date(2026, 2, 1), date(2026, 3, 1)]
    [group] = group_transactions([make_transaction(d, 1299) for d in dates])

    pattern = classify_group(group, ConfidenceScorer(BILL_PROFILE))

    assert pattern.confidence_score == 94.92
