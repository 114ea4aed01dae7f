"""Risk detector - finds the first simulated day breaching a balance threshold"""

from typing import Iterable, Optional

from cashflow_gateway.domain.models import DailyBalanceEntry, OverdraftRiskEvent

OVERDRAFT = "overdraft"
LOW_BALANCE = "low_balance"

DEFAULT_LOW_BALANCE_THRESHOLD_CENTS = 10_000  # $100
DEFAULT_OVERDRAFT_THRESHOLD_CENTS = 0


def format_cents(cents: int) -> str:
    return f"{cents / 100:.2f}"


def detect_overdraft_risk(
    entries: Iterable[DailyBalanceEntry],
    low_balance_threshold_cents: int = DEFAULT_LOW_BALANCE_THRESHOLD_CENTS,
    overdraft_threshold_cents: int = DEFAULT_OVERDRAFT_THRESHOLD_CENTS,
) -> Optional[OverdraftRiskEvent]:
    """
    Return the chronologically first breach of either threshold.

    Balances [120, 80, -10, 50] report the 80 day as a low-balance warning:
    the earliest breach wins even if a worse one follows. A balance exactly
    on the line is not a breach.
    """
    trigger = max(low_balance_threshold_cents, overdraft_threshold_cents)

    for entry in sorted(entries, key=lambda e: e.date):
        balance = entry.running_balance_cents
        if balance >= trigger:
            continue

        if balance < overdraft_threshold_cents:
            return OverdraftRiskEvent(
                date=entry.date,
                balance_cents=balance,
                message=f"Projected overdraft: balance falls to {format_cents(balance)} on {entry.date.isoformat()}",
                kind=OVERDRAFT,
            )
        return OverdraftRiskEvent(
            date=entry.date,
            balance_cents=balance,
            message=(
                f"Low balance warning: balance falls to {format_cents(balance)} on {entry.date.isoformat()}, "
                f"below {format_cents(low_balance_threshold_cents)}"
            ),
            kind=LOW_BALANCE,
        )

    return None
