"""
E2E tests for 5 user personas running the full API against a seeded ledger.

User personas:
- user_subscriber: salary plus three monthly subscriptions, comfortable balance
- user_gig: irregular payouts, monthly rent
- user_overdrawn: recurring car loan larger than income, already below zero
- user_thin: a single deposit, nothing recurring
- user_new: no history at all
"""

import pytest
from datetime import date
from fastapi.testclient import TestClient

MONTHS = [(2025, 10), (2025, 11), (2025, 12), (2026, 1), (2026, 2), (2026, 3)]


@pytest.mark.integration
def test_user_subscriber(client: TestClient, seed_ledger):
    """
    user_subscriber: Netflix, Spotify and a gym membership every month
    Expected: three monthly bills, salary not listed, no risk
    """
    rows = []
    for year, month in MONTHS:
        rows.append((date(year, month, 3), "Netflix", 1299, "expense", "subscriptions"))
        rows.append((date(year, month, 10), "Spotify", 999, "expense", "subscriptions"))
        rows.append((date(year, month, 5), "City Gym", 4000, "expense", "health"))
        if (year, month) != (2026, 3):
            rows.append((date(year, month, 28), "Payroll", 300_000, "income", "salary"))
    seed_ledger(rows, user_id="user_subscriber")

    listing = client.get("/v1/recurring-expenses", params={"user_id": "user_subscriber"}).json()
    assert sorted(p["description"] for p in listing["recurring_expenses"]) == ["City Gym", "Netflix", "Spotify"]
    assert all(p["frequency_label"] == "monthly" for p in listing["recurring_expenses"])
    assert listing["statistics"]["estimated_monthly_budget"] == 62.98

    forecast = client.get("/v1/predictions/cash-flow", params={"user_id": "user_subscriber"}).json()
    assert forecast["predictions"][0]["running_balance"] == 14622.12
    assert forecast["overdraft_risk"] is None


@pytest.mark.integration
def test_user_gig(client: TestClient, seed_ledger):
    """
    user_gig: Payouts of varying size on irregular days
    Expected: only rent is a recurring bill; forecast still covers every day
    """
    payouts = [
        (date(2025, 12, 2), 31_000),
        (date(2025, 12, 7), 9550),
        (date(2025, 12, 26), 62_000),
        (date(2026, 2, 7), 18_000),
        (date(2026, 2, 16), 44_000),
    ]
    rows = [(d, "Rideshare Payout", amount_cents, "income", "gig") for d, amount_cents in payouts]
    rows += [(date(y, m, 1), "Rent", 90_000, "expense", "housing") for y, m in MONTHS[2:]]
    seed_ledger(rows, user_id="user_gig")

    listing = client.get("/v1/recurring-expenses", params={"user_id": "user_gig"}).json()
    assert [p["description"] for p in listing["recurring_expenses"]] == ["Rent"]

    response = client.get("/v1/predictions/cash-flow", params={"user_id": "user_gig", "months": 2})
    assert response.status_code == 200
    predictions = response.json()["predictions"]
    assert predictions[0]["date"] == "2026-03-15"
    assert predictions[-1]["date"] == "2026-05-15"


@pytest.mark.integration
def test_user_overdrawn(client: TestClient, seed_ledger):
    """
    user_overdrawn: Car loan payments exceed the only deposit
    Expected: overdraft flagged on the first forecast day
    """
    rows = [(date(2026, 1, 5), "Tax Refund", 300_000, "income", "tax")]
    rows += [(date(y, m, 10), "Car Loan", 140_000, "expense", "loans") for y, m in MONTHS[2:]]
    seed_ledger(rows, user_id="user_overdrawn")

    risk = client.get("/v1/predictions/cash-flow", params={"user_id": "user_overdrawn"}).json()["overdraft_risk"]

    assert risk["date"] == "2026-03-15"
    assert risk["kind"] == "overdraft"
    assert risk["balance"] == -2600.0


@pytest.mark.integration
def test_user_thin(client: TestClient, seed_ledger):
    """
    user_thin: One deposit only
    Expected: nothing recurring, flat balance over the horizon
    """
    seed_ledger([(date(2026, 3, 1), "Deposit", 50_000, "income", "transfer")], user_id="user_thin")

    listing = client.get("/v1/recurring-expenses", params={"user_id": "user_thin"}).json()
    assert listing["recurring_expenses"] == []

    forecast = client.get("/v1/predictions/cash-flow", params={"user_id": "user_thin"}).json()
    assert {p["running_balance"] for p in forecast["predictions"]} == {500.0}
    assert forecast["overdraft_risk"] is None


@pytest.mark.integration
def test_user_new(client: TestClient):
    """
    user_new: No ledger entries
    Expected: zero balance is already under the low-balance line
    """
    forecast = client.get("/v1/predictions/cash-flow", params={"user_id": "user_new"}).json()

    assert len(forecast["predictions"]) == 93
    assert forecast["overdraft_risk"]["kind"] == "low_balance"
    assert forecast["overdraft_risk"]["date"] == "2026-03-15"
