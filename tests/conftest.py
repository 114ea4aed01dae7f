"""Pytest fixtures for testing"""

import os

# Point the app at SQLite before cashflow_gateway.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import date
from itertools import count
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from cashflow_gateway.api.dependencies import get_today
from cashflow_gateway.api.main import create_app
from cashflow_gateway.infrastructure.database.models import Base, LedgerTransaction
from cashflow_gateway.infrastructure.database.session import get_db
from cashflow_gateway.domain.models import Transaction


TODAY = date(2026, 3, 15)

# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a fixed 'today'"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for domain transactions with sensible defaults"""
    ids = count(1)

    def _make(
        on: date,
        amount_cents: int,
        description: str = "Netflix",
        type: str = "expense",
        category: str = "subscriptions",
        user_id: str = "user_1",
    ) -> Transaction:
        return Transaction(
            transaction_id=f"tx_{next(ids):04d}",
            user_id=user_id,
            date=on,
            description=description,
            amount_cents=amount_cents,
            type=type,
            category=category,
        )

    return _make


@pytest.fixture
def seed_ledger(db: Session) -> Callable[..., None]:
    """Insert ledger rows (date, description, amount_cents, type, category) for a user"""
    ids = count(1)

    def _seed(rows: list[tuple], user_id: str = "user_1") -> None:
        for on, description, amount_cents, type, category in rows:
            db.add(
                LedgerTransaction(
                    id=f"{user_id}_{next(ids):04d}",
                    user_id=user_id,
                    date=on,
                    description=description,
                    amount_cents=amount_cents,
                    type=type,
                    category=category,
                )
            )
        db.commit()

    return _seed


@pytest.fixture
def monthly_household() -> list[tuple]:
    """Salary, rent and a streaming subscription from Sep 2025 to Mar 2026, plus a one-off"""
    months = [(2025, 9), (2025, 10), (2025, 11), (2025, 12), (2026, 1), (2026, 2), (2026, 3)]
    rows = []
    for year, month in months:
        rows.append((date(year, month, 1), "Rent", 120_000, "expense", "housing"))
        rows.append((date(year, month, 3), "Netflix", 1299, "expense", "subscriptions"))
        if (year, month) != (2026, 3):
            rows.append((date(year, month, 25), "ACME Payroll", 250_000, "income", "salary"))
    rows.append((date(2026, 2, 14), "Florist", 6500, "expense", "gifts"))
    return rows
