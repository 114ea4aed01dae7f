"""Data access layer for ledger transactions"""

from datetime import date
from typing import List, Optional

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cashflow_gateway.domain.exceptions import DataUnavailableError
from cashflow_gateway.domain.models import INCOME, Transaction
from cashflow_gateway.infrastructure.database.models import LedgerTransaction


class TransactionRepository:
    """Read-only repository over the transaction ledger"""

    def __init__(self, db: Session):
        self.db = db

    def find_transactions(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        type_filter: Optional[str] = None,
    ) -> List[Transaction]:
        """
        Fetch a user's transactions in [start, end], oldest first.

        Amounts are normalized to unsigned magnitudes here, once, so the domain
        never has to guess a sign convention.

        Raises:
            DataUnavailableError: On any database failure
        """
        try:
            query = self.db.query(LedgerTransaction).filter(LedgerTransaction.user_id == user_id)
            if start is not None:
                query = query.filter(LedgerTransaction.date >= start)
            if end is not None:
                query = query.filter(LedgerTransaction.date <= end)
            if type_filter is not None:
                query = query.filter(LedgerTransaction.type == type_filter)

            rows = query.order_by(LedgerTransaction.date.asc(), LedgerTransaction.id.asc()).all()
        except SQLAlchemyError as e:
            raise DataUnavailableError(f"Transaction lookup failed for user {user_id}") from e

        return [
            Transaction(
                transaction_id=row.id,
                user_id=row.user_id,
                date=row.date,
                description=row.description,
                amount_cents=abs(row.amount_cents),
                type=row.type,
                category=row.category,
            )
            for row in rows
        ]

    def current_balance_cents(self, user_id: str, as_of: date) -> int:
        """
        Sum, in cents, of all transactions dated on or before as_of: income adds, expenses subtract.

        Raises:
            DataUnavailableError: On any database failure
        """
        try:
            signed = case(
                (LedgerTransaction.type == INCOME, func.abs(LedgerTransaction.amount_cents)),
                else_=-func.abs(LedgerTransaction.amount_cents),
            )
            total = (
                self.db.query(func.coalesce(func.sum(signed), 0))
                .filter(LedgerTransaction.user_id == user_id)
                .filter(LedgerTransaction.date <= as_of)
                .scalar()
            )
        except SQLAlchemyError as e:
            raise DataUnavailableError(f"Balance lookup failed for user {user_id}") from e

        return int(total or 0)
