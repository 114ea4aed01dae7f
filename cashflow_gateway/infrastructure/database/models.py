"""SQLAlchemy ORM models for the transaction ledger"""

from sqlalchemy import BigInteger, Column, Date, DateTime, Index, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class LedgerTransaction(Base):
    """User transaction as recorded by the ledger (read-only for this service)"""

    __tablename__ = "ledger_transaction"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(Text, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)  # sign carried by type
    type = Column(Text, nullable=False)  # income | expense
    category = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (Index("ix_ledger_transaction_user_date", "user_id", "date"),)
