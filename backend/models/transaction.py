"""Transaction model - append-only buy/sell ledger entries."""


from sqlalchemy import CheckConstraint, Column, Date, DateTime, Numeric, String, Text

from database import Base
from models.utils import generate_uuid, utcnow


class Transaction(Base):
    """A buy or sell record for a user.

    Transactions are a continuous log: a holding's originating buy
    transaction survives edits and deletion of the holding itself.
    """

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("type IN ('buy', 'sell')", name="ck_transaction_type"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    owner_id = Column(String, nullable=False, index=True)
    symbol = Column(String, nullable=False, index=True)
    company_name = Column(String, nullable=False, default="")
    type = Column(String, nullable=False)  # "buy" / "sell"
    quantity = Column(Numeric(18, 8), nullable=False)
    price = Column(Numeric(18, 4), nullable=False)
    total_amount = Column(Numeric(18, 4), nullable=False)
    transaction_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
