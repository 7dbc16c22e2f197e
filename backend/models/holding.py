"""Holding model - one purchase lot of an instrument owned by a user."""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Numeric, String, Text

from database import Base
from models.utils import generate_uuid, utcnow


class Holding(Base):
    """A discrete purchase record (lot) of a tracked instrument.

    Multiple lots of the same symbol are kept as separate rows; the
    valuation service merges them on read when an aggregated view is needed.
    """

    __tablename__ = "holdings"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_holding_quantity_positive"),
        CheckConstraint("purchase_price > 0", name="ck_holding_purchase_price_positive"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    owner_id = Column(String, nullable=False, index=True)
    symbol = Column(String, nullable=False, index=True)
    company_name = Column(String, nullable=False, default="")
    quantity = Column(Numeric(18, 8), nullable=False)
    purchase_price = Column(Numeric(18, 4), nullable=False)
    purchase_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
    )

    @property
    def invested(self) -> Decimal:
        """Total cost of the lot (quantity x purchase price)."""
        return Decimal(self.quantity) * Decimal(self.purchase_price)
