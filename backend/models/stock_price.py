"""StockPrice model - one persisted quote per symbol per trading date."""

from decimal import Decimal

from sqlalchemy import BigInteger, Column, Date, DateTime, Numeric, String, UniqueConstraint

from database import Base
from models.utils import generate_uuid, utcnow


class StockPrice(Base):
    """A normalized price snapshot for a tracked instrument on a date.

    Written by the daily collection job and read back by the market data
    resolver as the preferred quote source.
    """

    __tablename__ = "stock_prices"
    __table_args__ = (
        UniqueConstraint("symbol", "price_date", name="uix_stock_price_symbol_date"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    symbol = Column(String, nullable=False, index=True)
    raw_symbol = Column(String, nullable=True)  # Exchange identifier, e.g. "JKH.N0000"
    company_name = Column(String, nullable=True)
    price_date = Column(Date, nullable=False, index=True)
    price = Column(Numeric(18, 4), nullable=False, default=Decimal("0"))
    open = Column(Numeric(18, 4), nullable=False, default=Decimal("0"))
    high = Column(Numeric(18, 4), nullable=False, default=Decimal("0"))
    low = Column(Numeric(18, 4), nullable=False, default=Decimal("0"))
    previous_close = Column(Numeric(18, 4), nullable=False, default=Decimal("0"))
    change = Column(Numeric(18, 4), nullable=False, default=Decimal("0"))
    change_percent = Column(Numeric(18, 4), nullable=False, default=Decimal("0"))
    volume = Column(BigInteger, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
    )
