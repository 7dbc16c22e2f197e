"""Test fixtures and sample data."""
import pytest
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from models import Holding, PortfolioAsset, StockPrice

OWNER_ID = "user-1"


def create_stock_price(
    db: Session,
    symbol: str,
    price_date: date,
    price: Decimal,
    change: Decimal = Decimal("0"),
    volume: int = 0,
) -> StockPrice:
    """Create and flush a StockPrice row.

    This is a helper function (not a fixture) for tests that need several
    snapshot dates.
    """
    row = StockPrice(
        symbol=symbol,
        raw_symbol=f"{symbol}.N0000",
        company_name=f"{symbol} PLC",
        price_date=price_date,
        price=price,
        previous_close=price - change,
        change=change,
        volume=volume,
    )
    db.add(row)
    db.flush()
    return row


def create_holding(
    db: Session,
    symbol: str,
    quantity: Decimal,
    purchase_price: Decimal,
    owner_id: str = OWNER_ID,
    purchase_date: date = date(2024, 1, 15),
    notes: str | None = None,
) -> Holding:
    """Create and commit a Holding row (without a transaction)."""
    row = Holding(
        owner_id=owner_id,
        symbol=symbol,
        company_name=f"{symbol} PLC",
        quantity=quantity,
        purchase_price=purchase_price,
        purchase_date=purchase_date,
        notes=notes,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture
def holding(db: Session) -> Holding:
    """Create a test holding of 100 JKH at 180."""
    return create_holding(db, "JKH", Decimal("100"), Decimal("180"))


@pytest.fixture
def stock_prices(db: Session) -> list[StockPrice]:
    """Two snapshot dates; the later one is the latest snapshot."""
    rows = [
        create_stock_price(db, "JKH", date(2024, 6, 27), Decimal("190"), Decimal("1"), 1000),
        create_stock_price(db, "JKH", date(2024, 6, 28), Decimal("195.50"), Decimal("5.50"), 2500),
        create_stock_price(db, "COMB", date(2024, 6, 28), Decimal("98"), Decimal("-2"), 4000),
    ]
    db.commit()
    return rows


@pytest.fixture
def fixed_deposit(db: Session) -> PortfolioAsset:
    """Create a stored fixed deposit."""
    row = PortfolioAsset(
        owner_id=OWNER_ID,
        type="fixed-deposit",
        name="FD - HNB",
        details={
            "bank": "HNB",
            "principal": "500000",
            "interest_rate": "12.5",
            "compounding": "monthly",
            "start_date": "2024-01-01",
            "maturity_date": "2025-01-01",
            "auto_renewal": False,
        },
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture
def mutual_fund(db: Session) -> PortfolioAsset:
    """Create a stored mutual fund holding with only a buy NAV."""
    row = PortfolioAsset(
        owner_id=OWNER_ID,
        type="mutual-fund",
        name="Equity Fund",
        details={"units": "1000", "buy_nav": "15.25"},
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
