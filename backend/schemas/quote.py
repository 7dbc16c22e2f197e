"""Pydantic schemas for market data endpoints."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator


class QuoteResponse(BaseModel):
    """Schema for a normalized quote in API responses."""

    symbol: str
    company_name: str = ""
    price_date: date
    price: Decimal
    open: Decimal
    high: Decimal
    low: Decimal
    previous_close: Decimal
    change: Decimal
    change_percent: Decimal
    volume: int

    model_config = ConfigDict(from_attributes=True)


class QuoteResolutionResponse(BaseModel):
    """Latest quotes together with the source that produced them."""

    source: str
    quotes: list[QuoteResponse]


class MarketSummaryResponse(BaseModel):
    """Volume and breadth statistics for the resolved quotes."""

    source: str
    total_volume: int
    total_instruments: int
    advancers: int
    decliners: int
    unchanged: int


class StockHistoryResponse(BaseModel):
    """Persisted price history for one symbol."""

    symbol: str
    days: int
    quotes: list[QuoteResponse]


class RefreshResponse(BaseModel):
    """Result of a live fetch-and-save run."""

    fetched: int
    saved: int
    price_date: date


class QuoteInput(BaseModel):
    """Caller-supplied current price for one instrument."""

    symbol: str
    price: Decimal

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return v.strip().upper()
