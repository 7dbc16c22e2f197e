"""Pydantic schemas for holdings, transactions and portfolio summaries."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.quote import QuoteInput


class HoldingCreate(BaseModel):
    """Schema for recording a purchase lot."""

    symbol: str = Field(min_length=1)
    company_name: str = ""
    quantity: Decimal = Field(gt=0)
    purchase_price: Decimal = Field(gt=0)
    purchase_date: date = Field(default_factory=date.today)
    notes: Optional[str] = None

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return v.strip().upper()


class HoldingUpdate(BaseModel):
    """Schema for editing a lot. Only provided fields are changed."""

    company_name: Optional[str] = None
    quantity: Optional[Decimal] = Field(default=None, gt=0)
    purchase_price: Optional[Decimal] = Field(default=None, gt=0)
    purchase_date: Optional[date] = None
    notes: Optional[str] = None


class HoldingResponse(BaseModel):
    """Schema for a stored holding."""

    id: Optional[str] = None
    owner_id: Optional[str] = None
    symbol: str
    company_name: str = ""
    quantity: Decimal
    purchase_price: Decimal
    purchase_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class HoldingWithMetrics(HoldingResponse):
    """A holding enriched with valuation metrics."""

    current_price: Decimal
    current_value: Decimal
    invested: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal

    @property
    def is_positive(self) -> bool:
        return self.gain_loss >= 0


class PortfolioSummary(BaseModel):
    """Derived valuation of a set of holdings. Never persisted."""

    total_invested: Decimal
    current_value: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    holdings: list[HoldingWithMetrics]


class PortfolioSummaryResponse(PortfolioSummary):
    """Portfolio summary plus ranked performers and the quote source used."""

    quote_source: Optional[str] = None
    aggregated: bool = False
    top_performers: list[HoldingWithMetrics] = []
    worst_performers: list[HoldingWithMetrics] = []


class PortfolioSummaryRequest(BaseModel):
    """Caller-supplied quotes for valuing a portfolio."""

    quotes: list[QuoteInput] = []


class TransactionCreate(BaseModel):
    """Schema for recording a standalone buy or sell."""

    symbol: str = Field(min_length=1)
    company_name: str = ""
    type: Literal["buy", "sell"]
    quantity: Decimal = Field(gt=0)
    price: Decimal = Field(gt=0)
    transaction_date: date = Field(default_factory=date.today)
    notes: Optional[str] = None

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return v.strip().upper()


class TransactionResponse(BaseModel):
    """Schema for a stored transaction."""

    id: str
    owner_id: str
    symbol: str
    company_name: str
    type: str
    quantity: Decimal
    price: Decimal
    total_amount: Decimal
    transaction_date: date
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class HoldingCreatedResponse(BaseModel):
    """Response for a recorded purchase."""

    id: str
