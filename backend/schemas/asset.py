"""Pydantic schemas for non-tradable portfolio assets.

Assets form a closed tagged union on ``type``; each variant carries its
own fields and the shared ``name`` and ``notes``.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AssetBase(BaseModel):
    """Fields shared by every asset variant."""

    name: str = Field(min_length=1)
    notes: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class FixedAsset(AssetBase):
    """Land, gold, property, vehicles and similar."""

    type: Literal["fixed-asset"] = "fixed-asset"
    category: Literal["land", "gold", "property", "vehicle", "other"] = "other"
    purchase_price: Decimal = Field(ge=0)
    purchase_date: date
    current_value: Optional[Decimal] = Field(default=None, ge=0)  # Appraised value
    appraisal_date: Optional[date] = None
    location_or_details: Optional[str] = None


class FixedDeposit(AssetBase):
    """Bank term deposit."""

    type: Literal["fixed-deposit"] = "fixed-deposit"
    bank: str
    principal: Decimal = Field(ge=0)
    interest_rate: Decimal = Field(ge=0)  # Annual %, 12.5 means 12.5%
    compounding: Literal["simple", "monthly", "quarterly", "annually"] = "simple"
    start_date: date
    maturity_date: date
    auto_renewal: bool = False


class SavingsAccount(AssetBase):
    """Savings balance, updated manually."""

    type: Literal["savings"] = "savings"
    bank: str
    balance: Decimal
    interest_rate: Optional[Decimal] = None
    last_updated: Optional[date] = None


class MutualFund(AssetBase):
    """Fund units valued at the latest known NAV."""

    type: Literal["mutual-fund"] = "mutual-fund"
    fund_code: Optional[str] = None
    units: Decimal = Field(ge=0)
    buy_nav: Optional[Decimal] = None
    last_nav: Optional[Decimal] = None
    last_nav_date: Optional[date] = None


class TreasuryBond(AssetBase):
    """Government bond held in face-value units."""

    type: Literal["treasury-bond"] = "treasury-bond"
    issue_code: Optional[str] = None
    face_value: Decimal = Field(ge=0)  # Per unit
    units: Decimal = Field(ge=0)
    coupon_rate: Optional[Decimal] = None
    coupon_frequency: Optional[Literal["annual", "semi-annual", "quarterly"]] = None
    purchase_price: Optional[Decimal] = None  # Per unit
    purchase_date: Optional[date] = None
    maturity_date: Optional[date] = None
    current_market_price: Optional[Decimal] = None  # Per unit


AssetData = Annotated[
    Union[FixedAsset, FixedDeposit, SavingsAccount, MutualFund, TreasuryBond],
    Field(discriminator="type"),
]


class AssetCreate(BaseModel):
    """Request body wrapping one asset variant."""

    asset: AssetData


class AssetWithMetrics(BaseModel):
    """An asset variant with its computed valuation."""

    id: Optional[str] = None
    asset: AssetData
    current_value: Decimal
    invested: Optional[Decimal] = None
    gain_loss: Optional[Decimal] = None
    gain_loss_percent: Optional[Decimal] = None
    status: Optional[Literal["active", "matured"]] = None
    days_to_maturity: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AllocationSlice(BaseModel):
    """Current value of one group of assets and its share of the total."""

    key: str
    value: Decimal
    percentage: Decimal


class AssetsSummary(BaseModel):
    """Totals and allocation over a user's assets."""

    total_current_value: Decimal
    total_invested: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    items: list[AssetWithMetrics]
    by_type: list[AllocationSlice]
    by_category: list[AllocationSlice]
    matured_assets: list[AssetWithMetrics]
