"""Pydantic schemas for API request/response validation."""

from schemas.asset import (
    AllocationSlice,
    AssetCreate,
    AssetData,
    AssetsSummary,
    AssetWithMetrics,
    FixedAsset,
    FixedDeposit,
    MutualFund,
    SavingsAccount,
    TreasuryBond,
)
from schemas.holding import (
    HoldingCreate,
    HoldingCreatedResponse,
    HoldingResponse,
    HoldingUpdate,
    HoldingWithMetrics,
    PortfolioSummary,
    PortfolioSummaryRequest,
    PortfolioSummaryResponse,
    TransactionCreate,
    TransactionResponse,
)
from schemas.quote import (
    MarketSummaryResponse,
    QuoteInput,
    QuoteResolutionResponse,
    QuoteResponse,
    RefreshResponse,
    StockHistoryResponse,
)

__all__ = [
    "AllocationSlice",
    "AssetCreate",
    "AssetData",
    "AssetsSummary",
    "AssetWithMetrics",
    "FixedAsset",
    "FixedDeposit",
    "HoldingCreate",
    "HoldingCreatedResponse",
    "HoldingResponse",
    "HoldingUpdate",
    "HoldingWithMetrics",
    "MarketSummaryResponse",
    "MutualFund",
    "PortfolioSummary",
    "PortfolioSummaryRequest",
    "PortfolioSummaryResponse",
    "QuoteInput",
    "QuoteResolutionResponse",
    "QuoteResponse",
    "RefreshResponse",
    "SavingsAccount",
    "StockHistoryResponse",
    "TransactionCreate",
    "TransactionResponse",
    "TreasuryBond",
]
