"""Market data API endpoints."""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import get_db
from schemas import (
    MarketSummaryResponse,
    QuoteResolutionResponse,
    QuoteResponse,
    RefreshResponse,
    StockHistoryResponse,
)
from services.market_data_service import MarketDataService, calculate_market_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/market-data", tags=["market-data"])


def get_market_data_service() -> MarketDataService:
    """Provide the MarketDataService (overridden in tests via dependency_overrides)."""
    return MarketDataService()


@router.get("/quotes/latest", response_model=QuoteResolutionResponse)
def get_latest_quotes(
    db: Optional[Session] = Depends(get_db),
    service: MarketDataService = Depends(get_market_data_service),
):
    """Latest quotes from the persisted snapshot, else a live fetch.

    ``source`` is ``synthetic`` with no quotes when neither is available;
    clients substitute their own placeholder data in that case.
    """
    resolution = service.resolve_latest_quotes(db)
    return QuoteResolutionResponse(
        source=resolution.source.value,
        quotes=[QuoteResponse.model_validate(q) for q in resolution.quotes],
    )


@router.get("/summary", response_model=MarketSummaryResponse)
def get_market_summary(
    db: Optional[Session] = Depends(get_db),
    service: MarketDataService = Depends(get_market_data_service),
):
    """Volume and advancers/decliners over the latest quotes."""
    resolution = service.resolve_latest_quotes(db)
    summary = calculate_market_summary(resolution.quotes)
    return MarketSummaryResponse(
        source=resolution.source.value,
        total_volume=summary.total_volume,
        total_instruments=summary.total_instruments,
        advancers=summary.advancers,
        decliners=summary.decliners,
        unchanged=summary.unchanged,
    )


@router.get("/history/{symbol}", response_model=StockHistoryResponse)
def get_stock_history(
    symbol: str,
    days: int = Query(default=30, ge=1, le=3650, description="Lookback window in days"),
    db: Optional[Session] = Depends(get_db),
    service: MarketDataService = Depends(get_market_data_service),
):
    """Persisted daily quotes for one symbol, oldest first."""
    quotes = service.get_stock_history(db, symbol, days_back=days)
    return StockHistoryResponse(
        symbol=symbol.upper(),
        days=days,
        quotes=[QuoteResponse.model_validate(q) for q in quotes],
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh_quotes(
    db: Optional[Session] = Depends(get_db),
    service: MarketDataService = Depends(get_market_data_service),
):
    """Fetch a live snapshot and save it under today's date."""
    today = date.today()
    quotes = service.fetch_live_quotes(as_of=today)
    if not quotes:
        raise HTTPException(status_code=503, detail="Market data is currently unavailable")

    saved = service.save_snapshot(db, quotes, as_of=today)
    return RefreshResponse(fetched=len(quotes), saved=saved, price_date=today)
