"""Portfolio API endpoints: holdings, transactions and valuation."""

import logging
from typing import Iterable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from api.helpers import get_or_404
from api.market_data import get_market_data_service
from database import get_db
from models import Holding
from schemas import (
    HoldingCreate,
    HoldingCreatedResponse,
    HoldingResponse,
    HoldingUpdate,
    PortfolioSummaryRequest,
    PortfolioSummaryResponse,
    TransactionCreate,
    TransactionResponse,
)
from services.market_data_service import MarketDataService
from services.portfolio_service import PortfolioService
from services.portfolio_valuation_service import aggregate_by_symbol, rank_performers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/portfolios/{owner_id}", tags=["portfolio"])


@router.get("/holdings", response_model=list[HoldingResponse])
def list_holdings(owner_id: str, db: Optional[Session] = Depends(get_db)):
    """List a user's purchase lots, newest first."""
    return PortfolioService.get_user_holdings(db, owner_id)


@router.post("/holdings", response_model=HoldingCreatedResponse, status_code=201)
def add_holding(owner_id: str, data: HoldingCreate, db: Optional[Session] = Depends(get_db)):
    """Record a purchase lot and its buy transaction."""
    holding_id = PortfolioService.add_holding(db, owner_id, data)
    return HoldingCreatedResponse(id=holding_id)


@router.get("/holdings/{holding_id}", response_model=HoldingResponse)
def get_holding(owner_id: str, holding_id: str, db: Optional[Session] = Depends(get_db)):
    """Get one purchase lot."""
    return get_or_404(db, Holding, holding_id, owner_id, "Holding not found")


@router.patch("/holdings/{holding_id}", response_model=HoldingResponse)
def update_holding(
    owner_id: str,
    holding_id: str,
    data: HoldingUpdate,
    db: Optional[Session] = Depends(get_db),
):
    """Edit a lot's quantity, price, date, name or notes."""
    try:
        return PortfolioService.update_holding(db, owner_id, holding_id, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/holdings/{holding_id}", status_code=204)
def delete_holding(owner_id: str, holding_id: str, db: Optional[Session] = Depends(get_db)):
    """Delete a lot. Its buy transaction is kept."""
    try:
        PortfolioService.delete_holding(db, owner_id, holding_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.get("/transactions", response_model=list[TransactionResponse])
def list_transactions(
    owner_id: str,
    symbol: Optional[str] = Query(default=None, description="Filter by instrument code"),
    db: Optional[Session] = Depends(get_db),
):
    """List a user's transactions, newest first."""
    return PortfolioService.get_user_transactions(db, owner_id, symbol=symbol)


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def add_transaction(
    owner_id: str, data: TransactionCreate, db: Optional[Session] = Depends(get_db)
):
    """Record a standalone buy or sell."""
    return PortfolioService.add_transaction(db, owner_id, data)


def _summary_response(
    db: Optional[Session],
    owner_id: str,
    quotes: Iterable,
    aggregate: bool,
    quote_source: Optional[str],
) -> PortfolioSummaryResponse:
    summary = PortfolioService.calculate_portfolio_summary(db, owner_id, quotes)
    holdings = aggregate_by_symbol(summary.holdings) if aggregate else summary.holdings
    top, worst = rank_performers(holdings)
    return PortfolioSummaryResponse(
        total_invested=summary.total_invested,
        current_value=summary.current_value,
        total_gain_loss=summary.total_gain_loss,
        total_gain_loss_percent=summary.total_gain_loss_percent,
        holdings=holdings,
        quote_source=quote_source,
        aggregated=aggregate,
        top_performers=top,
        worst_performers=worst,
    )


@router.get("/summary", response_model=PortfolioSummaryResponse)
def get_portfolio_summary(
    owner_id: str,
    aggregate: bool = Query(default=False, description="Merge lots of the same symbol"),
    db: Optional[Session] = Depends(get_db),
    service: MarketDataService = Depends(get_market_data_service),
):
    """Value a user's holdings against the latest resolved quotes."""
    resolution = service.resolve_latest_quotes(db)
    return _summary_response(
        db, owner_id, resolution.quotes, aggregate, resolution.source.value
    )


@router.post("/summary", response_model=PortfolioSummaryResponse)
def value_portfolio(
    owner_id: str,
    request: PortfolioSummaryRequest,
    aggregate: bool = Query(default=False, description="Merge lots of the same symbol"),
    db: Optional[Session] = Depends(get_db),
):
    """Value a user's holdings against caller-supplied quotes."""
    return _summary_response(db, owner_id, request.quotes, aggregate, None)
