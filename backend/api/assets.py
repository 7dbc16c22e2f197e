"""Portfolio asset API endpoints (property, deposits, savings, funds, bonds)."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from api.helpers import get_or_404
from database import get_db
from models import PortfolioAsset
from schemas import AssetCreate, AssetsSummary, AssetWithMetrics
from services.asset_service import AssetService, row_to_metrics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/portfolios/{owner_id}/assets", tags=["assets"])


@router.get("", response_model=list[AssetWithMetrics])
def list_assets(owner_id: str, db: Optional[Session] = Depends(get_db)):
    """List a user's assets with their current values."""
    return AssetService.get_assets_with_metrics(db, owner_id)


@router.post("", response_model=AssetWithMetrics, status_code=201)
def add_asset(owner_id: str, data: AssetCreate, db: Optional[Session] = Depends(get_db)):
    """Store a new asset."""
    asset_id = AssetService.add_asset(db, owner_id, data.asset)
    return row_to_metrics(AssetService.get_asset(db, owner_id, asset_id))


@router.get("/summary", response_model=AssetsSummary)
def get_assets_summary(owner_id: str, db: Optional[Session] = Depends(get_db)):
    """Total value and allocation by type and category."""
    return AssetService.calculate_assets_summary(db, owner_id)


@router.get("/{asset_id}", response_model=AssetWithMetrics)
def get_asset(owner_id: str, asset_id: str, db: Optional[Session] = Depends(get_db)):
    """Get one asset with its current value."""
    return row_to_metrics(get_or_404(db, PortfolioAsset, asset_id, owner_id, "Asset not found"))


@router.put("/{asset_id}", response_model=AssetWithMetrics)
def update_asset(
    owner_id: str,
    asset_id: str,
    data: AssetCreate,
    db: Optional[Session] = Depends(get_db),
):
    """Replace an asset's details. The asset type cannot change."""
    if db is not None:
        get_or_404(db, PortfolioAsset, asset_id, owner_id, "Asset not found")
    try:
        row = AssetService.update_asset(db, owner_id, asset_id, data.asset)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return row_to_metrics(row)


@router.delete("/{asset_id}", status_code=204)
def delete_asset(owner_id: str, asset_id: str, db: Optional[Session] = Depends(get_db)):
    """Delete an asset."""
    try:
        AssetService.delete_asset(db, owner_id, asset_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
