"""Service for a user's non-tradable assets (property, deposits, funds, bonds)."""

import logging
from typing import Optional

from pydantic import TypeAdapter
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import require_session
from models import PortfolioAsset
from models.utils import utcnow
from schemas.asset import AssetData, AssetsSummary, AssetWithMetrics
from services.asset_metrics_service import calculate_assets_summary, compute_asset_metrics

logger = logging.getLogger(__name__)

_asset_adapter = TypeAdapter(AssetData)

# Columns stored outside the JSON details payload
_COMMON_FIELDS = {"type", "name", "notes"}


def asset_to_details(asset: AssetData) -> dict:
    """Serialize the variant-specific fields of an asset to JSON-safe values."""
    return asset.model_dump(mode="json", exclude=_COMMON_FIELDS)


def row_to_asset(row: PortfolioAsset) -> AssetData:
    """Rebuild the typed asset variant from a stored row."""
    return _asset_adapter.validate_python(
        {"type": row.type, "name": row.name, "notes": row.notes, **(row.details or {})}
    )


def row_to_metrics(row: PortfolioAsset) -> AssetWithMetrics:
    """Value a stored asset, carrying its id and timestamps."""
    metrics = compute_asset_metrics(row_to_asset(row), asset_id=row.id)
    return metrics.model_copy(
        update={"created_at": row.created_at, "updated_at": row.updated_at}
    )


class AssetService:
    """CRUD for portfolio assets.

    Mutations require a configured store; reads degrade to empty results.
    """

    @staticmethod
    def add_asset(db: Optional[Session], owner_id: str, asset: AssetData) -> str:
        """Store a new asset and return its id."""
        db = require_session(db, "add asset")

        row = PortfolioAsset(
            owner_id=owner_id,
            type=asset.type,
            name=asset.name,
            notes=asset.notes,
            details=asset_to_details(asset),
        )
        try:
            db.add(row)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info("Asset added: %s %r for %s (id=%s)", asset.type, asset.name, owner_id, row.id)
        return row.id

    @staticmethod
    def _get_owned_asset(db: Session, owner_id: str, asset_id: str) -> PortfolioAsset:
        row = (
            db.query(PortfolioAsset)
            .filter(PortfolioAsset.id == asset_id, PortfolioAsset.owner_id == owner_id)
            .first()
        )
        if row is None:
            raise ValueError(f"Asset {asset_id} not found")
        return row

    @staticmethod
    def update_asset(
        db: Optional[Session], owner_id: str, asset_id: str, asset: AssetData
    ) -> PortfolioAsset:
        """Replace an asset's payload. The variant type cannot change.

        Raises:
            ValueError: If the asset does not exist or the type differs.
        """
        db = require_session(db, "update asset")
        row = AssetService._get_owned_asset(db, owner_id, asset_id)
        if row.type != asset.type:
            raise ValueError(
                f"Cannot change asset type from {row.type} to {asset.type}"
            )

        row.name = asset.name
        row.notes = asset.notes
        row.details = asset_to_details(asset)
        row.updated_at = utcnow()
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(row)

        logger.info("Asset updated: %r (id=%s)", asset.name, asset_id)
        return row

    @staticmethod
    def delete_asset(db: Optional[Session], owner_id: str, asset_id: str) -> None:
        """Delete an asset.

        Raises:
            ValueError: If the asset does not exist for this owner.
        """
        db = require_session(db, "delete asset")
        row = AssetService._get_owned_asset(db, owner_id, asset_id)
        try:
            db.delete(row)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info("Asset deleted: id=%s", asset_id)

    @staticmethod
    def get_user_assets(db: Optional[Session], owner_id: str) -> list[PortfolioAsset]:
        """Return a user's assets, newest first (empty without a store)."""
        if db is None:
            return []
        try:
            return (
                db.query(PortfolioAsset)
                .filter(PortfolioAsset.owner_id == owner_id)
                .order_by(PortfolioAsset.created_at.desc())
                .all()
            )
        except SQLAlchemyError:
            logger.warning("Failed to read assets for %s", owner_id, exc_info=True)
            return []

    @staticmethod
    def get_asset(db: Optional[Session], owner_id: str, asset_id: str) -> Optional[PortfolioAsset]:
        """Return one asset, or None if missing or without a store."""
        if db is None:
            return None
        try:
            return (
                db.query(PortfolioAsset)
                .filter(PortfolioAsset.id == asset_id, PortfolioAsset.owner_id == owner_id)
                .first()
            )
        except SQLAlchemyError:
            logger.warning("Failed to read asset %s", asset_id, exc_info=True)
            return None

    @staticmethod
    def get_assets_with_metrics(db: Optional[Session], owner_id: str) -> list[AssetWithMetrics]:
        """Return a user's assets valued with their current-value rule."""
        return [row_to_metrics(row) for row in AssetService.get_user_assets(db, owner_id)]

    @staticmethod
    def calculate_assets_summary(db: Optional[Session], owner_id: str) -> AssetsSummary:
        """Totals and allocation over a user's assets."""
        return calculate_assets_summary(AssetService.get_assets_with_metrics(db, owner_id))
