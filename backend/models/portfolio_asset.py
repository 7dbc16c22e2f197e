"""PortfolioAsset model - non-tradable assets (property, deposits, funds, bonds)."""


from sqlalchemy import JSON, Column, DateTime, String, Text

from database import Base
from models.utils import generate_uuid, utcnow


class PortfolioAsset(Base):
    """A user-entered asset of one of the fixed asset variants.

    The ``type`` column carries the variant tag; variant-specific fields
    are stored in ``details`` and validated by ``schemas.asset``.
    """

    __tablename__ = "portfolio_assets"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    owner_id = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    notes = Column(Text, nullable=True)
    details = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
    )
