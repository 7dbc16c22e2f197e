"""Shared API helpers for route handlers."""

from typing import Optional, TypeVar

from fastapi import HTTPException
from sqlalchemy.orm import Session

from database import Base

T = TypeVar("T", bound=Base)


def get_or_404(
    db: Optional[Session],
    model: type[T],
    entity_id: str,
    owner_id: str,
    detail: str = "Not found",
) -> T:
    """Fetch a user's entity by primary key or raise 404.

    Args:
        db: Database session, or None without a store (always 404).
        model: SQLAlchemy model class with ``id`` and ``owner_id`` columns.
        entity_id: Primary key value.
        owner_id: Owner the entity must belong to.
        detail: Error message for the 404 response.

    Returns:
        The entity instance.

    Raises:
        HTTPException: 404 if the entity doesn't exist for this owner.
    """
    entity = None
    if db is not None:
        entity = (
            db.query(model)
            .filter(model.id == entity_id, model.owner_id == owner_id)
            .first()
        )
    if not entity:
        raise HTTPException(status_code=404, detail=detail)
    return entity
