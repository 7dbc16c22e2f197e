"""Service for a user's stock holdings and transaction ledger."""

import logging
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import require_session
from models import Holding, Transaction
from models.utils import utcnow
from schemas import HoldingCreate, HoldingUpdate, PortfolioSummary, TransactionCreate
from services.portfolio_valuation_service import compute_summary

logger = logging.getLogger(__name__)


class PortfolioService:
    """CRUD for holdings and transactions, plus per-user valuation.

    Mutations require a configured store and raise
    ``StoreNotConfiguredError`` without one. Reads return empty results
    instead, and absorb database read errors.
    """

    @staticmethod
    def add_holding(db: Optional[Session], owner_id: str, data: HoldingCreate) -> str:
        """Record a purchase lot together with its buy transaction.

        Both rows are committed in one transaction: if either insert fails,
        neither is kept.

        Args:
            db: Database session
            owner_id: Owner of the holding
            data: Validated lot details

        Returns:
            The new holding id
        """
        db = require_session(db, "add holding")

        holding = Holding(
            owner_id=owner_id,
            symbol=data.symbol,
            company_name=data.company_name,
            quantity=data.quantity,
            purchase_price=data.purchase_price,
            purchase_date=data.purchase_date,
            notes=data.notes,
        )
        transaction = Transaction(
            owner_id=owner_id,
            symbol=data.symbol,
            company_name=data.company_name,
            type="buy",
            quantity=data.quantity,
            price=data.purchase_price,
            total_amount=data.quantity * data.purchase_price,
            transaction_date=data.purchase_date,
            notes=data.notes,
        )

        try:
            db.add_all([holding, transaction])
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            "Holding added: %s x%s @ %s for %s (id=%s)",
            data.symbol, data.quantity, data.purchase_price, owner_id, holding.id,
        )
        return holding.id

    @staticmethod
    def _get_owned_holding(db: Session, owner_id: str, holding_id: str) -> Holding:
        holding = (
            db.query(Holding)
            .filter(Holding.id == holding_id, Holding.owner_id == owner_id)
            .first()
        )
        if holding is None:
            raise ValueError(f"Holding {holding_id} not found")
        return holding

    @staticmethod
    def update_holding(
        db: Optional[Session], owner_id: str, holding_id: str, data: HoldingUpdate
    ) -> Holding:
        """Apply the provided fields to a lot.

        The originating transaction is left untouched.

        Raises:
            ValueError: If the holding does not exist for this owner.
        """
        db = require_session(db, "update holding")
        holding = PortfolioService._get_owned_holding(db, owner_id, holding_id)

        for field_name, value in data.model_dump(exclude_unset=True).items():
            # Only notes may be cleared; other columns are NOT NULL
            if value is None and field_name != "notes":
                continue
            setattr(holding, field_name, value)
        holding.updated_at = utcnow()

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(holding)

        logger.info("Holding updated: %s (id=%s)", holding.symbol, holding_id)
        return holding

    @staticmethod
    def delete_holding(db: Optional[Session], owner_id: str, holding_id: str) -> None:
        """Delete a lot. Its buy transaction stays in the ledger.

        Raises:
            ValueError: If the holding does not exist for this owner.
        """
        db = require_session(db, "delete holding")
        holding = PortfolioService._get_owned_holding(db, owner_id, holding_id)
        symbol = holding.symbol

        try:
            db.delete(holding)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info("Holding deleted: %s (id=%s)", symbol, holding_id)

    @staticmethod
    def get_user_holdings(db: Optional[Session], owner_id: str) -> list[Holding]:
        """Return a user's lots, newest first (empty without a store)."""
        if db is None:
            return []
        try:
            return (
                db.query(Holding)
                .filter(Holding.owner_id == owner_id)
                .order_by(Holding.created_at.desc())
                .all()
            )
        except SQLAlchemyError:
            logger.warning("Failed to read holdings for %s", owner_id, exc_info=True)
            return []

    @staticmethod
    def get_holding(db: Optional[Session], owner_id: str, holding_id: str) -> Optional[Holding]:
        """Return one lot, or None if missing or without a store."""
        if db is None:
            return None
        try:
            return (
                db.query(Holding)
                .filter(Holding.id == holding_id, Holding.owner_id == owner_id)
                .first()
            )
        except SQLAlchemyError:
            logger.warning("Failed to read holding %s", holding_id, exc_info=True)
            return None

    @staticmethod
    def add_transaction(db: Optional[Session], owner_id: str, data: TransactionCreate) -> Transaction:
        """Append a standalone buy or sell record to the ledger."""
        db = require_session(db, "add transaction")

        transaction = Transaction(
            owner_id=owner_id,
            symbol=data.symbol,
            company_name=data.company_name,
            type=data.type,
            quantity=data.quantity,
            price=data.price,
            total_amount=data.quantity * data.price,
            transaction_date=data.transaction_date,
            notes=data.notes,
        )
        try:
            db.add(transaction)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(transaction)

        logger.info(
            "Transaction recorded: %s %s x%s for %s",
            data.type, data.symbol, data.quantity, owner_id,
        )
        return transaction

    @staticmethod
    def get_user_transactions(
        db: Optional[Session], owner_id: str, symbol: Optional[str] = None
    ) -> list[Transaction]:
        """Return a user's transactions, newest date first.

        Args:
            db: Database session, or None without a store
            owner_id: Owner of the ledger
            symbol: Optional instrument filter (case-insensitive)
        """
        if db is None:
            return []
        query = db.query(Transaction).filter(Transaction.owner_id == owner_id)
        if symbol:
            query = query.filter(Transaction.symbol == symbol.upper())
        try:
            return query.order_by(
                Transaction.transaction_date.desc(), Transaction.created_at.desc()
            ).all()
        except SQLAlchemyError:
            logger.warning("Failed to read transactions for %s", owner_id, exc_info=True)
            return []

    @staticmethod
    def get_symbol_transactions(
        db: Optional[Session], owner_id: str, symbol: str
    ) -> list[Transaction]:
        """Return a user's transactions for one instrument."""
        return PortfolioService.get_user_transactions(db, owner_id, symbol=symbol)

    @staticmethod
    def calculate_portfolio_summary(
        db: Optional[Session], owner_id: str, quotes: Iterable
    ) -> PortfolioSummary:
        """Load a user's holdings and value them against ``quotes``."""
        holdings = PortfolioService.get_user_holdings(db, owner_id)
        return compute_summary(holdings, quotes)
