"""Market data service: resolves latest quotes and persists daily snapshots."""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import require_session
from integrations.market_data_protocol import Quote, QuoteProvider
from models import StockPrice
from models.utils import utcnow

logger = logging.getLogger(__name__)


class QuoteSource(str, Enum):
    """Which source satisfied a latest-quotes request."""

    PERSISTED = "persisted"
    LIVE = "live"
    SYNTHETIC = "synthetic"


@dataclass
class QuoteResolution:
    """Quotes together with the source tag that produced them.

    ``SYNTHETIC`` always comes with an empty quote list; callers that want
    placeholder data substitute it themselves.
    """

    source: QuoteSource
    quotes: list[Quote] = field(default_factory=list)


@dataclass
class MarketSummary:
    """Aggregate statistics over one set of quotes."""

    total_volume: int = 0
    total_instruments: int = 0
    advancers: int = 0
    decliners: int = 0
    unchanged: int = 0


def stock_price_to_quote(row: StockPrice) -> Quote:
    """Convert a persisted StockPrice row back into a Quote."""
    return Quote(
        symbol=row.symbol,
        price_date=row.price_date,
        price=Decimal(row.price or 0),
        open=Decimal(row.open or 0),
        high=Decimal(row.high or 0),
        low=Decimal(row.low or 0),
        previous_close=Decimal(row.previous_close or 0),
        change=Decimal(row.change or 0),
        change_percent=Decimal(row.change_percent or 0),
        volume=int(row.volume or 0),
        company_name=row.company_name or row.symbol,
        raw_symbol=row.raw_symbol or "",
    )


def calculate_market_summary(quotes: Iterable[Quote]) -> MarketSummary:
    """Summarise volume and breadth (advancers/decliners) for a quote set."""
    summary = MarketSummary()
    for quote in quotes:
        summary.total_instruments += 1
        summary.total_volume += quote.volume
        if quote.change > 0:
            summary.advancers += 1
        elif quote.change < 0:
            summary.decliners += 1
        else:
            summary.unchanged += 1
    return summary


class MarketDataService:
    """Orchestrates quote retrieval across the persisted store and live provider.

    Resolution order is strict: persisted snapshot, then live bulk fetch,
    then an empty synthetic result. Exactly one source wins per call.
    """

    def __init__(self, provider: Optional[QuoteProvider] = None):
        """Initialize with an optional provider for dependency injection.

        Args:
            provider: Bulk quote provider. If None, a CSEClient is created
                     on first use.
        """
        self._provider = provider

    @property
    def provider(self) -> QuoteProvider:
        """Get the live quote provider, creating if not provided."""
        if self._provider is None:
            from integrations.cse_client import CSEClient

            self._provider = CSEClient()
        return self._provider

    def get_persisted_latest(self, db: Optional[Session]) -> list[Quote]:
        """Load every persisted quote for the most recent snapshot date.

        Read errors are logged and treated as "nothing persisted".

        Args:
            db: Database session, or None when the store is not configured.

        Returns:
            Quotes ordered by symbol, or an empty list.
        """
        if db is None:
            return []

        try:
            latest_date = db.query(func.max(StockPrice.price_date)).scalar()
            if latest_date is None:
                return []
            rows = (
                db.query(StockPrice)
                .filter(StockPrice.price_date == latest_date)
                .order_by(StockPrice.symbol)
                .all()
            )
        except SQLAlchemyError:
            logger.warning("Failed to read persisted stock prices", exc_info=True)
            return []

        return [stock_price_to_quote(row) for row in rows]

    def fetch_live_quotes(self, as_of: Optional[date] = None) -> list[Quote]:
        """Fetch a live snapshot from the provider (empty when unavailable)."""
        return self.provider.fetch_all_quotes(as_of=as_of)

    def resolve_latest_quotes(self, db: Optional[Session]) -> QuoteResolution:
        """Resolve the latest quotes using the persisted → live → synthetic fallback.

        Args:
            db: Database session, or None when the store is not configured.

        Returns:
            QuoteResolution tagged with the source that produced the quotes.
        """
        persisted = self.get_persisted_latest(db)
        if persisted:
            logger.debug("Resolved %d quotes from persisted store", len(persisted))
            return QuoteResolution(source=QuoteSource.PERSISTED, quotes=persisted)

        live = self.fetch_live_quotes()
        if live:
            logger.info("Resolved %d quotes from live provider", len(live))
            return QuoteResolution(source=QuoteSource.LIVE, quotes=live)

        logger.warning("No quotes available from persisted store or live provider")
        return QuoteResolution(source=QuoteSource.SYNTHETIC, quotes=[])

    def save_snapshot(
        self,
        db: Optional[Session],
        quotes: Iterable[Quote],
        as_of: Optional[date] = None,
    ) -> int:
        """Upsert quotes into ``stock_prices`` keyed by (symbol, price_date).

        Args:
            db: Database session. Raises StoreNotConfiguredError when None.
            quotes: Quotes to persist.
            as_of: Overrides each quote's ``price_date`` when given, so a
                  collection run is stored under a single snapshot date.

        Returns:
            Number of rows written (inserted or updated).
        """
        db = require_session(db, "save price snapshot")

        written = 0
        try:
            for quote in quotes:
                price_date = as_of or quote.price_date
                row = (
                    db.query(StockPrice)
                    .filter(
                        StockPrice.symbol == quote.symbol,
                        StockPrice.price_date == price_date,
                    )
                    .first()
                )
                if row is None:
                    row = StockPrice(symbol=quote.symbol, price_date=price_date)
                    db.add(row)
                else:
                    row.updated_at = utcnow()

                row.raw_symbol = quote.raw_symbol or None
                row.company_name = quote.company_name or quote.symbol
                row.price = quote.price
                row.open = quote.open
                row.high = quote.high
                row.low = quote.low
                row.previous_close = quote.previous_close
                row.change = quote.change
                row.change_percent = quote.change_percent
                row.volume = quote.volume
                # Flush per row so a duplicate symbol in one batch updates
                # the pending row instead of inserting twice
                db.flush()
                written += 1
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info("Saved %d stock prices", written)
        return written

    def get_stock_history(
        self,
        db: Optional[Session],
        symbol: str,
        days_back: int = 30,
    ) -> list[Quote]:
        """Return persisted quotes for one symbol since ``days_back`` days ago.

        Args:
            db: Database session, or None when the store is not configured.
            symbol: Instrument code (case-insensitive).
            days_back: Size of the lookback window in days.

        Returns:
            Quotes ascending by date; empty without a store or on read errors.
        """
        if db is None:
            return []

        cutoff = date.today() - timedelta(days=days_back)
        try:
            rows = (
                db.query(StockPrice)
                .filter(
                    StockPrice.symbol == symbol.upper(),
                    StockPrice.price_date >= cutoff,
                )
                .order_by(StockPrice.price_date)
                .all()
            )
        except SQLAlchemyError:
            logger.warning("Failed to read price history for %s", symbol, exc_info=True)
            return []

        return [stock_price_to_quote(row) for row in rows]
