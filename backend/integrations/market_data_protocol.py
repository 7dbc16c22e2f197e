"""Market data provider protocol definitions.

Defines the canonical quote record produced by normalization and the
interface the market data service uses to pull a live bulk snapshot.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Protocol


@dataclass(frozen=True)
class Quote:
    """One normalized price snapshot for an instrument on a trading date.

    Every numeric field is populated (absent upstream values become zero),
    so downstream arithmetic never has to handle None.
    """

    symbol: str
    price_date: date
    price: Decimal = Decimal("0")
    open: Decimal = Decimal("0")
    high: Decimal = Decimal("0")
    low: Decimal = Decimal("0")
    previous_close: Decimal = Decimal("0")
    change: Decimal = Decimal("0")
    change_percent: Decimal = Decimal("0")
    volume: int = 0
    company_name: str = ""
    raw_symbol: str = field(default="", compare=False)


class QuoteProvider(Protocol):
    """Protocol for bulk quote providers.

    Implementations make a single outbound call and return every tracked
    instrument they could parse.
    """

    @property
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'cse')."""
        ...

    def fetch_all_quotes(self, as_of: date | None = None) -> list[Quote]:
        """Fetch the latest quotes for all tracked instruments.

        Args:
            as_of: Date to stamp on records that carry no trade date.

        Returns:
            List of normalized quotes. An empty list means the provider was
            unavailable, not that no instruments exist.
        """
        ...
