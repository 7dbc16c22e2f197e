"""Normalization of raw exchange trade-summary records into Quotes.

The CSE payload schema drifts between deployments, so every logical field
is resolved through an ordered alias table instead of ad hoc lookups.
Adding support for a new upstream shape means adding a key path here.
"""

import logging
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from integrations.market_data_protocol import Quote
from integrations.parsing_utils import ZERO, parse_decimal, parse_int, parse_trade_date
from utils.ticker import split_symbol

logger = logging.getLogger(__name__)

# Logical field -> ordered upstream key paths (dotted paths descend into
# nested objects). The first present value wins.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "symbol": ("symbol", "securityCode", "ticker"),
    "company_name": ("name", "companyName", "securityName", "symbolName"),
    "price": (
        "price",
        "closingPrice",
        "currentPrice.price",
        "currentPrice.value",
        "currentPrice",
        "lastPrice",
        "lastTradedPrice",
    ),
    "open": ("open", "openPrice", "todayOpen"),
    "high": ("high", "highPrice", "dayHigh"),
    "low": ("low", "lowPrice", "dayLow"),
    "previous_close": ("previousClose", "prevClose", "previousClosingPrice", "closePrev"),
    "change": ("change", "priceChange", "netChange"),
    "change_percent": ("percentageChange", "changePercentage", "changePercent", "perChange"),
    "volume": ("shareVolume", "sharevolume", "volume", "tradeVolume", "tradevolume", "qty"),
    "date": ("date", "tradeDate"),
}


def _lookup_path(record: Mapping, path: str) -> Any:
    """Follow a dotted key path through nested mappings; None if any step is missing."""
    current: Any = record
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return None
        current = current[key]
    return current


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    # A nested object is a container, not a value for this alias
    if isinstance(value, Mapping):
        return False
    return True


def resolve_field(record: Any, field_name: str) -> Any:
    """Return the first present value for ``field_name`` in ``record``.

    Args:
        record: Raw upstream record. Non-mapping input is treated as empty.
        field_name: Key of :data:`FIELD_ALIASES`.

    Returns:
        The raw value, or None if no alias is present.
    """
    if not isinstance(record, Mapping):
        return None
    for path in FIELD_ALIASES[field_name]:
        value = _lookup_path(record, path)
        if _is_present(value):
            return value
    return None


def extract_raw_symbol(record: Any) -> str:
    """Return the upstream instrument identifier of a record, or ""."""
    value = resolve_field(record, "symbol")
    return str(value).strip() if value is not None else ""


def _derive(compute) -> Decimal:
    """Evaluate a derived field, falling back to zero on decimal overflow."""
    try:
        return compute()
    except ArithmeticError:
        logger.debug("Derived quote field out of range; using 0")
        return ZERO


def normalize_quote(
    record: Any,
    symbol: Optional[str] = None,
    as_of: Optional[date] = None,
) -> Quote:
    """Build a fully-populated Quote from one raw upstream record.

    Every numeric field defaults to zero when absent or unparseable.
    ``change`` is derived from price and previous close when absent, and
    ``change_percent`` from change and previous close.

    Args:
        record: Raw upstream record of unknown shape.
        symbol: Tracked code to stamp on the quote. Defaults to the
            uppercase prefix of the record's own identifier.
        as_of: Fallback trade date when the record carries none
            (defaults to today).

    Returns:
        The normalized Quote. Never raises.
    """
    raw_symbol = extract_raw_symbol(record)
    code = symbol if symbol is not None else split_symbol(raw_symbol)

    price = parse_decimal(resolve_field(record, "price"))
    previous_close = parse_decimal(resolve_field(record, "previous_close"))

    raw_change = resolve_field(record, "change")
    if raw_change is None:
        change = _derive(lambda: price - previous_close)
    else:
        change = parse_decimal(raw_change)

    raw_change_percent = resolve_field(record, "change_percent")
    if raw_change_percent is not None:
        change_percent = parse_decimal(raw_change_percent)
    elif previous_close != ZERO:
        change_percent = _derive(lambda: change / previous_close * Decimal("100"))
    else:
        change_percent = ZERO

    price_date = parse_trade_date(resolve_field(record, "date")) or as_of or date.today()

    name = resolve_field(record, "company_name")

    return Quote(
        symbol=code,
        price_date=price_date,
        price=price,
        open=parse_decimal(resolve_field(record, "open")),
        high=parse_decimal(resolve_field(record, "high")),
        low=parse_decimal(resolve_field(record, "low")),
        previous_close=previous_close,
        change=change,
        change_percent=change_percent,
        volume=parse_int(resolve_field(record, "volume")),
        company_name=str(name).strip() if name is not None else code,
        raw_symbol=raw_symbol,
    )
