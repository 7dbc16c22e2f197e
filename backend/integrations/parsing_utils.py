"""Shared value parsing utilities for upstream payloads.

Centralises the lenient numeric and date coercion the quote normalizer
needs: every function returns a fallback instead of raising.
"""

import math
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")

# Epoch values above this are treated as milliseconds (year 5138 in seconds)
_EPOCH_MS_THRESHOLD = 100_000_000_000


def parse_decimal(value, default: Decimal = ZERO) -> Decimal:
    """Parse a number-like value to a finite Decimal.

    Accepts ints, floats, Decimals and numeric strings (thousands
    separators and surrounding whitespace are tolerated). Booleans,
    non-numeric strings, NaN, infinities and values outside the current
    decimal context's exponent range return ``default``.

    Args:
        value: Any value from an upstream record.
        default: Value returned when parsing fails.

    Returns:
        A finite Decimal.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return default
        result = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return default
        try:
            result = Decimal(cleaned)
        except InvalidOperation:
            return default
    else:
        return default

    if not result.is_finite():
        return default
    try:
        # Round into the active context; traps Overflow past Emax
        return +result
    except ArithmeticError:
        return default


def parse_int(value, default: int = 0) -> int:
    """Parse a count-like value (e.g. traded volume) to an int.

    Fractional values are truncated. Anything unparseable returns ``default``.
    """
    parsed = parse_decimal(value, default=None)
    if parsed is None:
        return default
    return int(parsed)


def parse_unix_timestamp(value) -> datetime | None:
    """Parse a Unix epoch timestamp (seconds or milliseconds) to a UTC datetime.

    Args:
        value: An int, float, string-encoded number, or None.

    Returns:
        A timezone-aware UTC datetime, or None if the value cannot be parsed.
    """
    parsed = parse_decimal(value, default=None)
    if parsed is None:
        return None
    seconds = float(parsed)
    if abs(seconds) >= _EPOCH_MS_THRESHOLD:
        seconds /= 1000
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def parse_trade_date(value) -> date | None:
    """Parse a trade date from an upstream record.

    Handles:
    - date / datetime objects
    - ISO strings ("2024-06-28", "2024-06-28T10:30:00Z")
    - Unix epoch seconds or milliseconds (CSE ``lastTradedTime``)

    Returns:
        The date, or None if the value cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float, Decimal)):
        dt = parse_unix_timestamp(value)
        return dt.date() if dt else None

    value_str = str(value).strip()
    if not value_str:
        return None

    if value_str.endswith("Z"):
        value_str = value_str[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value_str).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(value_str[:10])
    except ValueError:
        pass

    dt = parse_unix_timestamp(value_str)
    return dt.date() if dt else None
