"""Portfolio valuation: per-lot metrics, totals and symbol aggregation.

Everything here is pure: holdings and quotes go in, derived pydantic
models come out. Nothing is read from or written to the database.
"""

import logging
from decimal import Decimal
from typing import Any, Iterable

from integrations.parsing_utils import ZERO, parse_decimal
from schemas.holding import HoldingWithMetrics, PortfolioSummary

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def gain_loss_percent(gain_loss: Decimal, invested: Decimal) -> Decimal:
    """Return gain/loss as a percentage of ``invested`` (0 when nothing is invested)."""
    if invested <= 0:
        return ZERO
    return gain_loss / invested * HUNDRED


def build_price_lookup(quotes: Iterable[Any]) -> dict[str, Decimal]:
    """Map symbol -> price from Quote objects, QuoteInput models or dicts.

    Later quotes for the same symbol replace earlier ones.
    """
    lookup: dict[str, Decimal] = {}
    for quote in quotes:
        if isinstance(quote, dict):
            symbol, price = quote.get("symbol"), quote.get("price")
        else:
            symbol, price = getattr(quote, "symbol", None), getattr(quote, "price", None)
        if not symbol:
            continue
        lookup[str(symbol).upper()] = parse_decimal(price)
    return lookup


def value_holding(holding: Any, price_lookup: dict[str, Decimal]) -> HoldingWithMetrics:
    """Compute metrics for one lot.

    The current price falls back to the purchase price when no usable
    (positive) quote exists, so a missing quote never shows as a loss.
    """
    quantity = parse_decimal(holding.quantity)
    purchase_price = parse_decimal(holding.purchase_price)

    quoted = price_lookup.get(str(holding.symbol).upper())
    current_price = quoted if quoted is not None and quoted > 0 else purchase_price

    invested = quantity * purchase_price
    current_value = quantity * current_price
    gain_loss = current_value - invested

    return HoldingWithMetrics(
        id=getattr(holding, "id", None),
        owner_id=getattr(holding, "owner_id", None),
        symbol=holding.symbol,
        company_name=getattr(holding, "company_name", None) or "",
        quantity=quantity,
        purchase_price=purchase_price,
        purchase_date=getattr(holding, "purchase_date", None),
        notes=getattr(holding, "notes", None),
        created_at=getattr(holding, "created_at", None),
        updated_at=getattr(holding, "updated_at", None),
        current_price=current_price,
        current_value=current_value,
        invested=invested,
        gain_loss=gain_loss,
        gain_loss_percent=gain_loss_percent(gain_loss, invested),
    )


def compute_summary(holdings: Iterable[Any], quotes: Iterable[Any]) -> PortfolioSummary:
    """Value a set of holdings against current quotes.

    Args:
        holdings: Lots exposing ``symbol``, ``quantity`` and
            ``purchase_price`` (ORM rows or schemas).
        quotes: Objects or dicts exposing ``symbol`` and ``price``.

    Returns:
        PortfolioSummary whose holdings keep the input order.
    """
    lookup = build_price_lookup(quotes)
    valued = [value_holding(h, lookup) for h in holdings]

    total_invested = sum((h.invested for h in valued), ZERO)
    current_value = sum((h.current_value for h in valued), ZERO)
    total_gain_loss = current_value - total_invested

    return PortfolioSummary(
        total_invested=total_invested,
        current_value=current_value,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percent=gain_loss_percent(total_gain_loss, total_invested),
        holdings=valued,
    )


def aggregate_by_symbol(holdings: Iterable[HoldingWithMetrics]) -> list[HoldingWithMetrics]:
    """Merge lots of the same symbol into one position.

    Quantities, invested, current value and gain/loss are summed; the
    purchase price becomes the quantity-weighted average cost. The first
    lot seen for a symbol supplies id, name, notes and dates, and merged
    positions appear in order of first appearance.
    """
    merged: dict[str, HoldingWithMetrics] = {}
    for holding in holdings:
        existing = merged.get(holding.symbol)
        if existing is None:
            merged[holding.symbol] = holding.model_copy()
            continue

        quantity = existing.quantity + holding.quantity
        invested = existing.invested + holding.invested
        gain_loss = existing.gain_loss + holding.gain_loss
        merged[holding.symbol] = existing.model_copy(
            update={
                "quantity": quantity,
                "purchase_price": invested / quantity if quantity else ZERO,
                "invested": invested,
                "current_value": existing.current_value + holding.current_value,
                "gain_loss": gain_loss,
                "gain_loss_percent": gain_loss_percent(gain_loss, invested),
            }
        )
    return list(merged.values())


def rank_performers(
    holdings: list[HoldingWithMetrics], limit: int = 5
) -> tuple[list[HoldingWithMetrics], list[HoldingWithMetrics]]:
    """Return (top, worst) performers by gain/loss percent.

    Top is best-first; worst is worst-first. With fewer than ``2 * limit``
    holdings the two lists overlap.
    """
    ranked = sorted(holdings, key=lambda h: h.gain_loss_percent, reverse=True)
    top = ranked[:limit]
    worst = list(reversed(ranked[-limit:])) if limit > 0 else []
    return top, worst
