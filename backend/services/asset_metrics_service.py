"""Current-value rules for non-tradable assets.

One evaluation function per asset variant, selected by the ``type`` tag.
Principal, balance and face value are user supplied; nothing here accrues
interest or projects coupons.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from integrations.parsing_utils import ZERO
from schemas.asset import (
    AllocationSlice,
    AssetData,
    AssetsSummary,
    AssetWithMetrics,
    FixedAsset,
    FixedDeposit,
    MutualFund,
    SavingsAccount,
    TreasuryBond,
)
from services.portfolio_valuation_service import gain_loss_percent

logger = logging.getLogger(__name__)


@dataclass
class AssetValuation:
    """Computed figures for one asset."""

    current_value: Decimal
    invested: Optional[Decimal] = None
    maturity_date: Optional[date] = None


def _value_fixed_asset(asset: FixedAsset) -> AssetValuation:
    current = asset.current_value if asset.current_value is not None else asset.purchase_price
    return AssetValuation(current_value=current, invested=asset.purchase_price)


def _value_fixed_deposit(asset: FixedDeposit) -> AssetValuation:
    # Current value stays at principal; accrued interest is not added
    return AssetValuation(
        current_value=asset.principal,
        invested=asset.principal,
        maturity_date=asset.maturity_date,
    )


def _value_savings(asset: SavingsAccount) -> AssetValuation:
    return AssetValuation(current_value=asset.balance)


def _value_mutual_fund(asset: MutualFund) -> AssetValuation:
    if asset.last_nav is not None:
        nav = asset.last_nav
    elif asset.buy_nav is not None:
        nav = asset.buy_nav
    else:
        nav = ZERO
    invested = asset.units * asset.buy_nav if asset.buy_nav is not None else None
    return AssetValuation(current_value=asset.units * nav, invested=invested)


def _value_treasury_bond(asset: TreasuryBond) -> AssetValuation:
    price = (
        asset.current_market_price
        if asset.current_market_price is not None
        else asset.face_value
    )
    cost = asset.purchase_price if asset.purchase_price is not None else asset.face_value
    return AssetValuation(
        current_value=asset.units * price,
        invested=asset.units * cost,
        maturity_date=asset.maturity_date,
    )


ASSET_VALUERS: dict[str, Callable[..., AssetValuation]] = {
    "fixed-asset": _value_fixed_asset,
    "fixed-deposit": _value_fixed_deposit,
    "savings": _value_savings,
    "mutual-fund": _value_mutual_fund,
    "treasury-bond": _value_treasury_bond,
}


def compute_asset_metrics(
    asset: AssetData,
    as_of: Optional[date] = None,
    asset_id: Optional[str] = None,
) -> AssetWithMetrics:
    """Compute the current value (and derived gain/loss) of one asset.

    Args:
        asset: Any asset variant.
        as_of: Reference date for maturity status (defaults to today).
        asset_id: Stored id to echo in the result.

    Returns:
        AssetWithMetrics. ``invested`` and gain/loss are None for variants
        without a cost basis (savings, funds without a buy NAV).
    """
    valuation = ASSET_VALUERS[asset.type](asset)

    gain_loss = None
    percent = None
    if valuation.invested is not None:
        gain_loss = valuation.current_value - valuation.invested
        percent = gain_loss_percent(gain_loss, valuation.invested)

    status = None
    days_to_maturity = None
    if valuation.maturity_date is not None:
        today = as_of or date.today()
        days_to_maturity = max(0, (valuation.maturity_date - today).days)
        status = "matured" if days_to_maturity == 0 else "active"
    elif asset.type in ("savings", "mutual-fund"):
        status = "active"

    return AssetWithMetrics(
        id=asset_id,
        asset=asset,
        current_value=valuation.current_value,
        invested=valuation.invested,
        gain_loss=gain_loss,
        gain_loss_percent=percent,
        status=status,
        days_to_maturity=days_to_maturity,
    )


def asset_category(asset: AssetData) -> str:
    """Allocation category: the fixed-asset category, else the asset type."""
    if isinstance(asset, FixedAsset):
        return asset.category
    return asset.type


def _allocation(values: dict[str, Decimal], total: Decimal) -> list[AllocationSlice]:
    return [
        AllocationSlice(
            key=key,
            value=value,
            percentage=value / total * Decimal("100") if total > 0 else ZERO,
        )
        for key, value in values.items()
    ]


def calculate_assets_summary(items: Iterable[AssetWithMetrics]) -> AssetsSummary:
    """Total current value, invested and allocation by type and category.

    Groups keep order of first appearance. Matured deposits and bonds are
    listed separately in ``matured_assets``.
    """
    items = list(items)
    total_current = sum((a.current_value for a in items), ZERO)
    total_invested = sum((a.invested for a in items if a.invested is not None), ZERO)
    total_gain_loss = total_current - total_invested

    by_type: dict[str, Decimal] = {}
    by_category: dict[str, Decimal] = {}
    for item in items:
        by_type[item.asset.type] = by_type.get(item.asset.type, ZERO) + item.current_value
        category = asset_category(item.asset)
        by_category[category] = by_category.get(category, ZERO) + item.current_value

    return AssetsSummary(
        total_current_value=total_current,
        total_invested=total_invested,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percent=gain_loss_percent(total_gain_loss, total_invested),
        items=items,
        by_type=_allocation(by_type, total_current),
        by_category=_allocation(by_category, total_current),
        matured_assets=[a for a in items if a.status == "matured"],
    )
