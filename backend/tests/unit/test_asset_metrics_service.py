"""Tests for per-variant asset valuation rules."""

from datetime import date
from decimal import Decimal

from schemas import FixedAsset, FixedDeposit, MutualFund, SavingsAccount, TreasuryBond
from services.asset_metrics_service import (
    asset_category,
    calculate_assets_summary,
    compute_asset_metrics,
)

AS_OF = date(2024, 6, 30)


def _fixed_asset(**kwargs):
    data = {
        "name": "Land - Kandy",
        "category": "land",
        "purchase_price": Decimal("5000000"),
        "purchase_date": date(2020, 1, 1),
    }
    data.update(kwargs)
    return FixedAsset(**data)


def _fixed_deposit(**kwargs):
    data = {
        "name": "FD - HNB",
        "bank": "HNB",
        "principal": Decimal("500000"),
        "interest_rate": Decimal("12.5"),
        "compounding": "monthly",
        "start_date": date(2024, 1, 1),
        "maturity_date": date(2025, 1, 1),
    }
    data.update(kwargs)
    return FixedDeposit(**data)


class TestFixedAsset:
    def test_appraised_value_used(self):
        m = compute_asset_metrics(_fixed_asset(current_value=Decimal("6000000")))

        assert m.current_value == Decimal("6000000")
        assert m.invested == Decimal("5000000")
        assert m.gain_loss == Decimal("1000000")
        assert m.gain_loss_percent == Decimal("20")

    def test_falls_back_to_purchase_price(self):
        m = compute_asset_metrics(_fixed_asset())

        assert m.current_value == Decimal("5000000")
        assert m.gain_loss == Decimal("0")

    def test_zero_purchase_price_guard(self):
        m = compute_asset_metrics(_fixed_asset(purchase_price=Decimal("0")))
        assert m.gain_loss_percent == Decimal("0")


class TestFixedDeposit:
    def test_current_value_is_principal(self):
        m = compute_asset_metrics(_fixed_deposit(), as_of=AS_OF)

        assert m.current_value == Decimal("500000")
        assert m.gain_loss == Decimal("0")

    def test_maturity_status(self):
        active = compute_asset_metrics(_fixed_deposit(), as_of=AS_OF)
        matured = compute_asset_metrics(_fixed_deposit(), as_of=date(2025, 3, 1))

        assert active.status == "active"
        assert active.days_to_maturity == 185
        assert matured.status == "matured"
        assert matured.days_to_maturity == 0


class TestSavings:
    def test_current_value_is_balance(self):
        m = compute_asset_metrics(
            SavingsAccount(name="NDB Savings", bank="NDB", balance=Decimal("250000.50"))
        )

        assert m.current_value == Decimal("250000.50")
        assert m.invested is None
        assert m.gain_loss is None
        assert m.status == "active"


class TestMutualFund:
    def test_uses_last_nav(self):
        m = compute_asset_metrics(
            MutualFund(name="Fund", units=Decimal("1000"), buy_nav=Decimal("10"), last_nav=Decimal("12"))
        )

        assert m.current_value == Decimal("12000")
        assert m.invested == Decimal("10000")
        assert m.gain_loss == Decimal("2000")

    def test_falls_back_to_buy_nav(self):
        m = compute_asset_metrics(MutualFund(name="Fund", units=Decimal("1000"), buy_nav=Decimal("15.25")))
        assert m.current_value == Decimal("15250")

    def test_no_nav_is_zero(self):
        m = compute_asset_metrics(MutualFund(name="Fund", units=Decimal("1000")))

        assert m.current_value == Decimal("0")
        assert m.invested is None


class TestTreasuryBond:
    def test_uses_market_price(self):
        m = compute_asset_metrics(
            TreasuryBond(
                name="T-Bond",
                face_value=Decimal("100"),
                units=Decimal("50"),
                purchase_price=Decimal("95"),
                current_market_price=Decimal("102"),
            )
        )

        assert m.current_value == Decimal("5100")
        assert m.invested == Decimal("4750")

    def test_falls_back_to_face_value(self):
        m = compute_asset_metrics(
            TreasuryBond(
                name="T-Bond",
                face_value=Decimal("100"),
                units=Decimal("50"),
                maturity_date=date(2030, 1, 1),
            ),
            as_of=AS_OF,
        )

        assert m.current_value == Decimal("5000")
        assert m.invested == Decimal("5000")
        assert m.status == "active"


class TestAssetsSummary:
    def test_totals_and_allocation(self):
        items = [
            compute_asset_metrics(_fixed_asset(purchase_price=Decimal("600"))),
            compute_asset_metrics(_fixed_asset(category="gold", purchase_price=Decimal("100"))),
            compute_asset_metrics(SavingsAccount(name="S", bank="B", balance=Decimal("300"))),
        ]

        summary = calculate_assets_summary(items)

        assert summary.total_current_value == Decimal("1000")
        assert summary.total_invested == Decimal("700")
        by_type = {s.key: (s.value, s.percentage) for s in summary.by_type}
        assert by_type == {
            "fixed-asset": (Decimal("700"), Decimal("70")),
            "savings": (Decimal("300"), Decimal("30")),
        }
        by_category = {s.key: s.value for s in summary.by_category}
        assert by_category == {
            "land": Decimal("600"),
            "gold": Decimal("100"),
            "savings": Decimal("300"),
        }

    def test_zero_total_percentages(self):
        items = [compute_asset_metrics(MutualFund(name="F", units=Decimal("0")))]

        summary = calculate_assets_summary(items)

        assert summary.by_type[0].percentage == Decimal("0")

    def test_category_falls_back_to_type(self):
        assert asset_category(_fixed_deposit()) == "fixed-deposit"
        assert asset_category(_fixed_asset(category="vehicle")) == "vehicle"

    def test_total_gain_loss_percent(self):
        items = [
            compute_asset_metrics(
                _fixed_asset(purchase_price=Decimal("800"), current_value=Decimal("1000"))
            ),
            compute_asset_metrics(SavingsAccount(name="S", bank="B", balance=Decimal("200"))),
        ]

        summary = calculate_assets_summary(items)

        assert summary.total_invested == Decimal("800")
        assert summary.total_gain_loss == Decimal("400")
        assert summary.total_gain_loss_percent == Decimal("50")

    def test_total_gain_loss_percent_zero_without_invested(self):
        items = [compute_asset_metrics(SavingsAccount(name="S", bank="B", balance=Decimal("200")))]

        summary = calculate_assets_summary(items)

        assert summary.total_gain_loss_percent == Decimal("0")

    def test_matured_assets_listed(self):
        matured = compute_asset_metrics(
            _fixed_deposit(name="FD - old", maturity_date=date(2024, 6, 1)), as_of=AS_OF
        )
        active = compute_asset_metrics(_fixed_deposit(), as_of=AS_OF)

        summary = calculate_assets_summary([active, matured])

        assert [a.asset.name for a in summary.matured_assets] == ["FD - old"]
        assert len(summary.items) == 2
