"""Tests for the daily stock data collection script."""

from datetime import date
from unittest.mock import patch

from models import StockPrice
from scripts.collect_stock_data import collect_stock_data
from services.market_data_service import MarketDataService
from tests.fixtures.mocks import SAMPLE_QUOTES, MockQuoteProvider


class TestCollectStockData:
    def test_dry_run_saves_nothing(self, capsys):
        service = MarketDataService(provider=MockQuoteProvider(quotes=SAMPLE_QUOTES))

        with patch("scripts.collect_stock_data.get_session_local") as mock_session_local:
            exit_code = collect_stock_data(dry_run=True, service=service)

        assert exit_code == 0
        mock_session_local.assert_not_called()
        out = capsys.readouterr().out
        assert "DRY RUN" in out
        assert "JKH" in out

    def test_saves_snapshot_for_today(self, db):
        provider = MockQuoteProvider(quotes=SAMPLE_QUOTES)
        service = MarketDataService(provider=provider)

        with patch("scripts.collect_stock_data.init_db"), \
             patch("scripts.collect_stock_data.get_session_local", return_value=lambda: db):
            exit_code = collect_stock_data(service=service)

        assert exit_code == 0
        assert provider.calls == [date.today()]
        assert {r.price_date for r in db.query(StockPrice).all()} == {date.today()}

    def test_unavailable_exchange_fails(self):
        service = MarketDataService(provider=MockQuoteProvider(should_fail=True))

        assert collect_stock_data(service=service) == 1

    def test_without_store_fails(self):
        service = MarketDataService(provider=MockQuoteProvider(quotes=SAMPLE_QUOTES))

        with patch("scripts.collect_stock_data.init_db"), \
             patch("scripts.collect_stock_data.get_session_local", return_value=None):
            assert collect_stock_data(service=service) == 1
