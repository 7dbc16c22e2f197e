"""External API integrations.

This package contains:
- Market data protocol: Canonical Quote record and bulk provider interface
- Quote normalizer: Alias-table driven mapping of raw exchange records
- CSE client: Bulk trade summary fetcher for the Colombo Stock Exchange
"""

from integrations.cse_client import CSEClient, unwrap_trade_summary
from integrations.market_data_protocol import Quote, QuoteProvider
from integrations.quote_normalizer import normalize_quote

__all__ = [
    "CSEClient",
    "Quote",
    "QuoteProvider",
    "normalize_quote",
    "unwrap_trade_summary",
]
