"""Colombo Stock Exchange market data provider (bulk trade summary)."""

import logging
from datetime import date
from typing import Any, Iterable, Optional

import httpx

from config import settings
from integrations.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderDataError,
    ProviderError,
)
from integrations.market_data_protocol import Quote
from integrations.quote_normalizer import extract_raw_symbol, normalize_quote
from utils.ticker import match_tracked_symbol

logger = logging.getLogger(__name__)

# Top-level keys the endpoint has been observed to wrap its record list in,
# checked in this order. ("Summery" is the exchange's own spelling.)
TRADE_SUMMARY_KEYS = ("tradeSummary", "reqTradeSummery", "reqTradeSummary")


def unwrap_trade_summary(payload: Any) -> list:
    """Extract the list of raw records from a trade summary payload.

    Args:
        payload: Decoded JSON document.

    Returns:
        The record list, or an empty list for unrecognised shapes.
    """
    if isinstance(payload, dict):
        for key in TRADE_SUMMARY_KEYS:
            records = payload.get(key)
            if isinstance(records, list):
                return records
        return []
    if isinstance(payload, list):
        return payload
    return []


class CSEClient:
    """Market data provider using the CSE ``tradeSummary`` endpoint.

    One POST returns every listed security; untracked instruments are
    dropped locally. There is no retry: callers decide whether to try again.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        tracked_symbols: Optional[Iterable[str]] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the client.

        Args:
            url: Endpoint URL. Defaults to ``settings.CSE_API_URL``.
            tracked_symbols: Instrument codes to keep. Defaults to
                ``settings.TRACKED_SYMBOLS``.
            timeout: Request timeout in seconds. Defaults to
                ``settings.CSE_TIMEOUT_SECONDS``.
            client: Pre-built httpx client (for testing).
        """
        self._url = url or settings.CSE_API_URL
        symbols = tracked_symbols if tracked_symbols is not None else settings.TRACKED_SYMBOLS
        self._tracked = frozenset(s.upper() for s in symbols)
        self._client = client or httpx.Client(
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            timeout=timeout if timeout is not None else settings.CSE_TIMEOUT_SECONDS,
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    @property
    def provider_name(self) -> str:
        return "cse"

    @property
    def tracked_symbols(self) -> frozenset[str]:
        return self._tracked

    def _post_trade_summary(self) -> Any:
        """POST an empty body to the endpoint and decode the JSON response.

        Raises:
            ProviderConnectionError: Timeout, network failure or an invalid URL.
            ProviderAPIError: Non-2xx response.
            ProviderDataError: Body is not valid JSON.
        """
        try:
            response = self._client.post(self._url, json={})
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ProviderConnectionError(
                f"CSE: request timed out: {e}", provider_name=self.provider_name
            ) from e
        except httpx.HTTPStatusError as e:
            raise ProviderAPIError(
                f"CSE: HTTP {e.response.status_code} from trade summary",
                provider_name=self.provider_name,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderConnectionError(
                f"CSE: request failed: {e}", provider_name=self.provider_name
            ) from e
        except (httpx.InvalidURL, httpx.StreamError) as e:
            raise ProviderConnectionError(
                f"CSE: cannot request {self._url!r}: {e}",
                provider_name=self.provider_name,
                retriable=False,
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise ProviderDataError(
                "CSE: response body is not valid JSON",
                provider_name=self.provider_name,
                content_type=response.headers.get("content-type", ""),
            ) from e

    def parse_records(self, records: list, as_of: Optional[date] = None) -> list[Quote]:
        """Match and normalize raw records, skipping untracked or broken ones.

        Args:
            records: Raw records from :func:`unwrap_trade_summary`.
            as_of: Date stamped on records without their own trade date.

        Returns:
            Quotes for tracked instruments, in payload order.
        """
        quotes: list[Quote] = []
        for index, record in enumerate(records):
            try:
                code = match_tracked_symbol(extract_raw_symbol(record), self._tracked)
                if code is None:
                    continue
                quotes.append(normalize_quote(record, symbol=code, as_of=as_of))
            except Exception:
                logger.warning(
                    "CSE: failed to parse record %d, skipping", index, exc_info=True
                )
        return quotes

    def fetch_all_quotes(self, as_of: Optional[date] = None) -> list[Quote]:
        """Fetch quotes for all tracked instruments with a single request.

        Args:
            as_of: Date stamped on records without their own trade date
                (defaults to today).

        Returns:
            Tracked quotes. An empty list means the exchange was unavailable.
        """
        logger.info("CSE: fetching trade summary (%d tracked symbols)", len(self._tracked))
        try:
            payload = self._post_trade_summary()
        except ProviderError as e:
            logger.warning("CSE: trade summary unavailable (retriable=%s): %s", e.retriable, e)
            return []

        records = unwrap_trade_summary(payload)
        if not records:
            logger.warning("CSE: trade summary contained no records")
            return []

        quotes = self.parse_records(records, as_of=as_of or date.today())
        logger.info(
            "CSE: parsed %d tracked quotes from %d records", len(quotes), len(records)
        )
        return quotes
