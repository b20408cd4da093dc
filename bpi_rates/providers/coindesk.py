"""CoinDesk Bitcoin Price Index source with a canned fallback document."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from time import perf_counter

from bpi_rates.logging import source_log_extra

from .base import BaseDocumentSource
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError

logger = logging.getLogger(__name__)

COINDESK_URL = "https://api.coindesk.com/v1/bpi/currentprice.json"

# Served verbatim whenever the live endpoint cannot be reached.
FALLBACK_DOCUMENT: bytes = """{
  "time": {
    "updated": "Aug 3, 2022 20:25:00 UTC",
    "updatedISO": "2022-08-03T20:25:00+00:00",
    "updateduk": "Aug 3, 2022 at 21:25 BST"
  },
  "disclaimer": "This data was produced from the CoinDesk Bitcoin Price Index (USD). Non-USD currency data converted using hourly conversion rate from openexchangerates.org",
  "chartName": "Bitcoin",
  "bpi": {
    "USD": { "code": "USD", "symbol": "$", "rate": "23,342.0112", "description": "US Dollar", "rate_float": 23342.0112 },
    "GBP": { "code": "GBP", "symbol": "£", "rate": "19,504.3978", "description": "British Pound Sterling", "rate_float": 19504.3978 },
    "EUR": { "code": "EUR", "symbol": "€", "rate": "22,738.5269", "description": "Euro", "rate_float": 22738.5269 }
  }
}""".encode("utf-8")


class CoinDeskSource(BaseDocumentSource):
    """Fetches the current price index, substituting the fallback on any failure."""

    name = "coindesk"

    def __init__(self, client: HTTPClient | None = None, url: str = COINDESK_URL) -> None:
        self._client = client or HTTPClient()
        self._url = url

    @classmethod
    def from_config(cls, config: Mapping[str, str | int | float]) -> CoinDeskSource:
        client_config = HTTPClientConfig(timeout=float(config.get("REQUEST_TIMEOUT_SECONDS", 10)))
        url = str(config.get("COINDESK_URL") or COINDESK_URL)
        return cls(HTTPClient(client_config), url=url)

    def fetch(self) -> bytes:
        start = perf_counter()
        try:
            body = self._client.get_bytes(self._url)
        except HTTPClientError as exc:
            duration = (perf_counter() - start) * 1000
            logger.warning(
                "CoinDesk fetch failed, serving fallback document: %s",
                exc,
                extra=source_log_extra(
                    source=self.name,
                    event="source.fetch",
                    status="error",
                    duration_ms=duration,
                    fallback=True,
                    error=str(exc),
                ),
            )
            return FALLBACK_DOCUMENT

        duration = (perf_counter() - start) * 1000
        logger.info(
            "CoinDesk fetch succeeded",
            extra=source_log_extra(
                source=self.name,
                event="source.fetch",
                status="success",
                duration_ms=duration,
            ),
        )
        return body
