"""Source interfaces for fetching the raw price-index document."""

from .base import BaseDocumentSource, SourceError
from .coindesk import COINDESK_URL, FALLBACK_DOCUMENT, CoinDeskSource
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from .static import StaticDocumentSource

__all__ = [
    "BaseDocumentSource",
    "SourceError",
    "COINDESK_URL",
    "FALLBACK_DOCUMENT",
    "CoinDeskSource",
    "HTTPClient",
    "HTTPClientConfig",
    "HTTPClientError",
    "StaticDocumentSource",
]
