"""Offline source for local development and testing."""

from __future__ import annotations

from .base import BaseDocumentSource
from .coindesk import FALLBACK_DOCUMENT


class StaticDocumentSource(BaseDocumentSource):
    """Deterministic source that always serves the fallback document."""

    name = "static"

    def __init__(self, document: bytes = FALLBACK_DOCUMENT) -> None:
        self._document = document

    def fetch(self) -> bytes:
        return self._document
