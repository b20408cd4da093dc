"""Test fixture helpers."""

from __future__ import annotations

from pathlib import Path

from bpi_rates.providers import BaseDocumentSource

_FIXTURE_ROOT = Path(__file__).parent


def load_document(name: str) -> bytes:
    """Load a raw price-index document fixture by filename."""

    return (_FIXTURE_ROOT / name).read_bytes()


class StubSource(BaseDocumentSource):
    """Document source returning a fixed payload and counting calls."""

    name = "stub"

    def __init__(self, document: bytes) -> None:
        self.document = document
        self.calls = 0

    def fetch(self) -> bytes:
        self.calls += 1
        return self.document
