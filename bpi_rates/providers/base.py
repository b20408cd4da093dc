"""Abstract interface for price-index document sources."""

from __future__ import annotations

from abc import ABC, abstractmethod


class SourceError(Exception):
    """Raised when a document source cannot be resolved or configured."""


class BaseDocumentSource(ABC):
    """Defines the interface all price-index document sources must implement."""

    name: str

    @abstractmethod
    def fetch(self) -> bytes:
        """Return the raw price-index document.

        Implementations never raise for transport failures; they substitute
        a fallback document instead.
        """
