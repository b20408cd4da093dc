"""Read-only lookup of localized currency names."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bpi_rates.database import get_session
from bpi_rates.models import Currency


class BaseReferenceStore(ABC):
    """Resolves a currency code to its localized display name."""

    @abstractmethod
    def lookup_name(self, code: str) -> str | None:
        """Return the localized name, or ``None`` when the code is unknown."""


class SqlReferenceStore(BaseReferenceStore):
    """Reference store backed by the ``currency`` table."""

    def lookup_name(self, code: str) -> str | None:
        currency = get_session().get(Currency, code.strip().upper())
        return currency.localized_name if currency is not None else None
