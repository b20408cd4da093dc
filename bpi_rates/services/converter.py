"""Display-ready view of the current price index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from bpi_rates.logging import source_log_extra
from bpi_rates.providers import BaseDocumentSource
from bpi_rates.utils.datetime import format_display

from .currency_store import BaseReferenceStore
from .document_parser import (
    IsoUpdateTime,
    MalformedDocument,
    TextUpdateTime,
    UpdateTime,
    parse_document,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvertedItem:
    code: str
    localized_name: str
    rate: Decimal


@dataclass(frozen=True)
class ConvertedView:
    """Formatted update time plus one item per currency, in document order."""

    updated_time: str
    items: tuple[ConvertedItem, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> ConvertedView:
        return cls(updated_time="", items=())


class Converter:
    """Joins the parsed document against the reference names. Writes nothing."""

    def __init__(self, source: BaseDocumentSource, reference_store: BaseReferenceStore) -> None:
        self._source = source
        self._reference_store = reference_store

    def convert(self) -> ConvertedView:
        result = parse_document(self._source.fetch())
        if isinstance(result, MalformedDocument):
            logger.warning(
                "Returning empty converted view: %s",
                result.reason,
                extra=source_log_extra(
                    source=getattr(self._source, "name", "unknown"),
                    event="convert.parse",
                    status="malformed",
                    error=result.reason,
                ),
            )
            return ConvertedView.empty()

        items = tuple(
            ConvertedItem(
                code=entry.code,
                localized_name=self._reference_store.lookup_name(entry.code) or "",
                rate=entry.rate,
            )
            for entry in result.rates
        )
        return ConvertedView(updated_time=format_update_time(result.updated), items=items)


def format_update_time(updated: UpdateTime) -> str:
    """Render ISO times for display; text times pass through untouched."""

    if isinstance(updated, IsoUpdateTime):
        return format_display(updated.moment)
    if isinstance(updated, TextUpdateTime):
        return updated.text
    return ""
