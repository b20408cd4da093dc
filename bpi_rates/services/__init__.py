"""Service layer modules."""

from __future__ import annotations

from .converter import ConvertedItem, ConvertedView, Converter
from .currency_manager import (
    CurrencyCreateData,
    CurrencyDTO,
    CurrencyUpdateData,
    create_currency,
    delete_currency,
    get_currency,
    list_currencies,
    update_currency,
)
from .currency_seed import init_reference_seed, seed_reference_currencies
from .currency_store import BaseReferenceStore, SqlReferenceStore
from .document_parser import MalformedDocument, ParsedSnapshot, parse_document
from .rate_store import BaseRateStore, RateRecord, SqlRateStore
from .rate_sync import RateSynchronizer, SyncReport
from .scheduler import init_scheduler, shutdown_scheduler
from .single_flight import SingleFlight


def init_services(app) -> None:
    """Wire the converter and synchronizer onto the app around the configured source."""

    source = app.extensions["bpi_source"]
    guard = SingleFlight() if app.config.get("RATES_SYNC_SINGLE_FLIGHT", False) else None

    app.extensions["bpi_converter"] = Converter(source, SqlReferenceStore())
    app.extensions["rate_synchronizer"] = RateSynchronizer(source, SqlRateStore(), guard=guard)
