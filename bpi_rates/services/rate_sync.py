"""Reconciliation of the rate table against the current price index.

One pass fetches the document, parses it, and upserts every currency it
lists with a single shared update time. Fetch and parse problems never
escape a pass: a malformed document abandons it before any write. Errors
raised by the rate store do propagate, after the store has rolled the
whole pass back.

Passes started concurrently (scheduler and manual trigger) are not
serialised unless a :class:`SingleFlight` guard is supplied; without it the
last pass to commit wins for every code it touches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from time import perf_counter

from bpi_rates.logging import source_log_extra
from bpi_rates.providers import BaseDocumentSource
from bpi_rates.utils.datetime import local_now

from .document_parser import IsoUpdateTime, MalformedDocument, ParsedSnapshot, parse_document
from .rate_store import BaseRateStore, RateRecord
from .single_flight import SingleFlight

logger = logging.getLogger(__name__)

SYNC_KEY = "rate-sync"

STATUS_SYNCED = "synced"
STATUS_ABANDONED = "abandoned"


@dataclass(frozen=True)
class SyncReport:
    """Outcome of the most recent pass, kept for health reporting."""

    status: str
    started_at: datetime
    updated_at: datetime | None = None
    currencies: tuple[str, ...] = ()
    reason: str | None = None


class RateSynchronizer:
    """Drives fetch, parse and per-code upsert into the rate store."""

    def __init__(
        self,
        source: BaseDocumentSource,
        rate_store: BaseRateStore,
        guard: SingleFlight | None = None,
    ) -> None:
        self._source = source
        self._store = rate_store
        self._guard = guard
        self._last_report: SyncReport | None = None

    def sync_once(self) -> None:
        if self._guard is None:
            self._run_pass()
            return

        ran, _ = self._guard.run(SYNC_KEY, self._run_pass)
        if not ran:
            # The leader already recorded the report for the shared pass.
            logger.info("Rate sync already in progress; joined the running pass")

    def get_last_report(self) -> SyncReport | None:
        return self._last_report

    def _run_pass(self) -> None:
        started_at = local_now()
        start = perf_counter()
        source_name = getattr(self._source, "name", "unknown")

        result = parse_document(self._source.fetch())
        if isinstance(result, MalformedDocument):
            logger.warning(
                "Rate sync abandoned: %s",
                result.reason,
                extra=source_log_extra(
                    source=source_name,
                    event="sync.pass",
                    status=STATUS_ABANDONED,
                    duration_ms=(perf_counter() - start) * 1000,
                    error=result.reason,
                ),
            )
            self._last_report = SyncReport(
                status=STATUS_ABANDONED, started_at=started_at, reason=result.reason
            )
            return

        updated_at = resolve_pass_time(result, now=started_at)
        with self._store.transaction():
            for entry in result.rates:
                self._store.upsert(RateRecord(code=entry.code, rate=entry.rate, updated_at=updated_at))

        codes = tuple(result.codes)
        logger.info(
            "Rate sync stored %s currencies as of %s",
            len(codes),
            updated_at.isoformat(),
            extra=source_log_extra(
                source=source_name,
                event="sync.pass",
                status=STATUS_SYNCED,
                duration_ms=(perf_counter() - start) * 1000,
                currencies=len(codes),
            ),
        )
        self._last_report = SyncReport(
            status=STATUS_SYNCED,
            started_at=started_at,
            updated_at=updated_at,
            currencies=codes,
        )


def resolve_pass_time(snapshot: ParsedSnapshot, *, now: datetime) -> datetime:
    """Use the document's ISO time; a text-only or missing time falls back to ``now``."""

    if isinstance(snapshot.updated, IsoUpdateTime):
        return snapshot.updated.moment
    return now
