"""Normalise a raw price-index document into a typed snapshot.

The parser is total: every input yields either a :class:`ParsedSnapshot` or a
:class:`MalformedDocument`. It never raises and never returns a partially
populated snapshot. A document in which any currency lacks a usable
``rate_float`` is rejected as a whole.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Union

from bpi_rates.utils.datetime import strip_offset


@dataclass(frozen=True)
class IsoUpdateTime:
    """Update time taken from ``time.updatedISO``, offset stripped."""

    moment: datetime


@dataclass(frozen=True)
class TextUpdateTime:
    """Update time taken verbatim from ``time.updated``."""

    text: str


# ``None`` marks a document without any usable update time.
UpdateTime = Union[IsoUpdateTime, TextUpdateTime, None]


@dataclass(frozen=True)
class CurrencyRate:
    code: str
    rate: Decimal


@dataclass(frozen=True)
class ParsedSnapshot:
    """Update time plus the currencies of one document, in document order."""

    updated: UpdateTime
    rates: tuple[CurrencyRate, ...] = field(default_factory=tuple)

    @property
    def codes(self) -> list[str]:
        return [item.code for item in self.rates]


@dataclass(frozen=True)
class MalformedDocument:
    """Closed failure outcome for documents that cannot be trusted."""

    reason: str


ParseResult = Union[ParsedSnapshot, MalformedDocument]


class _Malformed(Exception):
    pass


def parse_document(raw: bytes | str) -> ParseResult:
    """Parse ``raw`` into a snapshot, or describe why it is malformed."""

    try:
        root = json.loads(raw, parse_float=Decimal)
    except (ValueError, TypeError, RecursionError) as exc:
        return MalformedDocument(f"document is not valid JSON: {exc}")

    if not isinstance(root, Mapping):
        return MalformedDocument("document root is not an object")

    try:
        updated = _resolve_update_time(root.get("time"))
        rates = _extract_rates(root.get("bpi"))
    except _Malformed as exc:
        return MalformedDocument(str(exc))

    return ParsedSnapshot(updated=updated, rates=rates)


def _resolve_update_time(time_block: Any) -> UpdateTime:
    if not isinstance(time_block, Mapping):
        return None

    iso_value = time_block.get("updatedISO")
    if iso_value is not None:
        return IsoUpdateTime(_parse_offset_timestamp(iso_value))

    text_value = time_block.get("updated")
    if text_value is not None:
        if not isinstance(text_value, str):
            raise _Malformed("time.updated is not a string")
        return TextUpdateTime(text_value)

    return None


def _parse_offset_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise _Malformed("time.updatedISO is not a string")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise _Malformed(f"time.updatedISO is not an ISO-8601 timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        raise _Malformed(f"time.updatedISO has no UTC offset: {value!r}")
    return strip_offset(parsed)


def _extract_rates(bpi: Any) -> tuple[CurrencyRate, ...]:
    if bpi is None:
        return ()
    if not isinstance(bpi, Mapping):
        raise _Malformed("bpi is not an object")

    rates: list[CurrencyRate] = []
    seen: set[str] = set()
    for raw_code, entry in bpi.items():
        code = str(raw_code).strip().upper()
        if not code:
            raise _Malformed("bpi contains an empty currency code")
        if code in seen:
            raise _Malformed(f"bpi lists currency {code} more than once")
        if not isinstance(entry, Mapping):
            raise _Malformed(f"bpi.{raw_code} is not an object")

        rates.append(CurrencyRate(code=code, rate=_to_decimal(raw_code, entry.get("rate_float"))))
        seen.add(code)

    return tuple(rates)


def _to_decimal(code: str, value: Any) -> Decimal:
    if value is None:
        raise _Malformed(f"bpi.{code}.rate_float is missing")
    # bool is an int subclass; JSON true/false is never a rate.
    if isinstance(value, bool) or not isinstance(value, Decimal | int):
        raise _Malformed(f"bpi.{code}.rate_float is not a number")
    rate = Decimal(value)
    if not rate.is_finite():
        raise _Malformed(f"bpi.{code}.rate_float is not finite")
    return rate
