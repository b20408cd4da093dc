from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from bpi_rates.providers import FALLBACK_DOCUMENT
from bpi_rates.services.document_parser import (
    CurrencyRate,
    IsoUpdateTime,
    MalformedDocument,
    ParsedSnapshot,
    TextUpdateTime,
    parse_document,
)
from tests.fixtures import load_document


def _parse_ok(raw: bytes | str) -> ParsedSnapshot:
    result = parse_document(raw)
    assert isinstance(result, ParsedSnapshot), result
    return result


def test_parses_fallback_document_in_document_order():
    snapshot = _parse_ok(FALLBACK_DOCUMENT)

    assert snapshot.updated == IsoUpdateTime(datetime(2022, 8, 3, 20, 25, 0))
    assert snapshot.rates == (
        CurrencyRate("USD", Decimal("23342.0112")),
        CurrencyRate("GBP", Decimal("19504.3978")),
        CurrencyRate("EUR", Decimal("22738.5269")),
    )


def test_rates_keep_exact_decimal_text():
    snapshot = _parse_ok(load_document("coindesk_current.json"))

    rates = {item.code: item.rate for item in snapshot.rates}
    assert rates["JPY"] == Decimal("10812345.67")
    assert str(rates["USD"]) == "73104.5678"
    assert snapshot.codes == ["USD", "GBP", "EUR", "JPY"]


def test_iso_offset_is_dropped_not_converted():
    snapshot = _parse_ok(load_document("offset_time.json"))

    assert snapshot.updated == IsoUpdateTime(datetime(2024, 3, 14, 17, 41, 0))
    assert snapshot.updated.moment.tzinfo is None


def test_text_time_used_when_iso_missing():
    snapshot = _parse_ok(load_document("updated_text_only.json"))

    assert snapshot.updated == TextUpdateTime("Mar 14, 2024 09:41:00 UTC")
    assert snapshot.codes == ["EUR", "USD"]


def test_missing_time_block_yields_no_update_time():
    snapshot = _parse_ok(load_document("no_time.json"))

    assert snapshot.updated is None
    assert snapshot.codes == ["USD"]


def test_null_iso_falls_through_to_text():
    snapshot = _parse_ok('{"time": {"updatedISO": null, "updated": "soon"}, "bpi": {}}')

    assert snapshot.updated == TextUpdateTime("soon")


def test_missing_bpi_is_an_empty_snapshot():
    snapshot = _parse_ok('{"time": {"updatedISO": "2022-08-03T20:25:00Z"}}')

    assert snapshot.rates == ()
    assert snapshot.updated == IsoUpdateTime(datetime(2022, 8, 3, 20, 25, 0))


def test_integer_rate_is_accepted():
    snapshot = _parse_ok('{"bpi": {"usd": {"rate_float": 23342}}}')

    assert snapshot.rates == (CurrencyRate("USD", Decimal("23342")),)


def test_missing_rate_float_rejects_whole_document():
    result = parse_document(load_document("missing_rate_float.json"))

    assert isinstance(result, MalformedDocument)
    assert "GBP" in result.reason


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"not json",
        b"\xff\xfe\x00garbage",
        b"[1, 2, 3]",
        b'"just a string"',
        b'{"bpi": ["USD"]}',
        b'{"bpi": {"USD": 1.0}}',
        b'{"bpi": {"USD": {"rate_float": "23,342.0112"}}}',
        b'{"bpi": {"USD": {"rate_float": true}}}',
        b'{"bpi": {"USD": {"rate_float": null}}}',
        b'{"bpi": {"USD": {"rate_float": 1.0}, "usd": {"rate_float": 2.0}}}',
        b'{"bpi": {" ": {"rate_float": 1.0}}}',
        b'{"time": {"updatedISO": "yesterday"}, "bpi": {}}',
        b'{"time": {"updatedISO": "2022-08-03T20:25:00"}, "bpi": {}}',
        b'{"time": {"updatedISO": 1659558300}, "bpi": {}}',
    ],
)
def test_malformed_inputs_fail_closed(raw):
    result = parse_document(raw)

    assert isinstance(result, MalformedDocument)
    assert result.reason


def test_deeply_nested_document_is_malformed_not_raised():
    raw = b'{"bpi": ' + b"[" * 100_000 + b"]" * 100_000 + b"}"

    result = parse_document(raw)

    assert isinstance(result, MalformedDocument)
    assert "not valid JSON" in result.reason
