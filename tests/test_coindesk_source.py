from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from bpi_rates.providers import (
    COINDESK_URL,
    FALLBACK_DOCUMENT,
    CoinDeskSource,
    HTTPClientError,
    StaticDocumentSource,
)
from bpi_rates.providers import coindesk as coindesk_module
from bpi_rates.providers.registry import get_source, list_sources, register_source, reset_registry
from bpi_rates.providers.base import SourceError


@pytest.fixture(autouse=True)
def _reset_sources():
    reset_registry()
    yield
    reset_registry()


def test_fetch_returns_live_body_on_success():
    client = MagicMock()
    client.get_bytes.return_value = b'{"bpi": {}}'
    source = CoinDeskSource(client=client)

    assert source.fetch() == b'{"bpi": {}}'
    client.get_bytes.assert_called_once_with(COINDESK_URL)


def test_fetch_failure_returns_fallback_document_byte_for_byte():
    client = MagicMock()
    client.get_bytes.side_effect = HTTPClientError("Unexpected status 503", status_code=503)
    source = CoinDeskSource(client=client, url="https://example.invalid/bpi.json")

    first = source.fetch()
    second = source.fetch()

    assert first == FALLBACK_DOCUMENT
    assert second == FALLBACK_DOCUMENT
    assert client.get_bytes.call_count == 2


def test_fetch_failure_logs_warning_with_cause():
    client = MagicMock()
    client.get_bytes.side_effect = HTTPClientError("Failed to fetch: refused")
    source = CoinDeskSource(client=client)

    with patch.object(coindesk_module.logger, "warning") as mock_warning:
        source.fetch()

    mock_warning.assert_called_once()
    assert "refused" in str(mock_warning.call_args.args[1])
    extra = mock_warning.call_args.kwargs["extra"]
    assert extra["event"] == "source.fetch"
    assert extra["status"] == "error"
    assert extra["fallback"] is True
    assert extra["source"] == "coindesk"


def test_fallback_document_lists_three_currencies():
    text = FALLBACK_DOCUMENT.decode("utf-8")

    for code in ("USD", "GBP", "EUR"):
        assert f'"{code}"' in text
    assert '"updatedISO": "2022-08-03T20:25:00+00:00"' in text
    assert '"updated": "Aug 3, 2022 20:25:00 UTC"' in text


def test_from_config_uses_configured_url_and_timeout():
    source = CoinDeskSource.from_config(
        {"COINDESK_URL": "https://example.com/bpi.json", "REQUEST_TIMEOUT_SECONDS": 2}
    )

    assert source._url == "https://example.com/bpi.json"  # type: ignore[attr-defined]
    assert source._client._config.timeout == 2.0  # type: ignore[attr-defined]


def test_static_source_serves_fallback_without_network():
    assert StaticDocumentSource().fetch() == FALLBACK_DOCUMENT


def test_registry_resolves_static_and_rejects_unknown():
    assert {"coindesk", "static"}.issubset(list_sources())
    assert isinstance(get_source("static"), StaticDocumentSource)

    with pytest.raises(SourceError):
        get_source("does-not-exist")


def test_registry_accepts_custom_sources():
    register_source("canned", lambda: StaticDocumentSource(b"{}"))

    assert get_source("CANNED").fetch() == b"{}"


def test_registry_builds_coindesk_source_from_app_config(app):
    with app.app_context():
        source = get_source("coindesk")

    assert isinstance(source, CoinDeskSource)
