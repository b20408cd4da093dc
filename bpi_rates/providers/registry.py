"""Registry and factory for price-index document sources."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from .base import BaseDocumentSource, SourceError

SourceFactory = Callable[[], BaseDocumentSource]

_SOURCE_FACTORIES: Dict[str, SourceFactory] = {}


def _default_factories() -> Iterable[tuple[str, SourceFactory]]:
    from flask import current_app

    from .coindesk import CoinDeskSource
    from .static import StaticDocumentSource

    def coindesk_factory() -> CoinDeskSource:
        return CoinDeskSource.from_config(current_app.config)

    return [
        (StaticDocumentSource.name, StaticDocumentSource),
        (CoinDeskSource.name, coindesk_factory),
    ]


def register_source(name: str, factory: SourceFactory) -> None:
    """Register a source factory under the given name."""

    if not name:
        raise ValueError("Source name cannot be empty.")
    _SOURCE_FACTORIES[name.lower()] = factory


def unregister_source(name: str) -> None:
    """Remove a source factory; primarily for testing."""

    _SOURCE_FACTORIES.pop(name.lower(), None)


def list_sources() -> List[str]:
    """Return the list of registered source identifiers."""

    return sorted(_SOURCE_FACTORIES.keys())


def get_source(name: str | None = None) -> BaseDocumentSource:
    """Instantiate a source by name; requires an application context for ``coindesk``."""

    source_name = (name or "coindesk").lower()
    try:
        factory = _SOURCE_FACTORIES[source_name]
    except KeyError as exc:
        available = ", ".join(list_sources()) or "none registered"
        raise SourceError(f"Unknown source '{source_name}'. Available sources: {available}") from exc
    return factory()


def init_source(app) -> BaseDocumentSource:
    """Attach the configured source to the Flask app."""

    with app.app_context():
        source = get_source(app.config.get("BPI_SOURCE"))
    app.extensions["bpi_source"] = source
    return source


def reset_registry(default_factories: Iterable[tuple[str, SourceFactory]] | None = None) -> None:
    """Reset the source registry; useful for tests."""

    _SOURCE_FACTORIES.clear()

    factories = default_factories or _default_factories()
    for name, factory in factories:
        register_source(name, factory)


reset_registry()
