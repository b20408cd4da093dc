"""Console logging and per-request records for the BPI rates service.

Records carry a fixed set of structured fields (``event``, ``source``,
``status`` and friends). Plain output ignores them; the JSON formatter
promotes them to top-level keys. Requests served by the price-index
blueprint are attributed to the configured document source, everything
else to ``"api"``.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import UTC, datetime
from typing import Any

from flask import Flask, current_app, g, has_request_context, request
from flask.wrappers import Response
from werkzeug.exceptions import HTTPException

REQUEST_ID_HEADER = "X-Request-ID"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Output order of the structured fields in JSON records.
STRUCTURED_FIELDS = (
    "event",
    "source",
    "status",
    "request_id",
    "method",
    "route",
    "path",
    "duration_ms",
    "fallback",
    "currencies",
    "client_ip",
    "error",
)

SOURCE_BLUEPRINTS = frozenset({"CoinDesk"})

_LOGGING_EXT = "bpi_logging"
_REQUEST_LOGGING_EXT = "bpi_request_logging"


class JSONLogFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in STRUCTURED_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def setup_logging(app: Flask) -> None:
    """Install a single root handler; Flask and werkzeug loggers propagate to it."""

    if app.extensions.get(_LOGGING_EXT):
        return

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL") or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)
    if str(app.config.get("LOG_JSON_ENABLED", "")).strip().lower() in {"1", "true", "yes", "on"}:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(app.config.get("LOG_FORMAT") or DEFAULT_LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for logger in (app.logger, logging.getLogger("werkzeug")):
        logger.handlers.clear()
        logger.setLevel(level)
        logger.propagate = True

    app.extensions[_LOGGING_EXT] = True


def init_request_logging(app: Flask) -> None:
    """Tag each request with an ``X-Request-ID`` and log its outcome once."""

    if app.extensions.get(_REQUEST_LOGGING_EXT):
        return

    app.before_request(_start_request)
    app.after_request(_log_completed_request)
    app.teardown_request(_log_failed_request)
    app.extensions[_REQUEST_LOGGING_EXT] = True


def source_log_extra(
    *,
    source: str,
    event: str,
    status: str,
    duration_ms: float | None = None,
    fallback: bool = False,
    error: str | None = None,
    currencies: int | None = None,
) -> dict[str, Any]:
    """Build structured ``extra`` fields for fetch and sync log records."""

    return _compact(
        event=event,
        source=source,
        status=status,
        duration_ms=round(duration_ms, 3) if duration_ms is not None else None,
        request_id=g.get("request_id") if has_request_context() else None,
        fallback=fallback,
        currencies=currencies,
        error=error or None,
    )


def _start_request() -> None:
    g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    g.request_start = time.perf_counter()


def _log_completed_request(response: Response) -> Response:
    request_id = g.get("request_id")
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    current_app.logger.info(
        "Request handled", extra=_request_extra("request.completed", response.status_code)
    )
    g.request_logged = True
    return response


def _log_failed_request(exc: BaseException | None) -> None:
    if exc is None or g.get("request_logged"):
        return
    status = exc.code if isinstance(exc, HTTPException) and exc.code else 500
    current_app.logger.error(
        "Request failed", extra=_request_extra("request.failed", status, error=str(exc))
    )
    g.request_logged = True


def _request_extra(event: str, status: int, error: str | None = None) -> dict[str, Any]:
    started = g.get("request_start")
    duration_ms = (time.perf_counter() - started) * 1000 if started is not None else None
    return _compact(
        event=event,
        source=_request_source(),
        status=status,
        request_id=g.get("request_id"),
        method=request.method,
        route=request.url_rule.rule if request.url_rule else request.path,
        path=request.path,
        duration_ms=round(duration_ms, 3) if duration_ms is not None else None,
        client_ip=request.remote_addr,
        error=error,
    )


def _request_source() -> str:
    if request.blueprint in SOURCE_BLUEPRINTS:
        source = current_app.extensions.get("bpi_source")
        return getattr(source, "name", "api")
    return "api"


def _compact(**fields: Any) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}
