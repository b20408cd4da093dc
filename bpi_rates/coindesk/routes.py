"""Route handlers wrapping the fetch, convert and sync operations."""

from __future__ import annotations

from dataclasses import asdict

from flask import Response, current_app
from flask.views import MethodView
from sqlalchemy.exc import SQLAlchemyError

from bpi_rates.errors import APIError
from bpi_rates.providers import BaseDocumentSource
from bpi_rates.schemas import ConvertedViewSchema, SyncAcceptedSchema
from bpi_rates.services import Converter, RateSynchronizer

from . import blp


@blp.route("/raw")
class RawDocument(MethodView):
    def get(self):
        source: BaseDocumentSource = current_app.extensions["bpi_source"]
        return Response(source.fetch(), mimetype="application/json")


@blp.route("/converted")
class ConvertedDocument(MethodView):
    @blp.response(200, ConvertedViewSchema())
    def get(self):
        converter: Converter = current_app.extensions["bpi_converter"]
        view = converter.convert()
        return {
            "updated_time": view.updated_time,
            "items": [asdict(item) for item in view.items],
        }


@blp.route("/sync")
class SyncTrigger(MethodView):
    @blp.response(202, SyncAcceptedSchema())
    def post(self):
        synchronizer: RateSynchronizer = current_app.extensions["rate_synchronizer"]
        try:
            synchronizer.sync_once()
        except SQLAlchemyError as exc:
            current_app.logger.exception("Manual rate sync failed while writing to the rate store")
            raise APIError("Rate store unavailable.", status_code=503) from exc

        report = synchronizer.get_last_report()
        return {
            "message": "Sync completed.",
            "last_sync": asdict(report) if report is not None else None,
        }
