"""Read-only routes over the synced rate table."""

from __future__ import annotations

from dataclasses import asdict

from flask.views import MethodView

from bpi_rates.errors import NotFoundError
from bpi_rates.schemas import RateRecordSchema
from bpi_rates.services import SqlRateStore

from . import blp


@blp.route("")
class RateCollection(MethodView):
    @blp.response(200, RateRecordSchema(many=True))
    def get(self):
        return [asdict(record) for record in SqlRateStore().list_sorted()]


@blp.route("/<string:code>")
class RateItem(MethodView):
    @blp.response(200, RateRecordSchema())
    def get(self, code: str):
        record = SqlRateStore().find_by_code(code)
        if record is None:
            raise NotFoundError(f"No rate stored for '{code.strip().upper()}'.")
        return asdict(record)
