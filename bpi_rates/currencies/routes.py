"""Route handlers for reference currency CRUD."""

from __future__ import annotations

from dataclasses import asdict

from flask import url_for
from flask.views import MethodView

from bpi_rates.services import (
    CurrencyCreateData,
    CurrencyUpdateData,
    create_currency,
    delete_currency,
    get_currency,
    list_currencies,
    update_currency,
)

from . import blp
from .schemas import CurrencyCreateSchema, CurrencyResponseSchema, CurrencyUpdateSchema


@blp.route("")
class CurrencyCollection(MethodView):
    @blp.response(200, CurrencyResponseSchema(many=True))
    def get(self):
        return [asdict(dto) for dto in list_currencies()]

    @blp.arguments(CurrencyCreateSchema)
    @blp.response(201, CurrencyResponseSchema())
    def post(self, payload):
        dto = create_currency(
            CurrencyCreateData(code=payload["code"], localized_name=payload["localized_name"])
        )
        headers = {"Location": url_for("Currencies.CurrencyItem", code=dto.code, _external=False)}
        return asdict(dto), 201, headers


@blp.route("/<string:code>")
class CurrencyItem(MethodView):
    @blp.response(200, CurrencyResponseSchema())
    def get(self, code: str):
        return asdict(get_currency(code))

    @blp.arguments(CurrencyUpdateSchema)
    @blp.response(200, CurrencyResponseSchema())
    def put(self, payload, code: str):
        dto = update_currency(code, CurrencyUpdateData(localized_name=payload["localized_name"]))
        return asdict(dto)

    @blp.response(204)
    def delete(self, code: str):
        delete_currency(code)
        return None
