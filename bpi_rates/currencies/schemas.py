"""Marshmallow schemas for reference currency endpoints."""

from __future__ import annotations

from marshmallow import Schema, fields
from marshmallow.validate import Length, Regexp

CODE_VALIDATORS = [
    Length(min=1, max=10),
    Regexp(r"^\s*[A-Za-z]+\s*$", error="code may only contain letters"),
]


class CurrencyCreateSchema(Schema):
    code = fields.String(required=True, validate=CODE_VALIDATORS)
    localized_name = fields.String(required=True, validate=Length(min=1, max=50))


class CurrencyUpdateSchema(Schema):
    localized_name = fields.String(required=True, validate=Length(min=1, max=50))


class CurrencyResponseSchema(Schema):
    """Serialized reference currency."""

    code = fields.String(required=True)
    localized_name = fields.String(required=True)
