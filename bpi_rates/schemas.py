"""Schemas for API responses."""

from __future__ import annotations

from marshmallow import Schema, fields


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()


class SyncReportSchema(Schema):
    status = fields.String(required=True)
    started_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(allow_none=True)
    currencies = fields.List(fields.String(), required=True)
    reason = fields.String(allow_none=True)


class HealthSyncSchema(Schema):
    status = fields.String(required=True)
    source = fields.String(allow_none=True)
    scheduler_running = fields.Boolean(required=True)
    last_sync = fields.Nested(SyncReportSchema, allow_none=True)


class ConvertedItemSchema(Schema):
    code = fields.String(required=True)
    localized_name = fields.String(required=True)
    rate = fields.Decimal(required=True, as_string=True)


class ConvertedViewSchema(Schema):
    updated_time = fields.String(required=True)
    items = fields.List(fields.Nested(ConvertedItemSchema), required=True)


class RateRecordSchema(Schema):
    code = fields.String(required=True)
    rate = fields.Decimal(required=True, as_string=True)
    updated_at = fields.DateTime(required=True)


class SyncAcceptedSchema(Schema):
    message = fields.String(required=True)
    last_sync = fields.Nested(SyncReportSchema, allow_none=True)


class ErrorMessageSchema(Schema):
    message = fields.String(required=True)
