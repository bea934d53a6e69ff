"""Schemas shared across blueprints."""

from __future__ import annotations

from marshmallow import Schema, fields


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()
    upstream = fields.String()


class ErrorMessageSchema(Schema):
    message = fields.String(required=True)
    rejected_fields = fields.List(fields.String(), data_key="fields")
    field_errors = fields.Dict(keys=fields.String(), values=fields.List(fields.String()))
