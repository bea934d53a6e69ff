"""Marshmallow schemas for currency relay endpoints."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class ConversionRequestSchema(Schema):
    """JSON body of a conversion request."""

    class Meta:
        unknown = EXCLUDE

    from_currency = fields.String(required=True, data_key="FromCurrency")
    to_currency = fields.String(required=True, data_key="ToCurrency")
    amount = fields.Float(required=True, allow_nan=False, data_key="Amount")


class HistoricalRatesQuerySchema(Schema):
    base = fields.String(required=True, data_key="Base")
    start_date = fields.Date(required=True, data_key="StartDate")
    end_date = fields.Date(required=True, data_key="EndDate")
    # Out-of-range windows are not rejected; they page to an empty result.
    page = fields.Integer(load_default=1, data_key="page")
    page_size = fields.Integer(load_default=None, data_key="pageSize")


class ExchangeRatesResponseSchema(Schema):
    amount = fields.Float(data_key="Amount")
    base = fields.String(data_key="Base")
    start_date = fields.String(allow_none=True, data_key="StartDate")
    end_date = fields.String(allow_none=True, data_key="EndDate")
    rates = fields.Dict(
        keys=fields.String(),
        values=fields.Dict(keys=fields.String(), values=fields.Float()),
        data_key="Rates",
    )
