"""Route handlers for latest, conversion and historical rate queries."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from app.monitoring import timed_operation
from app.schemas import ErrorMessageSchema
from app.services import (
    DEFAULT_PAGE_SIZE,
    ConversionRequest,
    HistoricalRatesRequest,
    get_gateway,
)

from . import blp
from .schemas import (
    ConversionRequestSchema,
    ExchangeRatesResponseSchema,
    HistoricalRatesQuerySchema,
)


@blp.route("/latest/<string:base_currency>")
class LatestRates(MethodView):
    @blp.response(200)
    @blp.alt_response(502, schema=ErrorMessageSchema, description="Upstream failure")
    def get(self, base_currency: str):
        """Latest rates for a base currency, relayed verbatim."""

        with timed_operation("currency.latest", metadata={"base": base_currency}):
            return get_gateway(current_app).get_latest_rates(base_currency)


@blp.route("/convert")
class ConvertCurrency(MethodView):
    @blp.arguments(ConversionRequestSchema)
    @blp.response(200)
    @blp.alt_response(400, schema=ErrorMessageSchema, description="Excluded currency")
    def get(self, payload):
        """Convert an amount between two currencies through the upstream API."""

        conversion = ConversionRequest(
            from_currency=payload["from_currency"],
            to_currency=payload["to_currency"],
            amount=payload["amount"],
        )
        metadata = {"from": conversion.from_currency, "to": conversion.to_currency}
        with timed_operation("currency.convert", metadata=metadata):
            return get_gateway(current_app).convert_currency(conversion)


@blp.route("/historical")
class HistoricalRates(MethodView):
    @blp.arguments(HistoricalRatesQuerySchema, location="query")
    @blp.response(200, ExchangeRatesResponseSchema())
    def get(self, query_params):
        """Historical rates for a date range, one page of dated entries at a time."""

        query = HistoricalRatesRequest(
            base=query_params["base"],
            start_date=query_params["start_date"],
            end_date=query_params["end_date"],
        )
        page_size = query_params.get("page_size")
        if page_size is None:
            page_size = int(current_app.config.get("HISTORICAL_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE))

        metadata = {"base": query.base, "page": query_params["page"], "page_size": page_size}
        with timed_operation("currency.historical", metadata=metadata):
            return get_gateway(current_app).get_historical_rates(
                query,
                page=query_params["page"],
                page_size=page_size,
            )
