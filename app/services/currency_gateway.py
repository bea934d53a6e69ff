"""Request gateway forwarding currency queries to Frankfurter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from flask import Flask
from requests import Response

from app.errors import UpstreamError
from app.providers.frankfurter_client import FrankfurterClient
from app.providers.http_client import is_success
from app.providers.schemas import ExchangeRatesResponse, UpstreamRates
from app.validation import ensure_conversion_supported

from .pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, paginate_rates

logger = logging.getLogger(__name__)

EXTENSION_KEY = "currency_gateway"


@dataclass(frozen=True)
class ConversionRequest:
    from_currency: str
    to_currency: str
    amount: float


@dataclass(frozen=True)
class HistoricalRatesRequest:
    base: str
    start_date: date
    end_date: date


class CurrencyGateway:
    """Validates inbound queries, forwards them upstream and shapes the result.

    Non-success upstream responses surface as ``UpstreamError`` carrying the
    upstream status code and reason phrase unchanged.
    """

    def __init__(self, client: FrankfurterClient) -> None:
        self._client = client

    def get_latest_rates(self, base_currency: str) -> Any:
        response = self._client.latest(base_currency)
        return self._relay(response)

    def convert_currency(self, conversion: ConversionRequest) -> Any:
        ensure_conversion_supported(conversion.from_currency, conversion.to_currency)
        response = self._client.convert(
            conversion.amount,
            conversion.from_currency,
            conversion.to_currency,
        )
        return self._relay(response)

    def get_historical_rates(
        self,
        query: HistoricalRatesRequest,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ExchangeRatesResponse:
        response = self._client.history(query.start_date, query.end_date, query.base)
        if not is_success(response):
            raise UpstreamError.from_response(response)

        upstream = UpstreamRates.from_payload(response.json())
        page_rates = paginate_rates(upstream.rate_data, page, page_size)
        logger.debug(
            "Paginated %s of %s dated entries (page=%s, page_size=%s)",
            len(page_rates),
            len(upstream.rate_data),
            page,
            page_size,
        )
        return ExchangeRatesResponse.from_upstream(upstream, page_rates)

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _relay(response: Response) -> Any:
        if not is_success(response):
            raise UpstreamError.from_response(response)
        return response.json()


def create_gateway(config) -> CurrencyGateway:
    return CurrencyGateway(FrankfurterClient.from_config(config))


def init_gateway(app: Flask) -> CurrencyGateway:
    """Attach a gateway with its process-wide pooled session to the app."""

    gateway = create_gateway(app.config)
    app.extensions[EXTENSION_KEY] = gateway
    return gateway


def get_gateway(app: Flask) -> CurrencyGateway:
    try:
        return app.extensions[EXTENSION_KEY]
    except KeyError as exc:
        raise RuntimeError("Currency gateway has not been initialised") from exc
