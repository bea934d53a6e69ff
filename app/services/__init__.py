"""Service layer modules."""

from .currency_gateway import (
    ConversionRequest,
    CurrencyGateway,
    HistoricalRatesRequest,
    create_gateway,
    get_gateway,
    init_gateway,
)
from .pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, paginate_entries, paginate_rates

__all__ = [
    "ConversionRequest",
    "CurrencyGateway",
    "HistoricalRatesRequest",
    "create_gateway",
    "get_gateway",
    "init_gateway",
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "paginate_entries",
    "paginate_rates",
]
