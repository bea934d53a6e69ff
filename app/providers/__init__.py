"""Upstream client, retry policies and payload structures."""

from .frankfurter_client import FrankfurterClient, FrankfurterClientConfig, format_amount
from .http_client import (
    HTTPClient,
    HTTPClientConfig,
    UpstreamUnavailableError,
    build_session,
    is_success,
)
from .retry import BackoffRetryPolicy, FixedRetryPolicy, RetryPolicy, policy_from_config
from .schemas import ExchangeRatesResponse, UpstreamPayloadError, UpstreamRates

__all__ = [
    "BackoffRetryPolicy",
    "ExchangeRatesResponse",
    "FixedRetryPolicy",
    "FrankfurterClient",
    "FrankfurterClientConfig",
    "HTTPClient",
    "HTTPClientConfig",
    "RetryPolicy",
    "UpstreamPayloadError",
    "UpstreamRates",
    "UpstreamUnavailableError",
    "build_session",
    "format_amount",
    "is_success",
    "policy_from_config",
]
