from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date

from requests import Response

from app.providers.http_client import HTTPClient, HTTPClientConfig
from app.providers.retry import RetryPolicy, policy_from_config

logger = logging.getLogger(__name__)


def format_amount(amount: float | int) -> str:
    """Render an amount the way the upstream expects it in a query string."""

    value = float(amount)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class FrankfurterClientConfig:
    """Configuration parameters for the Frankfurter client."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        pool_maxsize: int = 10,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.pool_maxsize = pool_maxsize


class FrankfurterClient:
    """Builds Frankfurter queries and sends them through the shared wrapper."""

    def __init__(
        self,
        config: FrankfurterClientConfig,
        client: HTTPClient | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._config = config
        self._client = client or HTTPClient(
            HTTPClientConfig(
                base_url=config.base_url,
                timeout=config.timeout,
                pool_maxsize=config.pool_maxsize,
            ),
            retry_policy=retry_policy,
        )

    @classmethod
    def from_config(cls, config: Mapping[str, object]) -> FrankfurterClient:
        timeout = config.get("REQUEST_TIMEOUT_SECONDS")
        client_config = FrankfurterClientConfig(
            base_url=str(config.get("FRANKFURTER_API_BASE_URL")),
            timeout=float(timeout) if timeout is not None else None,
            pool_maxsize=int(config.get("UPSTREAM_POOL_MAXSIZE", 10)),
        )
        return cls(client_config, retry_policy=policy_from_config(config))

    def latest(self, base: str) -> Response:
        return self._client.get("latest", params={"base": base})

    def convert(self, amount: float | int, from_currency: str, to_currency: str) -> Response:
        params = {
            "amount": format_amount(amount),
            "from": from_currency,
            "to": to_currency,
        }
        return self._client.get("latest", params=params)

    def history(self, start: date, end: date, to: str) -> Response:
        path = f"{start:%Y-%m-%d}..{end:%Y-%m-%d}"
        logger.debug("Requesting historical rates %s to=%s", path, to)
        return self._client.get(path, params={"to": to})

    def close(self) -> None:
        self._client.close()
