"""Shared HTTP client wrapper that retries non-success upstream responses."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests
from requests import Response, Session
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException

from app.logging import upstream_log_extra

from .retry import FixedRetryPolicy, RetryPolicy

logger = logging.getLogger(__name__)


class UpstreamUnavailableError(RuntimeError):
    """Raised when no attempt produced an HTTP response at all."""


@dataclass(frozen=True)
class HTTPClientConfig:
    """Configuration for the shared HTTP client."""

    base_url: str
    timeout: Optional[float] = None
    pool_maxsize: int = 10


def build_session(pool_maxsize: int = 10) -> Session:
    """Create a pooled session meant to live for the whole process."""

    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_maxsize, pool_maxsize=pool_maxsize)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def is_success(response: Response) -> bool:
    return 200 <= response.status_code < 300


class HTTPClient:
    """Small HTTP client that applies a retry policy to upstream GETs."""

    def __init__(
        self,
        config: HTTPClientConfig,
        session: Optional[Session] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self._config = config
        self._session = session or build_session(config.pool_maxsize)
        self._policy = retry_policy or FixedRetryPolicy()

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._policy

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Response:
        """Issue a GET, retrying until a 2xx arrives or the policy gives up.

        The last received response is returned even when it is a failure.
        Transport errors count as failed attempts; if no attempt produced a
        response, ``UpstreamUnavailableError`` is raised from the last one.
        """

        url = self._build_url(path)
        attempt = 0
        response: Optional[Response] = None
        last_error: Optional[RequestException] = None

        while True:
            attempt += 1
            start = time.perf_counter()
            try:
                response = self._session.get(url, params=params, timeout=self._config.timeout)
            except RequestException as exc:
                last_error = exc
                self._log_failure(url, attempt, start, status=None, error=str(exc))
            else:
                if is_success(response):
                    return response
                self._log_failure(url, attempt, start, status=response.status_code, error=None)

            if not self._policy.should_retry(attempt):
                break
            sleep_for = self._policy.delay(attempt)
            if sleep_for > 0:
                time.sleep(sleep_for)

        if response is None:
            raise UpstreamUnavailableError(f"Failed to fetch {url}: {last_error}") from last_error
        return response

    def close(self) -> None:
        self._session.close()

    def _log_failure(
        self,
        url: str,
        attempt: int,
        start: float,
        *,
        status: Optional[int],
        error: Optional[str],
    ) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.warning(
            "HTTP request to %s failed (attempt %s/%s): %s.",
            url,
            attempt,
            self._policy.max_attempts,
            error or f"status {status}",
            extra=upstream_log_extra(
                event="upstream.retry",
                url=url,
                attempt=attempt,
                status=status,
                duration_ms=duration_ms,
                error=error,
            ),
        )

    def _build_url(self, path: str) -> str:
        base = self._config.base_url.rstrip("/")
        suffix = path.lstrip("/")
        return f"{base}/{suffix}"
