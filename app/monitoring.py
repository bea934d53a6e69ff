"""Timing logs for gateway operations."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from flask import current_app

from app.logging import current_request_id

LOG_EVENT_NAME = "performance.timing"
CONFIG_ENABLED_KEY = "TIMING_LOGS_ENABLED"
CONFIG_THRESHOLD_KEY = "TIMING_MIN_DURATION_MS"


def _should_log(duration_ms: float) -> bool:
    config = current_app.config
    if config.get(CONFIG_ENABLED_KEY):
        return True
    threshold = config.get(CONFIG_THRESHOLD_KEY)
    return threshold is not None and duration_ms >= float(threshold)


@contextmanager
def timed_operation(
    operation: str,
    *,
    metadata: Mapping[str, Any] | None = None,
    logger: logging.Logger | None = None,
) -> Iterator[None]:
    """Measure the wrapped block and log it when timing logs are enabled."""

    logger = logger or current_app.logger
    start = perf_counter()
    error: Exception | None = None
    try:
        yield
    except Exception as exc:
        error = exc
        raise
    finally:
        duration_ms = (perf_counter() - start) * 1000
        if _should_log(duration_ms):
            payload: dict[str, Any] = {
                "event": LOG_EVENT_NAME,
                "operation": operation,
                "duration_ms": round(duration_ms, 3),
                "status": "error" if error else "success",
                "source": "performance",
            }
            request_id = current_request_id()
            if request_id:
                payload["request_id"] = request_id
            if metadata:
                payload.update({str(key): value for key, value in metadata.items()})
            if error:
                payload["error"] = str(error)
                logger.warning("Timing captured (error)", extra=payload)
            else:
                logger.info("Timing captured", extra=payload)
