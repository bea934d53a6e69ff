"""Logging setup, request correlation and structured JSON formatting."""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import UTC, datetime
from typing import Any

from flask import Flask, Response, g, has_request_context, request
from werkzeug.exceptions import HTTPException

REQUEST_ID_HEADER = "X-Request-ID"

LOGGING_CONFIG_FLAG = "_logging_configured"
REQUEST_LOGGING_FLAG = "_request_logging_configured"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONLogFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info

        for key, value in vars(record).items():
            if key in RESERVED_ATTRS or key.startswith("_"):
                continue
            payload[key] = value

        return json.dumps(payload, default=str, separators=(",", ":"))


def setup_logging(app: Flask) -> None:
    """Install a single stream handler on the root logger."""

    if app.config.get(LOGGING_CONFIG_FLAG):
        return

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)
    if app.config.get("LOG_JSON_ENABLED"):
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                app.config.get("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")
            )
        )

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    # Flask and werkzeug loggers defer to the root handler.
    logging.getLogger("werkzeug").handlers = []
    app.logger.handlers = []
    app.logger.setLevel(level)
    app.logger.propagate = True

    app.config[LOGGING_CONFIG_FLAG] = True


def init_request_logging(app: Flask) -> None:
    """Log each request once with a correlation id and its duration."""

    if app.config.get(REQUEST_LOGGING_FLAG):
        return

    @app.before_request
    def _assign_request_id() -> None:
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_start = time.perf_counter()
        g.request_logged = False

    @app.after_request
    def _log_completed(response: Response) -> Response:
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        app.logger.info(
            "Request handled",
            extra=_request_extra("request.completed", status=response.status_code),
        )
        g.request_logged = True
        return response

    @app.teardown_request
    def _log_failed(exc: BaseException | None) -> None:
        if exc is None or getattr(g, "request_logged", False):
            return
        status = exc.code if isinstance(exc, HTTPException) and exc.code else 500
        app.logger.error(
            "Request failed",
            extra=_request_extra("request.failed", status=status, error=str(exc)),
        )
        g.request_logged = True

    app.config[REQUEST_LOGGING_FLAG] = True


def _request_extra(event: str, *, status: int, error: str | None = None) -> dict[str, Any]:
    start = getattr(g, "request_start", None)
    duration_ms = (time.perf_counter() - start) * 1000 if start is not None else None
    payload: dict[str, Any] = {
        "event": event,
        "route": request.url_rule.rule if request.url_rule else request.path,
        "method": request.method,
        "path": request.path,
        "status": status,
        "duration_ms": round(duration_ms, 3) if duration_ms is not None else None,
        "request_id": getattr(g, "request_id", None),
        "client_ip": request.remote_addr,
        "source": "api",
        "error": error,
    }
    return {key: value for key, value in payload.items() if value is not None}


def upstream_log_extra(
    *,
    event: str,
    url: str,
    attempt: int,
    status: int | None,
    duration_ms: float | None,
    error: str | None = None,
) -> dict[str, Any]:
    """Structured fields describing a single upstream attempt."""

    payload: dict[str, Any] = {
        "event": event,
        "url": url,
        "attempt": attempt,
        "status": status,
        "duration_ms": round(duration_ms, 3) if duration_ms is not None else None,
        "request_id": current_request_id(),
        "source": "upstream",
        "error": error,
    }
    return {key: value for key, value in payload.items() if value is not None}


def current_request_id() -> str | None:
    if not has_request_context():
        return None
    return getattr(g, "request_id", None)
