"""Application configuration classes."""

from __future__ import annotations

import os


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return float(value)


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "currency-converter-api"
    FRANKFURTER_API_BASE_URL = _get_env("FRANKFURTER_API_BASE_URL", "https://api.frankfurter.app")
    UPSTREAM_MAX_RETRIES = int(_get_env("UPSTREAM_MAX_RETRIES", "3"))
    UPSTREAM_BACKOFF_SECONDS = float(_get_env("UPSTREAM_BACKOFF_SECONDS", "0"))
    UPSTREAM_BACKOFF_JITTER = float(_get_env("UPSTREAM_BACKOFF_JITTER", "0.2"))
    UPSTREAM_POOL_MAXSIZE = int(_get_env("UPSTREAM_POOL_MAXSIZE", "10"))
    # Unset keeps the transport default (no per-attempt timeout).
    REQUEST_TIMEOUT_SECONDS: float | None = _optional_float("REQUEST_TIMEOUT_SECONDS")
    HISTORICAL_DEFAULT_PAGE_SIZE = int(_get_env("HISTORICAL_DEFAULT_PAGE_SIZE", "10"))
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")
    TIMING_LOGS_ENABLED = _get_env("TIMING_LOGS_ENABLED", "false").lower() == "true"
    TIMING_MIN_DURATION_MS = _optional_float("TIMING_MIN_DURATION_MS")


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test suite."""

    DEBUG = False
    TESTING = True
    FRANKFURTER_API_BASE_URL = "https://api.frankfurter.app"
    UPSTREAM_MAX_RETRIES = 3
    UPSTREAM_BACKOFF_SECONDS = 0.0
    REQUEST_TIMEOUT_SECONDS = None


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
        ValueError: If upstream settings are out of range.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    _validate_upstream(config_cls)
    return config_cls


def _validate_upstream(config_cls: type[BaseConfig]) -> None:
    if config_cls.UPSTREAM_MAX_RETRIES < 1:
        raise ValueError(
            f"UPSTREAM_MAX_RETRIES must be at least 1, got {config_cls.UPSTREAM_MAX_RETRIES}"
        )
    if config_cls.UPSTREAM_BACKOFF_SECONDS < 0:
        raise ValueError("UPSTREAM_BACKOFF_SECONDS cannot be negative")
    if config_cls.UPSTREAM_POOL_MAXSIZE < 1:
        raise ValueError("UPSTREAM_POOL_MAXSIZE must be at least 1")
    timeout = config_cls.REQUEST_TIMEOUT_SECONDS
    if timeout is not None and timeout <= 0:
        raise ValueError("REQUEST_TIMEOUT_SECONDS must be positive when set")
