"""Retry policies consulted by the shared HTTP client between attempts."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass


class RetryPolicy(ABC):
    """Decides whether another upstream attempt is made and when."""

    max_attempts: int

    def should_retry(self, attempt: int) -> bool:
        """Return True when ``attempt`` failed attempts still leave room for another."""

        return attempt < self.max_attempts

    @abstractmethod
    def delay(self, attempt: int) -> float:
        """Seconds to wait after failed ``attempt`` before the next one."""


@dataclass(frozen=True)
class FixedRetryPolicy(RetryPolicy):
    """Immediate retry up to a fixed number of total attempts."""

    max_attempts: int = 3

    def delay(self, attempt: int) -> float:
        return 0.0


@dataclass(frozen=True)
class BackoffRetryPolicy(RetryPolicy):
    """Exponential backoff with symmetric jitter."""

    max_attempts: int = 3
    backoff_seconds: float = 0.5
    backoff_jitter: float = 0.2

    def delay(self, attempt: int) -> float:
        base = self.backoff_seconds * (2 ** (attempt - 1))
        jitter = random.uniform(-self.backoff_jitter, self.backoff_jitter)
        return max(base + jitter, 0.0)


def policy_from_config(config) -> RetryPolicy:
    """Build the retry policy described by the application config."""

    max_attempts = int(config.get("UPSTREAM_MAX_RETRIES", 3))
    backoff_seconds = float(config.get("UPSTREAM_BACKOFF_SECONDS", 0) or 0)
    if backoff_seconds > 0:
        return BackoffRetryPolicy(
            max_attempts=max_attempts,
            backoff_seconds=backoff_seconds,
            backoff_jitter=float(config.get("UPSTREAM_BACKOFF_JITTER", 0.2)),
        )
    return FixedRetryPolicy(max_attempts=max_attempts)
