"""Dataclasses describing Frankfurter payloads and the reshaped responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

RateMap = Dict[str, float]
DatedRates = Tuple[str, RateMap]


class UpstreamPayloadError(ValueError):
    """Raised when an upstream body does not have the expected shape."""


def _normalize_rate_map(date_key: str, rates: Any) -> RateMap:
    if not isinstance(rates, Mapping):
        raise UpstreamPayloadError(f"Rates for {date_key!r} must be an object")
    try:
        return {str(code): float(value) for code, value in rates.items()}
    except (TypeError, ValueError) as exc:
        raise UpstreamPayloadError(f"Rates for {date_key!r} must be numbers") from exc


@dataclass(frozen=True)
class UpstreamRates:
    """Historical rates exactly as delivered, with dated entries kept in wire order."""

    amount: float
    base: str
    start_date: str | None
    end_date: str | None
    rate_data: Tuple[DatedRates, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Any) -> UpstreamRates:
        if not isinstance(payload, Mapping):
            raise UpstreamPayloadError("Upstream response must be a JSON object")
        if "rates" not in payload:
            raise UpstreamPayloadError("Upstream response missing 'rates' field")

        raw_rates = payload["rates"]
        if not isinstance(raw_rates, Mapping):
            raise UpstreamPayloadError("Upstream 'rates' field must be an object")

        entries = tuple(
            (str(date_key), _normalize_rate_map(date_key, rates))
            for date_key, rates in raw_rates.items()
        )
        try:
            amount = float(payload.get("amount", 0))
        except (TypeError, ValueError) as exc:
            raise UpstreamPayloadError("Upstream 'amount' field must be a number") from exc

        return cls(
            amount=amount,
            base=str(payload.get("base", "")),
            start_date=payload.get("start_date"),
            end_date=payload.get("end_date"),
            rate_data=entries,
        )


@dataclass(frozen=True)
class ExchangeRatesResponse:
    """Paginated envelope returned for historical queries."""

    amount: float
    base: str
    start_date: str | None
    end_date: str | None
    rates: Dict[str, RateMap] = field(default_factory=dict)

    @classmethod
    def from_upstream(cls, upstream: UpstreamRates, rates: Mapping[str, RateMap]) -> ExchangeRatesResponse:
        return cls(
            amount=upstream.amount,
            base=upstream.base,
            start_date=upstream.start_date,
            end_date=upstream.end_date,
            rates=dict(rates),
        )
