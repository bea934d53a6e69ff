"""Validation helpers for request payloads."""

from __future__ import annotations

from app.errors import ValidationError

EXCLUDED_CURRENCIES = frozenset({"TRY", "PLN", "THB", "MXN"})
EXCLUDED_CURRENCY_MESSAGE = "Currency conversion not supported for TRY, PLN, THB, and MXN."


def is_excluded(code: str | None) -> bool:
    return code in EXCLUDED_CURRENCIES


def ensure_conversion_supported(from_currency: str, to_currency: str) -> None:
    """Reject a conversion when either side is an excluded currency.

    Codes are compared exactly; lower-case codes pass through to the upstream.
    """

    rejected = [
        name
        for name, code in (("FromCurrency", from_currency), ("ToCurrency", to_currency))
        if is_excluded(code)
    ]
    if rejected:
        raise ValidationError(
            EXCLUDED_CURRENCY_MESSAGE,
            status_code=400,
            payload={"fields": rejected},
        )
