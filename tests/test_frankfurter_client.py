from __future__ import annotations

from datetime import date

import pytest
import responses
from responses import matchers

from app.providers.frankfurter_client import (
    FrankfurterClient,
    FrankfurterClientConfig,
    format_amount,
)
from app.providers.retry import BackoffRetryPolicy, FixedRetryPolicy, policy_from_config


@pytest.fixture()
def client():
    config = FrankfurterClientConfig(base_url="https://api.frankfurter.app", timeout=2)
    frankfurter = FrankfurterClient(config, retry_policy=FixedRetryPolicy(max_attempts=3))
    yield frankfurter
    frankfurter.close()


@responses.activate
def test_latest_sends_base_query(client):
    responses.add(
        responses.GET,
        "https://api.frankfurter.app/latest",
        json={"amount": 1.0, "base": "EUR", "rates": {"USD": 1.1}},
        match=[matchers.query_param_matcher({"base": "EUR"})],
    )

    response = client.latest("EUR")

    assert response.status_code == 200
    assert response.json()["rates"]["USD"] == 1.1


@responses.activate
def test_convert_sends_amount_and_pair(client):
    responses.add(
        responses.GET,
        "https://api.frankfurter.app/latest",
        json={"amount": 100.0, "base": "EUR", "rates": {"USD": 110.0}},
        match=[matchers.query_param_matcher({"amount": "100", "from": "EUR", "to": "USD"})],
    )

    response = client.convert(100, "EUR", "USD")

    assert response.json()["rates"]["USD"] == 110.0


@responses.activate
def test_history_builds_date_range_path(client):
    responses.add(
        responses.GET,
        "https://api.frankfurter.app/2020-01-01..2020-01-31",
        json={"amount": 1.0, "base": "EUR", "rates": {}},
        match=[matchers.query_param_matcher({"to": "USD"})],
    )

    response = client.history(date(2020, 1, 1), date(2020, 1, 31), "USD")

    assert response.status_code == 200
    assert len(responses.calls) == 1


@responses.activate
def test_failed_upstream_is_retried_three_times_and_returned(client):
    responses.add(responses.GET, "https://api.frankfurter.app/latest", status=503)

    response = client.latest("EUR")

    assert response.status_code == 503
    assert len(responses.calls) == 3


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(100, "100"), (100.0, "100"), (12.5, "12.5"), (0.1, "0.1")],
)
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected


def test_from_config_builds_policy_and_timeout():
    config = {
        "FRANKFURTER_API_BASE_URL": "https://example.test",
        "REQUEST_TIMEOUT_SECONDS": None,
        "UPSTREAM_MAX_RETRIES": 5,
        "UPSTREAM_BACKOFF_SECONDS": 0,
    }
    frankfurter = FrankfurterClient.from_config(config)

    policy = frankfurter._client.retry_policy  # type: ignore[attr-defined]
    assert policy == FixedRetryPolicy(max_attempts=5)
    frankfurter.close()


def test_policy_from_config_selects_backoff_when_configured():
    policy = policy_from_config(
        {"UPSTREAM_MAX_RETRIES": 4, "UPSTREAM_BACKOFF_SECONDS": 0.25, "UPSTREAM_BACKOFF_JITTER": 0}
    )

    assert isinstance(policy, BackoffRetryPolicy)
    assert policy.max_attempts == 4
    assert policy.delay(1) == 0.25
    assert policy.delay(3) == 1.0
