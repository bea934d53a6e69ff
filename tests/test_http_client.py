from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from requests import Response
from requests.exceptions import ConnectionError as RequestsConnectionError

from app.providers.http_client import (
    HTTPClient,
    HTTPClientConfig,
    UpstreamUnavailableError,
    build_session,
)
from app.providers.retry import BackoffRetryPolicy, FixedRetryPolicy


def make_response(status_code: int, reason: str = "OK") -> Response:
    resp = MagicMock(spec=Response)
    resp.status_code = status_code
    resp.reason = reason
    return resp


def make_client(session, max_attempts: int = 3) -> HTTPClient:
    config = HTTPClientConfig(base_url="https://example.com/")
    return HTTPClient(config=config, session=session, retry_policy=FixedRetryPolicy(max_attempts))


def test_success_returns_immediately():
    session = MagicMock()
    ok = make_response(200)
    session.get.return_value = ok

    response = make_client(session).get("/latest", params={"base": "EUR"})

    assert response is ok
    session.get.assert_called_once_with(
        "https://example.com/latest", params={"base": "EUR"}, timeout=None
    )


def test_fails_twice_then_succeeds_in_three_calls(monkeypatch):
    session = MagicMock()
    ok = make_response(200)
    session.get.side_effect = [make_response(503, "Service Unavailable"), make_response(500), ok]
    sleep = MagicMock()
    monkeypatch.setattr("time.sleep", sleep)

    response = make_client(session).get("latest")

    assert response is ok
    assert session.get.call_count == 3
    sleep.assert_not_called()


def test_always_failing_returns_last_failure_unchanged():
    session = MagicMock()
    first = make_response(503, "Service Unavailable")
    second = make_response(502, "Bad Gateway")
    last = make_response(404, "Not Found")
    session.get.side_effect = [first, second, last]

    response = make_client(session).get("latest")

    assert response is last
    assert response.status_code == 404
    assert response.reason == "Not Found"
    assert session.get.call_count == 3


def test_client_errors_are_retried_like_server_errors():
    session = MagicMock()
    session.get.return_value = make_response(400, "Bad Request")

    response = make_client(session, max_attempts=3).get("latest")

    assert response.status_code == 400
    assert session.get.call_count == 3


def test_single_attempt_policy_makes_one_call():
    session = MagicMock()
    session.get.return_value = make_response(500)

    make_client(session, max_attempts=1).get("latest")

    session.get.assert_called_once()


def test_transport_errors_on_every_attempt_propagate():
    session = MagicMock()
    session.get.side_effect = RequestsConnectionError("connection refused")

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        make_client(session).get("latest")

    assert "connection refused" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, RequestsConnectionError)
    assert session.get.call_count == 3


def test_transport_error_then_success_is_retried():
    session = MagicMock()
    ok = make_response(200)
    session.get.side_effect = [RequestsConnectionError("reset"), ok]

    assert make_client(session).get("latest") is ok
    assert session.get.call_count == 2


def test_last_received_response_wins_over_trailing_transport_error():
    session = MagicMock()
    failure = make_response(503, "Service Unavailable")
    session.get.side_effect = [failure, RequestsConnectionError("reset"), RequestsConnectionError("reset")]

    assert make_client(session).get("latest") is failure


def test_backoff_policy_sleeps_between_attempts(monkeypatch):
    session = MagicMock()
    session.get.side_effect = [make_response(500), make_response(500), make_response(200)]
    sleeps: list[float] = []
    monkeypatch.setattr("time.sleep", sleeps.append)
    monkeypatch.setattr("random.uniform", lambda *_: 0)

    client = HTTPClient(
        HTTPClientConfig(base_url="https://example.com"),
        session=session,
        retry_policy=BackoffRetryPolicy(max_attempts=3, backoff_seconds=0.5),
    )
    response = client.get("latest")

    assert response.status_code == 200
    assert sleeps == [0.5, 1.0]


def test_failed_attempts_are_logged(caplog):
    session = MagicMock()
    session.get.return_value = make_response(503)

    with caplog.at_level("WARNING", logger="app.providers.http_client"):
        make_client(session, max_attempts=2).get("latest")

    records = [record for record in caplog.records if getattr(record, "event", None) == "upstream.retry"]
    assert [record.attempt for record in records] == [1, 2]
    assert all(record.status == 503 for record in records)


def test_build_session_mounts_pooled_adapter():
    session = build_session(pool_maxsize=4)

    adapter = session.get_adapter("https://api.frankfurter.app/latest")

    assert adapter._pool_maxsize == 4
    session.close()
