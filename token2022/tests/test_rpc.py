"""RPC back-off transport tests."""

import httpx
import pytest

from token2022.rpc import MAX_DELAY, _BackoffTransport


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    recorded: list[float] = []
    monkeypatch.setattr("token2022.rpc.time.sleep", recorded.append)
    return recorded


def _transport(
    responses: list[httpx.Response], max_retries: int = 3
) -> tuple[_BackoffTransport, list[int]]:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        response = responses[min(len(calls), len(responses) - 1)]
        calls.append(response.status_code)
        return httpx.Response(response.status_code, headers=response.headers)

    return _BackoffTransport(httpx.MockTransport(handler), max_retries=max_retries, backoff=2.0), calls


def _get(transport: _BackoffTransport) -> int:
    with httpx.Client(transport=transport) as client:
        return client.get("http://rpc.test/").status_code


def test_retries_throttled_until_success(sleeps):
    transport, calls = _transport([httpx.Response(429), httpx.Response(503), httpx.Response(200)])
    assert _get(transport) == 200
    assert calls == [429, 503, 200]
    assert sleeps == [2.0, 4.0]


def test_honors_retry_after(sleeps):
    transport, _ = _transport([httpx.Response(429, headers={"Retry-After": "7"}), httpx.Response(200)])
    assert _get(transport) == 200
    assert sleeps == [7.0]


def test_retry_after_capped(sleeps):
    transport, _ = _transport([httpx.Response(429, headers={"Retry-After": "3600"}), httpx.Response(200)])
    _get(transport)
    assert sleeps == [MAX_DELAY]


def test_gives_up_after_max_retries(sleeps):
    transport, calls = _transport([httpx.Response(429)], max_retries=2)
    assert _get(transport) == 429
    assert len(calls) == 3
    assert len(sleeps) == 2


def test_other_errors_not_retried(sleeps):
    transport, calls = _transport([httpx.Response(500), httpx.Response(200)])
    assert _get(transport) == 500
    assert calls == [500]
    assert sleeps == []
