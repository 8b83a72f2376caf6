"""Solana RPC client factory.

Public endpoints throttle ``getProgramAccounts`` and bursts of
``getAccountInfo`` hard, answering 429 or 503. The transport below waits
and resends those requests, honoring ``Retry-After`` when the node sends it.
"""

import time

import httpx
from loguru import logger
from solana.rpc.api import Client as SolanaHTTPClient  # type: ignore[import-untyped]
from solana.rpc.commitment import Commitment, Confirmed  # type: ignore[import-untyped]

RETRY_STATUSES = frozenset({429, 503})
DEFAULT_MAX_RETRIES = 5
MAX_DELAY = 30.0


class _BackoffTransport(httpx.BaseTransport):
    def __init__(
        self,
        wrapped: httpx.BaseTransport,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff: float = 2.0,
        max_delay: float = MAX_DELAY,
    ) -> None:
        self._wrapped = wrapped
        self._max_retries = max_retries
        self._backoff = backoff
        self._max_delay = max_delay

    def _delay(self, response: httpx.Response, attempt: int) -> float:
        retry_after = response.headers.get("retry-after", "")
        if retry_after.isdigit():
            return min(float(retry_after), self._max_delay)
        return min((attempt + 1) * self._backoff, self._max_delay)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            response = self._wrapped.handle_request(request)
            if response.status_code not in RETRY_STATUSES or attempt >= self._max_retries:
                return response
            delay = self._delay(response, attempt)
            response.close()
            attempt += 1
            logger.warning(
                "{} answered {}, attempt {}/{} in {}s",
                request.url.host,
                response.status_code,
                attempt,
                self._max_retries,
                delay,
            )
            time.sleep(delay)

    def close(self) -> None:
        self._wrapped.close()


def new_rpc_client(
    url: str,
    commitment: Commitment = Confirmed,
    timeout: float = 30,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> SolanaHTTPClient:
    """Create a Solana RPC client reading at ``commitment``.

    Throttled requests are retried up to ``max_retries`` times before the
    last response is handed back to solana-py.
    """
    client = SolanaHTTPClient(url, commitment=commitment, timeout=timeout)
    client._provider.session = httpx.Client(
        timeout=timeout,
        transport=_BackoffTransport(httpx.HTTPTransport(), max_retries=max_retries),
    )
    return client
