"""
Fault-tolerant HTTP client.

Each send takes a slot in a bounded executor, then runs through a
tenacity retry loop whose every attempt is guarded by a circuit breaker.
Only transport errors are retried; an open breaker fails immediately.
"""

from dataclasses import dataclass, field

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
)

from ...config import CircuitBreakerSettings, ExecutorSettings, RetrySettings
from ...domain.ports import HttpTransport
from .bounded_executor import BoundedExecutor
from .circuit_breaker import CircuitBreaker

logger = structlog.get_logger()

DEFAULT_CONNECT_TIMEOUT = 10.0


@dataclass(frozen=True)
class TransportOptions:
    """Everything needed to build one isolated transport."""

    name: str
    circuit_breaker: CircuitBreakerSettings = field(default_factory=CircuitBreakerSettings)
    retry: RetrySettings = field(default_factory=RetrySettings)
    executor: ExecutorSettings = field(default_factory=ExecutorSettings)
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = 30.0
    follow_redirects: bool = False
    http2: bool = True


class FaultTolerantHttpClient(HttpTransport):
    """HTTP transport with bounded concurrency, retries and a circuit breaker."""

    def __init__(
        self,
        options: TransportOptions,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Build the transport.

        Args:
            options: Breaker, retry, executor and HTTP options
            transport: Optional low-level httpx transport (tests use MockTransport)
        """
        self._options = options
        self._client = httpx.AsyncClient(
            http2=options.http2,
            timeout=httpx.Timeout(options.read_timeout, connect=options.connect_timeout),
            follow_redirects=options.follow_redirects,
            transport=transport,
        )
        self._breaker = CircuitBreaker(
            options.name,
            options.circuit_breaker,
            record_exceptions=(httpx.TransportError,),
        )
        self._executor = BoundedExecutor(options.name, options.executor)

    @property
    def name(self) -> str:
        return self._options.name

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    @property
    def executor(self) -> BoundedExecutor:
        return self._executor

    async def send(self, request: httpx.Request) -> httpx.Response:
        return await self._executor.submit(lambda: self._send_with_retry(request))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send_with_retry(self, request: httpx.Request) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._options.retry.max_attempts),
            wait=self._wait_strategy(),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=self._log_retry,
            reraise=True,
        ):
            with attempt:
                return await self._breaker.call(lambda: self._send_once(request))

    async def _send_once(self, request: httpx.Request) -> httpx.Response:
        response = await self._client.send(request)
        await response.aread()
        return response

    def _wait_strategy(self):
        retry = self._options.retry
        if retry.backoff_multiplier <= 1.0:
            return wait_fixed(retry.wait_duration)
        return wait_exponential(
            multiplier=retry.wait_duration,
            exp_base=retry.backoff_multiplier,
            max=retry.max_wait_duration,
        )

    def _log_retry(self, retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        logger.info(
            "Retrying request",
            transport=self._options.name,
            attempt=retry_state.attempt_number,
            error=str(outcome.exception()) if outcome else None,
        )
