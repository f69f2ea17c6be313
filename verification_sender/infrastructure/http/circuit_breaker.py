"""
Count-based circuit breaker.

CLOSED keeps a ring of the last N call outcomes. Once the ring is full
and the failure rate reaches the threshold the breaker trips OPEN and
rejects calls without touching the network. After the wait duration it
moves to HALF_OPEN, lets a smaller ring of trial calls through, and
re-evaluates: back to CLOSED below the threshold, OPEN again otherwise.
"""

import time
from collections import deque
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TypeVar

import structlog

from ...config import CircuitBreakerSettings
from ...domain.errors import CircuitOpenError

logger = structlog.get_logger()

T = TypeVar("T")


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """
    Circuit breaker guarding one external dependency.

    Only exceptions of the recorded types count as failures; any value
    returned by the guarded call counts as a success.
    """

    def __init__(
        self,
        name: str,
        settings: CircuitBreakerSettings,
        record_exceptions: tuple[type[BaseException], ...] = (Exception,),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._name = name
        self._settings = settings
        self._record_exceptions = record_exceptions
        self._clock = clock
        self._state = CircuitState.CLOSED
        self._opened_at = 0.0
        self._outcomes: deque[bool] = deque(maxlen=settings.ring_buffer_size_in_closed_state)
        self._half_open_permits = 0
        # Bumped on every transition; outcomes from an older generation are dropped
        self._generation = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> CircuitState:
        if self._state is CircuitState.OPEN and self._wait_elapsed():
            self._transition(CircuitState.HALF_OPEN)
        return self._state

    def failure_rate(self) -> float:
        """Failure percentage of the current ring, or -1 while it is not full."""
        if len(self._outcomes) < (self._outcomes.maxlen or 0):
            return -1.0
        failures = sum(1 for ok in self._outcomes if not ok)
        return failures * 100.0 / len(self._outcomes)

    async def call(self, func: Callable[[], Awaitable[T]]) -> T:
        """
        Run a call through the breaker.

        Raises:
            CircuitOpenError: If the breaker does not permit the call
        """
        generation = self._acquire_permission()
        try:
            result = await func()
        except self._record_exceptions:
            self._record(False, generation)
            raise
        except BaseException:
            self._release_permission(generation)
            raise
        self._record(True, generation)
        return result

    def _acquire_permission(self) -> int:
        state = self.state
        if state is CircuitState.OPEN:
            raise CircuitOpenError(self._name)
        if state is CircuitState.HALF_OPEN:
            if self._half_open_permits <= 0:
                raise CircuitOpenError(self._name)
            self._half_open_permits -= 1
        return self._generation

    def _release_permission(self, generation: int) -> None:
        """Hand back a trial permit for a call that ended without an outcome."""
        if generation == self._generation and self._state is CircuitState.HALF_OPEN:
            self._half_open_permits += 1

    def _record(self, ok: bool, generation: int) -> None:
        if generation != self._generation:
            # Admitted under an earlier state
            return

        self._outcomes.append(ok)
        rate = self.failure_rate()
        if rate < 0:
            return

        if rate >= self._settings.failure_rate_threshold:
            self._transition(CircuitState.OPEN)
        elif self._state is CircuitState.HALF_OPEN:
            self._transition(CircuitState.CLOSED)

    def _wait_elapsed(self) -> bool:
        return self._clock() - self._opened_at >= self._settings.wait_duration_in_open_state

    def _transition(self, new_state: CircuitState) -> None:
        old_state = self._state
        self._state = new_state
        self._generation += 1

        if new_state is CircuitState.OPEN:
            self._opened_at = self._clock()
            logger.warning(
                "Circuit breaker opened",
                breaker=self._name,
                from_state=old_state.value,
                failure_rate=self.failure_rate(),
            )
        elif new_state is CircuitState.HALF_OPEN:
            size = self._settings.ring_buffer_size_in_half_open_state
            self._outcomes = deque(maxlen=size)
            self._half_open_permits = size
            logger.info("Circuit breaker half-open", breaker=self._name)
        else:
            self._outcomes = deque(maxlen=self._settings.ring_buffer_size_in_closed_state)
            logger.info("Circuit breaker closed", breaker=self._name)
