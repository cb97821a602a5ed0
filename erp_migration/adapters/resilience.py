"""
Fault-tolerance primitives for source-system calls.

- RetryPolicy: exponential backoff with jitter
- CircuitBreaker: fail fast while the source is unhealthy
- ResilientExecutor: circuit breaker wrapping a retry policy
"""

import time
import random
import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence, Type, TypeVar, Union

from ..errors import CircuitOpenError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# An error code / message fragment, or an exception class.
ErrorMatcher = Union[str, Type[BaseException]]


class RetryPolicy:
    """Retry a call with exponential backoff (capped, +/-25% jitter)."""

    def __init__(
        self,
        max_retries: int = 3,
        base_delay_ms: float = 200,
        max_delay_ms: float = 5000,
        retryable_errors: Optional[Sequence[ErrorMatcher]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the retry policy.

        Args:
            max_retries: Retries after the first attempt
            base_delay_ms: Delay before the first retry
            max_delay_ms: Upper bound on a single delay (before jitter)
            retryable_errors: Codes or exception classes to retry; empty retries everything
            sleep: Sleep function, in seconds
        """
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self.retryable_errors = list(retryable_errors or [])
        self._sleep = sleep

    def execute(self, func: Callable[[], T]) -> T:
        """Call `func`, retrying retryable failures. Re-raises the last error."""
        for attempt in range(self.max_retries + 1):
            try:
                return func()
            except Exception as e:
                if attempt == self.max_retries or not self.is_retryable(e):
                    raise
                delay = self.calculate_delay(attempt)
                logger.info(f"Retry {attempt + 1}/{self.max_retries} after {delay}ms: {e}")
                self._sleep(delay / 1000)
        raise AssertionError("unreachable")

    def is_retryable(self, error: BaseException) -> bool:
        if not self.retryable_errors:
            return True
        code = getattr(error, "code", None)
        message = str(error)
        for matcher in self.retryable_errors:
            if isinstance(matcher, str):
                if code == matcher or matcher in message:
                    return True
            elif isinstance(error, matcher):
                return True
        return False

    def calculate_delay(self, attempt: int) -> int:
        """Delay in milliseconds before retry number `attempt + 1`."""
        exponential = self.base_delay_ms * (2 ** attempt)
        capped = min(exponential, self.max_delay_ms)
        return round(capped * (0.75 + random.random() * 0.5))


class CircuitState(str, Enum):
    """Circuit breaker state."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half-open"


class CircuitBreaker:
    """
    Closed -> open after `failure_threshold` consecutive failures.
    Open -> half-open once `reset_timeout_ms` has elapsed since the last failure.
    Half-open lets `half_open_max` trial calls through; a success closes, a failure reopens.
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        reset_timeout_ms: float = 30000,
        half_open_max: int = 1,
        on_state_change: Optional[Callable[[CircuitState, CircuitState], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.failure_threshold = failure_threshold
        self.reset_timeout_ms = reset_timeout_ms
        self.half_open_max = half_open_max
        self.on_state_change = on_state_change
        self._clock = clock

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._last_failure_time: Optional[float] = None
        self._half_open_attempts = 0

    @property
    def state(self) -> CircuitState:
        return self._state

    def get_stats(self) -> Dict[str, Any]:
        """Get breaker statistics."""
        return {
            "state": self._state.value,
            "failure_count": self._failure_count,
            "success_count": self._success_count,
            "last_failure_time": self._last_failure_time,
        }

    def reset(self) -> None:
        """Force the breaker closed and clear counters."""
        self._transition_to(CircuitState.CLOSED)
        self._failure_count = 0
        self._success_count = 0
        self._last_failure_time = None
        self._half_open_attempts = 0

    def execute(self, func: Callable[[], T]) -> T:
        """
        Call `func` through the breaker.

        Raises:
            CircuitOpenError: If the breaker refuses the call
        """
        if self._state == CircuitState.OPEN:
            if self._should_attempt_reset():
                self._transition_to(CircuitState.HALF_OPEN)
            else:
                raise CircuitOpenError(
                    f"Circuit breaker is open ({self._failure_count} failures)",
                    details=self.get_stats(),
                )

        if self._state == CircuitState.HALF_OPEN:
            if self._half_open_attempts >= self.half_open_max:
                raise CircuitOpenError(
                    "Circuit breaker is half-open, max attempts reached",
                    details=self.get_stats(),
                )
            self._half_open_attempts += 1

        try:
            result = func()
        except Exception:
            self._on_failure()
            raise
        self._on_success()
        return result

    def _should_attempt_reset(self) -> bool:
        if self._last_failure_time is None:
            return True
        return (self._clock() - self._last_failure_time) * 1000 >= self.reset_timeout_ms

    def _on_success(self) -> None:
        self._success_count += 1
        if self._state == CircuitState.HALF_OPEN:
            self._transition_to(CircuitState.CLOSED)
            self._half_open_attempts = 0
        self._failure_count = 0

    def _on_failure(self) -> None:
        self._failure_count += 1
        self._last_failure_time = self._clock()
        if self._state == CircuitState.HALF_OPEN:
            self._transition_to(CircuitState.OPEN)
            self._half_open_attempts = 0
        elif self._failure_count >= self.failure_threshold:
            self._transition_to(CircuitState.OPEN)

    def _transition_to(self, new_state: CircuitState) -> None:
        if self._state == new_state:
            return
        previous = self._state
        self._state = new_state
        logger.info(f"Circuit breaker: {previous.value} -> {new_state.value}")
        if self.on_state_change:
            self.on_state_change(previous, new_state)


class ResilientExecutor:
    """Circuit breaker wrapping a retry policy: one breaker failure per exhausted retry loop."""

    def __init__(
        self,
        retry: Optional[RetryPolicy] = None,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ):
        self.retry_policy = retry or RetryPolicy()
        self.circuit_breaker = circuit_breaker or CircuitBreaker()

    def execute(self, func: Callable[[], T]) -> T:
        return self.circuit_breaker.execute(lambda: self.retry_policy.execute(func))

    def get_stats(self) -> Dict[str, Any]:
        return {
            "circuit_breaker": self.circuit_breaker.get_stats(),
            "max_retries": self.retry_policy.max_retries,
        }

    @classmethod
    def for_database(cls, **overrides: Any) -> "ResilientExecutor":
        """Defaults for database sources: 2 retries, 500ms..5s backoff, open after 3 failures for 60s."""
        retry = RetryPolicy(
            max_retries=overrides.get("max_retries", 2),
            base_delay_ms=overrides.get("base_delay_ms", 500),
            max_delay_ms=overrides.get("max_delay_ms", 5000),
            retryable_errors=overrides.get(
                "retryable_errors",
                ["ECONNRESET", "ETIMEDOUT", "ECONNREFUSED", "ERR_INFOR_DB"],
            ),
            sleep=overrides.get("sleep", time.sleep),
        )
        breaker = CircuitBreaker(
            failure_threshold=overrides.get("failure_threshold", 3),
            reset_timeout_ms=overrides.get("reset_timeout_ms", 60000),
            half_open_max=1,
            clock=overrides.get("clock", time.monotonic),
        )
        return cls(retry=retry, circuit_breaker=breaker)

    @classmethod
    def for_api(cls, **overrides: Any) -> "ResilientExecutor":
        """Defaults for REST sources: 3 retries, 500ms..10s backoff, open after 5 failures for 30s."""
        retry = RetryPolicy(
            max_retries=overrides.get("max_retries", 3),
            base_delay_ms=overrides.get("base_delay_ms", 500),
            max_delay_ms=overrides.get("max_delay_ms", 10000),
            retryable_errors=overrides.get(
                "retryable_errors",
                ["ECONNRESET", "ETIMEDOUT", "ECONNREFUSED", "Connection", "Timeout"],
            ),
            sleep=overrides.get("sleep", time.sleep),
        )
        breaker = CircuitBreaker(
            failure_threshold=overrides.get("failure_threshold", 5),
            reset_timeout_ms=overrides.get("reset_timeout_ms", 30000),
            half_open_max=1,
            clock=overrides.get("clock", time.monotonic),
        )
        return cls(retry=retry, circuit_breaker=breaker)
