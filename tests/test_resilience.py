"""Tests for retry and circuit breaker behavior."""

import pytest

from erp_migration.adapters.resilience import (
    CircuitBreaker,
    CircuitState,
    ResilientExecutor,
    RetryPolicy,
)
from erp_migration.errors import CircuitOpenError, InforError


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class Flaky:
    """Callable that fails `failures` times before succeeding."""

    def __init__(self, failures, error=None):
        self.failures = failures
        self.calls = 0
        self.error = error or ConnectionError("ECONNRESET")

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return "ok"


class TestRetryPolicy:
    def test_retries_until_success(self):
        sleeps = []
        policy = RetryPolicy(max_retries=3, base_delay_ms=100, sleep=sleeps.append)
        func = Flaky(2)
        assert policy.execute(func) == "ok"
        assert func.calls == 3
        assert len(sleeps) == 2

    def test_gives_up_after_max_retries(self):
        policy = RetryPolicy(max_retries=2, sleep=lambda s: None)
        func = Flaky(10)
        with pytest.raises(ConnectionError):
            policy.execute(func)
        assert func.calls == 3

    def test_non_retryable_error_raises_immediately(self):
        policy = RetryPolicy(max_retries=3, retryable_errors=["ETIMEDOUT"], sleep=lambda s: None)
        func = Flaky(1, error=ValueError("bad input"))
        with pytest.raises(ValueError):
            policy.execute(func)
        assert func.calls == 1

    def test_matchers(self):
        policy = RetryPolicy(retryable_errors=["INFOR_HTTP", "Timeout", KeyError])
        assert policy.is_retryable(InforError("boom", code="INFOR_HTTP"))
        assert policy.is_retryable(RuntimeError("Read Timeout"))
        assert policy.is_retryable(KeyError("x"))
        assert not policy.is_retryable(RuntimeError("nope"))
        assert RetryPolicy().is_retryable(RuntimeError("anything"))

    def test_delay_is_capped_with_jitter(self):
        policy = RetryPolicy(base_delay_ms=200, max_delay_ms=1000)
        for _ in range(20):
            assert 150 <= policy.calculate_delay(0) <= 250
            assert 750 <= policy.calculate_delay(10) <= 1250


class TestCircuitBreaker:
    def test_opens_after_threshold(self):
        breaker = CircuitBreaker(failure_threshold=2, clock=FakeClock())
        for _ in range(2):
            with pytest.raises(ConnectionError):
                breaker.execute(Flaky(1))
        assert breaker.state == CircuitState.OPEN
        with pytest.raises(CircuitOpenError):
            breaker.execute(lambda: "never")

    def test_half_open_success_closes(self):
        clock = FakeClock()
        transitions = []
        breaker = CircuitBreaker(
            failure_threshold=1,
            reset_timeout_ms=1000,
            clock=clock,
            on_state_change=lambda old, new: transitions.append((old, new)),
        )
        with pytest.raises(ConnectionError):
            breaker.execute(Flaky(1))
        clock.now = 1.5
        assert breaker.execute(lambda: "ok") == "ok"
        assert breaker.state == CircuitState.CLOSED
        assert transitions == [
            (CircuitState.CLOSED, CircuitState.OPEN),
            (CircuitState.OPEN, CircuitState.HALF_OPEN),
            (CircuitState.HALF_OPEN, CircuitState.CLOSED),
        ]

    def test_half_open_failure_reopens(self):
        clock = FakeClock()
        breaker = CircuitBreaker(failure_threshold=1, reset_timeout_ms=1000, clock=clock)
        with pytest.raises(ConnectionError):
            breaker.execute(Flaky(1))
        clock.now = 2.0
        with pytest.raises(ConnectionError):
            breaker.execute(Flaky(1))
        assert breaker.state == CircuitState.OPEN

    def test_reset(self):
        breaker = CircuitBreaker(failure_threshold=1, clock=FakeClock())
        with pytest.raises(ConnectionError):
            breaker.execute(Flaky(1))
        breaker.reset()
        assert breaker.get_stats() == {
            "state": "closed",
            "failure_count": 0,
            "success_count": 0,
            "last_failure_time": None,
        }


class TestResilientExecutor:
    def test_exhausted_retry_loop_counts_once(self):
        executor = ResilientExecutor.for_api(sleep=lambda s: None, failure_threshold=2)
        func = Flaky(100)
        with pytest.raises(ConnectionError):
            executor.execute(func)
        assert func.calls == 4
        assert executor.circuit_breaker.get_stats()["failure_count"] == 1
        assert executor.circuit_breaker.state == CircuitState.CLOSED

    def test_database_defaults(self):
        executor = ResilientExecutor.for_database()
        assert executor.retry_policy.max_retries == 2
        assert executor.circuit_breaker.failure_threshold == 3
        assert executor.get_stats()["max_retries"] == 2
