# backend/tests/services/test_circuit_breaker.py
"""
Tests for the circuit breaker implementation.
"""

import pytest

from finance_tracker.services.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpen,
    CircuitState,
)
from finance_tracker.services.exceptions import TickerNotFoundError


def fail(breaker: CircuitBreaker, exc: Exception | None = None) -> None:
    with pytest.raises(type(exc) if exc else RuntimeError):
        with breaker:
            raise exc or RuntimeError("boom")


class TestCircuitBreakerInit:
    """Tests for circuit breaker initialization."""

    def test_default_values(self):
        breaker = CircuitBreaker(name="test")

        assert breaker.name == "test"
        assert breaker.failure_threshold == 5
        assert breaker.recovery_timeout == 60.0
        assert breaker.state == CircuitState.CLOSED

    def test_invalid_failure_threshold(self):
        with pytest.raises(ValueError, match="failure_threshold must be at least 1"):
            CircuitBreaker(name="test", failure_threshold=0)

    def test_invalid_recovery_timeout(self):
        with pytest.raises(ValueError, match="recovery_timeout cannot be negative"):
            CircuitBreaker(name="test", recovery_timeout=-1)


class TestCircuitBreakerClosedState:
    """Tests for circuit breaker in closed state."""

    def test_allows_calls_when_closed(self):
        breaker = CircuitBreaker(name="test", failure_threshold=3)
        call_count = 0

        for _ in range(10):
            with breaker:
                call_count += 1

        assert call_count == 10
        assert breaker.state == CircuitState.CLOSED

    def test_opens_after_consecutive_failures(self, clock):
        breaker = CircuitBreaker(name="test", failure_threshold=3, clock=clock)

        for _ in range(3):
            fail(breaker)

        assert breaker.state == CircuitState.OPEN
        assert breaker.is_open

    def test_success_resets_failure_count(self, clock):
        breaker = CircuitBreaker(name="test", failure_threshold=3, clock=clock)

        fail(breaker)
        fail(breaker)
        with breaker:
            pass
        fail(breaker)
        fail(breaker)

        assert breaker.state == CircuitState.CLOSED

    def test_excluded_exceptions_do_not_count(self, clock):
        breaker = CircuitBreaker(
            name="test",
            failure_threshold=1,
            excluded_exceptions=(TickerNotFoundError,),
            clock=clock,
        )

        fail(breaker, TickerNotFoundError("NOPE", "test"))

        assert breaker.state == CircuitState.CLOSED

    def test_exceptions_propagate(self):
        breaker = CircuitBreaker(name="test")

        with pytest.raises(KeyError):
            with breaker:
                raise KeyError("x")


class TestCircuitBreakerOpenState:
    """Tests for circuit breaker in open and half-open states."""

    @pytest.fixture
    def open_breaker(self, clock) -> CircuitBreaker:
        breaker = CircuitBreaker(
            name="api", failure_threshold=1, recovery_timeout=30.0, clock=clock
        )
        fail(breaker)
        return breaker

    def test_rejects_calls_while_open(self, open_breaker, clock):
        clock.advance(10)

        with pytest.raises(CircuitBreakerOpen) as exc_info:
            with open_breaker:
                pass

        assert exc_info.value.breaker_name == "api"
        assert exc_info.value.time_remaining == pytest.approx(20.0)

    def test_half_open_after_timeout(self, open_breaker, clock):
        clock.advance(30)

        assert open_breaker.state == CircuitState.HALF_OPEN

    def test_successful_probe_closes(self, open_breaker, clock):
        clock.advance(31)

        with open_breaker:
            pass

        assert open_breaker.state == CircuitState.CLOSED

    def test_failed_probe_reopens(self, open_breaker, clock):
        clock.advance(31)

        fail(open_breaker)

        assert open_breaker.state == CircuitState.OPEN

    def test_only_one_probe_at_a_time(self, open_breaker, clock):
        clock.advance(31)

        with open_breaker:
            with pytest.raises(CircuitBreakerOpen):
                with open_breaker:
                    pass

    def test_manual_reset(self, open_breaker):
        open_breaker.reset()

        assert open_breaker.state == CircuitState.CLOSED
