# backend/finance_tracker/services/circuit_breaker.py
"""
Circuit breaker for the free price APIs.

Each external price source gets its own breaker. After repeated failures the
breaker opens and the market data service skips that source (moving on to the
next provider in the chain, or leaving the price missing) instead of paying a
timeout per symbol while the source is down.

States:
    CLOSED    - Normal operation, requests pass through
    OPEN      - Too many consecutive failures, requests rejected immediately
    HALF_OPEN - Recovery timeout elapsed, one probe request allowed

Usage:
    breaker = CircuitBreaker(name="finnhub", failure_threshold=3)

    try:
        with breaker:
            quote = provider.get_quote("AAPL")
    except CircuitBreakerOpen:
        quote = None

The clock is injectable so tests can move time forward without sleeping.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerOpen(Exception):
    """
    Raised when a circuit breaker is open.

    Attributes:
        breaker_name: Name of the circuit breaker
        time_remaining: Seconds until a probe request will be allowed
    """

    def __init__(self, breaker_name: str, time_remaining: float) -> None:
        self.breaker_name = breaker_name
        self.time_remaining = time_remaining
        super().__init__(
            f"Circuit breaker '{breaker_name}' is open. "
            f"Retry in {time_remaining:.1f} seconds."
        )


@dataclass
class CircuitBreaker:
    """
    Thread-safe consecutive-failure circuit breaker.

    Attributes:
        name: Identifier used in logs and errors (usually the provider name)
        failure_threshold: Consecutive failures before opening
        recovery_timeout: Seconds to stay open before allowing a probe
        excluded_exceptions: Exception types that don't count as failures
            (e.g. TickerNotFoundError: the source answered, the symbol is unknown)
        clock: Monotonic time source
    """

    name: str
    failure_threshold: int = 5
    recovery_timeout: float = 60.0
    excluded_exceptions: tuple[type[Exception], ...] = ()
    clock: Callable[[], float] = time.monotonic

    _state: CircuitState = field(default=CircuitState.CLOSED, init=False)
    _consecutive_failures: int = field(default=0, init=False)
    _opened_at: float = field(default=0.0, init=False)
    _probe_in_flight: bool = field(default=False, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def __post_init__(self) -> None:
        if self.failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        if self.recovery_timeout < 0:
            raise ValueError("recovery_timeout cannot be negative")

    @property
    def state(self) -> CircuitState:
        with self._lock:
            self._refresh()
            return self._state

    @property
    def is_open(self) -> bool:
        return self.state == CircuitState.OPEN

    def _refresh(self) -> None:
        """Move OPEN -> HALF_OPEN once the timeout has elapsed. Lock must be held."""
        if self._state == CircuitState.OPEN and self._remaining() <= 0:
            self._set_state(CircuitState.HALF_OPEN)

    def _remaining(self) -> float:
        return max(0.0, self.recovery_timeout - (self.clock() - self._opened_at))

    def _set_state(self, new_state: CircuitState) -> None:
        old_state = self._state
        self._state = new_state
        self._probe_in_flight = False
        if new_state == CircuitState.CLOSED:
            self._consecutive_failures = 0
        if new_state == CircuitState.OPEN:
            self._opened_at = self.clock()
        logger.info(
            f"CircuitBreaker '{self.name}' state change: "
            f"{old_state.value} -> {new_state.value}"
        )

    def __enter__(self) -> "CircuitBreaker":
        with self._lock:
            self._refresh()
            if self._state == CircuitState.OPEN:
                raise CircuitBreakerOpen(self.name, self._remaining())
            if self._state == CircuitState.HALF_OPEN:
                if self._probe_in_flight:
                    raise CircuitBreakerOpen(self.name, 0.0)
                self._probe_in_flight = True
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: Any) -> bool:
        with self._lock:
            failed = exc_val is not None and not isinstance(exc_val, self.excluded_exceptions)
            if not failed:
                if self._state != CircuitState.CLOSED:
                    self._set_state(CircuitState.CLOSED)
                self._consecutive_failures = 0
            elif self._state == CircuitState.HALF_OPEN:
                self._set_state(CircuitState.OPEN)
            else:
                self._consecutive_failures += 1
                if self._consecutive_failures >= self.failure_threshold:
                    self._set_state(CircuitState.OPEN)
        return False

    def reset(self) -> None:
        """Manually close the breaker."""
        with self._lock:
            self._set_state(CircuitState.CLOSED)
