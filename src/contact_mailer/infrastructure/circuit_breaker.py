"""
Circuit Breaker Pattern.

Stops calling the email provider for a while after repeated failures,
so a provider outage fails contact requests fast instead of piling up
slow timeouts.
"""

import time
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Any, Callable, Dict, Optional, Tuple, Type

from contact_mailer.core.exceptions import InfrastructureError
from contact_mailer.infrastructure.logging import get_logger


logger = get_logger(__name__)


class CircuitState(str, Enum):
    """Circuit breaker states."""
    CLOSED = "closed"        # Normal operation
    OPEN = "open"            # Failing, reject requests
    HALF_OPEN = "half_open"  # Testing if service recovered


@dataclass(frozen=True)
class CircuitBreakerConfig:
    """Circuit breaker configuration."""
    failure_threshold: int = 5       # Failures before opening
    success_threshold: int = 1       # Successes to close from half-open
    timeout_seconds: float = 30.0    # Time before trying again
    excluded_exceptions: Tuple[Type[Exception], ...] = ()  # Don't count these as failures


class CircuitBreakerOpenError(InfrastructureError):
    """Raised when a call is rejected because the circuit is open."""

    def __init__(self, name: str, retry_in_seconds: float):
        super().__init__(
            f"Circuit breaker '{name}' is open",
            {"circuit": name, "retry_in_seconds": round(retry_in_seconds, 1)}
        )
        self.circuit_name = name
        self.retry_in_seconds = retry_in_seconds


class CircuitBreaker:
    """
    Circuit breaker for external service calls.

    Thread-safe; one instance is shared by all request threads.
    """

    def __init__(
        self,
        name: str,
        config: Optional[CircuitBreakerConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._name = name
        self._config = config or CircuitBreakerConfig()
        self._clock = clock
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._opened_at: Optional[float] = None
        self._lock = Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> CircuitState:
        """Get current state, moving to half-open once the timeout elapsed."""
        with self._lock:
            if self._state == CircuitState.OPEN and self._remaining_open_time() <= 0:
                self._state = CircuitState.HALF_OPEN
                self._success_count = 0
                logger.info(
                    f"Circuit breaker '{self._name}' entering half-open state",
                    extra={"extra_fields": {"circuit": self._name}}
                )
            return self._state

    def _remaining_open_time(self) -> float:
        if self._opened_at is None:
            return 0.0
        elapsed = self._clock() - self._opened_at
        return self._config.timeout_seconds - elapsed

    def _record_success(self) -> None:
        with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                self._success_count += 1
                if self._success_count >= self._config.success_threshold:
                    self._state = CircuitState.CLOSED
                    self._failure_count = 0
                    self._opened_at = None
                    logger.info(
                        f"Circuit breaker '{self._name}' closed after recovery",
                        extra={"extra_fields": {"circuit": self._name}}
                    )
            else:
                self._failure_count = 0

    def _record_failure(self, exception: Exception) -> None:
        if isinstance(exception, self._config.excluded_exceptions):
            return

        with self._lock:
            self._failure_count += 1

            if self._state == CircuitState.HALF_OPEN:
                # Single failure in half-open reopens the circuit
                self._open()
                logger.warning(
                    f"Circuit breaker '{self._name}' reopened after half-open failure",
                    extra={"extra_fields": {
                        "circuit": self._name,
                        "error": str(exception),
                    }}
                )
            elif self._failure_count >= self._config.failure_threshold:
                self._open()
                logger.warning(
                    f"Circuit breaker '{self._name}' opened after {self._failure_count} failures",
                    extra={"extra_fields": {
                        "circuit": self._name,
                        "failure_count": self._failure_count,
                        "error": str(exception),
                    }}
                )

    def _open(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = self._clock()

    def call(self, func: Callable, *args: Any, **kwargs: Any) -> Any:
        """
        Execute a function through the circuit breaker.

        Raises:
            CircuitBreakerOpenError: If circuit is open.
            Exception: Any exception from the function.
        """
        if self.state == CircuitState.OPEN:
            with self._lock:
                remaining = max(self._remaining_open_time(), 0.0)
            raise CircuitBreakerOpenError(self._name, remaining)

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            self._record_failure(e)
            raise
        self._record_success()
        return result

    def reset(self) -> None:
        """Manually reset the circuit breaker."""
        with self._lock:
            self._state = CircuitState.CLOSED
            self._failure_count = 0
            self._success_count = 0
            self._opened_at = None


# Global circuit breakers registry
_circuit_breakers: Dict[str, CircuitBreaker] = {}
_registry_lock = Lock()


def get_circuit_breaker(
    name: str,
    config: Optional[CircuitBreakerConfig] = None,
) -> CircuitBreaker:
    """Get or create a circuit breaker by name."""
    with _registry_lock:
        if name not in _circuit_breakers:
            _circuit_breakers[name] = CircuitBreaker(name, config)
        return _circuit_breakers[name]


def reset_circuit_breakers() -> None:
    """Reset every registered circuit breaker."""
    with _registry_lock:
        for breaker in _circuit_breakers.values():
            breaker.reset()
