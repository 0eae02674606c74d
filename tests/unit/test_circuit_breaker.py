"""
Tests for the Circuit Breaker.
"""

from unittest.mock import MagicMock

import pytest

from contact_mailer.core.exceptions import ConfigurationError, InfrastructureError
from contact_mailer.infrastructure.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerOpenError,
    CircuitState,
    get_circuit_breaker,
)


class FakeClock:
    """Manually advanced monotonic clock."""
    
    def __init__(self) -> None:
        self.now = 1000.0
    
    def __call__(self) -> float:
        return self.now


class TestCircuitBreaker:
    """Tests for CircuitBreaker state transitions."""
    
    @pytest.fixture
    def clock(self):
        return FakeClock()
    
    @pytest.fixture
    def breaker(self, clock):
        return CircuitBreaker(
            "test",
            CircuitBreakerConfig(
                failure_threshold=3,
                timeout_seconds=30.0,
                excluded_exceptions=(ConfigurationError,),
            ),
            clock=clock,
        )
    
    @staticmethod
    def _fail(breaker, exc=None):
        func = MagicMock(side_effect=exc or RuntimeError("down"))
        with pytest.raises(type(exc) if exc else RuntimeError):
            breaker.call(func)
    
    def test_starts_closed_and_passes_results(self, breaker):
        assert breaker.state == CircuitState.CLOSED
        assert breaker.call(lambda x: x * 2, 21) == 42
    
    def test_opens_after_threshold(self, breaker):
        for _ in range(3):
            self._fail(breaker)
        
        assert breaker.state == CircuitState.OPEN
        func = MagicMock()
        with pytest.raises(CircuitBreakerOpenError) as exc_info:
            breaker.call(func)
        func.assert_not_called()
        assert exc_info.value.retry_in_seconds == pytest.approx(30.0)
    
    def test_open_error_is_infrastructure_error(self):
        assert issubclass(CircuitBreakerOpenError, InfrastructureError)
    
    def test_success_resets_failure_count(self, breaker):
        self._fail(breaker)
        self._fail(breaker)
        breaker.call(lambda: None)
        self._fail(breaker)
        
        assert breaker.state == CircuitState.CLOSED
    
    def test_excluded_exceptions_do_not_count(self, breaker):
        for _ in range(5):
            self._fail(breaker, ConfigurationError("RESEND_API_KEY"))
        
        assert breaker.state == CircuitState.CLOSED
    
    def test_half_open_after_timeout_then_closes(self, breaker, clock):
        for _ in range(3):
            self._fail(breaker)
        
        clock.now += 31
        
        assert breaker.state == CircuitState.HALF_OPEN
        assert breaker.call(lambda: "ok") == "ok"
        assert breaker.state == CircuitState.CLOSED
    
    def test_half_open_failure_reopens(self, breaker, clock):
        for _ in range(3):
            self._fail(breaker)
        clock.now += 31
        
        self._fail(breaker)
        
        assert breaker.state == CircuitState.OPEN
    
    def test_reset(self, breaker):
        for _ in range(3):
            self._fail(breaker)
        
        breaker.reset()
        
        assert breaker.state == CircuitState.CLOSED


class TestRegistry:
    """Tests for the named breaker registry."""
    
    def test_same_name_returns_same_breaker(self):
        assert get_circuit_breaker("registry-test") is get_circuit_breaker("registry-test")
