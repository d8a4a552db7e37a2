"""Unit tests for backoff delay calculation."""

import pytest

from http_retry.core.execution.backoff import calculate_delay
from http_retry.core.retry_config import BackoffStrategy


class TestLinearBackoff:
    """Test linear strategy returns the interval unchanged."""

    @pytest.mark.parametrize("attempts", [0, 1, 5, 10])
    def test_constant_delay(self, attempts):
        assert calculate_delay(3000, attempts, BackoffStrategy.LINEAR) == 3000

    def test_zero_interval(self):
        assert calculate_delay(0, 4, BackoffStrategy.LINEAR) == 0


class TestExponentialBackoff:
    """Test exponential strategy doubles per attempt."""

    def test_delay_sequence(self):
        delays = [calculate_delay(1000, k, BackoffStrategy.EXPONENTIAL) for k in range(4)]

        assert delays == [1000, 2000, 4000, 8000]

    def test_growth_is_unbounded(self):
        """Test there is no ceiling beyond the validated interval."""
        assert calculate_delay(60000, 10, BackoffStrategy.EXPONENTIAL) == 60000 * 1024

    def test_zero_interval(self):
        assert calculate_delay(0, 3, BackoffStrategy.EXPONENTIAL) == 0
