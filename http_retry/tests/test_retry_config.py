"""Unit tests for RetryConfig validation and defaults."""

import pytest
from pydantic import ValidationError

from http_retry.core.errors import InvalidRetryOptionsError
from http_retry.core.retry_config import (
    MAX_RETRIES,
    MAX_RETRY_INTERVAL,
    MAX_UPDATE_INTERVAL,
    BackoffStrategy,
    RetryConfig,
)


class TestRetryConfigDefaults:
    """Test default option values."""

    def test_empty_options_use_defaults(self):
        """Test {} merges to the documented defaults."""
        config = RetryConfig.from_options({})

        assert config.retries == 3
        assert config.interval == 3000
        assert config.strategy == BackoffStrategy.LINEAR
        assert config.update_interval == 1000
        assert config.retry_on_server_failure is False
        assert config.retry_on_unexpected_format is False
        assert config.live_updates is True
        assert config.no_updates is False

    def test_none_options_use_defaults(self):
        """Test None behaves like {}."""
        assert RetryConfig.from_options(None) == RetryConfig()

    def test_to_options_uses_camel_case(self):
        """Test wire form keys."""
        options = RetryConfig().to_options()

        assert options == {
            "retries": 3,
            "interval": 3000,
            "strategy": "linear",
            "updateInterval": 1000,
            "retryOnServerFailure": False,
            "retryOnUnexpectedFormat": False,
            "liveUpdates": True,
            "noUpdates": False,
        }


class TestRetryConfigNames:
    """Test camelCase and snake_case option names."""

    def test_camel_case_options(self):
        config = RetryConfig.from_options(
            {"updateInterval": 500, "retryOnServerFailure": True, "noUpdates": True}
        )

        assert config.update_interval == 500
        assert config.retry_on_server_failure is True
        assert config.no_updates is True

    def test_snake_case_options(self):
        config = RetryConfig.from_options(
            {"update_interval": 500, "retry_on_unexpected_format": True, "live_updates": False}
        )

        assert config.update_interval == 500
        assert config.retry_on_unexpected_format is True
        assert config.live_updates is False

    def test_strategy_from_string(self):
        config = RetryConfig.from_options({"strategy": "exponential"})

        assert config.strategy == BackoffStrategy.EXPONENTIAL

    def test_unknown_option_rejected(self):
        """Test typos fail instead of being silently ignored."""
        with pytest.raises(InvalidRetryOptionsError, match="Unknown retry option: retry"):
            RetryConfig.from_options({"retry": 5})


class TestRetryConfigBounds:
    """Test bound validation happens at construction time."""

    def test_upper_bounds_accepted(self):
        config = RetryConfig.from_options(
            {
                "retries": MAX_RETRIES,
                "interval": MAX_RETRY_INTERVAL,
                "updateInterval": MAX_UPDATE_INTERVAL,
            }
        )

        assert config.retries == 10
        assert config.interval == 60000
        assert config.update_interval == 10000

    def test_zero_values_accepted(self):
        config = RetryConfig.from_options({"retries": 0, "interval": 0, "updateInterval": 0})

        assert config.retries == 0
        assert config.interval == 0
        assert config.update_interval == 0

    def test_whole_number_floats_accepted(self):
        config = RetryConfig.from_options({"retries": 3.0, "interval": 1000.0, "updateInterval": 500.0})

        assert config.retries == 3
        assert isinstance(config.retries, int)
        assert config.interval == 1000
        assert config.update_interval == 500

    def test_retries_above_max(self):
        """Test retries: 11 fails synchronously."""
        with pytest.raises(InvalidRetryOptionsError) as exc_info:
            RetryConfig.from_options({"retries": 11})

        assert str(exc_info.value) == (
            "Invalid value for retries. It must be a non-negative integer less than 10."
        )

    @pytest.mark.parametrize("value", [-1, 1.5, True, "3"])
    def test_retries_must_be_non_negative_integer(self, value):
        with pytest.raises(InvalidRetryOptionsError, match="Invalid value for retries"):
            RetryConfig.from_options({"retries": value})

    @pytest.mark.parametrize("value", [-1, 60001, 2.5])
    def test_interval_out_of_bounds(self, value):
        with pytest.raises(InvalidRetryOptionsError) as exc_info:
            RetryConfig.from_options({"interval": value})

        assert str(exc_info.value) == (
            "Invalid value for interval. It must be a non-negative integer less than 60000."
        )

    @pytest.mark.parametrize("key", ["updateInterval", "update_interval"])
    def test_update_interval_out_of_bounds(self, key):
        with pytest.raises(InvalidRetryOptionsError) as exc_info:
            RetryConfig.from_options({key: 10001})

        assert str(exc_info.value) == (
            "Invalid value for updateInterval. It must be a non-negative integer less than 10000."
        )

    def test_invalid_strategy(self):
        with pytest.raises(InvalidRetryOptionsError) as exc_info:
            RetryConfig.from_options({"strategy": "fibonacci"})

        assert str(exc_info.value) == 'Invalid strategy. Valid values are "linear" or "exponential".'

    def test_error_is_value_error(self):
        """Test configuration failures are ValueErrors, distinct from runtime errors."""
        with pytest.raises(ValueError):
            RetryConfig.from_options({"retries": 100})


class TestRetryConfigImmutability:
    """Test configs are frozen values."""

    def test_config_is_frozen(self):
        config = RetryConfig()

        with pytest.raises(ValidationError):
            config.retries = 5
