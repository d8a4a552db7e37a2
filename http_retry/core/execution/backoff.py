"""Backoff delay calculation for http-retry."""

from http_retry.core.retry_config import BackoffStrategy


def calculate_delay(interval: int, attempts: int, strategy: BackoffStrategy) -> int:
    """Delay in ms before the next attempt.

    Linear returns ``interval`` unchanged; exponential returns
    ``interval * 2 ** attempts``. No jitter and no ceiling: bound growth through
    ``retries``.

    Args:
        interval: Base interval in ms
        attempts: Number of retries already performed (0-based attempt index)
        strategy: BackoffStrategy

    Returns:
        Delay in milliseconds
    """
    if strategy == BackoffStrategy.LINEAR:
        return interval
    return interval * 2**attempts
