"""Retry with decorrelated-jitter backoff for throttled AWS calls."""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

logger = logging.getLogger("vpc_discovery.retry")

T = TypeVar("T")

# Rate-limit/throttling error codes returned by AWS APIs
RETRYABLE_ERROR_CODES: set[str] = {
    "Throttling",
    "ThrottlingException",
    "ThrottledException",
    "RequestThrottledException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "RateExceeded",
    "SlowDown",
    "ProvisionedThroughputExceededException",
    "BandwidthLimitExceeded",
    "TransactionInProgressException",
    "EC2ThrottledException",
}


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff settings.

    Attributes:
        min_wait: Lower bound of a single wait (seconds)
        max_wait: Upper bound of a single wait (seconds)
        ceiling: Total wait after which retryable errors propagate (seconds)
    """

    min_wait: float = 3.0
    max_wait: float = 60.0
    ceiling: float = 300.0

    def __post_init__(self):
        if self.min_wait < 0 or self.max_wait < self.min_wait:
            raise ValueError(
                f"Invalid wait bounds: min_wait={self.min_wait}, max_wait={self.max_wait}"
            )
        if self.ceiling < 0:
            raise ValueError(f"Invalid retry ceiling: {self.ceiling}")

    def next_wait(self, previous: float) -> float:
        """Decorrelated jitter: max(min, random * min(max, previous * 3))"""
        return max(self.min_wait, random.random() * min(self.max_wait, previous * 3))


DEFAULT_RETRY_POLICY = RetryPolicy()


def get_error_code(error: Exception) -> str:
    """Error code of a botocore ClientError, or the exception class name"""
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        return response.get("Error", {}).get("Code", "") or "Unknown"
    return error.__class__.__name__


def is_retryable(error: Exception) -> bool:
    """True for throttling/rate-limit errors"""
    if getattr(error, "response", None) is None:
        return False
    return get_error_code(error) in RETRYABLE_ERROR_CODES


def call_with_retry(
    fn: Callable[[], T],
    is_retryable: Callable[[Exception], bool] = is_retryable,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``fn`` and retry it while it fails with a retryable error.

    Waits follow decorrelated jitter. Once the total waited time reaches
    ``policy.ceiling`` the last error is re-raised as-is; non-retryable
    errors are re-raised immediately.
    """
    waited = 0.0
    previous = policy.min_wait
    attempt = 1
    while True:
        try:
            return fn()
        except Exception as e:
            if not is_retryable(e) or waited >= policy.ceiling:
                raise
            wait = policy.next_wait(previous)
            logger.warning(
                "Throttled (%s) on attempt %d; retrying in %.1fs",
                get_error_code(e),
                attempt,
                wait,
            )
            sleep(wait)
            waited += wait
            previous = wait
            attempt += 1
