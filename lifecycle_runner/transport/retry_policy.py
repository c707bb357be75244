"""Retry policy for report publishing: which responses to retry and how long to wait."""

from dataclasses import dataclass

# Status codes a collector may return while restarting or overloaded
RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff over a fixed number of retries."""
    max_retries: int = 3
    initial_delay: float = 1.0
    backoff_factor: float = 2.0
    max_delay: float = 30.0
    retry_statuses: frozenset[int] = RETRYABLE_STATUSES

    def get_delay(self, attempt: int) -> float:
        """Seconds to wait before retry number ``attempt`` (0 = first retry)."""
        return min(self.initial_delay * (self.backoff_factor ** attempt), self.max_delay)

    def should_retry(self, attempt: int, status_code: int = None) -> bool:
        """Whether attempt ``attempt`` (0-indexed) may be followed by another.

        With a status code, only retryable statuses qualify; without one
        (connection error or timeout) any attempt with retries left does.
        """
        if attempt >= self.max_retries:
            return False
        return status_code is None or status_code in self.retry_statuses


def default_retry_policy() -> RetryPolicy:
    """3 retries, 1s initial delay, 2x backoff, 30s max."""
    return RetryPolicy()


def no_retry_policy() -> RetryPolicy:
    """Fail on the first error."""
    return RetryPolicy(max_retries=0)
