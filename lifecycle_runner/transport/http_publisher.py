"""HTTP publisher for run reports.

POSTs the JSON report to a results collector. Connection errors, timeouts
and the statuses the RetryPolicy lists (5xx, 429) are retried; other error
responses are raised at once.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import requests

from .retry_policy import RetryPolicy, default_retry_policy

_logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    """Outcome of a publish request."""
    status_code: int
    attempts: int
    body: Optional[Any] = None


class ReportPublisher:
    """Sends JSON reports to a collector endpoint."""

    def __init__(
        self,
        url: str,
        retry_policy: Optional[RetryPolicy] = None,
        request_timeout: float = 10.0,
    ):
        """Initialize the publisher.

        Args:
            url: Collector endpoint receiving the report.
            retry_policy: Retry policy for failed requests.
            request_timeout: Per-request timeout in seconds.
        """
        self.url = url
        self.retry_policy = retry_policy or default_retry_policy()
        self.request_timeout = request_timeout
        self._session = requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def publish(self, report: dict[str, Any]) -> PublishResult:
        """POST a report dictionary.

        Returns:
            PublishResult with the final status code and attempt count.

        Raises:
            requests.HTTPError: On a 4xx response, or a 5xx after all retries.
            requests.ConnectionError: If the collector stays unreachable.
            requests.Timeout: If every attempt timed out.
        """
        for attempt in range(self.retry_policy.max_retries + 1):
            try:
                response = self._session.post(
                    self.url, json=report, timeout=self.request_timeout
                )
            except (requests.ConnectionError, requests.Timeout) as e:
                if not self.retry_policy.should_retry(attempt):
                    raise
                self._backoff(attempt, e)
                continue

            if self.retry_policy.should_retry(attempt, response.status_code):
                self._backoff(attempt, f"HTTP {response.status_code}")
                continue

            response.raise_for_status()
            return PublishResult(
                status_code=response.status_code,
                attempts=attempt + 1,
                body=_json_or_none(response),
            )

        raise RuntimeError("Publish failed with no response captured")

    def _backoff(self, attempt: int, reason: Any) -> None:
        delay = self.retry_policy.get_delay(attempt)
        _logger.warning(
            "Publishing report to %s failed (%s); retrying in %.1fs", self.url, reason, delay
        )
        time.sleep(delay)

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def _json_or_none(response: requests.Response) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        return None
