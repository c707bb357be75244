"""Transport module - publishing reports over HTTP."""

from .http_publisher import PublishResult, ReportPublisher
from .retry_policy import RetryPolicy, default_retry_policy, no_retry_policy

__all__ = [
    "PublishResult",
    "ReportPublisher",
    "RetryPolicy",
    "default_retry_policy",
    "no_retry_policy",
]
