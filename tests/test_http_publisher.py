"""Tests for ReportPublisher and RetryPolicy."""

from unittest import mock

import pytest
import requests

from lifecycle_runner.transport import (
    ReportPublisher,
    RetryPolicy,
    default_retry_policy,
    no_retry_policy,
)


def make_response(status_code, body=None):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = body if body is not None else {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"HTTP {status_code}")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def no_sleep():
    with mock.patch("lifecycle_runner.transport.http_publisher.time.sleep") as sleep:
        yield sleep


class TestRetryPolicy:
    def test_exponential_backoff_is_capped(self):
        policy = RetryPolicy(initial_delay=1.0, backoff_factor=2.0, max_delay=5.0)

        assert [policy.get_delay(i) for i in range(4)] == [1.0, 2.0, 4.0, 5.0]

    def test_presets(self):
        assert default_retry_policy().max_retries == 3
        assert no_retry_policy().max_retries == 0

    def test_should_retry_only_retryable_statuses(self):
        policy = RetryPolicy(max_retries=2)

        assert policy.should_retry(0, 503)
        assert policy.should_retry(1, 429)
        assert not policy.should_retry(0, 404)
        assert not policy.should_retry(0, 200)

    def test_should_retry_stops_when_retries_are_spent(self):
        policy = RetryPolicy(max_retries=2)

        assert policy.should_retry(1)
        assert not policy.should_retry(2)
        assert not policy.should_retry(2, 503)


class TestReportPublisher:
    def test_publish_success(self, no_sleep):
        publisher = ReportPublisher("http://collector/reports")
        with mock.patch.object(publisher._session, "post", return_value=make_response(201, {"id": 7})) as post:
            result = publisher.publish({"status": "passed"})

        post.assert_called_once_with(
            "http://collector/reports", json={"status": "passed"}, timeout=10.0
        )
        assert result.status_code == 201
        assert result.attempts == 1
        assert result.body == {"id": 7}
        no_sleep.assert_not_called()

    def test_server_error_is_retried(self, no_sleep):
        publisher = ReportPublisher("http://collector/reports")
        responses = [make_response(503), make_response(200)]
        with mock.patch.object(publisher._session, "post", side_effect=responses):
            result = publisher.publish({})

        assert result.attempts == 2
        no_sleep.assert_called_once_with(1.0)

    def test_client_error_is_not_retried(self, no_sleep):
        publisher = ReportPublisher("http://collector/reports")
        with mock.patch.object(publisher._session, "post", return_value=make_response(400)) as post:
            with pytest.raises(requests.HTTPError):
                publisher.publish({})

        assert post.call_count == 1

    def test_server_error_after_retries_raises(self, no_sleep):
        publisher = ReportPublisher(
            "http://collector/reports", retry_policy=RetryPolicy(max_retries=2)
        )
        with mock.patch.object(publisher._session, "post", return_value=make_response(500)) as post:
            with pytest.raises(requests.HTTPError):
                publisher.publish({})

        assert post.call_count == 3
        assert no_sleep.call_count == 2

    def test_connection_error_without_retries(self, no_sleep):
        with ReportPublisher("http://collector/reports", retry_policy=no_retry_policy()) as publisher:
            with mock.patch.object(
                publisher._session, "post", side_effect=requests.ConnectionError("refused")
            ):
                with pytest.raises(requests.ConnectionError):
                    publisher.publish({})

        no_sleep.assert_not_called()

    def test_timeout_then_success(self, no_sleep):
        publisher = ReportPublisher("http://collector/reports")
        with mock.patch.object(
            publisher._session, "post", side_effect=[requests.Timeout("slow"), make_response(200)]
        ):
            result = publisher.publish({})

        assert result.attempts == 2
