"""
Tests for the rate-limit retry policy.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from labeltracks.utils.retry import RetryPolicy, call_with_rate_limit_retry
from labeltracks.core.exceptions import APIError, RateLimitError


class TestRetryPolicy:
    """Tests for RetryPolicy defaults."""

    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.max_attempts == 2
        assert policy.backoff_seconds == 60.0


class TestCallWithRateLimitRetry:
    """Tests for call_with_rate_limit_retry."""

    def test_success_immediate(self, fake_sleep):
        func = Mock(return_value="ok")
        policy = RetryPolicy(sleep=fake_sleep)

        assert call_with_rate_limit_retry(func, policy) == "ok"
        assert func.call_count == 1
        assert fake_sleep.sleeps == []

    def test_rate_limited_then_success(self, fake_sleep):
        func = Mock(side_effect=[RateLimitError("429", status_code=429), "ok"])
        policy = RetryPolicy(sleep=fake_sleep)

        assert call_with_rate_limit_retry(func, policy, "test") == "ok"
        assert func.call_count == 2
        assert fake_sleep.sleeps == [60.0]

    def test_retries_exactly_once_by_default(self, fake_sleep):
        func = Mock(side_effect=RateLimitError("429", status_code=429))
        policy = RetryPolicy(sleep=fake_sleep)

        with pytest.raises(RateLimitError):
            call_with_rate_limit_retry(func, policy)

        assert func.call_count == 2
        assert fake_sleep.sleeps == [60.0]

    def test_custom_attempts_and_backoff(self, fake_sleep):
        func = Mock(side_effect=RateLimitError("429", status_code=429))
        policy = RetryPolicy(max_attempts=4, backoff_seconds=5, sleep=fake_sleep)

        with pytest.raises(RateLimitError):
            call_with_rate_limit_retry(func, policy)

        assert func.call_count == 4
        assert fake_sleep.sleeps == [5, 5, 5]

    def test_single_attempt_never_sleeps(self, fake_sleep):
        func = Mock(side_effect=RateLimitError("429", status_code=429))
        policy = RetryPolicy(max_attempts=1, sleep=fake_sleep)

        with pytest.raises(RateLimitError):
            call_with_rate_limit_retry(func, policy)

        assert func.call_count == 1
        assert fake_sleep.sleeps == []

    def test_other_errors_are_not_retried(self, fake_sleep):
        func = Mock(side_effect=APIError("500", status_code=500))
        policy = RetryPolicy(sleep=fake_sleep)

        with pytest.raises(APIError):
            call_with_rate_limit_retry(func, policy)

        assert func.call_count == 1
        assert fake_sleep.sleeps == []
