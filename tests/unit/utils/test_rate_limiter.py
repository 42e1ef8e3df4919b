"""
Tests for WindowRateLimiter.
"""

import threading

import pytest

from storefront.utils.rate_limiter import RateLimitExceeded, WindowRateLimiter


class TestWindowRateLimiter:
    def test_allows_limit_requests_then_rejects(self, fake_clock):
        limiter = WindowRateLimiter(limit=3, window_seconds=60.0, clock=fake_clock)

        for _ in range(3):
            limiter.check_and_consume()

        with pytest.raises(RateLimitExceeded) as exc_info:
            limiter.check_and_consume()

        assert exc_info.value.limit == 3
        assert exc_info.value.retry_after_seconds == 60

    def test_window_resets_after_window_seconds(self, fake_clock):
        limiter = WindowRateLimiter(limit=2, window_seconds=60.0, clock=fake_clock)
        limiter.check_and_consume()
        limiter.check_and_consume()

        fake_clock.advance(60.0)
        limiter.check_and_consume()

        assert limiter.status().request_count == 1
        assert limiter.status().is_limited is False

    def test_retry_after_reflects_remaining_window(self, fake_clock):
        limiter = WindowRateLimiter(limit=1, window_seconds=60.0, clock=fake_clock)
        limiter.check_and_consume()
        fake_clock.advance(15.5)

        with pytest.raises(RateLimitExceeded) as exc_info:
            limiter.check_and_consume()

        assert exc_info.value.retry_after_seconds == 45

    def test_retry_after_is_at_least_one_second(self, fake_clock):
        limiter = WindowRateLimiter(limit=1, window_seconds=60.0, clock=fake_clock)
        limiter.check_and_consume()
        fake_clock.advance(59.99)

        with pytest.raises(RateLimitExceeded) as exc_info:
            limiter.check_and_consume()

        assert exc_info.value.retry_after_seconds == 1

    def test_status_reports_remaining_and_limited_flag(self, fake_clock):
        limiter = WindowRateLimiter(limit=2, window_seconds=60.0, clock=fake_clock)
        limiter.check_and_consume()
        assert limiter.status().remaining == 1

        limiter.check_and_consume()
        with pytest.raises(RateLimitExceeded):
            limiter.check_and_consume()

        status = limiter.status()
        assert status.remaining == 0
        assert status.is_limited is True

    def test_reset_clears_window(self, fake_clock):
        limiter = WindowRateLimiter(limit=1, window_seconds=60.0, clock=fake_clock)
        limiter.check_and_consume()
        limiter.reset()

        limiter.check_and_consume()
        assert limiter.status().request_count == 1

    def test_rejects_invalid_configuration(self):
        with pytest.raises(ValueError):
            WindowRateLimiter(limit=0)
        with pytest.raises(ValueError):
            WindowRateLimiter(window_seconds=0)

    def test_concurrent_callers_never_exceed_limit(self):
        limiter = WindowRateLimiter(limit=200, window_seconds=60.0)
        accepted = []
        accepted_lock = threading.Lock()

        def worker():
            for _ in range(50):
                try:
                    limiter.check_and_consume()
                except RateLimitExceeded:
                    continue
                with accepted_lock:
                    accepted.append(1)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(accepted) == 200
        assert limiter.status().request_count == 200
