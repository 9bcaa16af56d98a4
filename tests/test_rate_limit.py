"""Tests for the fixed-window limiter on /api routes."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from bloghub.core.rate_limiter import FixedWindowRateLimiter
from bloghub.main import create_app


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def hits(limiter, key, count):
    async def _go():
        return [await limiter.hit(key) for _ in range(count)]

    return asyncio.run(_go())


class TestFixedWindowRateLimiter:
    def test_allows_up_to_max(self):
        limiter = FixedWindowRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())
        results = hits(limiter, "1.2.3.4", 4)
        assert [allowed for allowed, _ in results] == [True, True, True, False]

    def test_retry_after_counts_down_to_window_end(self):
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
        hits(limiter, "ip", 1)
        clock.now += 20
        (result,) = hits(limiter, "ip", 1)
        assert result == (False, 40)

    def test_window_resets(self):
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
        hits(limiter, "ip", 2)
        clock.now += 60
        assert hits(limiter, "ip", 1) == [(True, 0)]

    def test_clients_are_counted_separately(self):
        limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
        assert hits(limiter, "a", 1) == [(True, 0)]
        assert hits(limiter, "b", 1) == [(True, 0)]


class TestApiRateLimit:
    """Only /api routes are limited, and the rejection uses the error envelope"""

    @pytest.fixture
    def limited_client(self, test_settings):
        settings = test_settings.model_copy(update={"RATE_LIMIT_MAX_REQUESTS": 2})
        with TestClient(create_app(settings)) as client:
            yield client

    def test_over_limit_gets_429(self, limited_client):
        assert limited_client.get("/api/posts").status_code == 200
        assert limited_client.get("/api/posts").status_code == 200
        response = limited_client.get("/api/posts")
        assert response.status_code == 429
        assert response.json() == {
            "success": False,
            "message": "Too many requests from this IP, please try again later.",
        }
        assert int(response.headers["Retry-After"]) > 0

    def test_limit_applies_before_auth(self, limited_client):
        limited_client.get("/api/posts")
        limited_client.get("/api/posts")
        assert limited_client.get("/api/auth/me").status_code == 429

    def test_probes_are_not_limited(self, limited_client):
        for _ in range(5):
            assert limited_client.get("/health").status_code == 200

    def test_disabled(self, test_settings):
        settings = test_settings.model_copy(update={"RATE_LIMIT_ENABLED": False, "RATE_LIMIT_MAX_REQUESTS": 1})
        with TestClient(create_app(settings)) as client:
            statuses = {client.get("/api/posts").status_code for _ in range(3)}
        assert statuses == {200}
