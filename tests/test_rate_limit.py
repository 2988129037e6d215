import redis

from classstore.main import create_app
from classstore.services.rate_limit_service import RateLimitService
from fastapi.testclient import TestClient


class FakeRedis:
    """Just enough of redis.Redis for the fixed-window script."""

    def __init__(self, fail=False):
        self.counts = {}
        self.fail = fail

    def eval(self, script, numkeys, key, window):
        if self.fail:
            raise redis.ConnectionError("redis down")
        self.counts[key] = self.counts.get(key, 0) + 1
        return [self.counts[key], int(window)]


class TestRateLimitService:

    def test_allows_up_to_limit(self):
        limiter = RateLimitService(client=FakeRedis(), limit=2, window=60)

        assert limiter.check("1.2.3.4") == (True, 0)
        assert limiter.check("1.2.3.4") == (True, 0)
        assert limiter.check("1.2.3.4") == (False, 60)
        assert limiter.check("5.6.7.8") == (True, 0)

    def test_fails_open_when_redis_is_down(self):
        limiter = RateLimitService(client=FakeRedis(fail=True), limit=1, window=60)
        assert limiter.check("1.2.3.4") == (True, 0)
        assert limiter.check("1.2.3.4") == (True, 0)

    def test_disabled_with_zero_limit(self):
        fake = FakeRedis()
        limiter = RateLimitService(client=fake, limit=0)
        assert not limiter.enabled
        assert limiter.check("1.2.3.4") == (True, 0)
        assert fake.counts == {}


class TestRateLimitMiddleware:

    def test_returns_429(self, db):
        app = create_app(rate_limiter=RateLimitService(client=FakeRedis(), limit=2, window=30))

        with TestClient(app) as client:
            assert client.get("/health").status_code == 200
            assert client.get("/health").status_code == 200
            resp = client.get("/health")

        assert resp.status_code == 429
        assert resp.json()["retryAfter"] == 30
        assert resp.headers["Retry-After"] == "30"
