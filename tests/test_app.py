import pytest

from greatwok.app import create_app
from greatwok.core import config
from greatwok.core.db import get_db
from greatwok.core.rate_limiter import FixedWindowRateLimiter


def test_health_up(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "UP", "dbConnected": True}


def test_health_down(app, client):
    class BrokenSession:
        def execute(self, *args, **kwargs):
            raise RuntimeError("database is gone")

    app.dependency_overrides[get_db] = lambda: BrokenSession()
    res = client.get("/health")
    assert res.status_code == 500
    assert res.json() == {"status": "DOWN", "dbConnected": False}


def test_rate_limit_applies_to_api_only(app, client):
    app.state.rate_limiter = FixedWindowRateLimiter(max_requests=2, window_seconds=60)

    assert client.get("/api/categories").status_code == 200
    second = client.get("/api/categories")
    assert second.headers["X-RateLimit-Remaining"] == "0"

    blocked = client.get("/api/categories")
    assert blocked.status_code == 429
    assert blocked.json() == {"error": "Too many requests, please try again later."}
    assert int(blocked.headers["Retry-After"]) > 0

    assert client.get("/health").status_code == 200


def test_fixed_window_resets():
    now = [1000.0]
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=10, clock=lambda: now[0])

    assert limiter.hit("1.2.3.4")[0] is True
    assert limiter.hit("1.2.3.4")[0] is False
    assert limiter.hit("5.6.7.8")[0] is True

    now[0] += 10
    assert limiter.hit("1.2.3.4") == (True, 0, 10)


def test_expired_windows_are_dropped():
    now = [1000.0]
    limiter = FixedWindowRateLimiter(max_requests=5, window_seconds=10, clock=lambda: now[0])

    for n in range(10000):
        limiter.hit(f"10.0.{n // 256}.{n % 256}")
    assert limiter.tracked_clients == 10000

    now[0] += 3600
    limiter.hit("192.168.1.1")
    assert limiter.tracked_clients == 1


def test_security_headers(client):
    res = client.get("/api/categories")
    assert res.headers["X-Content-Type-Options"] == "nosniff"


def test_refuses_to_start_without_secret(monkeypatch):
    monkeypatch.setattr(config, "JWT_SECRET", None)
    with pytest.raises(RuntimeError):
        create_app(create_tables=False)
