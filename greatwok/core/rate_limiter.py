# core/rate_limiter.py
import logging
import threading
import time

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


class FixedWindowRateLimiter:
    """
    In-memory fixed-window counter keyed by client address.

    Each key gets ``max_requests`` hits per ``window_seconds``; the window
    restarts on the first hit after it elapses. Expired windows are swept at
    most once per window length so idle clients do not accumulate.
    """

    def __init__(self, max_requests: int, window_seconds: int, clock=time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows = {}  # key -> [window_start, count]
        self._lock = threading.Lock()
        self._last_sweep = None

    def hit(self, key: str):
        """
        Count one request for ``key``.

        Returns:
            tuple: (allowed, remaining, retry_after_seconds)
        """
        now = self._clock()
        with self._lock:
            self._sweep(now)
            window = self._windows.get(key)
            if window is None or now - window[0] >= self.window_seconds:
                window = [now, 0]
                self._windows[key] = window
            window[1] += 1
            count = window[1]
            retry_after = max(0, int(window[0] + self.window_seconds - now))

        if count > self.max_requests:
            return False, 0, retry_after
        return True, self.max_requests - count, retry_after

    def _sweep(self, now):
        # caller holds the lock
        if self._last_sweep is not None and now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for k in expired:
            del self._windows[k]

    @property
    def tracked_clients(self) -> int:
        return len(self._windows)

    def reset(self):
        with self._lock:
            self._windows.clear()


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def rate_limit_middleware(request: Request, call_next):
    """Apply the app's limiter to /api/* only."""
    limiter = getattr(request.app.state, "rate_limiter", None)
    if limiter is None or not request.url.path.startswith("/api/"):
        return await call_next(request)

    key = client_key(request)
    allowed, remaining, retry_after = limiter.hit(key)
    if not allowed:
        logger.warning("Rate limit exceeded for %s on %s", key, request.url.path)
        return JSONResponse(status_code=429, content={"error": RATE_LIMIT_MESSAGE},
                            headers={"Retry-After": str(retry_after)})

    response = await call_next(request)
    response.headers["X-RateLimit-Limit"] = str(limiter.max_requests)
    response.headers["X-RateLimit-Remaining"] = str(remaining)
    return response


async def security_headers_middleware(request: Request, call_next):
    """A small subset of the usual hardening headers."""
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    return response
