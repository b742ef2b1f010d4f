"""
In-memory fixed-window rate limiter.
Keeps a process-wide store of counters that a background timer sweeps periodically.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from rental_trust.config import get_settings
from rental_trust.utils.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_IP = "127.0.0.1"


@dataclass
class RateLimitEntry:
    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single rate limit check. reset_at is a timestamp in seconds."""
    success: bool
    remaining: int
    reset_at: float


class RateLimiter:
    """
    Fixed-window request counter keyed by arbitrary strings.

    A key's window starts on its first hit and lasts window_seconds. Hits
    beyond the limit within the window are rejected without being counted.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._store: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._sweeper: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def hit(self, key: str, limit: int, window_seconds: float) -> RateLimitResult:
        """
        Register one request for key.

        Args:
            key: Bucket identifier, e.g. "auth:203.0.113.1"
            limit: Requests allowed per window
            window_seconds: Window length in seconds

        Returns:
            RateLimitResult with success flag, remaining requests and window reset time
        """
        now = self._clock()

        with self._lock:
            entry = self._store.get(key)

            if entry is None or entry.reset_at < now:
                reset_at = now + window_seconds
                self._store[key] = RateLimitEntry(count=1, reset_at=reset_at)
                return RateLimitResult(success=True, remaining=limit - 1, reset_at=reset_at)

            if entry.count >= limit:
                return RateLimitResult(success=False, remaining=0, reset_at=entry.reset_at)

            entry.count += 1
            return RateLimitResult(
                success=True,
                remaining=limit - entry.count,
                reset_at=entry.reset_at
            )

    def sweep(self) -> int:
        """Drop expired entries. Returns the number removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._store.items() if entry.reset_at < now]
            for key in expired:
                del self._store[key]

        if expired:
            logger.debug(f"Rate limiter swept {len(expired)} expired entries")
        return len(expired)

    def reset(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        return len(self._store)

    def start_sweeper(self, interval_seconds: float) -> None:
        """Start a daemon thread that sweeps expired entries every interval_seconds."""
        if self._sweeper is not None and self._sweeper.is_alive():
            return

        self._stop_event.clear()

        def run():
            while not self._stop_event.wait(interval_seconds):
                self.sweep()

        self._sweeper = threading.Thread(target=run, name="rate-limit-sweeper", daemon=True)
        self._sweeper.start()
        logger.info(f"Rate limit sweeper started (interval: {interval_seconds}s)")

    def stop_sweeper(self) -> None:
        if self._sweeper is None:
            return
        self._stop_event.set()
        self._sweeper.join(timeout=1)
        self._sweeper = None


# Process-wide limiter shared by the helpers below
_default_limiter: Optional[RateLimiter] = None
_default_lock = threading.Lock()


def get_rate_limiter() -> RateLimiter:
    """Return the process-wide limiter, starting its sweeper on first use."""
    global _default_limiter
    with _default_lock:
        if _default_limiter is None:
            _default_limiter = RateLimiter()
            _default_limiter.start_sweeper(get_settings().rate_limit_sweep_interval_seconds)
        return _default_limiter


def rate_limit(key: str, limit: int, window_seconds: float) -> RateLimitResult:
    return get_rate_limiter().hit(key, limit, window_seconds)


def auth_rate_limit(ip: str) -> RateLimitResult:
    """Rate limit for authentication endpoints (10 per minute by default)."""
    settings = get_settings()
    return rate_limit(f"auth:{ip}", settings.auth_rate_limit, settings.rate_limit_window_seconds)


def api_rate_limit(ip: str) -> RateLimitResult:
    """Rate limit for general API endpoints (60 per minute by default)."""
    settings = get_settings()
    return rate_limit(f"api:{ip}", settings.api_rate_limit, settings.rate_limit_window_seconds)


def enforce(result: RateLimitResult, now: Optional[float] = None) -> RateLimitResult:
    """
    Raise RateLimitExceededError when result is a rejection.

    Raises:
        RateLimitExceededError: With Retry-After set to the seconds until the window resets
    """
    if result.success:
        return result

    current = time.time() if now is None else now
    retry_after = max(1, math.ceil(result.reset_at - current))
    logger.warning(f"Rate limit exceeded, retry after {retry_after}s")
    raise RateLimitExceededError(retry_after)


def get_client_ip(headers: Mapping[str, str]) -> str:
    """
    Get client IP address from request headers.

    The first x-forwarded-for entry wins over x-real-ip; without either the
    loopback address is returned. Header names are matched case-insensitively.
    """
    normalized = {name.lower(): value for name, value in headers.items()}

    forwarded_for = normalized.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = normalized.get("x-real-ip")
    if real_ip:
        return real_ip

    return DEFAULT_CLIENT_IP
