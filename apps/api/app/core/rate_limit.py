"""
Sliding-window rate limiting.

Tiers (per client key):
- general: every /api request
- sensitive: mutating + auth routes, checked in addition to general
- login: failed login attempts only (successful logins are forgiven)

Counters live behind RateLimitStore so another backend can replace the in-memory one.
"""
from __future__ import annotations

import math
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Optional, Protocol

from fastapi import Request

from app.core.errors import CatalogError
from app.core.observability import emit


@dataclass(frozen=True)
class RateDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int = 0


class RateLimitStore(Protocol):
    def hit(self, key: str, limit: int, window: float) -> RateDecision: ...

    def undo(self, key: str) -> None: ...

    def reset(self) -> None: ...


class InMemoryRateLimitStore:
    """Per-key timestamp log; each hit prunes, checks and records under one lock.

    Keys whose log empties are dropped; idle keys are swept at most once per window.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._hits: Dict[str, Deque[float]] = {}
        self._last_sweep: Optional[float] = None

    def hit(self, key: str, limit: int, window: float) -> RateDecision:
        with self._lock:
            now = self._clock()
            cutoff = now - window
            self._sweep(now, cutoff, window)

            bucket = self._hits.setdefault(key, deque())
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()

            if len(bucket) >= limit:
                if not bucket:
                    del self._hits[key]
                    return RateDecision(False, limit, 0, max(1, math.ceil(window)))
                retry = max(1, math.ceil(bucket[0] + window - now))
                return RateDecision(False, limit, 0, retry)

            bucket.append(now)
            return RateDecision(True, limit, limit - len(bucket))

    def undo(self, key: str) -> None:
        with self._lock:
            bucket = self._hits.get(key)
            if bucket:
                bucket.pop()
            if not bucket:
                self._hits.pop(key, None)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = None

    def size(self) -> int:
        with self._lock:
            return len(self._hits)

    def _sweep(self, now: float, cutoff: float, window: float) -> None:
        if self._last_sweep is not None and now - self._last_sweep < window:
            return
        self._last_sweep = now
        for key in [k for k, b in self._hits.items() if not b or b[-1] <= cutoff]:
            del self._hits[key]


def client_key(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client is not None and request.client.host:
        return request.client.host
    return "unknown"


class RateLimiter:
    """One tier: `name` scopes the bucket so tiers count independently."""

    def __init__(self, name: str, limit: int, window_seconds: int, store: Optional[RateLimitStore] = None):
        self.name = name
        self.limit = limit
        self.window_seconds = window_seconds
        self.store: RateLimitStore = store if store is not None else InMemoryRateLimitStore()

    def key_for(self, request: Request) -> str:
        return f"{self.name}:{client_key(request)}"

    def check(self, request: Request) -> RateDecision:
        key = self.key_for(request)
        decision = self.store.hit(key, self.limit, self.window_seconds)
        if not decision.allowed:
            emit(
                "warning",
                "rate_limit.exceeded",
                f"{self.name} limit exceeded for {request.method} {request.url.path}",
                module=__name__,
                tier=self.name,
                client=client_key(request),
                retry_after=decision.retry_after,
            )
            raise CatalogError(
                "RATE_LIMITED",
                "Too many requests, please try again later",
                429,
                details={"retry_after": decision.retry_after},
                headers={"Retry-After": str(decision.retry_after)},
            )
        return decision

    def forgive(self, request: Request) -> None:
        self.store.undo(self.key_for(request))


def _limiter(request: Request, name: str) -> RateLimiter:
    return request.app.state.rate_limiters[name]


def general_limit(request: Request) -> None:
    _limiter(request, "general").check(request)


def sensitive_limit(request: Request) -> None:
    _limiter(request, "sensitive").check(request)


def login_limit(request: Request) -> None:
    _limiter(request, "login").check(request)


def build_limiters(window_seconds: int, general: int, sensitive: int, login: int) -> Dict[str, RateLimiter]:
    store = InMemoryRateLimitStore()
    return {
        "general": RateLimiter("general", general, window_seconds, store),
        "sensitive": RateLimiter("sensitive", sensitive, window_seconds, store),
        "login": RateLimiter("login", login, window_seconds, store),
    }
