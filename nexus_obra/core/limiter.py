"""Per-application rate limiter (fixed window, in-memory, keyed by client IP).

Built on the limits package (the engine behind slowapi). One RateLimiter is
created per app in create_app() and stored on app.state.rate_limiter; route
dependencies look it up from the request, so tests and multiple apps never
share counters. Responses carry the draft-8 RateLimit and RateLimit-Policy
headers; a 429 also carries Retry-After. Counters live in process memory and reset on window expiry
or on reset(); they are not durable across restarts.
"""

from __future__ import annotations

import logging
import math
import time

from fastapi import Request, Response
from limits import RateLimitItem, RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter
from slowapi.util import get_remote_address

from nexus_obra.core.config import Settings
from nexus_obra.domain.exceptions import RateLimitExceededException

logger = logging.getLogger(__name__)

API_SCOPE = "api"
AUTH_SCOPE = "auth"


class RateLimiter:
    """Fixed-window request budget per (scope, client key)."""

    def __init__(
        self,
        limits: dict[str, RateLimitItem],
        *,
        enabled: bool = True,
    ) -> None:
        self._limits = dict(limits)
        self.enabled = enabled
        self._storage = MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self._storage)

    @classmethod
    def from_settings(cls, settings: Settings) -> RateLimiter:
        """Build the api and auth scopes from configured window/max values."""
        return cls(
            {
                API_SCOPE: RateLimitItemPerSecond(
                    settings.rate_limit_max, settings.rate_limit_window_seconds
                ),
                AUTH_SCOPE: RateLimitItemPerSecond(
                    settings.auth_rate_limit_max,
                    settings.auth_rate_limit_window_seconds,
                ),
            },
            enabled=settings.rate_limit_enabled,
        )

    def _item(self, scope: str) -> RateLimitItem:
        item = self._limits.get(scope)
        if item is None:
            raise KeyError(f"Unknown rate limit scope: {scope}")
        return item

    def hit(self, scope: str, key: str) -> bool:
        """Consume one request for key in scope. Return False when the window is exhausted."""
        if not self.enabled:
            return True
        return self._strategy.hit(self._item(scope), scope, key)

    def check(self, request: Request, scope: str) -> dict[str, str]:
        """Consume one request for the caller's IP and return its RateLimit headers.

        Raises:
            RateLimitExceededException: the window is exhausted. Carries the
                limit, window, remaining count and seconds until the reset.
        """
        if not self.enabled:
            return {}
        key = get_remote_address(request)
        item = self._item(scope)
        allowed = self._strategy.hit(item, scope, key)
        reset_time, remaining = self._strategy.get_window_stats(item, scope, key)
        reset_after = max(0, math.ceil(reset_time - time.time()))
        if not allowed:
            logger.info(
                "Rate limit exceeded: scope=%s key=%s path=%s", scope, key, request.url.path
            )
            raise RateLimitExceededException(
                scope,
                limit=item.amount,
                window_seconds=item.get_expiry(),
                remaining=remaining,
                retry_after=max(1, reset_after),
            )
        return rate_limit_headers(scope, item.amount, item.get_expiry(), remaining, reset_after)

    def reset(self) -> None:
        """Drop all counters (start every window afresh)."""
        self._storage.reset()


def rate_limit_headers(
    scope: str, limit: int, window_seconds: int, remaining: int, reset_after: int
) -> dict[str, str]:
    """Build the IETF draft-8 RateLimit-Policy and RateLimit header pair."""
    return {
        "RateLimit-Policy": f'"{scope}";q={limit};w={window_seconds}',
        "RateLimit": f'"{scope}";r={remaining};t={reset_after}',
    }


def get_rate_limiter(request: Request) -> RateLimiter | None:
    """Return the limiter registered on the app, or None when the app has none."""
    return getattr(request.app.state, "rate_limiter", None)


def _apply_limit(request: Request, response: Response, scope: str) -> None:
    limiter = get_rate_limiter(request)
    if limiter is not None:
        response.headers.update(limiter.check(request, scope))


async def limit_api(request: Request, response: Response) -> None:
    """Dependency: general API budget."""
    _apply_limit(request, response, API_SCOPE)


async def limit_auth(request: Request, response: Response) -> None:
    """Dependency: stricter budget for login, signup and password reset."""
    _apply_limit(request, response, AUTH_SCOPE)
