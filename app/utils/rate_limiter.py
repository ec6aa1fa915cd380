import logging

from fastapi import Depends, Request
from redis import Redis

from app.core.cache import get_cache
from app.core.exceptions import RateLimitError

logger = logging.getLogger(__name__)


def allow(client: Redis, key: str, limit: int, window_seconds: int) -> bool:
    """Return True if action under key is allowed within window, else False.

    Uses INCR + EXPIRE (nx) for a fixed window per key.
    """
    with client.pipeline() as pipe:
        pipe.incr(key, 1)
        pipe.expire(key, window_seconds, nx=True)
        count, _ = pipe.execute()
    return int(count) <= limit


def allow_for_email(client: Redis, action: str, email: str, limit: int, window_seconds: int = 60) -> bool:
    safe_email = (email or "").lower()
    return allow(client, f"ratelimit:{action}:{safe_email}", limit, window_seconds)


def client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def enforce_rate_limit(request: Request, cache: Redis = Depends(get_cache)) -> None:
    """Router-level dependency: reject the request once the client's window is spent."""
    settings = request.app.state.settings
    key = f"ratelimit:requests:{client_key(request)}"
    if not allow(cache, key, settings.RATE_LIMIT_MAX_REQUESTS, settings.RATE_LIMIT_WINDOW_SECONDS):
        logger.warning("Rate limit exceeded for %s", key)
        raise RateLimitError(
            "Too many requests, slow down.",
            [f"limit of {settings.RATE_LIMIT_MAX_REQUESTS} requests per "
             f"{settings.RATE_LIMIT_WINDOW_SECONDS}s exceeded"],
        )
