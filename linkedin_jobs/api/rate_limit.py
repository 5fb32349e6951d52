"""
Per-client rate limiting for the public API.

One fixed window per caller. Callers behind the RapidAPI proxy are keyed by
their proxy secret, direct callers by API key, everyone else by IP address.
"""

from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from linkedin_jobs.config.settings import Settings

_KEY_HEADERS = ["x-rapidapi-proxy-secret", "x-api-key"]


def client_key(request: Request) -> str:
    for header in _KEY_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return get_remote_address(request)


def create_limiter(config: Settings) -> Limiter:
    """A limiter applying the configured window to every route."""
    return Limiter(key_func=client_key, default_limits=[config.rate_limit])


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": "Too many requests",
            "detail": f"Rate limit exceeded: {exc.detail}",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
