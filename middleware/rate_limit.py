# middleware/rate_limit.py
"""
Rate limiting configuration using slowapi.

Usage in route files:
    from middleware.rate_limit import limiter, AUTH_RATE_LIMIT

    @router.post("/login")
    @limiter.limit(AUTH_RATE_LIMIT)
    async def login(request: Request, ...):
        ...
"""
import logging
import os

from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from services.auth import token_subject

logger = logging.getLogger(__name__)


def _get_rate_limit_key(request: Request) -> str:
    """
    Identify the caller for rate-limiting.

    Strategy:
      1. If the request carries a valid JWT, use the user id (sub claim)
         so the limit is per-user regardless of IP.
      2. Otherwise, fall back to client IP.
    """
    sub = token_subject(request)
    if sub:
        return f"user:{sub}"
    return get_remote_address(request)


# ─── Default limits ────────────────────────────────────────────────
# Env-overridable so you can tune per-environment without redeploying.
DEFAULT_RATE_LIMIT = os.getenv("RATE_LIMIT_DEFAULT", "100/minute")
# register / login
AUTH_RATE_LIMIT = os.getenv("RATE_LIMIT_AUTH", "20/minute")

limiter = Limiter(
    key_func=_get_rate_limit_key,
    default_limits=[DEFAULT_RATE_LIMIT],
    storage_uri=os.getenv("REDIS_URL") or "memory://",
    strategy="fixed-window",
)
