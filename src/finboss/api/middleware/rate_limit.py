"""Per-client rate limiting (disabled under APP_ENV=test)."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from finboss.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit],
    enabled=not settings.is_test,
)
