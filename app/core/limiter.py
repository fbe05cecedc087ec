"""Per-client rate limits (SlowAPI), keyed by remote address.

Limits are read from settings on each request, so they follow
UPLOAD_RATE_LIMIT / VERIFY_RATE_LIMIT without touching the routes.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)

limit_upload = limiter.limit(lambda: get_settings().upload_rate_limit)
limit_verify = limiter.limit(lambda: get_settings().verify_rate_limit)
