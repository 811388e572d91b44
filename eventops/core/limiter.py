# eventops/core/limiter.py
"""
Request rate limiting for the public auth endpoints.

Kept in its own module so routers and main.py can both import it.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from eventops.core.config import settings

# Keyed by client IP. Disabled via RATE_LIMIT_ENABLED=false (tests do this).
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

LOGIN_RATE_LIMIT = "20/minute"
REGISTER_RATE_LIMIT = "10/minute"
