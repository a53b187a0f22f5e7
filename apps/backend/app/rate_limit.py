"""
IP-based rate limiting for the login and registration endpoints.
"""
import os
from slowapi import Limiter
from slowapi.util import get_remote_address

_env = os.getenv("JOBLY_ENV", "production").lower()

# Rate limit: 30 requests per minute in dev, 5 in production
RATE_LIMIT_LOGIN = os.getenv("RATE_LIMIT_LOGIN", "30/minute" if _env == "dev" else "5/minute")

limiter = Limiter(key_func=get_remote_address, enabled=_env != "test")
