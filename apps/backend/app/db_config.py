"""
Database configuration module.
Reads DATABASE_URL (or DATABASE_URL_TEST when JOBLY_ENV=test) and turns it
into psycopg2 connection parameters.
"""

import os
import logging
from urllib.parse import urlparse, unquote

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "postgresql:///jobly"
DEFAULT_TEST_DATABASE_URL = "postgresql:///jobly_test"


def get_database_url() -> str:
    """Database URL for the current JOBLY_ENV."""
    if os.getenv("JOBLY_ENV", "").lower() == "test":
        return os.getenv("DATABASE_URL_TEST") or DEFAULT_TEST_DATABASE_URL
    return os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL


def mask_database_url(url: str) -> str:
    """Hide the password part of a connection URL for logging."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return "<unparseable>"
    if not parsed.password:
        return url
    return url.replace(f":{parsed.password}@", ":***@")


class DBConfig:
    """Database configuration resolved from the environment"""

    def __init__(self, database_url: str | None = None):
        self.database_url = database_url or get_database_url()
        logger.info(f"[db_config] database url: {mask_database_url(self.database_url)}")

    @property
    def is_db_enabled(self) -> bool:
        return bool(self.database_url)

    def get_connection_params(self) -> dict | None:
        """
        Get psycopg2 connection parameters.
        Returns dict with database, user, and (when given) host, port, password.
        Host-less URLs such as postgresql:///jobly use the local socket.
        """
        if not self.database_url:
            return None

        try:
            parsed = urlparse(self.database_url)
        except ValueError as e:
            logger.error(f"[db_config] Failed to parse database url: {e}")
            return None

        if parsed.scheme not in ("postgres", "postgresql"):
            logger.error(f"[db_config] Unsupported database scheme: {parsed.scheme}")
            return None

        params = {
            "database": parsed.path.lstrip('/') or 'jobly',
        }
        if parsed.hostname:
            params["host"] = parsed.hostname
            params["port"] = parsed.port or 5432
        if parsed.username:
            params["user"] = unquote(parsed.username)
        # URL-decode to handle special characters
        if parsed.password:
            params["password"] = unquote(parsed.password)

        logger.debug(
            f"[db_config] Database connection params: host={params.get('host', '<socket>')}, "
            f"database={params['database']}, user={params.get('user', '<default>')}"
        )
        return params


# Global instance
db_config = DBConfig()
