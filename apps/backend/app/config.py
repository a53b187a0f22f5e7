import os
import logging

import psycopg2

from app.db_config import db_config

logger = logging.getLogger(__name__)

DEV_SECRET_KEY = "secret-dev"
DEFAULT_PORT = 3001


def get_env() -> str:
    return os.getenv("JOBLY_ENV", "production").lower()


def is_dev_mode() -> bool:
    return get_env() == "dev"


def is_test_mode() -> bool:
    return get_env() == "test"


def get_secret_key() -> str:
    """Signing key for auth tokens. Falls back to a dev key outside production."""
    secret = os.getenv("SECRET_KEY")
    if secret:
        return secret
    if get_env() == "production":
        logger.warning("[config] SECRET_KEY not set in production; using insecure dev key")
    return DEV_SECRET_KEY


def get_bcrypt_work_factor() -> int:
    # bcrypt accepts 4..31 rounds; keep tests fast
    default = 4 if is_test_mode() else 12
    try:
        return int(os.getenv("BCRYPT_WORK_FACTOR", default))
    except ValueError:
        logger.warning("[config] BCRYPT_WORK_FACTOR is not an integer; using default")
        return default


def get_port() -> int:
    return int(os.getenv("PORT", DEFAULT_PORT))


class Capabilities:
    @staticmethod
    def check_db_connection() -> bool:
        """Verify database connection with a trivial query"""
        conn_params = db_config.get_connection_params()
        if not conn_params:
            return False

        try:
            # Use very short timeout for health checks (1 second max)
            conn = psycopg2.connect(**conn_params, connect_timeout=1)
            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            cursor.fetchone()
            cursor.close()
            conn.close()
            return True
        except psycopg2.Error as e:
            logger.warning(f"[config] Database health check failed: {e}")
            return False

    @classmethod
    def get_status(cls) -> dict:
        db = cls.check_db_connection()
        return {
            "status": "green" if db else "amber",
            "env": get_env(),
            "components": {
                "db": db,
            },
        }


def get_env_presence() -> dict:
    required_vars = [
        "JOBLY_ENV",
        "SECRET_KEY",
        "DATABASE_URL",
        "DATABASE_URL_TEST",
        "BCRYPT_WORK_FACTOR",
        "PORT",
    ]

    return {var: bool(os.getenv(var)) for var in required_vars}
