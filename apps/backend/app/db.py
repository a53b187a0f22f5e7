"""
Query interface over psycopg2.

Repositories talk to the store only through Database.execute(sql, params),
where `sql` uses positional placeholders ($1, $2, ...) and `params` is the
ordered list of values they refer to. psycopg2 itself only understands
pyformat, so placeholders are rewritten to named parameters here.
"""
import logging
import re
from typing import Any, Iterator, Optional, Sequence

import psycopg2
from psycopg2 import errors as pg_errors
from psycopg2.extras import RealDictCursor

from app.db_config import db_config
from app.errors import BadRequestError, ConflictError, JoblyError

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")


def to_pyformat(sql: str, params: Sequence[Any]) -> tuple[str, Optional[dict]]:
    """
    Rewrite $n placeholders as %(pn)s and build the matching dict.

    Literal percent signs in `sql` are doubled so psycopg2 does not read
    them as format markers. A placeholder may be used more than once.
    """
    if not params:
        return sql, None

    named = {f"p{i}": value for i, value in enumerate(params, start=1)}
    text = _PLACEHOLDER.sub(lambda m: f"%(p{m.group(1)})s", sql.replace("%", "%%"))
    return text, named


class Database:
    """One psycopg2 connection in autocommit mode."""

    def __init__(self, conn):
        self.conn = conn

    def execute(self, sql: str, params: Sequence[Any] = ()) -> list[dict]:
        """Run one statement and return its rows as dicts (empty if none)."""
        text, named = to_pyformat(sql, params)
        cursor = self.conn.cursor(cursor_factory=RealDictCursor)
        try:
            cursor.execute(text, named)
            rows = cursor.fetchall() if cursor.description else []
        except pg_errors.UniqueViolation as e:
            logger.warning(f"[db] Unique violation: {e.diag.message_detail}")
            raise ConflictError(e.diag.message_detail or "Duplicate value") from e
        except pg_errors.ForeignKeyViolation as e:
            logger.warning(f"[db] Foreign key violation: {e.diag.message_detail}")
            raise BadRequestError(e.diag.message_detail or "Invalid reference") from e
        finally:
            cursor.close()
        return [dict(row) for row in rows]

    def close(self):
        self.conn.close()


def connect(conn_params: Optional[dict] = None) -> Database:
    conn_params = conn_params or db_config.get_connection_params()
    if not conn_params:
        raise JoblyError("Database not configured", status=503)
    conn = psycopg2.connect(**conn_params, connect_timeout=5)
    conn.autocommit = True
    return Database(conn)


def get_db() -> Iterator[Database]:
    """FastAPI dependency: one connection per request, closed afterwards."""
    db = connect()
    try:
        yield db
    finally:
        db.close()
