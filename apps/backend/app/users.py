"""
User repository: registration, login check, profile CRUD and job applications.
Passwords are stored as bcrypt hashes and never returned.
"""
import logging
from typing import Any, Mapping

import bcrypt
from fastapi import Depends

from app.config import get_bcrypt_work_factor
from app.db import Database, get_db
from app.errors import ConflictError, NotFoundError, UnauthorizedError
from app.query_builder import USER_COLUMNS, sql_for_partial_update

logger = logging.getLogger(__name__)

USER_SELECT = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=get_bcrypt_work_factor())
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


class UserRepository:
    def __init__(self, db: Database):
        self.db = db

    def authenticate(self, username: str, password: str) -> dict:
        """
        Returns {username, firstName, lastName, email, isAdmin}.

        Raises UnauthorizedError if the user is missing or the password is wrong.
        """
        rows = self.db.execute(
            f"""SELECT {USER_SELECT}, password
                FROM users
                WHERE username = $1""",
            [username],
        )
        if rows:
            user = rows[0]
            hashed = user.pop("password")
            if check_password(password, hashed):
                return user

        logger.info(f"[users] Failed login for {username}")
        raise UnauthorizedError("Invalid username/password")

    def register(self, data: Mapping[str, Any]) -> dict:
        """
        Create a user from {username, password, firstName, lastName, email, isAdmin}.

        Raises ConflictError on a duplicate username.
        """
        duplicate = self.db.execute(
            "SELECT username FROM users WHERE username = $1",
            [data["username"]],
        )
        if duplicate:
            raise ConflictError(f"Duplicate username: {data['username']}")

        rows = self.db.execute(
            f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {USER_SELECT}""",
            [
                data["username"],
                hash_password(data["password"]),
                data["firstName"],
                data["lastName"],
                data["email"],
                bool(data.get("isAdmin", False)),
            ],
        )
        logger.info(f"[users] Registered {data['username']}")
        return rows[0]

    def find_all(self) -> list[dict]:
        return self.db.execute(
            f"""SELECT {USER_SELECT}
                FROM users
                ORDER BY username"""
        )

    def get(self, username: str) -> dict:
        """
        Returns {username, firstName, lastName, email, isAdmin, jobs}
        where jobs is the list of job ids the user applied to.
        """
        rows = self.db.execute(
            f"""SELECT {USER_SELECT}
                FROM users
                WHERE username = $1""",
            [username],
        )
        if not rows:
            raise NotFoundError(f"No user: {username}")

        user = rows[0]
        applications = self.db.execute(
            """SELECT job_id
               FROM applications
               WHERE username = $1
               ORDER BY job_id""",
            [username],
        )
        user["jobs"] = [row["job_id"] for row in applications]
        return user

    def update(self, username: str, data: Mapping[str, Any]) -> dict:
        """
        Partial update of {firstName, lastName, password, email, isAdmin}.
        A new password is hashed before it is stored.
        """
        data = dict(data)
        if data.get("password"):
            data["password"] = hash_password(data["password"])

        update = sql_for_partial_update(data, USER_COLUMNS)
        rows = self.db.execute(
            f"""UPDATE users
                SET {update.set_clause}
                WHERE username = ${update.next_index}
                RETURNING {USER_SELECT}""",
            [*update.values, username],
        )
        if not rows:
            raise NotFoundError(f"No user: {username}")

        logger.info(f"[users] Updated {username}: {', '.join(data)}")
        return rows[0]

    def remove(self, username: str) -> None:
        rows = self.db.execute(
            """DELETE
               FROM users
               WHERE username = $1
               RETURNING username""",
            [username],
        )
        if not rows:
            raise NotFoundError(f"No user: {username}")
        logger.info(f"[users] Deleted {username}")

    def apply_to_job(self, username: str, job_id: int) -> None:
        """
        Record an application.

        Raises NotFoundError for an unknown job or user,
        ConflictError if the user already applied.
        """
        if not self.db.execute("SELECT id FROM jobs WHERE id = $1", [job_id]):
            raise NotFoundError(f"No job: {job_id}")
        if not self.db.execute("SELECT username FROM users WHERE username = $1", [username]):
            raise NotFoundError(f"No username: {username}")

        self.db.execute(
            """INSERT INTO applications (job_id, username)
               VALUES ($1, $2)""",
            [job_id, username],
        )
        logger.info(f"[users] {username} applied to job {job_id}")


def get_user_repo(db: Database = Depends(get_db)) -> UserRepository:
    return UserRepository(db)
