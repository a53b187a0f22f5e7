"""
Company repository.
"""
import logging
from typing import Any, Mapping, Optional

from fastapi import Depends

from app.db import Database, get_db
from app.errors import BadRequestError, ConflictError, NotFoundError
from app.jobs import format_job
from app.query_builder import COMPANY_COLUMNS, build_company_filter, sql_for_partial_update

logger = logging.getLogger(__name__)

COMPANY_SELECT = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


class CompanyRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, data: Mapping[str, Any]) -> dict:
        """
        Create a company from {handle, name, description, numEmployees, logoUrl}.

        Raises ConflictError if the handle is already taken.
        """
        duplicate = self.db.execute(
            "SELECT handle FROM companies WHERE handle = $1",
            [data["handle"]],
        )
        if duplicate:
            raise ConflictError(f"Duplicate company: {data['handle']}")

        rows = self.db.execute(
            f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COMPANY_SELECT}""",
            [
                data["handle"],
                data["name"],
                data.get("description") or "",
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
        logger.info(f"[companies] Created company {data['handle']}")
        return rows[0]

    def find_all(self, spec: Optional[Mapping[str, Any]] = None) -> list[dict]:
        """
        All companies ordered by name, optionally narrowed by
        {nameLike, minEmployees, maxEmployees}.

        Raises BadRequestError if minEmployees > maxEmployees.
        """
        spec = spec or {}
        min_employees = spec.get("minEmployees")
        max_employees = spec.get("maxEmployees")
        if min_employees is not None and max_employees is not None and min_employees > max_employees:
            raise BadRequestError("minEmployees cannot be greater than maxEmployees")

        where = build_company_filter(spec)
        rows = self.db.execute(
            f"""SELECT {COMPANY_SELECT}
                FROM companies
                {where.where}
                ORDER BY name""",
            where.values,
        )
        return rows

    def get(self, handle: str) -> dict:
        """
        Returns {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...].
        """
        rows = self.db.execute(
            f"""SELECT {COMPANY_SELECT}
                FROM companies
                WHERE handle = $1""",
            [handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        company = rows[0]
        jobs = self.db.execute(
            """SELECT id, title, salary, equity
               FROM jobs
               WHERE company_handle = $1
               ORDER BY id""",
            [handle],
        )
        company["jobs"] = [format_job(job) for job in jobs]
        return company

    def update(self, handle: str, data: Mapping[str, Any]) -> dict:
        """
        Partial update of {name, description, numEmployees, logoUrl}.
        The handle itself never changes.
        """
        update = sql_for_partial_update(data, COMPANY_COLUMNS)
        rows = self.db.execute(
            f"""UPDATE companies
                SET {update.set_clause}
                WHERE handle = ${update.next_index}
                RETURNING {COMPANY_SELECT}""",
            [*update.values, handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        logger.info(f"[companies] Updated company {handle}: {', '.join(data)}")
        return rows[0]

    def remove(self, handle: str) -> None:
        rows = self.db.execute(
            """DELETE
               FROM companies
               WHERE handle = $1
               RETURNING handle""",
            [handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")
        logger.info(f"[companies] Deleted company {handle}")


def get_company_repo(db: Database = Depends(get_db)) -> CompanyRepository:
    return CompanyRepository(db)
