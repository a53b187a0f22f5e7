"""
Job repository: create, read, filter, update and delete job rows.
"""
import logging
from decimal import Decimal
from typing import Any, Mapping, Optional

from fastapi import Depends

from app.db import Database, get_db
from app.errors import NotFoundError
from app.query_builder import JOB_COLUMNS, build_job_filter, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_SELECT = 'id, title, salary, equity, company_handle AS "companyHandle"'


def format_equity(equity: Any) -> Optional[str]:
    """NUMERIC comes back as Decimal; the API reports it as a string ("0.356")."""
    if equity is None:
        return None
    if isinstance(equity, Decimal):
        return str(equity)
    return str(Decimal(str(equity)))


def format_job(row: Mapping[str, Any]) -> dict:
    job = dict(row)
    if "equity" in job:
        job["equity"] = format_equity(job["equity"])
    return job


class JobRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, data: Mapping[str, Any]) -> dict:
        """
        Create a job from {title, salary, equity, companyHandle}.
        Returns {id, title, salary, equity, companyHandle}.
        """
        rows = self.db.execute(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_SELECT}""",
            [data["title"], data.get("salary"), data.get("equity"), data["companyHandle"]],
        )
        job = format_job(rows[0])
        logger.info(f"[jobs] Created job {job['id']} for {job['companyHandle']}")
        return job

    def find_all(self) -> list[dict]:
        rows = self.db.execute(
            f"""SELECT {JOB_SELECT}
                FROM jobs
                ORDER BY id DESC"""
        )
        return [format_job(row) for row in rows]

    def filter(self, spec: Mapping[str, Any]) -> list[dict]:
        """
        Jobs matching {title, minSalary, hasEquity}; any subset may be given.
        With nothing to filter on this is the same as find_all().
        """
        where = build_job_filter(spec)
        if not where:
            return self.find_all()

        rows = self.db.execute(
            f"""SELECT {JOB_SELECT}
                FROM jobs
                {where.where}
                ORDER BY id DESC""",
            where.values,
        )
        return [format_job(row) for row in rows]

    def get(self, job_id: int) -> dict:
        """
        Returns {id, title, salary, equity, company}
        where company is {handle, name, description, numEmployees, logoUrl}.

        Raises NotFoundError if there is no such job.
        """
        rows = self.db.execute(
            f"""SELECT {JOB_SELECT}
                FROM jobs
                WHERE id = $1""",
            [job_id],
        )
        if not rows:
            raise NotFoundError(f"No job with id of {job_id}")

        job = format_job(rows[0])
        company_handle = job.pop("companyHandle")

        companies = self.db.execute(
            """SELECT handle,
                      name,
                      description,
                      num_employees AS "numEmployees",
                      logo_url AS "logoUrl"
               FROM companies
               WHERE handle = $1""",
            [company_handle],
        )
        job["company"] = companies[0] if companies else None
        return job

    def update(self, job_id: int, data: Mapping[str, Any]) -> dict:
        """
        Partial update: only the fields present in `data` change.
        Fields may include {title, salary, equity}.

        Raises EmptyInputError (a BadRequestError) before querying if `data`
        is empty, NotFoundError if there is no such job.
        """
        update = sql_for_partial_update(data, JOB_COLUMNS)
        rows = self.db.execute(
            f"""UPDATE jobs
                SET {update.set_clause}
                WHERE id = ${update.next_index}
                RETURNING {JOB_SELECT}""",
            [*update.values, job_id],
        )
        if not rows:
            raise NotFoundError(f"No job with id of {job_id}")

        logger.info(f"[jobs] Updated job {job_id}: {', '.join(data)}")
        return format_job(rows[0])

    def remove(self, job_id: int) -> None:
        rows = self.db.execute(
            """DELETE
               FROM jobs
               WHERE id = $1
               RETURNING id""",
            [job_id],
        )
        if not rows:
            raise NotFoundError(f"No job with id of {job_id}")
        logger.info(f"[jobs] Deleted job {job_id}")


def get_job_repo(db: Database = Depends(get_db)) -> JobRepository:
    return JobRepository(db)
