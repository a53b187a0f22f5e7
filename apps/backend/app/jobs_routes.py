"""
Job endpoints.
Reads are public; creating, changing and deleting jobs needs an admin token.
"""
from fastapi import APIRouter, Depends, Request

from app.jobs import JobRepository, get_job_repo
from app.schemas import JobFilter, JobNew, JobUpdate, parse_model
from security.auth import ensure_admin

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", status_code=201, dependencies=[Depends(ensure_admin)])
def create_job(body: JobNew, jobs: JobRepository = Depends(get_job_repo)):
    """Returns {job: {id, title, salary, equity, companyHandle}}"""
    job = jobs.create(body.model_dump())
    return {"job": job}


@router.get("")
def list_jobs(request: Request, jobs: JobRepository = Depends(get_job_repo)):
    """
    Returns {jobs: [{id, title, salary, equity, companyHandle}, ...]}

    Optional query filters: title (substring, case-insensitive),
    minSalary, hasEquity=true|false.
    """
    filters = parse_model(JobFilter, request.query_params)
    return {"jobs": jobs.filter(filters.model_dump(exclude_none=True))}


@router.get("/{job_id}")
def get_job(job_id: int, jobs: JobRepository = Depends(get_job_repo)):
    """Returns {job: {id, title, salary, equity, company}}"""
    return {"job": jobs.get(job_id)}


@router.patch("/{job_id}", dependencies=[Depends(ensure_admin)])
def update_job(job_id: int, body: JobUpdate, jobs: JobRepository = Depends(get_job_repo)):
    """
    Partial update of {title, salary, equity}.
    Sending id or companyHandle is a 400.
    """
    job = jobs.update(job_id, body.model_dump(exclude_unset=True))
    return {"job": job}


@router.delete("/{job_id}", dependencies=[Depends(ensure_admin)])
def delete_job(job_id: int, jobs: JobRepository = Depends(get_job_repo)):
    jobs.remove(job_id)
    return {"deleted": job_id}
