import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin, query_filters
from jobly.crud import job as job_crud
from jobly.schemas.job import (
    DeletedResponse,
    JobCreateRequest,
    JobEnvelope,
    JobFilter,
    JobListResponse,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    """
    Create a new job posting. Admin only.

    The company named by companyHandle must exist.
    """
    job = job_crud.create(db, request)
    logger.info(f"{admin['username']} created job {job['id']}: {job['title']}")
    return {"job": job}


@router.get("", response_model=JobListResponse)
def list_jobs(
    filters: dict = Depends(query_filters(JobFilter)),
    db: Session = Depends(get_db),
):
    """
    List jobs, optionally filtered. Open to anyone.

    Query parameters:
        title: Case-insensitive substring of the title
        minSalary: Minimum salary
        hasEquity: true to only list jobs offering equity; false is ignored

    Any query parameter triggers filtering, so a query string with only
    unrecognized parameters is a 400.
    """
    if filters:
        jobs = job_crud.filter_by(db, filters)
    else:
        jobs = job_crud.find_all(db)
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID. Open to anyone."""
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    """
    Update a job's title, salary or equity. Admin only.
    """
    job = job_crud.update(db, job_id, request.model_dump(by_alias=True, exclude_unset=True))
    logger.info(f"{admin['username']} updated job {job_id}")
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    """
    Delete a job by ID. Admin only.
    """
    job_crud.remove(db, job_id)
    logger.info(f"{admin['username']} deleted job {job_id}")
    return {"deleted": str(job_id)}
