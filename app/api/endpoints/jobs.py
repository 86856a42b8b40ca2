import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from app.core.deps import ensure_owner, get_optional_session, get_storage
from app.core.errors import NotFoundError, ValidationError
from app.core.sessions import SessionData
from app.core.storage import StorageBackend
from app.schemas.job import PRICE_RANGE_MESSAGE, JobCreate, JobRecord, JobUpdate

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[JobRecord])
def list_jobs(
    is_active: Optional[bool] = Query(None, alias="isActive"),
    job_type: Optional[str] = Query(None, alias="jobType"),
    employment_type: Optional[str] = Query(None, alias="employmentType"),
    creator_id: Optional[int] = Query(None, alias="creatorId"),
    storage: StorageBackend = Depends(get_storage)
):
    """
    List jobs in the order they were posted.

    Args:
        isActive: Only jobs that are (or are not) open
        jobType: Exact job type, e.g. "Remote"
        employmentType: Exact employment type, e.g. "Per Project"
        creatorId: Only jobs posted by this creator
    """
    filters = {
        "is_active": is_active,
        "job_type": job_type,
        "employment_type": employment_type,
        "creator_id": creator_id,
    }
    return storage.get_jobs({key: value for key, value in filters.items() if value is not None})


@router.get("/creator/{creator_id}", response_model=List[JobRecord])
def list_jobs_by_creator(creator_id: int, storage: StorageBackend = Depends(get_storage)):
    return storage.get_jobs_by_creator(creator_id)


@router.get("/{job_id}", response_model=JobRecord)
def get_job(job_id: int, storage: StorageBackend = Depends(get_storage)):
    """
    Retrieve a job by ID.
    """
    job = storage.get_job(job_id)

    if not job:
        raise NotFoundError("Job not found")

    return job


@router.post("", status_code=201, response_model=JobRecord)
def create_job(
    request: JobCreate,
    storage: StorageBackend = Depends(get_storage)
):
    """
    Post a new job.

    The price range must satisfy minPrice <= maxPrice and the creator must
    be an existing user.
    """
    if not storage.get_user(request.creator_id):
        raise ValidationError("Creator not found")

    job = storage.create_job(request)

    logger.info(f"Created job {job.id}: {job.title} (creator_id={job.creator_id})")
    return job


@router.patch("/{job_id}", response_model=JobRecord)
def update_job(
    job_id: int,
    request: JobUpdate,
    session: Optional[SessionData] = Depends(get_optional_session),
    storage: StorageBackend = Depends(get_storage)
):
    """
    Partially update a job, e.g. {"isActive": false} to close it.

    Only the job's creator (or an admin) may update it. The merged price
    range is re-checked.
    """
    job = storage.get_job(job_id)

    if not job:
        raise NotFoundError("Job not found")

    ensure_owner(session, job.creator_id, "job")

    changes = request.changes()
    min_price = changes.get("min_price", job.min_price)
    max_price = changes.get("max_price", job.max_price)
    if min_price > max_price:
        raise ValidationError(PRICE_RANGE_MESSAGE)

    updated_job = storage.update_job(job_id, changes)
    if not updated_job:
        raise NotFoundError("Job not found")

    logger.info(f"Updated job {job_id}: {sorted(changes)}")
    return updated_job
