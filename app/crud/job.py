"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the storage layer.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from app.models.job import Job
from app.schemas.job import JobCreate


def create(db: Session, job_data: JobCreate) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id
    """
    db_job = Job(
        title=job_data.title,
        description=job_data.description,
        job_type=job_data.job_type,
        employment_type=job_data.employment_type,
        min_price=job_data.min_price,
        max_price=job_data.max_price,
        price_type=job_data.price_type,
        skills=list(job_data.skills),
        creator_id=job_data.creator_id,
        is_active=job_data.is_active,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: int) -> Optional[Job]:
    """
    Retrieve a job by its ID.

    Args:
        db: Database session
        job_id: Job ID to retrieve

    Returns:
        Job instance if found, None otherwise
    """
    return db.query(Job).filter(Job.id == job_id).first()


def get_multi(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[Job]:
    """
    Retrieve jobs in insertion order with optional exact-match filtering.

    Args:
        db: Database session
        filters: Optional mapping of column name to required value

    Returns:
        List of Job instances
    """
    query = db.query(Job)

    if filters:
        query = query.filter_by(**filters)

    return query.order_by(Job.id).all()


def get_by_creator(db: Session, creator_id: int) -> List[Job]:
    return get_multi(db, {"creator_id": creator_id})


def update(db: Session, job_id: int, fields: Dict[str, Any]) -> Optional[Job]:
    """
    Merge fields into an existing job.

    Args:
        db: Database session
        job_id: Job ID to update
        fields: Column values to set; unknown keys and "id" are ignored

    Returns:
        Updated Job instance if found, None otherwise
    """
    job = get_by_id(db, job_id)
    if not job:
        return None

    for key, value in fields.items():
        if key != "id" and hasattr(Job, key):
            setattr(job, key, value)

    db.commit()
    db.refresh(job)

    return job
