"""
API endpoints for job applications.

Application status lifecycle:

    pending -> accepted
            -> rejected

Accepted and rejected are terminal. Only the creator who posted the job
(or an admin) can decide an application.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends

from app.core.deps import ensure_owner, get_optional_session, get_storage
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.sessions import SessionData
from app.core.storage import StorageBackend
from app.models.application import ApplicationStatus
from app.schemas.application import ApplicationCreate, ApplicationRecord, ApplicationStatusUpdate

router = APIRouter(tags=["Applications"])
logger = logging.getLogger(__name__)


@router.get("/applications/editor/{editor_id}", response_model=List[ApplicationRecord])
def list_applications_by_editor(editor_id: int, storage: StorageBackend = Depends(get_storage)):
    """Applications an editor has submitted."""
    return storage.get_applications_by_editor(editor_id)


@router.get("/applications/{application_id}", response_model=ApplicationRecord)
def get_application(application_id: int, storage: StorageBackend = Depends(get_storage)):
    application = storage.get_application(application_id)

    if not application:
        raise NotFoundError("Application not found")

    return application


@router.get("/jobs/{job_id}/applications", response_model=List[ApplicationRecord])
def list_applications_for_job(job_id: int, storage: StorageBackend = Depends(get_storage)):
    """
    Applications received by a job, oldest first.
    """
    if not storage.get_job(job_id):
        raise NotFoundError("Job not found")

    return storage.get_applications_by_job(job_id)


@router.post("/applications", status_code=201, response_model=ApplicationRecord)
def create_application(
    request: ApplicationCreate,
    storage: StorageBackend = Depends(get_storage)
):
    """
    Apply to a job.

    Flow:
    1. The job must exist and still be active
    2. The applying editor must exist
    3. The application starts as pending
    """
    job = storage.get_job(request.job_id)
    if not job:
        raise NotFoundError("Job not found")
    if not job.is_active:
        raise ValidationError("Job is no longer accepting applications")

    if not storage.get_user(request.editor_id):
        raise NotFoundError("Editor not found")

    if request.status != ApplicationStatus.PENDING:
        raise ValidationError("New applications must start as pending")

    application = storage.create_application(request)

    logger.info(f"Editor {application.editor_id} applied to job {application.job_id} (application {application.id})")
    return application


@router.patch("/applications/{application_id}", response_model=ApplicationRecord)
def update_application_status(
    application_id: int,
    request: ApplicationStatusUpdate,
    session: Optional[SessionData] = Depends(get_optional_session),
    storage: StorageBackend = Depends(get_storage)
):
    """
    Accept or reject a pending application.

    Raises:
        NotFoundError 404: If the application (or its job) does not exist
        AuthenticationError 401: If not logged in
        AuthorizationError 403: If the caller did not post the job
        ValidationError 400: If the new status is not accepted/rejected
        ConflictError 400: If the application was already decided
    """
    application = storage.get_application(application_id)
    if not application:
        raise NotFoundError("Application not found")

    job = storage.get_job(application.job_id)
    if not job:
        raise NotFoundError("Job not found")

    ensure_owner(session, job.creator_id, "application")

    if request.status == ApplicationStatus.PENDING:
        raise ValidationError("Status must be accepted or rejected")

    if application.status != ApplicationStatus.PENDING:
        raise ConflictError(f"Application has already been {application.status.value}")

    updated = storage.update_application(application_id, {"status": request.status})
    if not updated:
        raise NotFoundError("Application not found")

    logger.info(f"Application {application_id} {request.status.value} by user {session.user_id}")
    return updated
