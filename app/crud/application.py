"""
CRUD operations for job applications.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from app.models.application import Application
from app.schemas.application import ApplicationCreate


def create(db: Session, application_data: ApplicationCreate) -> Application:
    """
    Create a new application.

    Args:
        db: Database session
        application_data: Validated application data

    Returns:
        Application: Created application record
    """
    application = Application(**application_data.model_dump())

    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def get_by_id(db: Session, application_id: int) -> Optional[Application]:
    return db.query(Application).filter(Application.id == application_id).first()


def get_by_job(db: Session, job_id: int) -> List[Application]:
    """
    Get all applications for a job, oldest first.
    """
    return db.query(Application).filter(Application.job_id == job_id).order_by(Application.id).all()


def get_by_editor(db: Session, editor_id: int) -> List[Application]:
    return db.query(Application).filter(Application.editor_id == editor_id).order_by(Application.id).all()


def update(db: Session, application_id: int, fields: Dict[str, Any]) -> Optional[Application]:
    """
    Merge fields into an application.

    Status transitions are not checked here; the route layer guards them.

    Returns:
        Updated Application or None if not found
    """
    application = get_by_id(db, application_id)
    if not application:
        return None

    for key, value in fields.items():
        if key != "id" and hasattr(Application, key):
            setattr(application, key, value)

    db.commit()
    db.refresh(application)
    return application
