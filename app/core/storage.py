"""
Storage abstraction layer supporting both in-memory maps and a relational database.

This module provides one repository interface for every marketplace entity,
allowing seamless switching between in-process storage (for development and
tests) and SQLAlchemy (for production). The backend instance is created once
per application and injected into request handlers; nothing here is global.

Lookups that find nothing return None. Uniqueness rules (username, email,
one editor profile per user) are enforced atomically with the insert and
reported as ConflictError.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app import crud
from app.core.config import Settings
from app.core.database import init_db, make_engine, make_session_factory
from app.core.errors import ConflictError
from app.models.application import ApplicationStatus
from app.schemas.application import ApplicationCreate, ApplicationRecord
from app.schemas.editor_profile import EditorProfileCreate, EditorProfileRecord
from app.schemas.job import JobCreate, JobRecord
from app.schemas.review import ReviewCreate, ReviewRecord
from app.schemas.user import UserCreate, UserRecord

logger = logging.getLogger(__name__)

Filters = Optional[Dict[str, Any]]
RecordT = TypeVar("RecordT", bound=BaseModel)

USERNAME_TAKEN = "Username already exists"
EMAIL_TAKEN = "Email already registered"
PROFILE_EXISTS = "User already has an editor profile"


class StorageBackend:
    """Abstract base class for storage backends"""

    def init_schema(self) -> None:
        """Prepare the backend for use (create tables etc.)"""

    # Users
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        raise NotImplementedError

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        raise NotImplementedError

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        raise NotImplementedError

    def get_users(self, filters: Filters = None) -> List[UserRecord]:
        raise NotImplementedError

    def create_user(self, user: UserCreate) -> UserRecord:
        """Insert a user; raises ConflictError on duplicate username or email"""
        raise NotImplementedError

    def update_user(self, user_id: int, fields: Dict[str, Any]) -> Optional[UserRecord]:
        """Merge fields into a user; raises ConflictError if the new email is taken"""
        raise NotImplementedError

    # Jobs
    def get_job(self, job_id: int) -> Optional[JobRecord]:
        raise NotImplementedError

    def get_jobs(self, filters: Filters = None) -> List[JobRecord]:
        raise NotImplementedError

    def get_jobs_by_creator(self, creator_id: int) -> List[JobRecord]:
        raise NotImplementedError

    def create_job(self, job: JobCreate) -> JobRecord:
        raise NotImplementedError

    def update_job(self, job_id: int, fields: Dict[str, Any]) -> Optional[JobRecord]:
        raise NotImplementedError

    # Editor profiles
    def get_editor_profile(self, profile_id: int) -> Optional[EditorProfileRecord]:
        raise NotImplementedError

    def get_editor_profile_by_user_id(self, user_id: int) -> Optional[EditorProfileRecord]:
        raise NotImplementedError

    def get_editor_profiles(self, filters: Filters = None) -> List[EditorProfileRecord]:
        raise NotImplementedError

    def create_editor_profile(self, profile: EditorProfileCreate) -> EditorProfileRecord:
        """Insert a profile; raises ConflictError if the user already has one"""
        raise NotImplementedError

    def update_editor_profile(self, profile_id: int, fields: Dict[str, Any]) -> Optional[EditorProfileRecord]:
        raise NotImplementedError

    # Reviews
    def get_review(self, review_id: int) -> Optional[ReviewRecord]:
        raise NotImplementedError

    def get_reviews_by_editor(self, editor_id: int) -> List[ReviewRecord]:
        raise NotImplementedError

    def get_reviews_by_creator(self, creator_id: int) -> List[ReviewRecord]:
        raise NotImplementedError

    def create_review(self, review: ReviewCreate) -> ReviewRecord:
        raise NotImplementedError

    # Applications
    def get_application(self, application_id: int) -> Optional[ApplicationRecord]:
        raise NotImplementedError

    def get_applications_by_job(self, job_id: int) -> List[ApplicationRecord]:
        raise NotImplementedError

    def get_applications_by_editor(self, editor_id: int) -> List[ApplicationRecord]:
        raise NotImplementedError

    def create_application(self, application: ApplicationCreate) -> ApplicationRecord:
        raise NotImplementedError

    def update_application(self, application_id: int, fields: Dict[str, Any]) -> Optional[ApplicationRecord]:
        raise NotImplementedError


class _Table(Generic[RecordT]):
    """One entity map: rows in insertion order plus its id counter."""

    def __init__(self, record_cls: Type[RecordT]):
        self.record_cls = record_cls
        self.rows: Dict[int, RecordT] = {}
        self.next_id = 1

    def insert(self, data: Dict[str, Any]) -> RecordT:
        record = self.record_cls(id=self.next_id, **data)
        self.rows[record.id] = record
        self.next_id += 1
        return record.model_copy(deep=True)

    def get(self, record_id: int) -> Optional[RecordT]:
        record = self.rows.get(record_id)
        return record.model_copy(deep=True) if record else None

    def find(self, filters: Filters = None) -> List[RecordT]:
        filters = filters or {}
        return [
            record.model_copy(deep=True)
            for record in self.rows.values()
            if all(getattr(record, key, None) == value for key, value in filters.items())
        ]

    def first(self, **filters) -> Optional[RecordT]:
        for record in self.rows.values():
            if all(getattr(record, key) == value for key, value in filters.items()):
                return record.model_copy(deep=True)
        return None

    def update(self, record_id: int, fields: Dict[str, Any]) -> Optional[RecordT]:
        record = self.rows.get(record_id)
        if record is None:
            return None
        changes = {
            key: value for key, value in fields.items()
            if key != "id" and key in self.record_cls.model_fields
        }
        updated = record.model_copy(update=changes, deep=True)
        self.rows[record_id] = updated
        return updated.model_copy(deep=True)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemStorage(StorageBackend):
    """
    In-process storage backend.

    All operations run under one re-entrant lock, so uniqueness checks and
    id assignment cannot interleave between worker threads.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._users = _Table(UserRecord)
        self._jobs = _Table(JobRecord)
        self._profiles = _Table(EditorProfileRecord)
        self._reviews = _Table(ReviewRecord)
        self._applications = _Table(ApplicationRecord)

    # Users

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self._lock:
            return self._users.first(username=username)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            return self._users.first(email=email)

    def get_users(self, filters: Filters = None) -> List[UserRecord]:
        with self._lock:
            return self._users.find(filters)

    def create_user(self, user: UserCreate) -> UserRecord:
        with self._lock:
            if self._users.first(username=user.username):
                raise ConflictError(USERNAME_TAKEN)
            if self._users.first(email=user.email):
                raise ConflictError(EMAIL_TAKEN)
            return self._users.insert({**user.model_dump(), "created_at": _now()})

    def update_user(self, user_id: int, fields: Dict[str, Any]) -> Optional[UserRecord]:
        with self._lock:
            email = fields.get("email")
            if email is not None:
                owner = self._users.first(email=email)
                if owner and owner.id != user_id:
                    raise ConflictError(EMAIL_TAKEN)
            return self._users.update(user_id, fields)

    # Jobs

    def get_job(self, job_id: int) -> Optional[JobRecord]:
        with self._lock:
            return self._jobs.get(job_id)

    def get_jobs(self, filters: Filters = None) -> List[JobRecord]:
        with self._lock:
            return self._jobs.find(filters)

    def get_jobs_by_creator(self, creator_id: int) -> List[JobRecord]:
        return self.get_jobs({"creator_id": creator_id})

    def create_job(self, job: JobCreate) -> JobRecord:
        with self._lock:
            return self._jobs.insert({**job.model_dump(), "created_at": _now()})

    def update_job(self, job_id: int, fields: Dict[str, Any]) -> Optional[JobRecord]:
        with self._lock:
            return self._jobs.update(job_id, fields)

    # Editor profiles

    def get_editor_profile(self, profile_id: int) -> Optional[EditorProfileRecord]:
        with self._lock:
            return self._profiles.get(profile_id)

    def get_editor_profile_by_user_id(self, user_id: int) -> Optional[EditorProfileRecord]:
        with self._lock:
            return self._profiles.first(user_id=user_id)

    def get_editor_profiles(self, filters: Filters = None) -> List[EditorProfileRecord]:
        with self._lock:
            return self._profiles.find(filters)

    def create_editor_profile(self, profile: EditorProfileCreate) -> EditorProfileRecord:
        with self._lock:
            if self._profiles.first(user_id=profile.user_id):
                raise ConflictError(PROFILE_EXISTS)
            return self._profiles.insert(profile.model_dump())

    def update_editor_profile(self, profile_id: int, fields: Dict[str, Any]) -> Optional[EditorProfileRecord]:
        with self._lock:
            return self._profiles.update(profile_id, fields)

    # Reviews

    def get_review(self, review_id: int) -> Optional[ReviewRecord]:
        with self._lock:
            return self._reviews.get(review_id)

    def get_reviews_by_editor(self, editor_id: int) -> List[ReviewRecord]:
        with self._lock:
            return self._reviews.find({"editor_id": editor_id})

    def get_reviews_by_creator(self, creator_id: int) -> List[ReviewRecord]:
        with self._lock:
            return self._reviews.find({"creator_id": creator_id})

    def create_review(self, review: ReviewCreate) -> ReviewRecord:
        with self._lock:
            return self._reviews.insert({**review.model_dump(), "created_at": _now()})

    # Applications

    def get_application(self, application_id: int) -> Optional[ApplicationRecord]:
        with self._lock:
            return self._applications.get(application_id)

    def get_applications_by_job(self, job_id: int) -> List[ApplicationRecord]:
        with self._lock:
            return self._applications.find({"job_id": job_id})

    def get_applications_by_editor(self, editor_id: int) -> List[ApplicationRecord]:
        with self._lock:
            return self._applications.find({"editor_id": editor_id})

    def create_application(self, application: ApplicationCreate) -> ApplicationRecord:
        with self._lock:
            data = application.model_dump()
            data["status"] = data.get("status") or ApplicationStatus.PENDING
            return self._applications.insert({**data, "created_at": _now()})

    def update_application(self, application_id: int, fields: Dict[str, Any]) -> Optional[ApplicationRecord]:
        with self._lock:
            return self._applications.update(application_id, fields)


class SqlStorage(StorageBackend):
    """
    Relational storage backend built on the CRUD layer.

    Every operation runs in its own database session. Uniqueness checks run
    in the same transaction as the insert, and unique-constraint violations
    raised by a concurrent writer are reported as ConflictError too.
    """

    def __init__(self, engine: Engine):
        self._engine = engine
        self._session_factory = make_session_factory(engine)

    def init_schema(self) -> None:
        init_db(self._engine)

    def _one(self, record_cls: Type[RecordT], fetch: Callable[[Session], Any]) -> Optional[RecordT]:
        with self._session_factory() as db:
            row = fetch(db)
            return record_cls.model_validate(row) if row is not None else None

    def _many(self, record_cls: Type[RecordT], fetch: Callable[[Session], List[Any]]) -> List[RecordT]:
        with self._session_factory() as db:
            return [record_cls.model_validate(row) for row in fetch(db)]

    def _write(self, record_cls: Type[RecordT], write: Callable[[Session], Any], conflict_message: str) -> Optional[RecordT]:
        with self._session_factory() as db:
            try:
                row = write(db)
            except IntegrityError as e:
                db.rollback()
                logger.warning(f"Integrity error on {record_cls.__name__} write: {e.orig}")
                raise ConflictError(conflict_message) from e
            return record_cls.model_validate(row) if row is not None else None

    # Users

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        return self._one(UserRecord, lambda db: crud.user.get_by_id(db, user_id))

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        return self._one(UserRecord, lambda db: crud.user.get_by_username(db, username))

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return self._one(UserRecord, lambda db: crud.user.get_by_email(db, email))

    def get_users(self, filters: Filters = None) -> List[UserRecord]:
        return self._many(UserRecord, lambda db: crud.user.get_multi(db, filters))

    def create_user(self, user: UserCreate) -> UserRecord:
        def write(db: Session):
            if crud.user.get_by_username(db, user.username):
                raise ConflictError(USERNAME_TAKEN)
            if crud.user.get_by_email(db, user.email):
                raise ConflictError(EMAIL_TAKEN)
            return crud.user.create(db, user)

        return self._write(UserRecord, write, "Username or email already exists")

    def update_user(self, user_id: int, fields: Dict[str, Any]) -> Optional[UserRecord]:
        def write(db: Session):
            email = fields.get("email")
            if email is not None:
                owner = crud.user.get_by_email(db, email)
                if owner and owner.id != user_id:
                    raise ConflictError(EMAIL_TAKEN)
            return crud.user.update(db, user_id, fields)

        return self._write(UserRecord, write, EMAIL_TAKEN)

    # Jobs

    def get_job(self, job_id: int) -> Optional[JobRecord]:
        return self._one(JobRecord, lambda db: crud.job.get_by_id(db, job_id))

    def get_jobs(self, filters: Filters = None) -> List[JobRecord]:
        return self._many(JobRecord, lambda db: crud.job.get_multi(db, filters))

    def get_jobs_by_creator(self, creator_id: int) -> List[JobRecord]:
        return self._many(JobRecord, lambda db: crud.job.get_by_creator(db, creator_id))

    def create_job(self, job: JobCreate) -> JobRecord:
        return self._write(JobRecord, lambda db: crud.job.create(db, job), "Job references a missing creator")

    def update_job(self, job_id: int, fields: Dict[str, Any]) -> Optional[JobRecord]:
        return self._write(JobRecord, lambda db: crud.job.update(db, job_id, fields), "Job update violates a constraint")

    # Editor profiles

    def get_editor_profile(self, profile_id: int) -> Optional[EditorProfileRecord]:
        return self._one(EditorProfileRecord, lambda db: crud.editor_profile.get_by_id(db, profile_id))

    def get_editor_profile_by_user_id(self, user_id: int) -> Optional[EditorProfileRecord]:
        return self._one(EditorProfileRecord, lambda db: crud.editor_profile.get_by_user_id(db, user_id))

    def get_editor_profiles(self, filters: Filters = None) -> List[EditorProfileRecord]:
        return self._many(EditorProfileRecord, lambda db: crud.editor_profile.get_multi(db, filters))

    def create_editor_profile(self, profile: EditorProfileCreate) -> EditorProfileRecord:
        def write(db: Session):
            if crud.editor_profile.get_by_user_id(db, profile.user_id):
                raise ConflictError(PROFILE_EXISTS)
            return crud.editor_profile.create(db, profile)

        return self._write(EditorProfileRecord, write, PROFILE_EXISTS)

    def update_editor_profile(self, profile_id: int, fields: Dict[str, Any]) -> Optional[EditorProfileRecord]:
        return self._write(
            EditorProfileRecord,
            lambda db: crud.editor_profile.update(db, profile_id, fields),
            PROFILE_EXISTS,
        )

    # Reviews

    def get_review(self, review_id: int) -> Optional[ReviewRecord]:
        return self._one(ReviewRecord, lambda db: crud.review.get_by_id(db, review_id))

    def get_reviews_by_editor(self, editor_id: int) -> List[ReviewRecord]:
        return self._many(ReviewRecord, lambda db: crud.review.get_by_editor(db, editor_id))

    def get_reviews_by_creator(self, creator_id: int) -> List[ReviewRecord]:
        return self._many(ReviewRecord, lambda db: crud.review.get_by_creator(db, creator_id))

    def create_review(self, review: ReviewCreate) -> ReviewRecord:
        return self._write(ReviewRecord, lambda db: crud.review.create(db, review), "Review references a missing user")

    # Applications

    def get_application(self, application_id: int) -> Optional[ApplicationRecord]:
        return self._one(ApplicationRecord, lambda db: crud.application.get_by_id(db, application_id))

    def get_applications_by_job(self, job_id: int) -> List[ApplicationRecord]:
        return self._many(ApplicationRecord, lambda db: crud.application.get_by_job(db, job_id))

    def get_applications_by_editor(self, editor_id: int) -> List[ApplicationRecord]:
        return self._many(ApplicationRecord, lambda db: crud.application.get_by_editor(db, editor_id))

    def create_application(self, application: ApplicationCreate) -> ApplicationRecord:
        return self._write(
            ApplicationRecord,
            lambda db: crud.application.create(db, application),
            "Application references a missing job or editor",
        )

    def update_application(self, application_id: int, fields: Dict[str, Any]) -> Optional[ApplicationRecord]:
        return self._write(
            ApplicationRecord,
            lambda db: crud.application.update(db, application_id, fields),
            "Application update violates a constraint",
        )


# Storage factory - returns appropriate backend based on settings
def get_storage_backend(settings: Settings) -> StorageBackend:
    """Get storage backend based on STORAGE_BACKEND setting"""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        return MemStorage()
    if backend == "sql":
        return SqlStorage(make_engine(settings.DATABASE_URL))
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")
