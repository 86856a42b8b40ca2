import enum
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum
from app.core.database import Base


class ApplicationStatus(str, enum.Enum):
    """
    Application status lifecycle:

    PENDING -> ACCEPTED
            -> REJECTED

    Both ACCEPTED and REJECTED are terminal.
    """
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Application(Base):
    """An editor's bid on a job."""
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    editor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    cover_letter = Column(String, nullable=False)
    price = Column(Integer, nullable=False)
    status = Column(
        Enum(ApplicationStatus, values_callable=lambda e: [m.value for m in e], name="application_status"),
        default=ApplicationStatus.PENDING,
        nullable=False,
        index=True
    )

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def __repr__(self):
        return f"<Application(id={self.id}, job_id={self.job_id}, status={self.status.value})>"
