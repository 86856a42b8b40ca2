from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, JSON
from app.core.database import Base


class Job(Base):
    """
    Job model representing a creator's posted work request.
    Carries a price range and the ordered list of required skills.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    job_type = Column(String, nullable=False)
    employment_type = Column(String, nullable=False)

    min_price = Column(Integer, nullable=False)
    max_price = Column(Integer, nullable=False)
    price_type = Column(String, nullable=False)

    # Ordered list of skill names
    skills = Column(JSON, nullable=False, default=list)

    creator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', creator_id={self.creator_id})>"
