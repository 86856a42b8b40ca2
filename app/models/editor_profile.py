"""
Editor profile model.

Each editor owns at most one profile; the unique constraint on user_id
backs the "one profile per user" rule at the database level.
"""

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, JSON
from app.core.database import Base


class EditorProfile(Base):
    __tablename__ = "editor_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    skills = Column(JSON, nullable=False, default=list)

    hourly_rate = Column(Integer, nullable=False)
    experience = Column(Integer, nullable=False)  # years
    portfolio_url = Column(String, nullable=True)

    is_available = Column(Boolean, default=True, nullable=False, index=True)

    def __repr__(self):
        return f"<EditorProfile(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
