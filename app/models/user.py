"""
User model for marketplace accounts.

A user is either a creator (posts jobs), an editor (owns an editor profile
and applies to jobs) or an admin. The role never changes after registration.
"""

import enum
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Enum
from app.core.database import Base


class UserRole(str, enum.Enum):
    CREATOR = "creator"
    EDITOR = "editor"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    email = Column(String, unique=True, nullable=False, index=True)

    # Stored as handed over by the route layer (a passlib hash)
    password = Column(String, nullable=False)

    full_name = Column(String, nullable=False)
    role = Column(Enum(UserRole, values_callable=lambda e: [m.value for m in e], name="user_role"), nullable=False)
    avatar_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role={self.role.value})>"
