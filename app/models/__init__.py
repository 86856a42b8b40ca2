"""
Database models package.
"""

from app.models.user import User, UserRole
from app.models.job import Job
from app.models.editor_profile import EditorProfile
from app.models.review import Review
from app.models.application import Application, ApplicationStatus

__all__ = ["User", "UserRole", "Job", "EditorProfile", "Review", "Application", "ApplicationStatus"]
