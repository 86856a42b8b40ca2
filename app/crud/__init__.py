"""
CRUD operations (Create, Read, Update) for database models.

This layer provides a clean separation between the SQL storage backend and
database operations, following the Repository pattern.
"""

from app.crud import user, job, editor_profile, review, application

__all__ = ["user", "job", "editor_profile", "review", "application"]
