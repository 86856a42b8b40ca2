"""
FastAPI dependencies for storage access, sessions and authorization.

The storage backend, session store and settings are created once per
application (see main.create_app) and read from ``app.state`` here, so
handlers never touch module-level state.
"""

from typing import Optional

from fastapi import Depends, Request

from app.core.config import Settings
from app.core.errors import AuthenticationError, AuthorizationError
from app.core.sessions import SessionData, SessionStore
from app.core.storage import StorageBackend
from app.models.user import UserRole
from app.schemas.user import UserRecord


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> StorageBackend:
    return request.app.state.storage


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_session_token(
    request: Request,
    settings: Settings = Depends(get_settings)
) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_optional_session(
    token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store)
) -> Optional[SessionData]:
    """
    Return the caller's session if the cookie names a live one, else None.
    """
    if not token:
        return None
    return session_store.get(token)


def get_current_session(
    session: Optional[SessionData] = Depends(get_optional_session)
) -> SessionData:
    """
    Require a logged-in caller.

    Raises:
        AuthenticationError: If there is no live session
    """
    if session is None:
        raise AuthenticationError("Not authenticated")
    return session


def get_current_user(
    session: SessionData = Depends(get_current_session),
    storage: StorageBackend = Depends(get_storage)
) -> UserRecord:
    """
    Resolve the logged-in user.

    Raises:
        AuthenticationError: If the session points at a user that no longer exists
    """
    user = storage.get_user(session.user_id)
    if user is None:
        raise AuthenticationError("Not authenticated")
    return user


def ensure_owner(session: Optional[SessionData], owner_id: int, resource: str) -> None:
    """
    Allow the owner of a resource, or an admin, to modify it.

    Update endpoints take the optional session and call this after the
    existence check, so a missing resource is reported as 404 first.

    Raises:
        AuthenticationError: If there is no live session
        AuthorizationError: If the caller is neither owner nor admin
    """
    if session is None:
        raise AuthenticationError("Not authenticated")
    if session.user_id != owner_id and session.role != UserRole.ADMIN:
        raise AuthorizationError(f"You do not have permission to modify this {resource}")
