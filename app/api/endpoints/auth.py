"""
Authentication endpoints for registration, login and logout.

Implements server-side sessions:
- POST /register: Create new user account
- POST /login: Verify credentials and start a session (cookie)
- POST /logout: End the current session
- GET /me: Get current user profile
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Response

from app.core.config import Settings
from app.core.deps import get_current_user, get_session_store, get_session_token, get_settings, get_storage
from app.core.errors import AuthenticationError, InternalError, ValidationError
from app.core.security import get_password_hash, verify_password
from app.core.sessions import SessionStore, SessionStoreError
from app.core.storage import StorageBackend
from app.models.user import UserRole
from app.schemas.base import MessageResponse
from app.schemas.user import LoginRequest, UserCreate, UserRecord, UserResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)

# Same message for unknown username and wrong password
INVALID_CREDENTIALS = "Invalid credentials"


@router.post("/register", status_code=201, response_model=UserResponse)
def register(
    request: UserCreate,
    storage: StorageBackend = Depends(get_storage)
):
    """
    Register a new creator or editor account.

    The password is hashed before it reaches storage. Duplicate usernames
    and emails are rejected by the storage layer atomically with the insert.

    Raises:
        ValidationError 400: If the requested role is admin (admins are never self-registered)
        ConflictError 400: If the username or email is already taken
    """
    if request.role == UserRole.ADMIN:
        raise ValidationError("Admin accounts cannot be self-registered")

    user_data = request.model_copy(update={"password": get_password_hash(request.password)})
    user = storage.create_user(user_data)

    logger.info(f"New user registered: {user.username} (id={user.id}, role={user.role.value})")
    return user.public()


@router.post("/login", response_model=UserResponse)
def login(
    request: LoginRequest,
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    storage: StorageBackend = Depends(get_storage),
    session_store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings)
):
    """
    Authenticate with username and password and start a session.

    Unknown usernames and wrong passwords produce the same 401 response.
    """
    if not request.username or not request.password:
        raise ValidationError("Username and password are required")

    user = storage.get_user_by_username(request.username)
    if not user or not verify_password(request.password, user.password):
        logger.info(f"Failed login attempt for username: {request.username}")
        raise AuthenticationError(INVALID_CREDENTIALS)

    # Replace any session this client already had
    if token:
        session_store.destroy(token)

    new_token = session_store.create(user.id, user.role)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=new_token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )

    logger.info(f"User logged in: {user.username} (id={user.id})")
    return user.public()


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings)
):
    """
    End the current session. Succeeds even when there is no session.
    """
    if token:
        try:
            session_store.destroy(token)
        except SessionStoreError as e:
            logger.error(f"Error destroying session: {e}")
            raise InternalError("Failed to logout") from e

    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(
    current_user: UserRecord = Depends(get_current_user)
):
    """
    Get the logged-in user's profile.
    """
    return current_user.public()
