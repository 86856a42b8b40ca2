import logging
from typing import Optional
from fastapi import APIRouter, Depends

from app.core.deps import ensure_owner, get_optional_session, get_storage
from app.core.errors import NotFoundError
from app.core.sessions import SessionData
from app.core.storage import StorageBackend
from app.schemas.editor_profile import EditorProfileRecord
from app.schemas.user import UserResponse, UserUpdate

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, storage: StorageBackend = Depends(get_storage)):
    """
    Retrieve a user by ID. The credential is never included.
    """
    user = storage.get_user(user_id)

    if not user:
        raise NotFoundError("User not found")

    return user.public()


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    request: UserUpdate,
    session: Optional[SessionData] = Depends(get_optional_session),
    storage: StorageBackend = Depends(get_storage)
):
    """
    Update a user's own profile fields (fullName, email, avatarUrl).

    Only the user themself or an admin may do this. Username and role
    cannot be changed.
    """
    if not storage.get_user(user_id):
        raise NotFoundError("User not found")

    ensure_owner(session, user_id, "user")

    user = storage.update_user(user_id, request.changes())
    if not user:
        raise NotFoundError("User not found")

    logger.info(f"Updated user {user_id}")
    return user.public()


@router.get("/{user_id}/editor-profile", response_model=EditorProfileRecord)
def get_user_editor_profile(user_id: int, storage: StorageBackend = Depends(get_storage)):
    """
    Retrieve the editor profile owned by a user.
    """
    profile = storage.get_editor_profile_by_user_id(user_id)

    if not profile:
        raise NotFoundError("Editor profile not found")

    return profile
