"""
API endpoints for editor profiles.

An editor owns at most one profile; creating a second one for the same
user is rejected.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from app.core.deps import ensure_owner, get_optional_session, get_storage
from app.core.errors import NotFoundError
from app.core.sessions import SessionData
from app.core.storage import StorageBackend
from app.schemas.editor_profile import EditorProfileCreate, EditorProfileRecord, EditorProfileUpdate

router = APIRouter(prefix="/editor-profiles", tags=["Editor Profiles"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[EditorProfileRecord])
def list_editor_profiles(
    is_available: Optional[bool] = Query(None, alias="isAvailable"),
    storage: StorageBackend = Depends(get_storage)
):
    """
    List editor profiles, optionally only those open for work.
    """
    filters = {"is_available": is_available} if is_available is not None else None
    return storage.get_editor_profiles(filters)


@router.get("/{profile_id}", response_model=EditorProfileRecord)
def get_editor_profile(profile_id: int, storage: StorageBackend = Depends(get_storage)):
    profile = storage.get_editor_profile(profile_id)

    if not profile:
        raise NotFoundError("Editor profile not found")

    return profile


@router.post("", status_code=201, response_model=EditorProfileRecord)
def create_editor_profile(
    request: EditorProfileCreate,
    storage: StorageBackend = Depends(get_storage)
):
    """
    Create an editor profile for an existing user.

    Raises:
        NotFoundError 404: If the user does not exist
        ConflictError 400: If the user already has a profile
    """
    if not storage.get_user(request.user_id):
        raise NotFoundError("User not found")

    # The storage layer re-checks this atomically with the insert
    profile = storage.create_editor_profile(request)

    logger.info(f"Created editor profile {profile.id} for user {profile.user_id}")
    return profile


@router.patch("/{profile_id}", response_model=EditorProfileRecord)
def update_editor_profile(
    profile_id: int,
    request: EditorProfileUpdate,
    session: Optional[SessionData] = Depends(get_optional_session),
    storage: StorageBackend = Depends(get_storage)
):
    """
    Partially update a profile. Only its owner (or an admin) may do this.
    """
    profile = storage.get_editor_profile(profile_id)

    if not profile:
        raise NotFoundError("Editor profile not found")

    ensure_owner(session, profile.user_id, "editor profile")

    updated_profile = storage.update_editor_profile(profile_id, request.changes())
    if not updated_profile:
        raise NotFoundError("Editor profile not found")

    logger.info(f"Updated editor profile {profile_id}")
    return updated_profile
