import logging
from typing import List
from fastapi import APIRouter, Depends

from app.core.deps import get_storage
from app.core.errors import NotFoundError
from app.core.storage import StorageBackend
from app.schemas.review import ReviewCreate, ReviewRecord

router = APIRouter(prefix="/reviews", tags=["Reviews"])
logger = logging.getLogger(__name__)


@router.get("/editor/{editor_id}", response_model=List[ReviewRecord])
def list_reviews_for_editor(editor_id: int, storage: StorageBackend = Depends(get_storage)):
    """Reviews written about an editor, oldest first."""
    return storage.get_reviews_by_editor(editor_id)


@router.get("/creator/{creator_id}", response_model=List[ReviewRecord])
def list_reviews_by_creator(creator_id: int, storage: StorageBackend = Depends(get_storage)):
    """Reviews a creator has written."""
    return storage.get_reviews_by_creator(creator_id)


@router.get("/{review_id}", response_model=ReviewRecord)
def get_review(review_id: int, storage: StorageBackend = Depends(get_storage)):
    review = storage.get_review(review_id)

    if not review:
        raise NotFoundError("Review not found")

    return review


@router.post("", status_code=201, response_model=ReviewRecord)
def create_review(
    request: ReviewCreate,
    storage: StorageBackend = Depends(get_storage)
):
    """
    Leave a review for an editor. Both the editor and the creator must exist.
    """
    if not storage.get_user(request.editor_id):
        raise NotFoundError("Editor not found")
    if not storage.get_user(request.creator_id):
        raise NotFoundError("Creator not found")

    review = storage.create_review(request)

    logger.info(f"Created review {review.id} for editor {review.editor_id} (rating={review.rating})")
    return review
