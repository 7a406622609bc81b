# backend/reviewhub/api/reviews.py
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, UploadFile

from reviewhub import schemas
from reviewhub.api.binding import bind_list_filter
from reviewhub.api.dependencies import get_current_user_id, get_repositories, get_storage
from reviewhub.repositories import Repositories
from reviewhub.services.statsig_client import log_backend_event
from reviewhub.services.storage import ObjectStorageProtocol, store_upload

router = APIRouter(prefix="/review", tags=["review"])


@router.post("", response_model=schemas.ReviewRead)
def create_review(
    payload: schemas.ReviewCreate,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.ReviewRead:
    review = repos.reviews.create({**payload.model_dump(), "user_id": user_id})
    log_backend_event("review_created", user_id=user_id, review_id=review.id)
    return review


@router.get("/list", response_model=schemas.ReviewList)
def list_reviews(
    page: str | None = Query(default="1"),
    limit: str | None = Query(default="10"),
    business_id: str = Query(default=""),
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.ReviewList:
    list_filter = bind_list_filter(page, limit, id_filters={"business_id": business_id})
    reviews, count = repos.reviews.get_list(list_filter)
    return schemas.ReviewList(reviews=reviews, count=count)


@router.get("/{review_id}", response_model=schemas.ReviewRead)
def get_review(
    review_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.ReviewRead:
    return repos.reviews.get_single(review_id)


@router.put("", response_model=schemas.ReviewRead)
def update_review(
    payload: schemas.ReviewUpdate,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.ReviewRead:
    return repos.reviews.update(payload.id, payload.model_dump(exclude={"id"}))


@router.delete("/{review_id}", response_model=schemas.SuccessResponse)
def delete_review(
    review_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SuccessResponse:
    repos.reviews.delete(review_id)
    return schemas.SuccessResponse(message="Review deleted successfully")


@router.post("/{review_id}/image", response_model=schemas.ReviewRead)
def set_review_image(
    review_id: str,
    file: UploadFile | None = File(default=None),
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
    storage: ObjectStorageProtocol = Depends(get_storage),
) -> schemas.ReviewRead:
    """Upload an image and attach its URL to the review, replacing any previous one."""
    # Fail before uploading when the review does not exist
    repos.reviews.get_single(review_id)
    url = store_upload(file, storage)
    log_backend_event("image_uploaded", user_id=user_id, resource="review", resource_id=review_id)
    return repos.reviews.update(review_id, {"photos": url})
