# backend/reviewhub/api/businesses.py
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, UploadFile

from reviewhub import schemas
from reviewhub.api.binding import bind_list_filter
from reviewhub.api.dependencies import get_current_user_id, get_repositories, get_storage
from reviewhub.repositories import Repositories
from reviewhub.services.statsig_client import log_backend_event
from reviewhub.services.storage import ObjectStorageProtocol, store_upload

router = APIRouter(prefix="/business", tags=["business"])


@router.post("", response_model=schemas.BusinessRead)
def create_business(
    payload: schemas.BusinessCreate,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.BusinessRead:
    business = repos.businesses.create({**payload.model_dump(), "owner_id": user_id})
    log_backend_event("business_created", user_id=user_id, business_id=business.id)
    return business


@router.get("/list", response_model=schemas.BusinessList)
def list_businesses(
    page: str | None = Query(default="1"),
    limit: str | None = Query(default="10"),
    owner_id: str = Query(default=""),
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.BusinessList:
    list_filter = bind_list_filter(page, limit, id_filters={"owner_id": owner_id})
    businesses, count = repos.businesses.get_list(list_filter)
    return schemas.BusinessList(businesses=businesses, count=count)


@router.get("/{business_id}", response_model=schemas.BusinessRead)
def get_business(
    business_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.BusinessRead:
    return repos.businesses.get_single(business_id)


@router.put("", response_model=schemas.BusinessRead)
def update_business(
    payload: schemas.BusinessUpdate,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.BusinessRead:
    return repos.businesses.update(payload.id, payload.model_dump(exclude={"id"}))


@router.delete("/{business_id}", response_model=schemas.SuccessResponse)
def delete_business(
    business_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SuccessResponse:
    repos.businesses.delete(business_id)
    return schemas.SuccessResponse(message="Business deleted successfully")


@router.post("/{business_id}/image", response_model=schemas.BusinessRead)
def set_business_image(
    business_id: str,
    file: UploadFile | None = File(default=None),
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
    storage: ObjectStorageProtocol = Depends(get_storage),
) -> schemas.BusinessRead:
    repos.businesses.get_single(business_id)
    url = store_upload(file, storage)
    log_backend_event("image_uploaded", user_id=user_id, resource="business", resource_id=business_id)
    return repos.businesses.update(business_id, {"photos": url})
