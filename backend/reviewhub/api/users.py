# backend/reviewhub/api/users.py
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, UploadFile

from reviewhub import schemas
from reviewhub.api.binding import bind_list_filter
from reviewhub.api.dependencies import get_current_user_id, get_repositories, get_storage
from reviewhub.exceptions import ConflictError
from reviewhub.repositories import Repositories
from reviewhub.services.security import hash_password
from reviewhub.services.statsig_client import log_backend_event
from reviewhub.services.storage import ObjectStorageProtocol, store_upload

router = APIRouter(prefix="/user", tags=["user"])


def ensure_unique_identity(
    repos: Repositories, email: str, username: str, user_id: str | None = None
) -> None:
    """Reject an e-mail or username already taken by another user."""
    by_email = repos.users.get_by_email(email)
    if by_email is not None and by_email.id != user_id:
        raise ConflictError(f"User with email '{email}' already exists.")
    by_username = repos.users.get_by_username(username)
    if by_username is not None and by_username.id != user_id:
        raise ConflictError(f"User with username '{username}' already exists.")


@router.post("", response_model=schemas.UserRead, status_code=201)
def create_user(
    payload: schemas.UserCreate,
    caller_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.UserRead:
    ensure_unique_identity(repos, payload.email, payload.username)
    values = payload.model_dump()
    values["password"] = hash_password(payload.password)
    user = repos.users.create(values)
    log_backend_event("user_created", user_id=caller_id, created_user_id=user.id)
    return user


@router.get("/list", response_model=schemas.UserList)
def list_users(
    page: str | None = Query(default="1"),
    limit: str | None = Query(default="10"),
    search: str = Query(default=""),
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.UserList:
    list_filter = bind_list_filter(page, limit)
    users, count = repos.users.get_list(list_filter, search=search.strip() or None)
    return schemas.UserList(users=users, count=count)


@router.get("/{user_id}", response_model=schemas.UserRead)
def get_user(
    user_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.UserRead:
    return repos.users.get_single(user_id)


@router.put("", response_model=schemas.UserRead)
def update_user(
    payload: schemas.UserUpdate,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.UserRead:
    repos.users.get_single(payload.id)
    ensure_unique_identity(repos, payload.email, payload.username, user_id=payload.id)
    return repos.users.update(payload.id, payload.model_dump(exclude={"id"}))


@router.delete("/{user_id}", response_model=schemas.SuccessResponse)
def delete_user(
    user_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SuccessResponse:
    repos.users.delete(user_id)
    return schemas.SuccessResponse(message="User deleted successfully")


@router.post("/avatar", response_model=schemas.UserRead)
def set_avatar(
    file: UploadFile | None = File(default=None),
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
    storage: ObjectStorageProtocol = Depends(get_storage),
) -> schemas.UserRead:
    """Upload an avatar and set it as the caller's profile picture."""
    repos.users.get_single(user_id)
    url = store_upload(file, storage)
    log_backend_event("image_uploaded", user_id=user_id, resource="user", resource_id=user_id)
    return repos.users.update(user_id, {"profile_picture": url})


@router.post("/upload", response_model=schemas.UploadResponse, tags=["upload"])
def upload_image(
    file: UploadFile | None = File(default=None),
    user_id: str = Depends(get_current_user_id),
    storage: ObjectStorageProtocol = Depends(get_storage),
) -> schemas.UploadResponse:
    """Upload an image to storage without touching the database."""
    url = store_upload(file, storage)
    log_backend_event("image_uploaded", user_id=user_id, resource="upload")
    return schemas.UploadResponse(url=url)
