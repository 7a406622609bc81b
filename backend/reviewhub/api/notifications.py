# backend/reviewhub/api/notifications.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from reviewhub import schemas
from reviewhub.api.binding import bind_list_filter
from reviewhub.api.dependencies import get_current_user_id, get_repositories
from reviewhub.repositories import Repositories

router = APIRouter(prefix="/notification", tags=["notification"])


@router.post("", response_model=schemas.NotificationRead)
def create_notification(
    payload: schemas.NotificationCreate,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.NotificationRead:
    return repos.notifications.create(payload.model_dump())


@router.get("/list", response_model=schemas.NotificationList)
def list_notifications(
    page: str | None = Query(default="1"),
    limit: str | None = Query(default="10"),
    user_id: str = Query(default=""),
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.NotificationList:
    list_filter = bind_list_filter(page, limit, id_filters={"user_id": user_id})
    notifications, count = repos.notifications.get_list(list_filter)
    return schemas.NotificationList(notifications=notifications, total_count=count)


@router.put("/status", response_model=schemas.NotificationRead)
@router.put("/update-status", response_model=schemas.NotificationRead)
def update_notification_status(
    payload: schemas.NotificationStatusUpdate,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.NotificationRead:
    """Change only the read/unread status; `/update-status` is kept for older clients."""
    return repos.notifications.update_status(payload.id, payload.status)


@router.get("/{notification_id}", response_model=schemas.NotificationRead)
def get_notification(
    notification_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.NotificationRead:
    return repos.notifications.get_single(notification_id)


@router.put("", response_model=schemas.NotificationRead)
def update_notification(
    payload: schemas.NotificationUpdate,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.NotificationRead:
    return repos.notifications.update(payload.id, payload.model_dump(exclude={"id"}))


@router.delete("/{notification_id}", response_model=schemas.SuccessResponse)
def delete_notification(
    notification_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SuccessResponse:
    repos.notifications.delete(notification_id)
    return schemas.SuccessResponse(message="Notification deleted successfully")
