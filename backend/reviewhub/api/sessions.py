# backend/reviewhub/api/sessions.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from reviewhub import schemas
from reviewhub.api.binding import bind_list_filter
from reviewhub.api.dependencies import get_current_user_id, get_repositories
from reviewhub.repositories import Repositories

# Sessions are created by POST /auth/login, never directly
router = APIRouter(prefix="/session", tags=["session"])


@router.get("/list", response_model=schemas.SessionList)
def list_sessions(
    page: str | None = Query(default="1"),
    limit: str | None = Query(default="10"),
    user_id: str = Query(default=""),
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SessionList:
    list_filter = bind_list_filter(page, limit, id_filters={"user_id": user_id})
    sessions, count = repos.sessions.get_list(list_filter)
    return schemas.SessionList(sessions=sessions, count=count)


@router.get("/{session_id}", response_model=schemas.SessionRead)
def get_session(
    session_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SessionRead:
    return repos.sessions.get_single(session_id)


@router.put("", response_model=schemas.SessionRead)
def update_session(
    payload: schemas.SessionUpdate,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SessionRead:
    return repos.sessions.update(payload.id, payload.model_dump(exclude={"id"}))


@router.delete("/{session_id}", response_model=schemas.SuccessResponse)
def delete_session(
    session_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SuccessResponse:
    repos.sessions.delete(session_id)
    return schemas.SuccessResponse(message="Session deleted successfully")
