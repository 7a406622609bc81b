# backend/reviewhub/api/events.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from reviewhub import schemas
from reviewhub.api.binding import bind_list_filter
from reviewhub.api.dependencies import get_current_user_id, get_repositories
from reviewhub.repositories import Repositories
from reviewhub.services.statsig_client import log_backend_event

router = APIRouter(prefix="/event", tags=["event"])


@router.post("", response_model=schemas.EventRead)
def create_event(
    payload: schemas.EventCreate,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.EventRead:
    event = repos.events.create(payload.model_dump())
    log_backend_event("event_created", user_id=user_id, event_id=event.id)
    return event


@router.get("/list", response_model=schemas.EventList)
def list_events(
    page: str | None = Query(default="1"),
    limit: str | None = Query(default="10"),
    business_id: str = Query(default=""),
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.EventList:
    list_filter = bind_list_filter(page, limit, id_filters={"business_id": business_id})
    events, count = repos.events.get_list(list_filter)
    return schemas.EventList(events=events, count=count)


@router.post("/add-participant", response_model=schemas.EventParticipantRead)
def add_participant(
    payload: schemas.EventParticipantRequest,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.EventParticipantRead:
    return repos.events.add_participant(payload.event_id, payload.user_id)


@router.delete("/remove-participant", response_model=schemas.SuccessResponse)
def remove_participant(
    payload: schemas.EventParticipantRequest,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SuccessResponse:
    repos.events.remove_participant(payload.event_id, payload.user_id)
    return schemas.SuccessResponse(message="Participant removed successfully")


@router.get("/{event_id}/participants", response_model=schemas.EventParticipantList)
def list_participants(
    event_id: str,
    page: str | None = Query(default="1"),
    limit: str | None = Query(default="10"),
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.EventParticipantList:
    repos.events.get_single(event_id)
    list_filter = bind_list_filter(page, limit)
    rows, count = repos.events.list_participants(event_id, list_filter)
    return schemas.EventParticipantList(
        participants=[schemas.EventUser(**row._mapping) for row in rows],
        count=count,
    )


@router.get("/{event_id}", response_model=schemas.EventRead)
def get_event(
    event_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.EventRead:
    return repos.events.get_single(event_id)


@router.put("", response_model=schemas.EventRead)
def update_event(
    payload: schemas.EventUpdate,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.EventRead:
    return repos.events.update(payload.id, payload.model_dump(exclude={"id"}))


@router.delete("/{event_id}", response_model=schemas.SuccessResponse)
def delete_event(
    event_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SuccessResponse:
    repos.events.delete(event_id)
    return schemas.SuccessResponse(message="Event deleted successfully")
