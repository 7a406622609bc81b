# backend/reviewhub/api/reports.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from reviewhub import schemas
from reviewhub.api.binding import bind_list_filter
from reviewhub.api.dependencies import get_current_user_id, get_repositories
from reviewhub.repositories import Repositories
from reviewhub.services.statsig_client import log_backend_event

router = APIRouter(prefix="/report", tags=["report"])


@router.post("", response_model=schemas.ReportRead)
def create_report(
    payload: schemas.ReportCreate,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.ReportRead:
    report = repos.reports.create({**payload.model_dump(), "user_id": user_id})
    log_backend_event("report_created", user_id=user_id, report_id=report.id)
    return report


@router.get("/list", response_model=schemas.ReportList)
def list_reports(
    page: str | None = Query(default="1"),
    limit: str | None = Query(default="10"),
    business_id: str = Query(default=""),
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.ReportList:
    list_filter = bind_list_filter(page, limit, id_filters={"business_id": business_id})
    reports, count = repos.reports.get_list(list_filter)
    return schemas.ReportList(reports=reports, count=count)


@router.get("/{report_id}", response_model=schemas.ReportRead)
def get_report(
    report_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.ReportRead:
    return repos.reports.get_single(report_id)


@router.put("", response_model=schemas.ReportRead)
def update_report(
    payload: schemas.ReportUpdate,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.ReportRead:
    return repos.reports.update(payload.id, payload.model_dump(exclude={"id"}))


@router.delete("/{report_id}", response_model=schemas.SuccessResponse)
def delete_report(
    report_id: str,
    _: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SuccessResponse:
    repos.reports.delete(report_id)
    return schemas.SuccessResponse(message="Report deleted successfully")
