# backend/reviewhub/schemas/__init__.py
from __future__ import annotations

"""
Pydantic schemas for request/response models.

This module is the API contract layer and depends on:
- reviewhub.models.NotificationStatus

It is used by:
- API routes (request binding and response_model)
- reviewhub.repositories (GetListFilter)

Conventions:
- `<Resource>Create` is the POST body (no id, no server-assigned fields)
- `<Resource>Update` is the PUT body: the full record keyed by `id`
- `<Resource>Read` is what the API returns
- `<Resource>List` is the list envelope: items plus the filtered `count`
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from reviewhub.models import NotificationStatus


# ---------- Shared ----------


class Filter(BaseModel):
    """A (column, operator, value) triple; `type` defaults to equality."""

    column: str
    type: str = "eq"
    value: Any = None


class OrderBy(BaseModel):
    column: str
    order: str = "desc"


class GetListFilter(BaseModel):
    page: int = 1
    limit: int = 10
    filters: List[Filter] = Field(default_factory=list)
    order_by: List[OrderBy] = Field(default_factory=list)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class ErrorResponse(BaseModel):
    code: str
    message: str


class SuccessResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    url: str


# ---------- Auth Schemas ----------


class RegisterRequest(BaseModel):
    email: str
    password: str = Field(min_length=6)
    full_name: Optional[str] = None
    gender: Optional[str] = None
    user_name: str


class VerifyEmail(BaseModel):
    email: str
    otp: str
    platform: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str
    platform: Optional[str] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    session_id: str
    expires_at: datetime


# ---------- User Schemas ----------


class UserCreate(BaseModel):
    username: str
    email: str
    password: str = Field(min_length=6)
    full_name: Optional[str] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    status: str = "active"
    user_role: str = "user"
    user_type: str = "standard"


class UserUpdate(BaseModel):
    id: str
    username: str
    email: str
    full_name: Optional[str] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    status: str = "active"
    user_role: str = "user"
    user_type: str = "standard"


class UserRead(BaseModel):
    id: str
    username: str
    email: str
    full_name: Optional[str]
    gender: Optional[str]
    bio: Optional[str]
    profile_picture: Optional[str]
    status: str
    user_role: str
    user_type: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserList(BaseModel):
    users: List[UserRead]
    count: int


# ---------- Business Schemas ----------


class BusinessCreate(BaseModel):
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    address: Optional[str] = None
    contact_info: Optional[str] = None
    photos: Optional[str] = None


class BusinessUpdate(BusinessCreate):
    id: str


class BusinessRead(BusinessCreate):
    id: str
    owner_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BusinessList(BaseModel):
    businesses: List[BusinessRead]
    count: int


# ---------- Review Schemas ----------


class ReviewCreate(BaseModel):
    business_id: str
    rating: int = Field(ge=1, le=5)
    feedback: Optional[str] = None
    photos: Optional[str] = None


class ReviewUpdate(ReviewCreate):
    id: str


class ReviewRead(BaseModel):
    id: str
    business_id: str
    user_id: Optional[str]
    rating: int
    feedback: Optional[str]
    photos: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReviewList(BaseModel):
    reviews: List[ReviewRead]
    count: int


# ---------- Event Schemas ----------


class EventCreate(BaseModel):
    business_id: str
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    date: Optional[datetime] = None


class EventUpdate(EventCreate):
    id: str


class EventRead(EventCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EventList(BaseModel):
    events: List[EventRead]
    count: int


class EventParticipantRequest(BaseModel):
    event_id: str
    user_id: str


class EventParticipantRead(BaseModel):
    id: str
    event_id: str
    user_id: str
    joined_at: datetime

    class Config:
        from_attributes = True


class EventUser(BaseModel):
    """A participant row joined with the participating user's profile."""

    id: str
    event_id: str
    username: str
    email: str
    full_name: Optional[str]
    gender: Optional[str]
    status: str
    user_role: str
    user_type: str


class EventParticipantList(BaseModel):
    participants: List[EventUser]
    count: int


# ---------- Report Schemas ----------


class ReportCreate(BaseModel):
    business_id: str
    reason: str


class ReportUpdate(ReportCreate):
    id: str


class ReportRead(ReportCreate):
    id: str
    user_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReportList(BaseModel):
    reports: List[ReportRead]
    count: int


# ---------- Notification Schemas ----------


class NotificationCreate(BaseModel):
    user_id: str
    owner_id: Optional[str] = None
    ownerrole: Optional[str] = None
    email: Optional[str] = None
    message: str
    status: NotificationStatus = NotificationStatus.UNREAD


class NotificationUpdate(NotificationCreate):
    id: str


class NotificationStatusUpdate(BaseModel):
    id: str
    status: NotificationStatus


class NotificationRead(NotificationCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class NotificationList(BaseModel):
    notifications: List[NotificationRead]
    total_count: int


# ---------- Session Schemas ----------


class SessionUpdate(BaseModel):
    id: str
    platform: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    is_active: bool = True
    expires_at: Optional[datetime] = None
    last_active_at: Optional[datetime] = None


class SessionRead(SessionUpdate):
    user_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SessionList(BaseModel):
    sessions: List[SessionRead]
    count: int

