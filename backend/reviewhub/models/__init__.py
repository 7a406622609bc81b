# backend/reviewhub/models/__init__.py
from __future__ import annotations

"""
Core ORM models for the reviewhub backend.

This module depends on:
- reviewhub.db.session.Base for the declarative base

It is used by:
- reviewhub.repositories (generic CRUD and per-resource queries)
- reviewhub.schemas (as `from_attributes` sources)

Models:
- User: registered account
- Business: a local business owned by a user
- Review: a user's rating/feedback for a business
- Event: an event hosted by a business
- EventParticipant: membership of a user in an event
- Report: a user's complaint about a business
- Notification: message delivered to a user
- Session: a login session backing an access token
- EmailVerification: pending one-time password for e-mail verification

Foreign keys are plain identifier strings; no ORM relationships or cascades
are declared, referential integrity is left to the database.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from reviewhub.db.session import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class UserStatus(str, enum.Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


class NotificationStatus(str, enum.Enum):
    UNREAD = "unread"
    READ = "read"


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=_new_id)
    username = Column(String, unique=True, nullable=False)
    email = Column(String, unique=True, nullable=False)
    full_name = Column(String, nullable=True)
    gender = Column(String, nullable=True)
    bio = Column(Text, nullable=True)

    # bcrypt hash, see reviewhub.services.security
    password = Column(String, nullable=False)

    profile_picture = Column(String, nullable=True)
    status = Column(String, nullable=False, default=UserStatus.INACTIVE.value)
    user_role = Column(String, nullable=False, default="user")
    user_type = Column(String, nullable=False, default="standard")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Business(Base):
    __tablename__ = "businesses"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=True)
    address = Column(String, nullable=True)
    contact_info = Column(String, nullable=True)
    owner_id = Column(String, ForeignKey("users.id"), nullable=True)
    photos = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Review(Base):
    __tablename__ = "reviews"

    id = Column(String, primary_key=True, default=_new_id)
    business_id = Column(String, ForeignKey("businesses.id"), nullable=False)
    user_id = Column(String, ForeignKey("users.id"), nullable=True)
    rating = Column(Integer, nullable=False)  # 1..5
    feedback = Column(Text, nullable=True)

    # Public URL of the attached image (a single value, replaced on upload)
    photos = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Event(Base):
    __tablename__ = "events"

    id = Column(String, primary_key=True, default=_new_id)
    business_id = Column(String, ForeignKey("businesses.id"), nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    date = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class EventParticipant(Base):
    __tablename__ = "event_participants"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_participant"),)

    id = Column(String, primary_key=True, default=_new_id)
    event_id = Column(String, ForeignKey("events.id"), nullable=False)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Report(Base):
    __tablename__ = "reports"

    id = Column(String, primary_key=True, default=_new_id)
    business_id = Column(String, ForeignKey("businesses.id"), nullable=False)
    user_id = Column(String, ForeignKey("users.id"), nullable=True)
    reason = Column(Text, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False)
    owner_id = Column(String, nullable=True)
    ownerrole = Column(String, nullable=True)
    email = Column(String, nullable=True)
    message = Column(Text, nullable=False)
    status = Column(String, nullable=False, default=NotificationStatus.UNREAD.value)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Session(Base):
    __tablename__ = "sessions"

    id = Column(String, primary_key=True, default=_new_id)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    platform = Column(String, nullable=True)
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime, nullable=True)
    last_active_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class EmailVerification(Base):
    """Pending OTP for a freshly registered user; deleted once consumed."""

    __tablename__ = "email_verifications"

    id = Column(String, primary_key=True, default=_new_id)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    email = Column(String, nullable=False)
    otp = Column(String, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
