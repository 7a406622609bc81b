from __future__ import annotations

"""backend/reviewhub/repositories/__init__.py

Per-resource repositories and the request-scoped `Repositories` bundle.

Each resource gets a thin subclass of the generic Repository; the ones that
need more than CRUD add their own queries here:
- UserRepository: lookups by email/username, free-text search in lists
- EventRepository: participant membership and the joined participant list
- NotificationRepository: status-only updates
- SessionRepository: deactivation on logout
- EmailVerificationRepository: pending OTP lookups
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from reviewhub import models
from reviewhub.exceptions import DbError, NotFoundError
from reviewhub.schemas import GetListFilter

from .base import Repository

logger = logging.getLogger(__name__)


class UserRepository(Repository[models.User]):
    resource_name = "User"

    def __init__(self, db: Session):
        super().__init__(
            db,
            models.User,
            filterable_columns=(
                "id",
                "username",
                "email",
                "full_name",
                "status",
                "user_role",
                "user_type",
                "created_at",
                "updated_at",
            ),
        )

    def _first(self, *criteria) -> Optional[models.User]:
        try:
            return self.db.query(models.User).filter(*criteria).first()
        except SQLAlchemyError as exc:
            logger.exception("Database error while looking up user")
            raise DbError("Error getting user") from exc

    def get_by_email(self, email: str) -> Optional[models.User]:
        return self._first(models.User.email == email)

    def get_by_username(self, username: str) -> Optional[models.User]:
        return self._first(models.User.username == username)

    def get_list(
        self, list_filter: GetListFilter, search: str | None = None
    ) -> Tuple[List[models.User], int]:
        """List users; `search` matches username, full name or e-mail, case-insensitively."""
        query = self.apply_filters(self.db.query(models.User), list_filter)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    models.User.username.ilike(pattern),
                    models.User.full_name.ilike(pattern),
                    models.User.email.ilike(pattern),
                )
            )
        return self.paginate(self.apply_ordering(query, list_filter), list_filter)


class BusinessRepository(Repository[models.Business]):
    resource_name = "Business"

    def __init__(self, db: Session):
        super().__init__(db, models.Business)


class ReviewRepository(Repository[models.Review]):
    resource_name = "Review"

    def __init__(self, db: Session):
        super().__init__(db, models.Review)


class EventRepository(Repository[models.Event]):
    resource_name = "Event"

    def __init__(self, db: Session):
        super().__init__(db, models.Event)

    def add_participant(self, event_id: str, user_id: str) -> models.EventParticipant:
        # Both ends must exist; the database alone may not enforce it (SQLite)
        self._load(event_id)
        if self.db.get(models.User, user_id) is None:
            raise NotFoundError("User", user_id)

        participant = models.EventParticipant(event_id=event_id, user_id=user_id)
        self.db.add(participant)
        self._commit("adding participant to")
        self.db.refresh(participant)
        return participant

    def remove_participant(self, event_id: str, user_id: str) -> None:
        try:
            participant = (
                self.db.query(models.EventParticipant)
                .filter(
                    models.EventParticipant.event_id == event_id,
                    models.EventParticipant.user_id == user_id,
                )
                .first()
            )
        except SQLAlchemyError as exc:
            logger.exception("Database error while looking up participant")
            raise DbError("Error getting event participant") from exc
        if participant is None:
            raise NotFoundError("Event participant", f"{event_id}/{user_id}")
        self.db.delete(participant)
        self._commit("removing participant from")

    def list_participants(self, event_id: str, list_filter: GetListFilter) -> Tuple[list, int]:
        """Return (rows, count) of participants joined with their user profile.

        Each row carries the user id, event id and the user's profile
        columns, ordered by join time (oldest first).
        """
        query = (
            self.db.query(
                models.User.id,
                models.EventParticipant.event_id,
                models.User.username,
                models.User.email,
                models.User.full_name,
                models.User.gender,
                models.User.status,
                models.User.user_role,
                models.User.user_type,
            )
            .join(models.User, models.User.id == models.EventParticipant.user_id)
            .filter(models.EventParticipant.event_id == event_id)
            .order_by(models.EventParticipant.joined_at.asc(), models.EventParticipant.id.asc())
        )
        return self.paginate(query, list_filter)


class ReportRepository(Repository[models.Report]):
    resource_name = "Report"

    def __init__(self, db: Session):
        super().__init__(db, models.Report)


class NotificationRepository(Repository[models.Notification]):
    resource_name = "Notification"

    def __init__(self, db: Session):
        super().__init__(db, models.Notification)

    def update_status(self, notification_id: str, status: str) -> models.Notification:
        return self.update(notification_id, {"status": status})


class SessionRepository(Repository[models.Session]):
    resource_name = "Session"

    def __init__(self, db: Session):
        super().__init__(db, models.Session)

    def deactivate(self, session_id: str) -> models.Session:
        return self.update(session_id, {"is_active": False, "last_active_at": datetime.utcnow()})


class EmailVerificationRepository(Repository[models.EmailVerification]):
    resource_name = "Email verification"

    def __init__(self, db: Session):
        super().__init__(db, models.EmailVerification)

    def get_latest(self, email: str) -> Optional[models.EmailVerification]:
        try:
            return (
                self.db.query(models.EmailVerification)
                .filter(models.EmailVerification.email == email)
                .order_by(models.EmailVerification.created_at.desc())
                .first()
            )
        except SQLAlchemyError as exc:
            logger.exception("Database error while looking up verification for %s", email)
            raise DbError("Error getting email verification") from exc

    def delete_for_user(self, user_id: str) -> None:
        try:
            self.db.query(models.EmailVerification).filter(
                models.EmailVerification.user_id == user_id
            ).delete()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Database error while clearing verifications for %s", user_id)
            raise DbError("Error deleting email verification") from exc
        self._commit("deleting")


@dataclass
class Repositories:
    """All repositories over one request-scoped session.

    This is the dependency bundle handlers receive through
    reviewhub.api.dependencies.get_repositories.
    """

    db: Session
    users: UserRepository = field(init=False)
    businesses: BusinessRepository = field(init=False)
    reviews: ReviewRepository = field(init=False)
    events: EventRepository = field(init=False)
    reports: ReportRepository = field(init=False)
    notifications: NotificationRepository = field(init=False)
    sessions: SessionRepository = field(init=False)
    verifications: EmailVerificationRepository = field(init=False)

    def __post_init__(self) -> None:
        self.users = UserRepository(self.db)
        self.businesses = BusinessRepository(self.db)
        self.reviews = ReviewRepository(self.db)
        self.events = EventRepository(self.db)
        self.reports = ReportRepository(self.db)
        self.notifications = NotificationRepository(self.db)
        self.sessions = SessionRepository(self.db)
        self.verifications = EmailVerificationRepository(self.db)


__all__ = [
    "BusinessRepository",
    "EmailVerificationRepository",
    "EventRepository",
    "NotificationRepository",
    "ReportRepository",
    "Repositories",
    "Repository",
    "ReviewRepository",
    "SessionRepository",
    "UserRepository",
]
