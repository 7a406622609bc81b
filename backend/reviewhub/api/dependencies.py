"""FastAPI dependencies shared by the routers.

Handlers never build their collaborators themselves; they receive
- `Repositories` over the request-scoped DB session
- the object storage client
- the caller's user id, as established by IdentityMiddleware

Tests swap any of these through `app.dependency_overrides`.
"""
from __future__ import annotations

from datetime import datetime

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from reviewhub.db.session import get_db
from reviewhub.exceptions import NotFoundError, UnauthorizedError
from reviewhub.repositories import Repositories
from reviewhub.services.storage import ObjectStorageProtocol, get_object_storage


def get_repositories(db: Session = Depends(get_db)) -> Repositories:
    return Repositories(db)


def get_storage() -> ObjectStorageProtocol:
    return get_object_storage()


def get_current_user_id(
    request: Request,
    repos: Repositories = Depends(get_repositories),
) -> str:
    """Return the authenticated caller's id or answer 401.

    The id is an opaque, pre-validated claim set by IdentityMiddleware.
    Token identities are additionally bound to a login session, which must
    still be active and unexpired.
    """
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise UnauthorizedError(getattr(request.state, "auth_error", None) or "Not authenticated")

    session_id = getattr(request.state, "session_id", None)
    if session_id:
        try:
            session = repos.sessions.get_single(session_id)
        except NotFoundError:
            raise UnauthorizedError("Session not found") from None
        if not session.is_active:
            raise UnauthorizedError("Session is no longer active")
        if session.expires_at is not None and session.expires_at < datetime.utcnow():
            raise UnauthorizedError("Session has expired")
    return user_id


def get_current_session_id(
    request: Request,
    user_id: str = Depends(get_current_user_id),
) -> str | None:
    return getattr(request.state, "session_id", None)
