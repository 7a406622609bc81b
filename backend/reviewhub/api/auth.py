# backend/reviewhub/api/auth.py
from __future__ import annotations

"""
Registration, e-mail verification, login and logout.

Flow:
1. POST /auth/register creates an `inactive` user and e-mails a one-time
   password (Celery task, inline fallback).
2. POST /auth/verify-email consumes the OTP and activates the user.
3. POST /auth/login checks the password of an active user, opens a Session
   row and returns a bearer token bound to it (`sid` claim).
4. POST /auth/logout deactivates that session; its token stops working.
"""

import logging
import secrets
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, Request

from reviewhub import models, schemas
from reviewhub.api.dependencies import get_current_session_id, get_repositories
from reviewhub.api.users import ensure_unique_identity
from reviewhub.config import get_settings
from reviewhub.exceptions import BadRequestError, UnauthorizedError
from reviewhub.repositories import Repositories
from reviewhub.services.security import (
    access_token_expiry,
    create_access_token,
    generate_otp,
    hash_password,
    verify_password,
)
from reviewhub.services.statsig_client import log_backend_event
from reviewhub.services.tasks import dispatch_verification_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=schemas.UserRead)
def register(
    payload: schemas.RegisterRequest,
    repos: Repositories = Depends(get_repositories),
) -> schemas.UserRead:
    ensure_unique_identity(repos, payload.email, payload.user_name)
    user = repos.users.create(
        {
            "username": payload.user_name,
            "email": payload.email,
            "full_name": payload.full_name,
            "gender": payload.gender,
            "password": hash_password(payload.password),
            "status": models.UserStatus.INACTIVE,
        }
    )

    otp = generate_otp()
    repos.verifications.create(
        {
            "user_id": user.id,
            "email": user.email,
            "otp": otp,
            "expires_at": datetime.utcnow() + timedelta(minutes=get_settings().otp_ttl_minutes),
        }
    )
    mode = dispatch_verification_email(user.email, otp)
    logger.info("Registered user %s; verification e-mail dispatched (%s)", user.id, mode)
    log_backend_event("user_registered", user_id=user.id)
    return user


@router.post("/verify-email", response_model=schemas.UserRead)
def verify_email(
    payload: schemas.VerifyEmail,
    repos: Repositories = Depends(get_repositories),
) -> schemas.UserRead:
    verification = repos.verifications.get_latest(payload.email)
    if verification is None or not secrets.compare_digest(verification.otp, payload.otp):
        raise BadRequestError("Invalid verification code")
    if verification.expires_at < datetime.utcnow():
        raise BadRequestError("Verification code has expired")

    user = repos.users.update(verification.user_id, {"status": models.UserStatus.ACTIVE})
    repos.verifications.delete_for_user(user.id)
    return user


@router.post("/login", response_model=schemas.TokenResponse)
def login(
    payload: schemas.LoginRequest,
    request: Request,
    repos: Repositories = Depends(get_repositories),
) -> schemas.TokenResponse:
    user = repos.users.get_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password):
        raise UnauthorizedError("Invalid email or password")
    if user.status != models.UserStatus.ACTIVE.value:
        raise BadRequestError("Email address is not verified")

    expires_at = access_token_expiry()
    session = repos.sessions.create(
        {
            "user_id": user.id,
            "platform": payload.platform,
            "ip_address": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent"),
            "is_active": True,
            "expires_at": expires_at,
            "last_active_at": datetime.utcnow(),
        }
    )
    log_backend_event("user_logged_in", user_id=user.id, platform=payload.platform)
    return schemas.TokenResponse(
        access_token=create_access_token(user.id, session.id, expires_at),
        session_id=session.id,
        expires_at=expires_at,
    )


@router.post("/logout", response_model=schemas.SuccessResponse)
def logout(
    session_id: str | None = Depends(get_current_session_id),
    repos: Repositories = Depends(get_repositories),
) -> schemas.SuccessResponse:
    if session_id:
        repos.sessions.deactivate(session_id)
    return schemas.SuccessResponse(message="Logged out successfully")
