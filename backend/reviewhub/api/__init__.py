# backend/reviewhub/api/__init__.py
from __future__ import annotations

"""
API router aggregation.

This module exposes a single `api_router` that the FastAPI app
includes at the root.
"""

from fastapi import APIRouter

from . import auth, businesses, events, notifications, reports, reviews, sessions, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(businesses.router)
api_router.include_router(reviews.router)
api_router.include_router(events.router)
api_router.include_router(reports.router)
api_router.include_router(notifications.router)
api_router.include_router(sessions.router)
