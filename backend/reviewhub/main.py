# backend/reviewhub/main.py
from __future__ import annotations

"""
FastAPI application setup.

This module depends on:
- reviewhub.config.get_settings for configuration
- reviewhub.db.session.Base and engine for DB initialization
- reviewhub.api.api_router for route registration
- reviewhub.exceptions for the error -> HTTP mapping
"""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from reviewhub import models  # noqa: F401  (registers tables on Base.metadata)
from reviewhub.api import api_router
from reviewhub.api.middleware import IdentityMiddleware
from reviewhub.config import get_settings
from reviewhub.db.session import Base, engine
from reviewhub.exceptions import (
    ReviewHubError,
    reviewhub_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from reviewhub.services.statsig_client import shutdown_statsig

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
)


# ---- Middleware ----

app.add_middleware(IdentityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(o).rstrip("/") for o in settings.allowed_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- Errors ----

app.add_exception_handler(ReviewHubError, reviewhub_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# ---- Routes ----

app.include_router(api_router)


# ---- Lifecycle ----


@app.on_event("startup")
def on_startup() -> None:
    """
    Initialize database schema on startup.

    Deployments that manage the schema externally can skip this safely:
    `create_all` only creates missing tables.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("%s started (%s)", settings.app_name, settings.environment)


@app.on_event("shutdown")
def on_shutdown() -> None:
    shutdown_statsig()


# ---- Healthcheck ----


@app.get("/health", tags=["health"])
def health() -> dict:
    return {"status": "ok"}
