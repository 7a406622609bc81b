# backend/reviewhub/exceptions.py
from __future__ import annotations

"""
Error taxonomy and FastAPI exception handlers.

Repositories, the storage client and the request binders raise the
exceptions below; the handlers registered in reviewhub.main are the only
place where they become HTTP responses. Every failure body has the shape
``{"code": ..., "message": ...}``.

Status mapping:
- BadRequestError / InvalidFilterError -> 400
- UnauthorizedError -> 401
- ForbiddenError -> 403
- NotFoundError -> 404
- MalformedIdFilterError -> 404 (legacy body, see the class)
- ConflictError -> 409
- FileTooLargeError -> 413
- DbError / StorageError -> 500
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ReviewHubError(Exception):
    """Base exception; carries the client-facing code, message and status."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class BadRequestError(ReviewHubError):
    code = "BAD_REQUEST"
    status_code = 400


class UnauthorizedError(ReviewHubError):
    code = "UNAUTHORIZED"
    status_code = 401


class ForbiddenError(ReviewHubError):
    code = "FORBIDDEN"
    status_code = 403


class NotFoundError(ReviewHubError):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str, entity_id: str | None = None):
        message = f"{resource} not found"
        if entity_id:
            message = f"{resource} not found: {entity_id}"
        super().__init__(message)
        self.resource = resource
        self.entity_id = entity_id


class FileTooLargeError(ReviewHubError):
    code = "FILE_TOO_LARGE"
    status_code = 413

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)")


class DbError(ReviewHubError):
    """Database failure; the driver detail is logged, never returned."""

    code = "DB_ERROR"
    status_code = 500


class ConflictError(DbError):
    code = "CONFLICT"
    status_code = 409


class InvalidFilterError(DbError):
    """A list filter or order-by clause could not be translated to SQL."""

    code = "INVALID_FILTER"
    status_code = 400


class StorageError(ReviewHubError):
    code = "STORAGE_ERROR"
    status_code = 500


class MalformedIdFilterError(ReviewHubError):
    """A list query filter id is not a UUID.

    Answered with 404 and the legacy `{"Error:": ...}` body that existing
    clients match on, unlike every other error.
    """

    code = "MALFORMED_ID"
    status_code = 404
    legacy_message = "Wrong format type please write UUID"

    def __init__(self, key: str, value: str):
        super().__init__(f"Query parameter {key}={value!r} is not a UUID")

    def to_dict(self) -> dict[str, Any]:
        return {"Error:": self.legacy_message}


# ---- Exception handlers ----


async def reviewhub_exception_handler(request: Request, exc: ReviewHubError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed or missing request input is a 400, not FastAPI's 422."""
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    return JSONResponse(
        status_code=400,
        content={"code": BadRequestError.code, "message": message},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"code": "INTERNAL_ERROR", "message": "Internal server error"},
    )
