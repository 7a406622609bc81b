"""Identity middleware: the single trust boundary for caller identity.

Contract:
- `request.state.user_id` / `request.state.session_id` are reset on every
  request, so nothing a client sends can pre-populate them.
- Default mode: a valid `Authorization: Bearer <jwt>` sets them from the
  `sub` / `sid` claims; an invalid token leaves them unset and records the
  reason in `request.state.auth_error`.
- Upstream mode (`settings.trust_upstream_identity`): the deployment sits
  behind a gateway that verifies tokens itself and forwards the caller id
  in the `sub` header. Only then is that header read.

Handlers read the identity through
reviewhub.api.dependencies.get_current_user_id, never from headers.
"""
from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from reviewhub.config import get_settings
from reviewhub.exceptions import UnauthorizedError
from reviewhub.services.security import decode_access_token

logger = logging.getLogger(__name__)

UPSTREAM_IDENTITY_HEADER = "sub"


class IdentityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.user_id = None
        request.state.session_id = None
        request.state.auth_error = None

        if get_settings().trust_upstream_identity:
            request.state.user_id = request.headers.get(UPSTREAM_IDENTITY_HEADER) or None
            return await call_next(request)

        scheme, _, token = request.headers.get("authorization", "").partition(" ")
        if scheme.lower() == "bearer" and token:
            try:
                claims = decode_access_token(token.strip())
            except UnauthorizedError as exc:
                logger.debug("Rejected bearer token: %s", exc.message)
                request.state.auth_error = exc.message
            else:
                request.state.user_id = claims["sub"]
                request.state.session_id = claims.get("sid")

        return await call_next(request)
