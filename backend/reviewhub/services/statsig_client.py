"""Statsig analytics events for resource and account activity.

Events are fire-and-forget: failures are logged and never reach the
request. With no server secret configured the client is a no-op.
"""
from __future__ import annotations

import logging
from typing import Any

from statsig import StatsigEvent, StatsigOptions, StatsigServer, StatsigUser

from reviewhub.config import get_settings

logger = logging.getLogger(__name__)

# Statsig requires a user; server-originated events without one use this id
ANONYMOUS_USER = "reviewhub-backend"


class StatsigEvents:
    def __init__(self, secret_key: str | None, environment: str):
        self._server: StatsigServer | None = None
        if not secret_key:
            logger.debug("Statsig disabled: no server secret configured")
            return

        try:
            server = StatsigServer()
            server.initialize(secret_key, StatsigOptions(environment={"tier": environment}))
            self._server = server
        except Exception as exc:  # noqa: BLE001
            logger.warning("Statsig initialization failed: %s", exc)
            self._server = None

    @property
    def enabled(self) -> bool:
        return self._server is not None

    def emit(
        self,
        event_name: str,
        *,
        user_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        if self._server is None:
            return

        try:
            self._server.log_event(
                StatsigEvent(
                    StatsigUser(user_id or ANONYMOUS_USER),
                    event_name,
                    metadata={k: str(v) for k, v in (metadata or {}).items()},
                )
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("Statsig event %s failed: %s", event_name, exc)

    def shutdown(self) -> None:
        if self._server is None:
            return

        try:
            self._server.shutdown()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Statsig shutdown failed: %s", exc)


_events: StatsigEvents | None = None


def get_statsig_events() -> StatsigEvents:
    global _events
    if _events is None:
        settings = get_settings()
        _events = StatsigEvents(settings.statsig_server_secret, settings.environment)
    return _events


def log_backend_event(
    event_name: str,
    *,
    user_id: str | None = None,
    **metadata: Any,
) -> None:
    """Emit `event_name`, e.g. ``log_backend_event("review_created", user_id=uid, review_id=rid)``."""
    get_statsig_events().emit(event_name, user_id=user_id, metadata=metadata)


def shutdown_statsig() -> None:
    get_statsig_events().shutdown()
