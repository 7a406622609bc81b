# backend/reviewhub/services/celery_app.py
from __future__ import annotations

"""
Celery application configuration for background jobs.

This module defines a single Celery instance:

    celery_app = Celery(...)

It is used by:
- reviewhub.services.tasks (for task definitions)
- the worker entrypoint via
  `celery -A reviewhub.services.celery_app.celery_app worker -Q mail`
"""

from celery import Celery

from reviewhub.config import get_settings

settings = get_settings()

celery_app = Celery(
    "reviewhub_tasks",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["reviewhub.services.tasks"],
)

# Run tasks in-process (tests, single-container deployments)
celery_app.conf.task_always_eager = settings.celery_task_always_eager

# Route mail tasks to a dedicated queue
celery_app.conf.task_routes = {
    "reviewhub.services.tasks.*": {"queue": "mail"},
}
