# backend/reviewhub/services/tasks.py
from __future__ import annotations

"""
Celery tasks for the reviewhub backend.

Currently provides:
- send_verification_email_task: deliver a registration OTP by e-mail.
"""

import logging

from celery import Task

from reviewhub.services.celery_app import celery_app
from reviewhub.services.mailer import send_verification_email

logger = logging.getLogger(__name__)


@celery_app.task(
    bind=True,
    name="reviewhub.services.tasks.send_verification_email_task",
    max_retries=3,
    default_retry_delay=30,
)
def send_verification_email_task(self: Task, email: str, otp: str) -> bool:
    """
    Celery task: send the verification OTP to a freshly registered address.

    SMTP failures are retried by Celery; the OTP stays valid in the
    database until it expires.
    """
    try:
        return send_verification_email(email, otp)
    except OSError as exc:
        logger.warning("Verification e-mail to %s failed: %s", email, exc)
        raise self.retry(exc=exc)


def dispatch_verification_email(email: str, otp: str) -> str:
    """Queue the e-mail via Celery, with a synchronous fallback.

    Returns the execution mode used ("celery" or "inline").
    """
    try:
        send_verification_email_task.delay(email, otp)
        return "celery"
    except Exception as exc:  # noqa: BLE001
        logger.warning("Celery dispatch failed, sending inline: %s", exc)

    try:
        send_verification_email(email, otp)
    except OSError as exc:
        logger.error("Inline verification e-mail to %s failed: %s", email, exc)
    return "inline"
