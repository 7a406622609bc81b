"""Outgoing e-mail over SMTP."""
from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from reviewhub.config import get_settings

logger = logging.getLogger(__name__)


def build_verification_message(email: str, otp: str, sender: str, ttl_minutes: int) -> EmailMessage:
    message = EmailMessage()
    message["Subject"] = "Your verification code"
    message["From"] = sender
    message["To"] = email
    message.set_content(
        f"Your verification code is {otp}.\n"
        f"It expires in {ttl_minutes} minutes."
    )
    return message


def send_verification_email(email: str, otp: str) -> bool:
    """Send the OTP to `email`. Returns False when SMTP is not configured."""
    settings = get_settings()
    if not settings.smtp_host:
        logger.info("SMTP not configured; skipping verification e-mail to %s", email)
        return False

    message = build_verification_message(
        email, otp, settings.smtp_sender, settings.otp_ttl_minutes
    )
    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30) as smtp:
        smtp.starttls()
        if settings.smtp_user:
            smtp.login(settings.smtp_user, settings.smtp_password or "")
        smtp.send_message(message)
    logger.info("Sent verification e-mail to %s", email)
    return True
