from unittest.mock import MagicMock

from reviewhub.config import get_settings
from reviewhub.services import mailer, tasks


def test_verification_email_skipped_without_smtp():
    assert mailer.send_verification_email("a@example.com", "123456") is False


def test_verification_message():
    message = mailer.build_verification_message("a@example.com", "123456", "noreply@reviewhub.local", 15)
    assert message["To"] == "a@example.com"
    assert "123456" in message.get_content()
    assert "15 minutes" in message.get_content()


def test_dispatch_runs_task_eagerly():
    assert tasks.dispatch_verification_email("a@example.com", "123456") == "celery"


def test_dispatch_falls_back_inline(monkeypatch):
    delay = MagicMock(side_effect=ConnectionError("broker down"))
    monkeypatch.setattr(tasks.send_verification_email_task, "delay", delay)

    assert tasks.dispatch_verification_email("a@example.com", "123456") == "inline"
    delay.assert_called_once_with("a@example.com", "123456")


def test_verification_email_uses_smtp(monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "smtp_host", "smtp.test")
    monkeypatch.setattr(settings, "smtp_user", None)
    smtp = MagicMock()
    monkeypatch.setattr(mailer.smtplib, "SMTP", MagicMock(return_value=smtp))

    assert mailer.send_verification_email("a@example.com", "654321") is True
    session = smtp.__enter__.return_value
    session.starttls.assert_called_once()
    session.login.assert_not_called()
    sent = session.send_message.call_args.args[0]
    assert sent["To"] == "a@example.com"
