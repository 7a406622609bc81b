"""Integrations: object storage, mail, background tasks, analytics, security helpers."""
