# backend/reviewhub/__init__.py
from __future__ import annotations

"""
Marks `reviewhub` as a Python package.

Routers live in reviewhub.api, data access in reviewhub.repositories,
integrations (storage, mail, analytics, tasks) in reviewhub.services.
"""
