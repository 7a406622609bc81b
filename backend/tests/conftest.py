"""
Pytest configuration for the reviewhub backend.

Environment variables are set before any reviewhub import, because
reviewhub.config.get_settings() is cached and the engine is created at
import time:
- an in-memory SQLite database shared through a StaticPool
- Celery in eager mode (no broker)
- no Statsig secret and no SMTP host, so side channels are no-ops
"""

import os
from pathlib import Path

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from reviewhub.api.dependencies import get_storage
from reviewhub.db.session import Base, SessionLocal, engine
from reviewhub.exceptions import StorageError
from reviewhub.main import app
from reviewhub.repositories import Repositories
from reviewhub.services.security import access_token_expiry, create_access_token, hash_password


class FakeStorage:
    """Records uploads instead of talking to MinIO."""

    def __init__(self):
        self.uploads: list[dict] = []
        self.fail = False

    def upload(self, key, local_path, content_type=None):
        if self.fail:
            raise StorageError("Error uploading file to storage")
        path = Path(local_path)
        self.uploads.append(
            {
                "key": key,
                "local_path": path,
                "content": path.read_bytes(),
                "content_type": content_type,
            }
        )
        return f"http://storage.test/reviewhub/{key}"


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repos(db):
    return Repositories(db)


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_user(username="alice", email=None, password="secret123", status="active"):
    with SessionLocal() as session:
        return Repositories(session).users.create(
            {
                "username": username,
                "email": email or f"{username}@example.com",
                "full_name": username.title(),
                "password": hash_password(password),
                "status": status,
            }
        )


def make_token(user_id):
    expires_at = access_token_expiry()
    with SessionLocal() as session:
        login_session = Repositories(session).sessions.create(
            {"user_id": user_id, "is_active": True, "expires_at": expires_at}
        )
    return create_access_token(user_id, login_session.id, expires_at)


@pytest.fixture
def user():
    return make_user()


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {make_token(user.id)}"}


@pytest.fixture
def business(client, auth_headers):
    response = client.post(
        "/business",
        json={"name": "Corner Cafe", "category": "cafe", "address": "1 Main St"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    return response.json()
