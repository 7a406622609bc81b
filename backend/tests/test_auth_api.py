"""
Tests for registration, verification, login/logout and the identity boundary.
"""

from datetime import datetime, timedelta

import pytest
from jose import jwt

from reviewhub import models
from reviewhub.config import get_settings
from reviewhub.db.session import SessionLocal
from reviewhub.services.security import create_access_token
from tests.conftest import make_user

REGISTRATION = {
    "email": "bob@example.com",
    "password": "hunter22",
    "full_name": "Bob Builder",
    "gender": "male",
    "user_name": "bob",
}


def _pending_otp(email):
    with SessionLocal() as session:
        verification = (
            session.query(models.EmailVerification)
            .filter(models.EmailVerification.email == email)
            .first()
        )
        return verification.otp if verification else None


def _register_and_verify(client):
    client.post("/auth/register", json=REGISTRATION)
    otp = _pending_otp(REGISTRATION["email"])
    return client.post(
        "/auth/verify-email",
        json={"email": REGISTRATION["email"], "otp": otp, "platform": "web"},
    )


def _login(client, password=REGISTRATION["password"]):
    return client.post(
        "/auth/login",
        json={"email": REGISTRATION["email"], "password": password, "platform": "web"},
    )


def test_register_creates_inactive_user_with_otp(client):
    response = client.post("/auth/register", json=REGISTRATION)

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "bob"
    assert body["status"] == "inactive"
    assert "password" not in body

    otp = _pending_otp(REGISTRATION["email"])
    assert otp is not None and len(otp) == 6 and otp.isdigit()


def test_register_duplicate_email_is_conflict(client):
    client.post("/auth/register", json=REGISTRATION)
    response = client.post("/auth/register", json={**REGISTRATION, "user_name": "bobby"})

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_verify_with_wrong_otp_is_rejected(client):
    client.post("/auth/register", json=REGISTRATION)

    response = client.post(
        "/auth/verify-email", json={"email": REGISTRATION["email"], "otp": "000000x"}
    )
    assert response.status_code == 400


def test_verify_with_expired_otp_is_rejected(client):
    client.post("/auth/register", json=REGISTRATION)
    with SessionLocal() as session:
        verification = session.query(models.EmailVerification).first()
        verification.expires_at = datetime.utcnow() - timedelta(minutes=1)
        otp = verification.otp
        session.commit()

    response = client.post(
        "/auth/verify-email", json={"email": REGISTRATION["email"], "otp": otp}
    )
    assert response.status_code == 400
    assert "expired" in response.json()["message"]


def test_verify_activates_user_and_consumes_otp(client):
    response = _register_and_verify(client)

    assert response.status_code == 200
    assert response.json()["status"] == "active"
    assert _pending_otp(REGISTRATION["email"]) is None


def test_login_requires_verified_email(client):
    client.post("/auth/register", json=REGISTRATION)

    response = _login(client)
    assert response.status_code == 400


def test_login_with_wrong_password_is_401(client):
    _register_and_verify(client)

    response = _login(client, password="wrong-password")
    assert response.status_code == 401


def test_login_issues_token_bound_to_session(client):
    _register_and_verify(client)

    response = _login(client)
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"

    claims = jwt.decode(body["access_token"], get_settings().jwt_secret, algorithms=["HS256"])
    assert claims["sid"] == body["session_id"]

    headers = {"Authorization": f"Bearer {body['access_token']}"}
    session = client.get(f"/session/{body['session_id']}", headers=headers).json()
    assert session["is_active"] is True
    assert session["platform"] == "web"
    assert session["user_id"] == claims["sub"]


def test_logout_revokes_token(client):
    _register_and_verify(client)
    token = _login(client).json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    assert client.get("/review/list", headers=headers).status_code == 200
    response = client.post("/auth/logout", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}

    after = client.get("/review/list", headers=headers)
    assert after.status_code == 401


def test_invalid_bearer_token_is_401(client):
    response = client.get("/review/list", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.json() == {"code": "UNAUTHORIZED", "message": "Invalid token"}


def test_expired_token_is_401(client, user):
    token = jwt.encode(
        {"sub": user.id, "exp": datetime.utcnow() - timedelta(minutes=5)},
        get_settings().jwt_secret,
        algorithm="HS256",
    )
    response = client.get("/review/list", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


def test_expired_session_rejects_valid_token(client, user):
    with SessionLocal() as session:
        login_session = models.Session(
            user_id=user.id,
            is_active=True,
            expires_at=datetime.utcnow() - timedelta(minutes=1),
        )
        session.add(login_session)
        session.commit()
        session_id = login_session.id

    token = create_access_token(user.id, session_id, datetime.utcnow() + timedelta(minutes=30))
    response = client.get("/review/list", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"code": "UNAUTHORIZED", "message": "Session has expired"}


def test_client_supplied_sub_header_is_ignored(client, user):
    response = client.get("/review/list", headers={"sub": user.id})

    assert response.status_code == 401


@pytest.fixture
def upstream_identity(monkeypatch):
    monkeypatch.setattr(get_settings(), "trust_upstream_identity", True)


def test_upstream_sub_header_is_trusted_when_configured(client, upstream_identity, business_owner):
    response = client.post(
        "/business",
        json={"name": "Gateway Diner"},
        headers={"sub": business_owner.id},
    )

    assert response.status_code == 200
    assert response.json()["owner_id"] == business_owner.id


def test_upstream_mode_still_requires_a_caller(client, upstream_identity):
    assert client.get("/review/list").status_code == 401


@pytest.fixture
def business_owner():
    return make_user(username="owner")
