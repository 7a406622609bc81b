"""Password hashing, one-time passwords and access tokens."""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from reviewhub.config import get_settings
from reviewhub.exceptions import UnauthorizedError

OTP_LENGTH = 6

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, encoded: str) -> bool:
    try:
        return pwd_context.verify(password, encoded)
    except ValueError:
        # Not a hash this context recognises
        return False


def generate_otp() -> str:
    return "".join(secrets.choice("0123456789") for _ in range(OTP_LENGTH))


def create_access_token(user_id: str, session_id: str, expires_at: datetime) -> str:
    settings = get_settings()
    claims = {
        "sub": user_id,
        "sid": session_id,
        "iat": datetime.utcnow(),
        "exp": expires_at,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def access_token_expiry() -> datetime:
    return datetime.utcnow() + timedelta(minutes=get_settings().access_token_ttl_minutes)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry; raise UnauthorizedError otherwise."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as exc:
        raise UnauthorizedError("Token has expired") from exc
    except JWTError as exc:
        raise UnauthorizedError("Invalid token") from exc

    if not payload.get("sub"):
        raise UnauthorizedError("Invalid token: missing user ID")
    return payload
