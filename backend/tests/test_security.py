from datetime import datetime, timedelta

import pytest

from reviewhub.exceptions import UnauthorizedError
from reviewhub.services.security import (
    create_access_token,
    decode_access_token,
    generate_otp,
    hash_password,
    verify_password,
)


def test_password_hash_round_trip():
    encoded = hash_password("s3cret!")
    assert encoded.startswith("$2b$")
    assert "s3cret!" not in encoded
    assert verify_password("s3cret!", encoded)
    assert not verify_password("wrong", encoded)


def test_password_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_verify_password_rejects_garbage():
    assert not verify_password("anything", "plaintext")


def test_generate_otp():
    otp = generate_otp()
    assert len(otp) == 6
    assert otp.isdigit()


def test_access_token_claims():
    token = create_access_token("user-1", "session-1", datetime.utcnow() + timedelta(minutes=5))
    claims = decode_access_token(token)
    assert claims["sub"] == "user-1"
    assert claims["sid"] == "session-1"


def test_expired_access_token():
    token = create_access_token("user-1", "session-1", datetime.utcnow() - timedelta(minutes=5))
    with pytest.raises(UnauthorizedError, match="Token has expired"):
        decode_access_token(token)


def test_tampered_access_token():
    token = create_access_token("user-1", "session-1", datetime.utcnow() + timedelta(minutes=5))
    with pytest.raises(UnauthorizedError, match="Invalid token"):
        decode_access_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))
