from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from storefront.domain.exceptions import InvalidTokenError
from storefront.infrastructure.security.token_service import JwtTokenService


ISSUED_AT = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("user_id", [1, 42, 987654321])
def test_decode_returns_issued_user_id(token_service, user_id):
    token, _ = token_service.create_access_token(user_id=user_id, now=ISSUED_AT)

    payload = token_service.decode_access_token(token=token, now=ISSUED_AT + timedelta(minutes=5))

    assert payload.user_id == user_id


def test_token_expires_one_hour_after_issuance(token_service):
    token, expires_at = token_service.create_access_token(user_id=7, now=ISSUED_AT)

    assert expires_at == ISSUED_AT + timedelta(hours=1)
    payload = token_service.decode_access_token(token=token, now=expires_at - timedelta(seconds=1))
    assert payload.user_id == 7

    with pytest.raises(InvalidTokenError):
        token_service.decode_access_token(token=token, now=expires_at + timedelta(seconds=1))


def test_token_signed_with_other_secret_is_rejected(token_service):
    other = JwtTokenService(jwt_secret="another-secret-with-enough-length-too", access_ttl_minutes=60)
    token, _ = other.create_access_token(user_id=7, now=ISSUED_AT)

    with pytest.raises(InvalidTokenError):
        token_service.decode_access_token(token=token, now=ISSUED_AT)


@pytest.mark.parametrize("token", ["garbage", "", "a.b.c"])
def test_malformed_token_is_rejected(token_service, token):
    with pytest.raises(InvalidTokenError):
        token_service.decode_access_token(token=token, now=ISSUED_AT)


def test_tampered_payload_is_rejected(token_service):
    token, _ = token_service.create_access_token(user_id=7, now=ISSUED_AT)
    header, _payload, signature = token.split(".")
    forged_payload = jwt.encode(
        {"sub": "8", "exp": int((ISSUED_AT + timedelta(hours=1)).timestamp())},
        "irrelevant-secret-with-enough-length",
        algorithm="HS256",
    ).split(".")[1]

    with pytest.raises(InvalidTokenError):
        token_service.decode_access_token(token=f"{header}.{forged_payload}.{signature}", now=ISSUED_AT)


def test_non_numeric_subject_is_rejected():
    secret = "test-secret-with-enough-length-for-hs256"
    service = JwtTokenService(jwt_secret=secret, access_ttl_minutes=60)
    token = jwt.encode(
        {"sub": "user-7", "exp": int((ISSUED_AT + timedelta(hours=1)).timestamp())},
        secret,
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        service.decode_access_token(token=token, now=ISSUED_AT)


def test_token_without_expiry_is_rejected():
    secret = "test-secret-with-enough-length-for-hs256"
    service = JwtTokenService(jwt_secret=secret, access_ttl_minutes=60)
    token = jwt.encode({"sub": "7"}, secret, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        service.decode_access_token(token=token, now=ISSUED_AT)


def test_returned_expiry_matches_encoded_expiry_for_fractional_issue_time(token_service):
    issued_at = ISSUED_AT.replace(microsecond=900000)

    token, expires_at = token_service.create_access_token(user_id=7, now=issued_at)

    assert expires_at == ISSUED_AT + timedelta(hours=1)
    assert jwt.decode(token, options={"verify_signature": False})["exp"] == int(expires_at.timestamp())
    assert token_service.decode_access_token(token=token, now=expires_at - timedelta(seconds=1)).user_id == 7
    with pytest.raises(InvalidTokenError):
        token_service.decode_access_token(token=token, now=expires_at + timedelta(milliseconds=400))
