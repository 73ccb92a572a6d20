from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from storefront.application.dto.auth import AccessTokenPayload
from storefront.application.ports.token_port import TokenPort
from storefront.domain.exceptions import InvalidTokenError


ALGORITHM = "HS256"


class JwtTokenService(TokenPort):
    """Stateless HS256 access tokens.

    Expiry is checked here against an injectable clock instead of by PyJWT, so
    verification depends only on the token, the secret and ``now``.
    """

    def __init__(self, *, jwt_secret: str, access_ttl_minutes: int):
        self._jwt_secret = jwt_secret
        self._access_ttl_minutes = access_ttl_minutes

    def create_access_token(self, *, user_id: int, now: datetime) -> tuple[str, datetime]:
        # exp is encoded in whole seconds.
        now = now.replace(microsecond=0)
        exp = now + timedelta(minutes=self._access_ttl_minutes)
        payload = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(payload, self._jwt_secret, algorithm=ALGORITHM)
        return token, exp

    def decode_access_token(self, *, token: str, now: datetime | None = None) -> AccessTokenPayload:
        try:
            payload = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError("Invalid access token.") from exc

        exp = payload["exp"]
        if not isinstance(exp, int):
            raise InvalidTokenError("Invalid access token.")
        current = now or utcnow()
        if int(current.timestamp()) >= exp:
            raise InvalidTokenError("Access token expired.")

        subject = payload["sub"]
        if not isinstance(subject, str) or not subject.isdigit():
            raise InvalidTokenError("Invalid token subject.")

        return AccessTokenPayload(user_id=int(subject))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
