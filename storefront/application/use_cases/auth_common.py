from __future__ import annotations

from datetime import datetime, timezone

from storefront.application.dto.auth import AccessTokenOutput
from storefront.application.ports.token_port import TokenPort
from storefront.domain.exceptions import ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def require_fields(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if value is None or not value.strip()]
    if not missing:
        return
    if len(missing) == 1:
        raise ValidationError(f"{missing[0]} is required.")
    raise ValidationError(f"{', '.join(missing[:-1])} and {missing[-1]} are required.")


def issue_access_token(*, user_id: int, token_port: TokenPort) -> AccessTokenOutput:
    access_token, access_expires_at = token_port.create_access_token(user_id=user_id, now=utcnow())
    return AccessTokenOutput(
        user_id=user_id,
        access_token=access_token,
        access_expires_at=access_expires_at,
    )
