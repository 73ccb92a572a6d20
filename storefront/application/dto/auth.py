from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from storefront.domain.entities.user import User


@dataclass(frozen=True)
class SignupInput:
    email: str | None
    password: str | None
    name: str | None


@dataclass(frozen=True)
class SignupOutput:
    user_id: int


@dataclass(frozen=True)
class LoginLocalInput:
    email: str | None
    password: str | None


@dataclass(frozen=True)
class LoginGoogleInput:
    code: str


@dataclass(frozen=True)
class AccessTokenOutput:
    user_id: int
    access_token: str
    access_expires_at: datetime


@dataclass(frozen=True)
class AccessTokenPayload:
    user_id: int


@dataclass(frozen=True)
class GoogleProfile:
    provider_user_id: str
    display_name: str
    emails: list[str] = field(default_factory=list)

    @property
    def primary_email(self) -> str | None:
        return self.emails[0] if self.emails else None


IdentityResolutionError = Literal["store_unavailable"]


@dataclass(frozen=True)
class IdentityResolution:
    """Outcome of linking an external profile to a local user.

    Either ``user`` is set (``created`` tells whether the row is new) or
    ``error`` names why the link could not be made. ``cause`` keeps the
    underlying exception for logging.
    """

    user: User | None = None
    created: bool = False
    error: IdentityResolutionError | None = None
    cause: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.user is not None and self.error is None

    @classmethod
    def found(cls, user: User) -> IdentityResolution:
        return cls(user=user)

    @classmethod
    def linked(cls, user: User) -> IdentityResolution:
        return cls(user=user, created=True)

    @classmethod
    def failed(cls, error: IdentityResolutionError, cause: Exception) -> IdentityResolution:
        return cls(error=error, cause=cause)
