from __future__ import annotations

from dataclasses import replace
from urllib.parse import urlencode

import pytest

from storefront.application.dto.auth import GoogleProfile
from storefront.domain.entities.user import User
from storefront.domain.exceptions import GoogleOauthError, InfrastructureError
from storefront.infrastructure.security.token_service import JwtTokenService


TEST_JWT_SECRET = "test-secret-with-enough-length-for-hs256"


class FakeUsersPort:
    def __init__(self):
        self.users: dict[int, User] = {}
        self.fail_lookups = False
        self.fail_inserts = False
        self._next_id = 1

    def _check_lookup(self) -> None:
        if self.fail_lookups:
            raise InfrastructureError("Credential store unavailable (lookup).")

    def _check_insert(self) -> None:
        if self.fail_inserts:
            raise InfrastructureError("Credential store unavailable (insert).")

    def _store(self, user: User) -> User:
        user = replace(user, id=self._next_id)
        self._next_id += 1
        self.users[user.id] = user
        return user

    def get_user_by_id(self, *, user_id: int) -> User | None:
        self._check_lookup()
        return self.users.get(user_id)

    def get_local_user_by_email(self, *, email: str) -> User | None:
        self._check_lookup()
        for user in self.users.values():
            if user.provider == "local" and user.email and user.email.lower() == email.lower():
                return user
        return None

    def get_user_by_provider_id(self, *, provider: str, provider_id: str) -> User | None:
        self._check_lookup()
        for user in self.users.values():
            if user.provider == provider and user.provider_id == provider_id:
                return user
        return None

    def create_local_user(self, *, name: str, email: str, password_hash: str) -> User:
        self._check_insert()
        return self._store(
            User(
                id=0,
                name=name,
                email=email,
                password_hash=password_hash,
                provider="local",
                provider_id=None,
            )
        )

    def create_federated_user(
        self,
        *,
        provider: str,
        provider_id: str,
        name: str,
        email: str | None,
    ) -> User:
        self._check_insert()
        return self._store(
            User(
                id=0,
                name=name,
                email=email,
                password_hash=None,
                provider=provider,
                provider_id=provider_id,
            )
        )


class FakePasswordHasher:
    def hash(self, plain_password: str) -> str:
        return f"hashed::{plain_password}"

    def verify(self, plain_password: str, password_hash: str) -> bool:
        return password_hash == f"hashed::{plain_password}"


class FakeGoogleOauthPort:
    def __init__(self, profiles: dict[str, GoogleProfile] | None = None):
        self.profiles = profiles or {}
        self.exchanged: list[str] = []

    def authorization_url(self, *, state: str | None = None) -> str:
        query = urlencode({"scope": "openid profile email", "state": state or ""})
        return f"https://accounts.example.test/consent?{query}"

    def exchange_code(self, *, code: str) -> GoogleProfile:
        self.exchanged.append(code)
        profile = self.profiles.get(code)
        if profile is None:
            raise GoogleOauthError("Google authorization code was rejected.")
        return profile


@pytest.fixture
def users_port() -> FakeUsersPort:
    return FakeUsersPort()


@pytest.fixture
def password_hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def token_service() -> JwtTokenService:
    return JwtTokenService(jwt_secret=TEST_JWT_SECRET, access_ttl_minutes=60)


@pytest.fixture
def bob_profile() -> GoogleProfile:
    return GoogleProfile(provider_user_id="g1", display_name="Bob", emails=["b@x.com"])


@pytest.fixture
def google_port(bob_profile: GoogleProfile) -> FakeGoogleOauthPort:
    return FakeGoogleOauthPort({"code-bob": bob_profile})
