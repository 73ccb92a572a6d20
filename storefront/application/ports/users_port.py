from __future__ import annotations

from typing import Protocol

from storefront.domain.entities.user import AuthProvider, User


class UsersPort(Protocol):
    def get_user_by_id(self, *, user_id: int) -> User | None:
        ...

    def get_local_user_by_email(self, *, email: str) -> User | None:
        ...

    def get_user_by_provider_id(self, *, provider: AuthProvider, provider_id: str) -> User | None:
        ...

    def create_local_user(self, *, name: str, email: str, password_hash: str) -> User:
        ...

    def create_federated_user(
        self,
        *,
        provider: AuthProvider,
        provider_id: str,
        name: str,
        email: str | None,
    ) -> User:
        ...
