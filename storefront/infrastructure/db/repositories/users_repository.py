from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from storefront.application.ports.users_port import UsersPort
from storefront.domain.exceptions import InfrastructureError
from storefront.infrastructure.db.mappers.users_mapper import map_row_to_user


logger = logging.getLogger(__name__)

USER_COLUMNS = "id, name, email, password_hash, provider, provider_id"


class SqlUsersRepository(UsersPort):
    def __init__(self, engine):
        self._engine = engine

    def get_user_by_id(self, *, user_id: int):
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM users
            WHERE id = :user_id
            LIMIT 1
        """
        row = self._fetch_one(sql, {"user_id": user_id}, op="get_user_by_id")
        return map_row_to_user(row) if row is not None else None

    def get_local_user_by_email(self, *, email: str):
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM users
            WHERE provider = 'local'
              AND lower(email) = :email
            ORDER BY id
            LIMIT 1
        """
        row = self._fetch_one(sql, {"email": email.lower()}, op="get_local_user_by_email")
        return map_row_to_user(row) if row is not None else None

    def get_user_by_provider_id(self, *, provider: str, provider_id: str):
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM users
            WHERE provider = :provider
              AND provider_id = :provider_id
            LIMIT 1
        """
        row = self._fetch_one(
            sql,
            {"provider": provider, "provider_id": provider_id},
            op="get_user_by_provider_id",
        )
        return map_row_to_user(row) if row is not None else None

    def create_local_user(self, *, name: str, email: str, password_hash: str):
        sql = f"""
            INSERT INTO users (name, email, password_hash, provider)
            VALUES (:name, :email, :password_hash, 'local')
            RETURNING {USER_COLUMNS}
        """
        row = self._insert_one(
            sql,
            {"name": name, "email": email, "password_hash": password_hash},
            op="create_local_user",
        )
        return map_row_to_user(row)

    def create_federated_user(
        self,
        *,
        provider: str,
        provider_id: str,
        name: str,
        email: str | None,
    ):
        sql = f"""
            INSERT INTO users (name, email, provider, provider_id)
            VALUES (:name, :email, :provider, :provider_id)
            RETURNING {USER_COLUMNS}
        """
        row = self._insert_one(
            sql,
            {"name": name, "email": email, "provider": provider, "provider_id": provider_id},
            op="create_federated_user",
        )
        return map_row_to_user(row)

    def _fetch_one(self, sql: str, params: dict, *, op: str):
        try:
            with self._engine.connect() as conn:
                return conn.execute(text(sql), params).mappings().first()
        except SQLAlchemyError as exc:
            logger.exception("users_repository: %s failed", op)
            raise InfrastructureError(f"Credential store unavailable ({op}).") from exc

    def _insert_one(self, sql: str, params: dict, *, op: str):
        try:
            with self._engine.begin() as conn:
                return conn.execute(text(sql), params).mappings().one()
        except SQLAlchemyError as exc:
            logger.exception("users_repository: %s failed", op)
            raise InfrastructureError(f"Credential store unavailable ({op}).") from exc
