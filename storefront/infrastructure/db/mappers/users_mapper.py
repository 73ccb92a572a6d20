from __future__ import annotations

from typing import Any, Mapping

from storefront.domain.entities.user import User


def map_row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=int(row["id"]),
        name=row["name"],
        email=row.get("email"),
        password_hash=row.get("password_hash"),
        provider=row["provider"],
        provider_id=row.get("provider_id"),
    )
