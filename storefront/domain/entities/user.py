from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


AuthProvider = Literal["local", "google"]


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str | None
    password_hash: str | None
    provider: AuthProvider
    provider_id: str | None
