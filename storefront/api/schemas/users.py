from __future__ import annotations

from pydantic import BaseModel


class ProfileResponse(BaseModel):
    id: int
    name: str
    email: str | None
    provider: str
