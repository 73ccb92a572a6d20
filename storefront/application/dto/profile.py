from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProfileOutput:
    id: int
    name: str
    email: str | None
    provider: str
