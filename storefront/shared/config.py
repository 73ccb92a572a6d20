from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str, default: str) -> tuple[str, ...]:
    value = _env(name) or default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    postgres_dsn: str
    jwt_secret: str
    jwt_access_ttl_minutes: int
    google_client_id: str
    google_client_secret: str
    google_redirect_uri: str
    google_http_timeout_seconds: float
    frontend_url: str
    cors_origins: tuple[str, ...]

    @property
    def login_failure_url(self) -> str:
        return f"{self.frontend_url}/login"


def get_settings() -> Settings:
    frontend_url = (_env("FRONTEND_URL") or "http://localhost:3000").rstrip("/")
    return Settings(
        postgres_dsn=_env("POSTGRES_DSN", ""),
        jwt_secret=_env("JWT_SECRET", ""),
        jwt_access_ttl_minutes=int(_env("JWT_ACCESS_TTL_MINUTES", "60")),
        google_client_id=_env("GOOGLE_CLIENT_ID", ""),
        google_client_secret=_env("GOOGLE_CLIENT_SECRET", ""),
        google_redirect_uri=_env("GOOGLE_REDIRECT_URI", "http://localhost:3001/auth/google/callback"),
        google_http_timeout_seconds=float(_env("GOOGLE_HTTP_TIMEOUT_SECONDS", "10")),
        frontend_url=frontend_url,
        cors_origins=_csv("CORS_ORIGINS", frontend_url),
    )
