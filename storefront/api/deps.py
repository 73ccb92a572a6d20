from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from storefront.application.ports.google_oauth_port import GoogleOauthPort
from storefront.application.ports.token_port import TokenPort
from storefront.application.use_cases.get_profile import GetProfileUseCase
from storefront.application.use_cases.login_google import LoginGoogleUseCase
from storefront.application.use_cases.login_local import LoginLocalUseCase
from storefront.application.use_cases.resolve_google_identity import ResolveGoogleIdentityUseCase
from storefront.application.use_cases.signup_local import SignupLocalUseCase
from storefront.domain.exceptions import AuthenticationError
from storefront.infrastructure.db.engine import get_engine
from storefront.infrastructure.db.repositories.users_repository import SqlUsersRepository
from storefront.shared.config import Settings, get_settings


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def _get_db_engine():
    settings = get_app_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


def get_users_repository() -> SqlUsersRepository:
    return SqlUsersRepository(_get_db_engine())


@lru_cache(maxsize=1)
def _get_password_hasher() -> "PasswordHasher":
    from storefront.infrastructure.security.password_hasher import PasswordHasher

    return PasswordHasher()


@lru_cache(maxsize=1)
def _get_token_service() -> "JwtTokenService":
    from storefront.infrastructure.security.token_service import JwtTokenService

    settings = get_app_settings()
    if not settings.jwt_secret:
        raise HTTPException(status_code=500, detail="JWT_SECRET is required.")
    return JwtTokenService(
        jwt_secret=settings.jwt_secret,
        access_ttl_minutes=settings.jwt_access_ttl_minutes,
    )


@lru_cache(maxsize=1)
def _get_google_oauth_client() -> "GoogleOauthClient":
    from storefront.infrastructure.clients.google_oauth_client import (
        GoogleOauthClient,
        GoogleOauthClientSettings,
    )

    settings = get_app_settings()
    if not settings.google_client_id:
        raise HTTPException(status_code=500, detail="GOOGLE_CLIENT_ID is required.")
    if not settings.google_client_secret:
        raise HTTPException(status_code=500, detail="GOOGLE_CLIENT_SECRET is required.")
    return GoogleOauthClient(
        GoogleOauthClientSettings(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            redirect_uri=settings.google_redirect_uri,
            timeout_seconds=settings.google_http_timeout_seconds,
        )
    )


def get_token_port() -> TokenPort:
    return _get_token_service()


def get_google_oauth_port() -> GoogleOauthPort:
    return _get_google_oauth_client()


def get_signup_local_use_case() -> SignupLocalUseCase:
    return SignupLocalUseCase(
        users_port=get_users_repository(),
        password_hasher=_get_password_hasher(),
    )


def get_login_local_use_case() -> LoginLocalUseCase:
    return LoginLocalUseCase(
        users_port=get_users_repository(),
        password_hasher=_get_password_hasher(),
        token_port=get_token_port(),
    )


def get_login_google_use_case() -> LoginGoogleUseCase:
    return LoginGoogleUseCase(
        google_oauth_port=get_google_oauth_port(),
        resolver=ResolveGoogleIdentityUseCase(users_port=get_users_repository()),
        token_port=get_token_port(),
    )


def get_get_profile_use_case() -> GetProfileUseCase:
    return GetProfileUseCase(users_port=get_users_repository())


def get_current_user_id(
    authorization: str | None = Header(default=None),
    token_port: TokenPort = Depends(get_token_port),
) -> int:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header.")
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")

    try:
        payload = token_port.decode_access_token(token=token)
    except AuthenticationError as exc:
        logger.info("auth_gate: rejected detail=%s", exc)
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    return payload.user_id


def get_callback_login_google_use_case() -> LoginGoogleUseCase | None:
    """Google callback variant that reports misconfiguration as ``None``.

    The callback is a browser redirect target, so the router turns ``None``
    into the login-failure redirect instead of a JSON 500.
    """
    try:
        return get_login_google_use_case()
    except HTTPException as exc:
        logger.error("auth_deps: google sign-in unavailable detail=%s", exc.detail)
        return None
