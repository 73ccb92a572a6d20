from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx
from google.auth.transport import requests
from google.oauth2 import id_token

from storefront.application.dto.auth import GoogleProfile
from storefront.application.ports.google_oauth_port import GoogleOauthPort
from storefront.domain.exceptions import GoogleOauthError


logger = logging.getLogger(__name__)

AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
SCOPES = ("openid", "profile", "email")


@dataclass(frozen=True)
class GoogleOauthClientSettings:
    client_id: str
    client_secret: str
    redirect_uri: str
    timeout_seconds: float


class GoogleOauthClient(GoogleOauthPort):
    def __init__(self, settings: GoogleOauthClientSettings):
        self._settings = settings

    def authorization_url(self, *, state: str | None = None) -> str:
        params = {
            "client_id": self._settings.client_id,
            "redirect_uri": self._settings.redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
        }
        if state:
            params["state"] = state
        return f"{AUTHORIZATION_ENDPOINT}?{urlencode(params)}"

    def exchange_code(self, *, code: str) -> GoogleProfile:
        raw_id_token = self._request_id_token(code)
        try:
            payload = id_token_verify(token=raw_id_token, audience=self._settings.client_id)
        except Exception as exc:  # pragma: no cover - depends on external validation errors
            raise GoogleOauthError("Invalid Google id_token.") from exc
        return profile_from_claims(payload)

    def _request_id_token(self, code: str) -> str:
        data = {
            "code": code,
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "redirect_uri": self._settings.redirect_uri,
            "grant_type": "authorization_code",
        }
        try:
            with httpx.Client(timeout=self._settings.timeout_seconds) as client:
                response = client.post(TOKEN_ENDPOINT, data=data)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "google_oauth_client: token exchange rejected status=%s",
                exc.response.status_code,
            )
            raise GoogleOauthError("Google authorization code was rejected.") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("google_oauth_client: token exchange failed detail=%s", exc)
            raise GoogleOauthError("Google token exchange failed.") from exc

        raw_id_token = payload.get("id_token") if isinstance(payload, dict) else None
        if not raw_id_token:
            raise GoogleOauthError("Google token response missing id_token.")
        return raw_id_token


def profile_from_claims(payload: dict) -> GoogleProfile:
    subject = payload.get("sub")
    if not subject:
        raise GoogleOauthError("Google id_token missing required claims.")

    email = payload.get("email") if isinstance(payload.get("email"), str) else None
    name = payload.get("name") if isinstance(payload.get("name"), str) else None
    if not name:
        name = email.split("@")[0] if email else ""
    return GoogleProfile(
        provider_user_id=str(subject),
        display_name=name.strip(),
        emails=[email] if email else [],
    )


def id_token_verify(*, token: str, audience: str) -> dict:
    request = requests.Request()
    return id_token.verify_oauth2_token(token, request, audience)
