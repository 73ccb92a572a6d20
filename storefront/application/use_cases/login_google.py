from __future__ import annotations

import logging

from storefront.application.dto.auth import AccessTokenOutput, LoginGoogleInput
from storefront.application.ports.google_oauth_port import GoogleOauthPort
from storefront.application.ports.token_port import TokenPort
from storefront.domain.exceptions import AuthenticationError, ValidationError

from .auth_common import issue_access_token
from .resolve_google_identity import ResolveGoogleIdentityUseCase


logger = logging.getLogger(__name__)


class LoginGoogleUseCase:
    def __init__(
        self,
        *,
        google_oauth_port: GoogleOauthPort,
        resolver: ResolveGoogleIdentityUseCase,
        token_port: TokenPort,
    ):
        self._google_oauth_port = google_oauth_port
        self._resolver = resolver
        self._token_port = token_port

    def execute(self, command: LoginGoogleInput) -> AccessTokenOutput:
        if not command.code:
            raise ValidationError("Authorization code is required.")

        profile = self._google_oauth_port.exchange_code(code=command.code)
        resolution = self._resolver.execute(profile)
        if not resolution.ok:
            logger.warning("login_google: denied reason=%s", resolution.error)
            raise AuthenticationError("Google sign-in failed.") from resolution.cause

        return issue_access_token(user_id=resolution.user.id, token_port=self._token_port)
