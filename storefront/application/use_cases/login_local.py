from __future__ import annotations

import logging

from storefront.application.dto.auth import AccessTokenOutput, LoginLocalInput
from storefront.application.ports.password_hasher_port import PasswordHasherPort
from storefront.application.ports.token_port import TokenPort
from storefront.application.ports.users_port import UsersPort
from storefront.domain.exceptions import InvalidCredentialsError

from .auth_common import issue_access_token, normalize_email, require_fields


logger = logging.getLogger(__name__)


class LoginLocalUseCase:
    def __init__(
        self,
        *,
        users_port: UsersPort,
        password_hasher: PasswordHasherPort,
        token_port: TokenPort,
    ):
        self._users_port = users_port
        self._password_hasher = password_hasher
        self._token_port = token_port

    def execute(self, command: LoginLocalInput) -> AccessTokenOutput:
        require_fields(email=command.email, password=command.password)
        email = normalize_email(command.email)

        user = self._users_port.get_local_user_by_email(email=email)
        if user is None or not user.password_hash:
            logger.info("login_local: rejected reason=unknown_account")
            raise InvalidCredentialsError("Invalid credentials.")

        if not self._password_hasher.verify(command.password, user.password_hash):
            logger.info("login_local: rejected reason=password_mismatch user_id=%s", user.id)
            raise InvalidCredentialsError("Invalid credentials.")

        return issue_access_token(user_id=user.id, token_port=self._token_port)
