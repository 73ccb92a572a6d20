from __future__ import annotations

import logging

from storefront.application.dto.auth import SignupInput, SignupOutput
from storefront.application.ports.password_hasher_port import PasswordHasherPort
from storefront.application.ports.users_port import UsersPort
from storefront.domain.exceptions import EmailAlreadyExistsError

from .auth_common import normalize_email, require_fields


logger = logging.getLogger(__name__)


class SignupLocalUseCase:
    def __init__(
        self,
        *,
        users_port: UsersPort,
        password_hasher: PasswordHasherPort,
    ):
        self._users_port = users_port
        self._password_hasher = password_hasher

    def execute(self, command: SignupInput) -> SignupOutput:
        require_fields(email=command.email, password=command.password, name=command.name)
        email = normalize_email(command.email)
        name = command.name.strip()

        if self._users_port.get_local_user_by_email(email=email) is not None:
            raise EmailAlreadyExistsError("Email already in use.")

        password_hash = self._password_hasher.hash(command.password)
        user = self._users_port.create_local_user(
            name=name,
            email=email,
            password_hash=password_hash,
        )
        logger.info("signup_local: created user_id=%s", user.id)
        return SignupOutput(user_id=user.id)
