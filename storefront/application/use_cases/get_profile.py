from __future__ import annotations

from storefront.application.dto.profile import ProfileOutput
from storefront.application.ports.users_port import UsersPort
from storefront.domain.exceptions import UserNotFoundError


class GetProfileUseCase:
    def __init__(self, *, users_port: UsersPort):
        self._users_port = users_port

    def execute(self, *, user_id: int) -> ProfileOutput:
        user = self._users_port.get_user_by_id(user_id=user_id)
        if user is None:
            raise UserNotFoundError("User not found.")
        return ProfileOutput(
            id=user.id,
            name=user.name,
            email=user.email,
            provider=user.provider,
        )
