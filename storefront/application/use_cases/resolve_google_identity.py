from __future__ import annotations

import logging

from storefront.application.dto.auth import GoogleProfile, IdentityResolution
from storefront.application.ports.users_port import UsersPort
from storefront.domain.exceptions import InfrastructureError


logger = logging.getLogger(__name__)

PROVIDER = "google"


class ResolveGoogleIdentityUseCase:
    """Links a Google profile to a local user, creating the user on first sight.

    An existing link wins over any drift in name or email on Google's side;
    nothing is re-synced. The resolver never raises for store failures: they
    come back as a failed ``IdentityResolution`` so the caller decides how to
    deny the login.
    """

    def __init__(self, *, users_port: UsersPort):
        self._users_port = users_port

    def execute(self, profile: GoogleProfile) -> IdentityResolution:
        try:
            user = self._users_port.get_user_by_provider_id(
                provider=PROVIDER,
                provider_id=profile.provider_user_id,
            )
        except InfrastructureError as exc:
            logger.error("resolve_google_identity: lookup failed detail=%s", exc)
            return IdentityResolution.failed("store_unavailable", exc)

        if user is not None:
            return IdentityResolution.found(user)

        try:
            user = self._users_port.create_federated_user(
                provider=PROVIDER,
                provider_id=profile.provider_user_id,
                name=profile.display_name,
                email=profile.primary_email,
            )
        except InfrastructureError as exc:
            logger.error("resolve_google_identity: insert failed detail=%s", exc)
            return IdentityResolution.failed("store_unavailable", exc)

        logger.info("resolve_google_identity: linked user_id=%s", user.id)
        return IdentityResolution.linked(user)
