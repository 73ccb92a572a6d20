from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class ValidationError(DomainError):
    """Missing or malformed input."""


class AuthenticationError(DomainError):
    """Caller could not be authenticated."""


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair did not match a local account."""


class InvalidTokenError(AuthenticationError):
    """Bearer token is malformed, forged or expired."""


class GoogleOauthError(AuthenticationError):
    """Google authorization-code exchange failed."""


class ConflictError(DomainError):
    """Resource already exists."""


class EmailAlreadyExistsError(ConflictError):
    """A local account already uses this email."""


class InfrastructureError(DomainError):
    """Credential store or network failure."""


class UserNotFoundError(DomainError):
    """Token subject no longer has a user row."""
