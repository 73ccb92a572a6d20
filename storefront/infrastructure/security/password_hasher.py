from __future__ import annotations

from passlib.context import CryptContext

from storefront.application.ports.password_hasher_port import PasswordHasherPort


class PasswordHasher(PasswordHasherPort):
    """Hashes local-account passwords.

    Google-linked users have no ``password_hash`` and never get here; an empty
    stored hash is a mismatch, not an error.
    """

    def __init__(self):
        self._ctx = CryptContext(
            schemes=["argon2", "bcrypt"],
            deprecated="auto",
        )

    def hash(self, plain_password: str) -> str:
        return self._ctx.hash(plain_password)

    def verify(self, plain_password: str, password_hash: str | None) -> bool:
        if not password_hash:
            return False
        try:
            return self._ctx.verify(plain_password, password_hash)
        except (ValueError, TypeError):
            return False
