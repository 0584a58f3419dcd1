"""Credential verification (timing-safe)."""

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass

from playgate.users import Identity, UserDirectory

logger = logging.getLogger(__name__)

# Both sides of a comparison are MACed under this key first, so
# compare_digest always sees two 32-byte values.
_COMPARE_KEY = secrets.token_bytes(32)

# Compared against when the claimed user id is unknown.
_DUMMY_AUTH_BYTES = secrets.token_bytes(36)


@dataclass(frozen=True)
class Credentials:
    user_id: str
    token: str

    def __repr__(self) -> str:
        return f"Credentials(user_id={self.user_id!r}, token=<redacted>)"


def constant_time_equals(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in time independent of their contents.

    The inputs are reduced to fixed-width HMAC-SHA256 digests before
    ``hmac.compare_digest`` runs, so neither a shared prefix nor a length
    difference changes the amount of work done.
    """
    digest_a = hmac.new(_COMPARE_KEY, a, hashlib.sha256).digest()
    digest_b = hmac.new(_COMPARE_KEY, b, hashlib.sha256).digest()
    return hmac.compare_digest(digest_a, digest_b)


class AuthenticationService:
    """Verifies login credentials against a UserDirectory."""

    def __init__(self, directory: UserDirectory) -> None:
        self._directory = directory

    def authenticate(self, credentials: Credentials) -> Identity | None:
        """Return the matching Identity, or None if the credentials are wrong.

        A wrong token and an unknown user id are indistinguishable to the
        caller, and both paths run the same comparison.
        """
        identity = self._directory.lookup(credentials.user_id)
        expected = identity.auth_bytes if identity is not None else _DUMMY_AUTH_BYTES
        matched = constant_time_equals(expected, credentials.token.encode("utf-8"))

        if identity is None or not matched:
            logger.info("Failed login attempt for user %s", credentials.user_id)
            return None
        logger.info("User %s authenticated", identity.user_id)
        return identity
