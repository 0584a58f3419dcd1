"""The directory of identities allowed to log in."""

import logging
import threading
import uuid
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    user_id: str
    # bytes a presented token must match
    auth_bytes: bytes


class UserDirectory:
    """In-memory mapping of user id to Identity.

    Only one identity is provisioned today, but lookups go through the
    mapping so more can be added without changing callers.
    """

    def __init__(self) -> None:
        self._users: dict[str, Identity] = {}
        self._lock = threading.Lock()

    def add(self, identity: Identity) -> None:
        with self._lock:
            self._users[identity.user_id] = identity

    def lookup(self, user_id: str) -> Identity | None:
        return self._users.get(user_id)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __len__(self) -> int:
        return len(self._users)


def provision_directory(secret: str, user_id: str = "") -> tuple[UserDirectory, Identity]:
    """Build a directory holding the single identity bound to ``secret``."""
    identity = Identity(
        user_id=user_id or str(uuid.uuid4()),
        auth_bytes=secret.encode("utf-8"),
    )
    directory = UserDirectory()
    directory.add(identity)
    logger.info("Provisioned API user %s", identity.user_id)
    return directory, identity
