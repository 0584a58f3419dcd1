"""Bootstrap of the shared login secret."""

import logging
import os
import uuid

logger = logging.getLogger(__name__)


class SecretBootstrapError(RuntimeError):
    """The secret file could not be read or written. The server can't start."""


def obtain_secret(path: str) -> str:
    """Return the secret stored at ``path``, creating it on first use.

    An existing file is read and stripped of surrounding whitespace. A
    missing (or blank) file gets a new random UUID written to it verbatim,
    so the value written and the value read back are the same.
    """
    try:
        if os.path.isfile(path):
            with open(path, "r", encoding="utf-8") as f:
                secret = f.read().strip()
            if secret:
                logger.info("Using existing secret from %s", path)
                return secret
            logger.warning("Secret file %s is empty, generating a new secret", path)

        secret = str(uuid.uuid4())
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(secret)
        os.chmod(path, 0o600)
    except OSError as e:
        raise SecretBootstrapError(f"Cannot bootstrap secret at {path}: {e}") from e

    logger.info("Generated new secret in %s", path)
    return secret
