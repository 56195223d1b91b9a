import json
import logging
import os

from .config import RESUMAKER_HOME, get_provider

logger = logging.getLogger(__name__)

CREDENTIAL_NAME = "api_key"


class CredentialStore:
    """Keeps one API key on disk between runs.

    The key lives under a fixed name in a small JSON file. Nothing is
    written until ``set`` is called; there is no default value.
    """

    def __init__(self, path: str | None = None):
        self.path = path or os.path.join(RESUMAKER_HOME, "credentials.json")

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError:
                logger.warning("Ignoring unreadable credential file: %s", self.path)
                return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> str | None:
        value = self._load().get(CREDENTIAL_NAME)
        return value or None

    def set(self, value: str) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        data = self._load()
        data[CREDENTIAL_NAME] = value
        # Owner-only from creation, the file holds a secret
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f)
        # O_CREAT's mode only applies to new files
        os.chmod(self.path, 0o600)


def resolve_api_key(
    provider: str, store: CredentialStore | None = None, explicit: str | None = None
) -> str | None:
    """Find an API key: explicit value, then environment, then the store."""
    if explicit:
        return explicit

    env_value = os.getenv(get_provider(provider)["env_key"])
    if env_value:
        return env_value

    if store is not None:
        return store.get()
    return None
