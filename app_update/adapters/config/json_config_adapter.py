"""Persists the active UpdateConfig so background checks can reuse it."""

import logging
from typing import Optional, Protocol

from app_update.adapters.config.secret_store import HeaderCredentialStore, is_secret_header
from app_update.domain.model import UpdateConfig
from app_update.domain.ports import KeyValueStorePort

logger = logging.getLogger("app_update.config")

CONFIG_KEY = "config"


class CredentialStoreProtocol(Protocol):
    def get_header(self, name: str) -> Optional[str]:
        ...

    def set_header(self, name: str, value: str) -> bool:
        ...


class JsonConfigAdapter:

    def __init__(self, store: KeyValueStorePort, credentials: CredentialStoreProtocol | None = None):
        self.store = store
        self.credentials = credentials or HeaderCredentialStore()

    def save(self, config: UpdateConfig) -> None:
        data = config.to_dict()
        headers = dict(data.get("custom_headers") or {})
        for name, value in headers.items():
            if not is_secret_header(name):
                continue
            stored = self.credentials.set_header(name, value)
            # Keep plaintext only if the keychain backend is unavailable.
            headers[name] = "" if stored else value
        if headers:
            data["custom_headers"] = headers

        try:
            self.store.set(CONFIG_KEY, data)
        except Exception:
            logger.exception("Failed to persist update config")

    def load(self) -> Optional[UpdateConfig]:
        try:
            data = self.store.get(CONFIG_KEY)
        except Exception:
            logger.exception("Failed to read persisted update config")
            return None
        if not isinstance(data, dict):
            return None

        data = dict(data)
        raw_headers = data.get("custom_headers")
        headers = {}
        for name, value in (raw_headers if isinstance(raw_headers, dict) else {}).items():
            if is_secret_header(name):
                value = self.credentials.get_header(name) or value
            if not value:
                logger.warning("Dropping %s header: no stored credential", name)
                continue
            headers[name] = value
        data["custom_headers"] = headers or None
        try:
            return UpdateConfig.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring malformed persisted update config: %s", e)
            return None

    def clear(self) -> None:
        try:
            self.store.remove(CONFIG_KEY)
        except Exception:
            logger.exception("Failed to clear persisted update config")
