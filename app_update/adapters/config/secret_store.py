"""Keychain storage for credentials carried in custom request headers.

Header names are case-insensitive, so each credential is filed under
``header:<lowercased name>`` in the OS keychain.
"""

from __future__ import annotations

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError

logger = logging.getLogger("app_update.secrets")

DEFAULT_SERVICE_NAME = "app-update"
SECRET_HEADERS = frozenset({"authorization", "proxy-authorization", "x-api-key"})


def is_secret_header(name: str) -> bool:
    return name.lower() in SECRET_HEADERS


def credential_key(name: str) -> str:
    return f"header:{name.lower()}"


class HeaderCredentialStore:

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME):
        self.service_name = service_name

    def get_header(self, name: str) -> Optional[str]:
        try:
            return keyring.get_password(self.service_name, credential_key(name)) or None
        except KeyringError as e:
            logger.warning("Keychain lookup for %s header failed: %s", name, e)
            return None

    def set_header(self, name: str, value: str) -> bool:
        """Store ``value`` for header ``name``; an empty value forgets it.

        Returns False when the keychain backend refused the change.
        """
        key = credential_key(name)
        try:
            if value:
                keyring.set_password(self.service_name, key, value)
            elif keyring.get_password(self.service_name, key) is not None:
                keyring.delete_password(self.service_name, key)
        except KeyringError as e:
            logger.warning("Keychain update for %s header failed: %s", name, e)
            return False
        return True
