"""Version source backed by the host's own update endpoint."""

import logging
from typing import Optional
from urllib.error import URLError

from app_update.adapters.http_client import JsonHttpClient
from app_update.domain.errors import ParseError
from app_update.domain.model import PackageInfo, UpdateConfig, UpdateDescriptor
from app_update.domain.ports import VersionSourcePort
from app_update.domain.version import SemanticVersion

logger = logging.getLogger("app_update.backend")


def build_query(config: UpdateConfig, current: SemanticVersion, package: PackageInfo) -> dict:
    params = {
        "platform": package.platform,
        "current_version": str(current),
        "build_number": package.build_number,
        "package_name": package.package_name,
    }
    if config.region_code:
        params["region"] = config.region_code
    if config.test_group:
        params["test_group"] = config.test_group
    return params


def build_headers(config: UpdateConfig) -> dict:
    headers = {}
    if config.custom_user_agent:
        headers["User-Agent"] = config.custom_user_agent
    if config.custom_headers:
        headers.update(config.custom_headers)
    return headers


class CustomBackendSource(VersionSourcePort):

    def __init__(self, config: UpdateConfig, http: JsonHttpClient | None = None):
        self.config = config
        self.http = http or JsonHttpClient()

    def fetch(self, current: SemanticVersion, package: PackageInfo) -> Optional[UpdateDescriptor]:
        """Returns None on transport errors, non-200 answers and malformed bodies."""
        try:
            data = self.http.get_json(
                self.config.custom_update_url,
                params=build_query(self.config, current, package),
                headers=build_headers(self.config),
                timeout=self.config.request_timeout_seconds,
            )
        except (URLError, OSError, ValueError) as e:
            logger.warning("Custom update check failed: %s", e)
            return None

        if not isinstance(data, dict) or not data.get("latest_version"):
            logger.warning("Custom update endpoint returned an unusable body")
            return None

        payload = dict(data)
        if not payload.get("current_version"):
            payload["current_version"] = str(current)

        try:
            return UpdateDescriptor.from_dict(payload)
        except (KeyError, TypeError, ParseError) as e:
            logger.warning("Malformed custom update response: %s", e)
            return None
