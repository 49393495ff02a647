"""Version source backed by the App Store public lookup API."""

import logging
from typing import Optional
from urllib.error import URLError

from app_update.adapters.backend.custom_backend import build_headers
from app_update.adapters.http_client import JsonHttpClient
from app_update.adapters.store import DEFAULT_LOOKUP_COUNTRY, PUBLIC_LOOKUP_URL
from app_update.domain.errors import ParseError
from app_update.domain.model import PackageInfo, UpdateConfig, UpdateDescriptor, optional_int, parse_timestamp
from app_update.domain.ports import VersionSourcePort
from app_update.domain.version import SemanticVersion

logger = logging.getLogger("app_update.store.lookup")


class PublicLookupSource(VersionSourcePort):

    def __init__(self, config: UpdateConfig, http: JsonHttpClient | None = None, url: str = PUBLIC_LOOKUP_URL):
        self.config = config
        self.http = http or JsonHttpClient()
        self.url = url

    def fetch(self, current: SemanticVersion, package: PackageInfo) -> Optional[UpdateDescriptor]:
        params = {
            "id": self.config.app_store_id,
            "country": self.config.region_code or DEFAULT_LOOKUP_COUNTRY,
        }
        try:
            data = self.http.get_json(
                self.url,
                params=params,
                headers=build_headers(self.config),
                timeout=self.config.request_timeout_seconds,
            )
        except (URLError, OSError, ValueError) as e:
            logger.warning("Store lookup failed: %s", e)
            return None

        results = data.get("results") if isinstance(data, dict) else None
        if not results or not isinstance(results[0], dict):
            logger.info("Store lookup returned no results for %s", self.config.app_store_id)
            return None

        app = results[0]
        try:
            latest = SemanticVersion.parse(str(app["version"]))
        except (KeyError, ParseError) as e:
            logger.warning("Store lookup result has no usable version: %s", e)
            return None

        return UpdateDescriptor(
            latest_version=latest,
            current_version=current,
            release_notes=app.get("releaseNotes"),
            file_size_bytes=optional_int(app.get("fileSizeBytes")),
            release_date=parse_timestamp(app.get("currentVersionReleaseDate")),
            metadata=app,
        )
