"""Use case: obtain a remote UpdateDescriptor for the installed app."""

import logging
from datetime import timedelta
from typing import Optional

from app_update.adapters.backend.custom_backend import CustomBackendSource
from app_update.adapters.http_client import JsonHttpClient
from app_update.adapters.store.native_store import NativeStoreSource
from app_update.adapters.store.public_lookup import PublicLookupSource
from app_update.domain.errors import NetworkPolicyError
from app_update.domain.model import ConnectionType, PackageInfo, UpdateConfig, UpdateDescriptor
from app_update.domain.ports import NativeStorePort, NetworkPort, VersionSourcePort
from app_update.services.cache_service import CacheService

logger = logging.getLogger("app_update.resolver")


def select_version_sources(
    config: UpdateConfig,
    package: PackageInfo,
    native_store: Optional[NativeStorePort] = None,
    http: Optional[JsonHttpClient] = None,
) -> list[VersionSourcePort]:
    """Custom backend first, then the platform's store path."""
    sources: list[VersionSourcePort] = []
    if config.custom_update_url:
        sources.append(CustomBackendSource(config, http))
    if package.platform == "android" and config.play_store_id and native_store is not None:
        sources.append(NativeStoreSource(native_store))
    elif package.platform == "ios" and config.app_store_id:
        sources.append(PublicLookupSource(config, http))
    return sources


class UpdateResolver:

    def __init__(
        self,
        config: UpdateConfig,
        package: PackageInfo,
        cache: CacheService,
        sources: list[VersionSourcePort],
        network: Optional[NetworkPort] = None,
    ):
        self.config = config
        self.package = package
        self.cache = cache
        self.sources = sources
        self.network = network

    def resolve(self) -> Optional[UpdateDescriptor]:
        """Return the newest known descriptor, or None when nothing could be found.

        Only the WiFi-only policy raises; every source failure degrades to None.
        """
        self._enforce_network_policy()

        if self.config.enable_caching:
            cached = self.cache.cached_update_info(timedelta(hours=self.config.cache_duration_hours))
            if cached is not None:
                logger.info("Using cached update info (latest=%s)", cached.latest_version)
                return cached

        current = self.package.semantic_version
        descriptor = None
        for source in self.sources:
            try:
                descriptor = source.fetch(current, self.package)
            except Exception:
                logger.exception("Version source %s failed", type(source).__name__)
                descriptor = None
            if descriptor is not None:
                logger.info(
                    "%s reported latest=%s current=%s",
                    type(source).__name__,
                    descriptor.latest_version,
                    descriptor.current_version,
                )
                break

        if descriptor is not None and self.config.enable_caching:
            self.cache.cache_update_info(descriptor)
        return descriptor

    def _enforce_network_policy(self) -> None:
        if not self.config.wifi_only:
            return
        connection = self.network.connection_type() if self.network else ConnectionType.UNKNOWN
        if connection != ConnectionType.WIFI:
            raise NetworkPolicyError(f"WiFi required for update check (connection={connection.value})")
