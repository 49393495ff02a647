"""Use case: periodic update checks outside the foreground flow.

The background run only talks to the foreground through the key-value
store: it reads the persisted configuration and leaves a flag plus the
descriptor behind for the next launch to pick up.
"""

import logging
import threading
from typing import Optional

from app_update.adapters.config.json_config_adapter import JsonConfigAdapter
from app_update.adapters.http_client import JsonHttpClient
from app_update.domain.errors import NetworkPolicyError
from app_update.domain.model import PackageInfo
from app_update.domain.ports import NativeStorePort, NetworkPort
from app_update.services.cache_service import CacheService
from app_update.usecases.resolve_update import UpdateResolver, select_version_sources

logger = logging.getLogger("app_update.background")

MIN_INTERVAL_SECONDS = 60


class BackgroundUpdateWorker:

    def __init__(
        self,
        config_store: JsonConfigAdapter,
        cache: CacheService,
        package: PackageInfo,
        network: Optional[NetworkPort] = None,
        native_store: Optional[NativeStorePort] = None,
        http: Optional[JsonHttpClient] = None,
    ):
        self.config_store = config_store
        self.cache = cache
        self.package = package
        self.network = network
        self.native_store = native_store
        self.http = http
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def run_once(self) -> bool:
        """One background task run. Returns False only on an unexpected failure."""
        config = self.config_store.load()
        if config is None:
            logger.info("No persisted update config, skipping background check")
            return True

        if not self.cache.should_check_for_update(config.background_check_interval_hours):
            logger.debug("Background check interval not elapsed")
            return True

        sources = select_version_sources(config, self.package, self.native_store, self.http)
        resolver = UpdateResolver(config, self.package, self.cache, sources, self.network)
        try:
            descriptor = resolver.resolve()
        except NetworkPolicyError as e:
            logger.info("Background check skipped: %s", e)
            return True
        except Exception:
            logger.exception("Background update check failed")
            return False

        if descriptor is not None and descriptor.update_available:
            logger.info("Background check found update %s", descriptor.latest_version)
            self.cache.mark_background_update(descriptor)
        return True

    def start(self, interval_hours: int) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop,
            args=(max(interval_hours * 3600, MIN_INTERVAL_SECONDS),),
            name="app-update-background",
            daemon=True,
        )
        self._thread.start()

    def cancel(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _loop(self, interval_seconds: float) -> None:
        while not self._stop.is_set():
            self.run_once()
            self._stop.wait(interval_seconds)
