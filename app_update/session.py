"""UpdateSession: the host application's handle on the update workflow.

The host constructs one session per configuration and owns its lifetime;
there is no process-wide instance.
"""

import logging
from typing import Optional

from app_update.adapters.config.json_config_adapter import CredentialStoreProtocol, JsonConfigAdapter
from app_update.adapters.http_client import JsonHttpClient
from app_update.adapters.system.clock import SystemClock
from app_update.adapters.system.url_launcher import WebBrowserLauncher
from app_update.domain.errors import ConfigurationError
from app_update.domain.model import PackageInfo, UpdateConfig, UpdateDescriptor, UpdateFlowResult
from app_update.domain.ports import (
    ClockPort,
    KeyValueStorePort,
    NativeStorePort,
    NetworkPort,
    UpdatePresenterPort,
    UrlLauncherPort,
)
from app_update.services.analytics import AnalyticsService
from app_update.services.cache_service import CacheService
from app_update.usecases.background_check import BackgroundUpdateWorker
from app_update.usecases.check_update import CheckUpdateUseCase
from app_update.usecases.perform_update import PerformUpdateUseCase, select_install_executor
from app_update.usecases.present_update import CheckAndPresentUseCase
from app_update.usecases.resolve_update import UpdateResolver, select_version_sources

logger = logging.getLogger("app_update.session")


class UpdateSession:

    def __init__(
        self,
        config: UpdateConfig,
        package: PackageInfo,
        store: KeyValueStorePort,
        clock: Optional[ClockPort] = None,
        network: Optional[NetworkPort] = None,
        native_store: Optional[NativeStorePort] = None,
        launcher: Optional[UrlLauncherPort] = None,
        presenter: Optional[UpdatePresenterPort] = None,
        http: Optional[JsonHttpClient] = None,
        credentials: Optional[CredentialStoreProtocol] = None,
    ):
        self.package = package
        self.store = store
        self.clock = clock or SystemClock()
        self.network = network
        self.native_store = native_store
        self.launcher = launcher or WebBrowserLauncher()
        self.presenter = presenter
        self.http = http or JsonHttpClient()
        self.cache = CacheService(store, self.clock)
        self.config_store = JsonConfigAdapter(store, credentials)
        self.worker = BackgroundUpdateWorker(
            self.config_store,
            self.cache,
            package,
            network=network,
            native_store=native_store,
            http=self.http,
        )
        self.update_config(config)

    def update_config(self, config: UpdateConfig) -> None:
        """Validate and switch to ``config``. Raises ConfigurationError."""
        if not config.is_valid():
            raise ConfigurationError(
                "Invalid configuration: at least one of play_store_id, app_store_id "
                "or custom_update_url must be provided"
            )
        self.config = config
        self.analytics = AnalyticsService(config, self.clock)
        if config.enable_background_check:
            self.config_store.save(config)
        logger.info("Update session configured (platform=%s)", self.package.platform)

    @property
    def current_version(self) -> str:
        return str(self.package.semantic_version)

    def _resolver(self) -> UpdateResolver:
        sources = select_version_sources(self.config, self.package, self.native_store, self.http)
        return UpdateResolver(self.config, self.package, self.cache, sources, self.network)

    def _perform(self) -> PerformUpdateUseCase:
        executor = select_install_executor(
            self.config, self.package, self.launcher, self.analytics, self.native_store
        )
        return PerformUpdateUseCase(executor)

    def check_for_update(self) -> Optional[UpdateDescriptor]:
        return CheckUpdateUseCase(self._resolver(), self.analytics).execute()

    def check_and_present(self, presenter: Optional[UpdatePresenterPort] = None) -> UpdateFlowResult:
        presenter = presenter or self.presenter
        if presenter is None:
            raise ValueError("A presenter is required to show updates")
        use_case = CheckAndPresentUseCase(
            CheckUpdateUseCase(self._resolver(), self.analytics),
            self.cache,
            self.analytics,
            self._perform(),
        )
        return use_case.execute(presenter)

    def perform_update(self, descriptor: UpdateDescriptor) -> bool:
        return self._perform().execute(descriptor)

    def clear_cache(self) -> None:
        self.cache.clear_cache()
        self.cache.reset_dismiss_data()

    # ── Background checks ───────────────────────────────────────────

    def start_background_checks(self) -> None:
        if not self.config.enable_background_check:
            return
        self.worker.start(self.config.background_check_interval_hours)

    def cancel_background_checks(self) -> None:
        self.worker.cancel()
        self.config_store.clear()

    def has_background_update(self) -> bool:
        return self.cache.has_background_update()

    def background_update(self) -> Optional[UpdateDescriptor]:
        return self.cache.background_update_info()

    def clear_background_update(self) -> None:
        self.cache.clear_background_update()
