"""Use case: start installing an accepted update."""

import logging
from typing import Optional

from app_update.adapters.store.in_app_update import InAppUpdateExecutor
from app_update.adapters.store.store_page import StorePageExecutor
from app_update.domain.model import PackageInfo, UpdateConfig, UpdateDescriptor
from app_update.domain.ports import InstallExecutorPort, NativeStorePort, UrlLauncherPort
from app_update.services.analytics import AnalyticsService

logger = logging.getLogger("app_update.install")


def select_install_executor(
    config: UpdateConfig,
    package: PackageInfo,
    launcher: UrlLauncherPort,
    analytics: AnalyticsService,
    native_store: Optional[NativeStorePort] = None,
) -> InstallExecutorPort:
    store_page = StorePageExecutor(config, package, launcher)
    if package.platform == "android" and config.play_store_id and native_store is not None:
        return InAppUpdateExecutor(config, native_store, fallback=store_page, analytics=analytics)
    return store_page


class PerformUpdateUseCase:

    def __init__(self, executor: InstallExecutorPort):
        self.executor = executor

    def execute(self, descriptor: UpdateDescriptor) -> bool:
        logger.info("Starting update to %s via %s", descriptor.latest_version, type(self.executor).__name__)
        try:
            return self.executor.install(descriptor)
        except Exception:
            logger.exception("Update execution failed")
            return False
