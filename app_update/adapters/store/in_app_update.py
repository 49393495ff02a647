"""Install executor driving the platform's in-app update flow."""

import logging

from app_update.domain.model import InAppUpdateResult, UpdateConfig, UpdateDescriptor, UpdateStrategy
from app_update.domain.ports import InstallExecutorPort, NativeStorePort
from app_update.services.analytics import AnalyticsService

logger = logging.getLogger("app_update.store.in_app")


class InAppUpdateExecutor(InstallExecutorPort):

    def __init__(
        self,
        config: UpdateConfig,
        sdk: NativeStorePort,
        fallback: InstallExecutorPort,
        analytics: AnalyticsService,
    ):
        self.config = config
        self.sdk = sdk
        self.fallback = fallback
        self.analytics = analytics

    def install(self, descriptor: UpdateDescriptor) -> bool:
        try:
            status = self.sdk.check_for_update()
            if not status.update_available:
                logger.info("In-app update not available, opening store page")
                return self.fallback.install(descriptor)

            self.analytics.track_install_started()
            if self.config.strategy == UpdateStrategy.IMMEDIATE or descriptor.forced:
                result = self.sdk.perform_immediate_update()
            else:
                result = self.sdk.start_flexible_update()
                if result == InAppUpdateResult.SUCCESS:
                    self.sdk.complete_flexible_update()
        except Exception as e:
            logger.exception("In-app update failed")
            self.analytics.track_install_failed(str(e))
            return self.fallback.install(descriptor)

        if result == InAppUpdateResult.SUCCESS:
            self.analytics.track_install_completed()
            return True

        self.analytics.track_install_failed(result.value)
        return False
