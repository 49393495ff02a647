"""Use case: check for an update and, if it should be shown, present it.

One check-and-present cycle::

    Checking -> NoUpdate                      (nothing found / not newer)
    Checking -> UpdateFound -> Suppressed     (same version dismissed before)
    Checking -> UpdateFound -> Presented -> Accepted -> UpdateInitiated
                                         -> Deferred | Dismissed

Forced updates (``is_forced`` or below the minimum supported version) are
never suppressed and their dismissals are never recorded.
"""

import logging

from app_update.domain.model import UpdateDescriptor, UpdateFlowResult, UpdateFlowState, UserChoice
from app_update.domain.ports import UpdatePresenterPort
from app_update.services.analytics import AnalyticsService
from app_update.services.cache_service import CacheService
from app_update.usecases.check_update import CheckUpdateUseCase
from app_update.usecases.perform_update import PerformUpdateUseCase

logger = logging.getLogger("app_update.decision")


class CheckAndPresentUseCase:

    def __init__(
        self,
        check: CheckUpdateUseCase,
        cache: CacheService,
        analytics: AnalyticsService,
        perform: PerformUpdateUseCase,
    ):
        self.check = check
        self.cache = cache
        self.analytics = analytics
        self.perform = perform

    def execute(self, presenter: UpdatePresenterPort) -> UpdateFlowResult:
        descriptor = self.check.execute()
        if descriptor is None or not descriptor.update_available:
            return UpdateFlowResult(UpdateFlowState.NO_UPDATE, descriptor)

        if self.is_suppressed(descriptor):
            logger.info("Update %s was dismissed before, not presenting", descriptor.latest_version)
            return UpdateFlowResult(UpdateFlowState.SUPPRESSED, descriptor)

        return self.present(descriptor, presenter)

    def is_suppressed(self, descriptor: UpdateDescriptor) -> bool:
        if descriptor.forced:
            return False
        return self.cache.has_user_dismissed_version(str(descriptor.latest_version))

    def present(self, descriptor: UpdateDescriptor, presenter: UpdatePresenterPort) -> UpdateFlowResult:
        forced = descriptor.forced
        self.analytics.track_dialog_shown(descriptor)
        choice = presenter.present(descriptor, forced)
        logger.info("User chose %s for update %s", choice.value, descriptor.latest_version)

        if choice == UserChoice.ACCEPTED:
            self.analytics.track_update_accepted(descriptor)
            # The install outcome only goes to analytics and logs.
            self.perform.execute(descriptor)
            return UpdateFlowResult(UpdateFlowState.UPDATE_INITIATED, descriptor, choice)

        if not forced:
            self.cache.mark_update_dismissed(str(descriptor.latest_version))
        self.analytics.track_update_dismissed(descriptor, dismiss_count=self.cache.dismiss_count())

        state = UpdateFlowState.DEFERRED if choice == UserChoice.DEFERRED else UpdateFlowState.DISMISSED
        return UpdateFlowResult(state, descriptor, choice)
