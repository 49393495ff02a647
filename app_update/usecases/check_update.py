"""Use case: check whether a newer release exists."""

import logging
from typing import Optional

from app_update.domain.errors import NetworkPolicyError
from app_update.domain.model import UpdateDescriptor
from app_update.services.analytics import AnalyticsService
from app_update.usecases.resolve_update import UpdateResolver

logger = logging.getLogger("app_update.check")


class CheckUpdateUseCase:

    def __init__(self, resolver: UpdateResolver, analytics: AnalyticsService):
        self.resolver = resolver
        self.analytics = analytics

    def execute(self) -> Optional[UpdateDescriptor]:
        """Returns None when no source could answer. Raises NetworkPolicyError."""
        self.analytics.track_check_started()
        try:
            descriptor = self.resolver.resolve()
        except NetworkPolicyError as e:
            logger.info("Update check skipped: %s", e)
            self.analytics.track_check_failed(str(e))
            raise

        if descriptor is not None:
            self.analytics.track_check_completed(update_available=descriptor.update_available)
        return descriptor
