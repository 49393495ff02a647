"""Analytics events for the update flow, forwarded to the host's callback."""

import logging
from typing import Optional

from app_update.domain.model import UpdateConfig, UpdateDescriptor, UpdateEvent
from app_update.domain.ports import ClockPort

logger = logging.getLogger("app_update.analytics")


class AnalyticsService:

    def __init__(self, config: UpdateConfig, clock: ClockPort):
        self.config = config
        self.clock = clock

    def track_event(self, event: UpdateEvent, data: Optional[dict] = None) -> None:
        if not self.config.enable_analytics or self.config.analytics_callback is None:
            return

        payload = {"event": event.value, "timestamp": self.clock.now().isoformat()}
        if data:
            payload.update(data)

        try:
            self.config.analytics_callback(event, payload)
        except Exception:
            logger.exception("Analytics callback failed for %s", event.value)

    def track_check_started(self) -> None:
        self.track_event(UpdateEvent.CHECK_STARTED)

    def track_check_completed(self, update_available: bool) -> None:
        event = UpdateEvent.UPDATE_AVAILABLE if update_available else UpdateEvent.UPDATE_NOT_AVAILABLE
        self.track_event(event, {"update_available": update_available})

    def track_check_failed(self, error: str) -> None:
        self.track_event(UpdateEvent.CHECK_FAILED, {"error": error})

    def track_dialog_shown(self, descriptor: UpdateDescriptor) -> None:
        self.track_event(
            UpdateEvent.UPDATE_DIALOG_SHOWN,
            {
                "current_version": str(descriptor.current_version),
                "latest_version": str(descriptor.latest_version),
                "update_type": descriptor.update_kind.value,
                "is_forced": descriptor.forced,
            },
        )

    def track_update_accepted(self, descriptor: UpdateDescriptor) -> None:
        self.track_event(
            UpdateEvent.UPDATE_ACCEPTED,
            {
                "current_version": str(descriptor.current_version),
                "latest_version": str(descriptor.latest_version),
                "update_type": descriptor.update_kind.value,
            },
        )

    def track_update_dismissed(self, descriptor: UpdateDescriptor, dismiss_count: int) -> None:
        self.track_event(
            UpdateEvent.UPDATE_DISMISSED,
            {
                "current_version": str(descriptor.current_version),
                "latest_version": str(descriptor.latest_version),
                "dismiss_count": dismiss_count,
            },
        )

    def track_install_started(self) -> None:
        self.track_event(UpdateEvent.UPDATE_INSTALL_STARTED)

    def track_install_completed(self) -> None:
        self.track_event(UpdateEvent.UPDATE_INSTALL_COMPLETED)

    def track_install_failed(self, error: str) -> None:
        self.track_event(UpdateEvent.UPDATE_INSTALL_FAILED, {"error": error})
