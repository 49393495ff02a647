"""Update cache, dismissal state and background results over a key-value store.

Every operation is best-effort: a failing store is logged and treated as
empty, it never interrupts an update check.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from app_update.domain.cache_policy import is_entry_valid, is_version_dismissed, should_check
from app_update.domain.model import CacheEntry, DismissalState, UpdateDescriptor, descriptor_from_dict
from app_update.domain.ports import ClockPort, KeyValueStorePort

logger = logging.getLogger("app_update.cache")

UPDATE_INFO_KEY = "update_info"
LAST_CHECK_KEY = "last_check"
DISMISSED_KEY = "dismissed"
DISMISSED_VERSION_KEY = "dismissed_version"
DISMISS_COUNT_KEY = "dismiss_count"
BACKGROUND_AVAILABLE_KEY = "background_update_available"
BACKGROUND_INFO_KEY = "background_update_info"


def _to_epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _from_epoch_ms(value) -> datetime:
    return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)


def _aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.astimezone(timezone.utc)
    return moment


class CacheService:

    def __init__(self, store: KeyValueStorePort, clock: ClockPort):
        self.store = store
        self.clock = clock

    # ── Update info ─────────────────────────────────────────────────

    def cache_update_info(self, descriptor: UpdateDescriptor) -> None:
        try:
            self.store.set(UPDATE_INFO_KEY, json.dumps(descriptor.to_dict()))
            self.store.set(LAST_CHECK_KEY, _to_epoch_ms(self.clock.now()))
        except Exception:
            logger.exception("Failed to cache update info")

    def cached_entry(self) -> Optional[CacheEntry]:
        try:
            raw = self.store.get(UPDATE_INFO_KEY)
            last_check = self.store.get(LAST_CHECK_KEY)
            if raw is None or last_check is None:
                return None
            descriptor = descriptor_from_dict(json.loads(raw))
            return CacheEntry(descriptor=descriptor, fetched_at=_from_epoch_ms(last_check))
        except Exception:
            logger.exception("Failed to read cached update info")
            return None

    def cached_update_info(self, ttl: timedelta) -> Optional[UpdateDescriptor]:
        entry = self.cached_entry()
        if entry is None:
            return None
        if not is_entry_valid(entry, _aware(self.clock.now()), ttl):
            logger.debug("Cached update info expired (fetched_at=%s)", entry.fetched_at)
            return None
        return entry.descriptor

    def clear_cache(self) -> None:
        for key in (UPDATE_INFO_KEY, LAST_CHECK_KEY):
            self._remove(key)

    def last_check_time(self) -> Optional[datetime]:
        try:
            value = self.store.get(LAST_CHECK_KEY)
            return _from_epoch_ms(value) if value is not None else None
        except Exception:
            logger.exception("Failed to read last check time")
            return None

    def should_check_for_update(self, interval_hours: int) -> bool:
        return should_check(self.last_check_time(), _aware(self.clock.now()), interval_hours)

    # ── Dismissals ──────────────────────────────────────────────────

    def mark_update_dismissed(self, version: str) -> None:
        try:
            count = int(self.store.get(DISMISS_COUNT_KEY, 0) or 0)
            self.store.set(DISMISSED_KEY, True)
            self.store.set(DISMISSED_VERSION_KEY, version)
            self.store.set(DISMISS_COUNT_KEY, count + 1)
        except Exception:
            logger.exception("Failed to record dismissal of %s", version)

    def dismissal_state(self) -> DismissalState:
        try:
            return DismissalState(
                dismissed=bool(self.store.get(DISMISSED_KEY, False)),
                dismissed_version=self.store.get(DISMISSED_VERSION_KEY),
                dismiss_count=int(self.store.get(DISMISS_COUNT_KEY, 0) or 0),
            )
        except Exception:
            logger.exception("Failed to read dismissal state")
            return DismissalState()

    def has_user_dismissed_version(self, version: str) -> bool:
        return is_version_dismissed(self.dismissal_state(), version)

    def dismiss_count(self) -> int:
        return self.dismissal_state().dismiss_count

    def clear_dismiss_status(self) -> None:
        for key in (DISMISSED_KEY, DISMISSED_VERSION_KEY):
            self._remove(key)

    def reset_dismiss_data(self) -> None:
        for key in (DISMISSED_KEY, DISMISSED_VERSION_KEY, DISMISS_COUNT_KEY):
            self._remove(key)

    # ── Background results ──────────────────────────────────────────

    def mark_background_update(self, descriptor: UpdateDescriptor) -> None:
        try:
            self.store.set(BACKGROUND_AVAILABLE_KEY, True)
            self.store.set(BACKGROUND_INFO_KEY, json.dumps(descriptor.to_dict()))
        except Exception:
            logger.exception("Failed to store background update result")

    def has_background_update(self) -> bool:
        try:
            return bool(self.store.get(BACKGROUND_AVAILABLE_KEY, False))
        except Exception:
            logger.exception("Failed to read background update flag")
            return False

    def background_update_info(self) -> Optional[UpdateDescriptor]:
        try:
            raw = self.store.get(BACKGROUND_INFO_KEY)
            return descriptor_from_dict(json.loads(raw)) if raw else None
        except Exception:
            logger.exception("Failed to read background update info")
            return None

    def clear_background_update(self) -> None:
        for key in (BACKGROUND_AVAILABLE_KEY, BACKGROUND_INFO_KEY):
            self._remove(key)

    def _remove(self, key: str) -> None:
        try:
            self.store.remove(key)
        except Exception:
            logger.exception("Failed to remove %s from store", key)
