"""Cache validity, dismissal scoping and the background check gate."""

from datetime import datetime, timedelta
from typing import Optional

from app_update.domain.model import CacheEntry, DismissalState


def is_entry_valid(entry: CacheEntry, now: datetime, ttl: timedelta) -> bool:
    return now - entry.fetched_at <= ttl


def is_version_dismissed(state: DismissalState, version: str) -> bool:
    # Exact string match: dismissing 1.2.0 never hides 1.2.1.
    return state.dismissed and state.dismissed_version == version


def should_check(last_check: Optional[datetime], now: datetime, interval_hours: int) -> bool:
    if last_check is None:
        return True
    return now - last_check >= timedelta(hours=interval_hours)
