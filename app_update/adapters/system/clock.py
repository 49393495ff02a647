"""Wall clock adapter."""

from datetime import datetime, timezone

from app_update.domain.ports import ClockPort


class SystemClock(ClockPort):

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
