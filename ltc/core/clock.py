"""Wall-clock time source"""

import time
from datetime import datetime, timedelta, timezone


class SystemClock:
    """Clock backed by the real system time, in UTC so DST shifts never move a deadline."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def sleep(self, duration: timedelta) -> None:
        time.sleep(duration.total_seconds())
