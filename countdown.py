import datetime
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

ONE_DAY = datetime.timedelta(days=1)


@dataclass
class Countdown:
    text: str
    remaining: datetime.timedelta
    reset: bool = False
    result: Optional[object] = None


def start_of_day(now: datetime.datetime) -> datetime.datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def next_midnight(now: datetime.datetime) -> datetime.datetime:
    """The midnight that ends now's calendar day, even when now is exactly 00:00."""
    return datetime.datetime.combine(now.date() + ONE_DAY, datetime.time(0), tzinfo=now.tzinfo)


def remaining(now: datetime.datetime) -> datetime.timedelta:
    """Time left until the next midnight, floored to whole seconds."""
    diff = next_midnight(now) - now
    seconds = max(int(diff.total_seconds() // 1), 0)
    return datetime.timedelta(seconds=seconds)


def format_remaining(delta: datetime.timedelta) -> str:
    total = max(int(delta.total_seconds()), 0)
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


class CountdownScheduler:
    """
    Drives the midnight reset from periodic ticks.

    The scheduler remembers the boundary it is waiting for. A tick at or past that
    instant resets the store once and moves on to the midnight after the tick, so a
    late tick that skipped several midnights still resets only once.
    """

    def __init__(self, store):
        self.store = store
        self.pending_boundary = None
        self.last_reset = None

    def tick(self, now: datetime.datetime) -> Countdown:
        if self.pending_boundary is None:
            # First tick: a tick landing exactly on midnight counts as that crossing.
            self.pending_boundary = now if now == start_of_day(now) else next_midnight(now)

        reset = False
        result = None
        if now >= self.pending_boundary:
            logger.info("Midnight boundary %s crossed, resetting streaks", self.pending_boundary)
            result = self.store.reset_all()
            self.last_reset = self.pending_boundary
            self.pending_boundary = next_midnight(now)
            reset = True

        left = remaining(now)
        return Countdown(text=format_remaining(left), remaining=left, reset=reset, result=result)
