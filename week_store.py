import copy
import logging
from dataclasses import dataclass
from typing import Optional

from errors import InvalidDay, InvalidHabit, PersistenceReadFailure, PersistenceWriteFailure
from habits import DAYS, HABITS, empty_day, is_valid_day, is_valid_habit
from storage import JsonCodec

logger = logging.getLogger(__name__)


@dataclass
class MutationResult:
    """
    Outcome of a store operation.
    ok is False when the call was rejected (bad day or habit) and nothing changed.
    persisted is False when the change was applied in memory but could not be saved.
    """
    ok: bool
    persisted: bool = True
    warning: Optional[str] = None
    error: Optional[Exception] = None

    def __bool__(self):
        return self.ok


def _clean_count(value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not value.is_integer():
        return 0
    return int(value) if value >= 0 else 0


def normalize_week(raw) -> dict:
    """
    Build a complete WeekRecord from whatever was stored.
    Every day 1..7 gets every habit; unknown days/habits are dropped and bad counts become 0.
    """
    if isinstance(raw, list):
        # Firebase returns objects keyed "1".."7" as a list with index 0 unused.
        raw = {str(i): value for i, value in enumerate(raw)}
    if not isinstance(raw, dict):
        raw = {}
    week = {}
    for day in DAYS:
        stored_day = raw.get(str(day))
        if stored_day is None:
            stored_day = raw.get(day)
        if not isinstance(stored_day, dict):
            week[day] = empty_day()
            continue
        week[day] = {habit: _clean_count(stored_day.get(habit, 0)) for habit in HABITS}
    return week


def serialize_week(week: dict) -> dict:
    return {str(day): {habit: week[day][habit] for habit in HABITS} for day in DAYS}


class WeekStore:
    """Seven days of per-habit streak counts, saved to a slot after every change."""

    def __init__(self, slot, codec=None):
        self.slot = slot
        self.codec = codec or JsonCodec()
        self.week = normalize_week({})
        self.current_day = 1

    # -------------------------------
    # LOAD / SAVE
    # -------------------------------
    def load(self) -> dict:
        raw = {}
        try:
            text = self.slot.read()
            if text:
                raw = self.codec.decode(text)
        except PersistenceReadFailure as e:
            logger.warning("Discarding unreadable habit data: %s", e)
            raw = {}
        self.week = normalize_week(raw)
        return self.snapshot()

    def save(self) -> MutationResult:
        try:
            self.slot.write(self.codec.encode(serialize_week(self.week)))
        except PersistenceWriteFailure as e:
            logger.warning("Habit data kept in memory only: %s", e)
            return MutationResult(ok=True, persisted=False, warning=f"Progress could not be saved: {e}", error=e)
        return MutationResult(ok=True)

    # -------------------------------
    # MUTATIONS
    # -------------------------------
    def increment_habit(self, day, habit_id) -> MutationResult:
        if not is_valid_day(day):
            return MutationResult(ok=False, persisted=False, error=InvalidDay(day))
        if not is_valid_habit(habit_id):
            return MutationResult(ok=False, persisted=False, error=InvalidHabit(habit_id))
        self.week[day][habit_id] += 1
        return self.save()

    def reset_all(self) -> MutationResult:
        for day in DAYS:
            for habit in HABITS:
                self.week[day][habit] = 0
        logger.info("All streaks reset to 0")
        return self.save()

    def set_current_day(self, day) -> MutationResult:
        if not is_valid_day(day):
            return MutationResult(ok=False, persisted=False, error=InvalidDay(day))
        self.current_day = day
        return MutationResult(ok=True)

    # -------------------------------
    # QUERIES
    # -------------------------------
    def get_day_record(self, day) -> dict:
        if not is_valid_day(day):
            raise InvalidDay(day)
        return dict(self.week[day])

    def current_record(self) -> dict:
        return self.get_day_record(self.current_day)

    def snapshot(self) -> dict:
        return copy.deepcopy(self.week)
