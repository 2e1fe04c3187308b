class TrackerError(Exception):
    """Base class for every error raised by the streak tracker."""


class InvalidDay(TrackerError, ValueError):
    def __init__(self, day):
        super().__init__(f"Day must be an integer between 1 and 7, got {day!r}")
        self.day = day


class InvalidHabit(TrackerError, ValueError):
    def __init__(self, habit_id):
        super().__init__(f"Unknown habit {habit_id!r}")
        self.habit_id = habit_id


class PersistenceReadFailure(TrackerError):
    """The persisted slot exists but could not be read or decoded."""


class PersistenceWriteFailure(TrackerError):
    """The persisted slot could not be written. In-memory state is unaffected."""
