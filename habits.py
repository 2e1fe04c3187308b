import enum

# -------------------------------
# FIXED HABIT SET & DAY SLOTS
# -------------------------------
# Order is shared by the buttons, the stored record and the chart.
HABITS = ("wake-up", "drink-water", "exercise", "read", "meditate")
DAYS = tuple(range(1, 8))

HABIT_TITLES = {
    "wake-up": "Wake up early",
    "drink-water": "Drink water",
    "exercise": "Exercise",
    "read": "Read",
    "meditate": "Meditate",
}


class StreakColor(enum.Enum):
    GREEN = "#4caf50"
    ORANGE = "#ff9800"
    RED = "#f44336"

    @property
    def hex(self) -> str:
        return self.value


def is_valid_day(day) -> bool:
    # bool is an int subclass, True must not pass as day 1
    return isinstance(day, int) and not isinstance(day, bool) and day in DAYS


def is_valid_habit(habit_id) -> bool:
    return habit_id in HABITS


def empty_day() -> dict:
    return {habit: 0 for habit in HABITS}


def color_for_streak(streak: int) -> StreakColor:
    """
    Colour band for a streak value, used by both the streak text and the chart line.
    6 and up is green, 3 to 5 is orange, anything lower is red.
    """
    if streak >= 6:
        return StreakColor.GREEN
    if streak >= 3:
        return StreakColor.ORANGE
    return StreakColor.RED


def streak_label(streak: int) -> str:
    return f"Streak: {streak}"


def button_glyph(streak: int):
    """
    Cosmetic button state. Cycles with the streak modulo 3 and is never stored.
    Returns (glyph, color).
    """
    click_count = streak % 3
    glyph = "✓" if click_count in (1, 2) else "☐"
    color = StreakColor.GREEN.hex if click_count == 2 else "#000"
    return glyph, color
