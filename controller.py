import datetime
import logging
from dataclasses import dataclass

import chart_renderer
from countdown import CountdownScheduler
from habits import HABITS, HABIT_TITLES, button_glyph, color_for_streak, streak_label
from week_store import MutationResult

logger = logging.getLogger(__name__)

TICK_INTERVAL = datetime.timedelta(seconds=1)


# =====================================================
# CLOCK & SCHEDULER
# =====================================================
class SystemClock:
    def now(self) -> datetime.datetime:
        return datetime.datetime.now()


class FixedClock:
    def __init__(self, now: datetime.datetime):
        self.current = now

    def now(self) -> datetime.datetime:
        return self.current

    def advance(self, delta: datetime.timedelta):
        self.current += delta


class Job:
    def __init__(self, interval, fn, next_run):
        self.interval = interval
        self.fn = fn
        self.next_run = next_run
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class CooperativeScheduler:
    """
    Runs periodic jobs on the caller's thread whenever run_pending() is called.
    A job that fell behind runs once and is rescheduled from the current time.
    """

    def __init__(self, clock=None):
        self.clock = clock or SystemClock()
        self.jobs = []

    def every(self, interval: datetime.timedelta, fn) -> Job:
        job = Job(interval, fn, self.clock.now())
        self.jobs.append(job)
        return job

    def run_pending(self, now=None) -> int:
        now = now or self.clock.now()
        self.jobs = [job for job in self.jobs if not job.cancelled]
        ran = 0
        for job in list(self.jobs):
            if job.cancelled or now < job.next_run:
                continue
            job.fn()
            job.next_run = now + job.interval
            ran += 1
        return ran


# =====================================================
# TRACKER CONTROLLER
# =====================================================
@dataclass
class HabitDisplay:
    habit: str
    title: str
    streak: int
    text: str
    color: str
    glyph: str
    glyph_color: str


class HabitTracker:
    """
    Wires UI input callbacks to the WeekStore and redraws after every change.
    on_render receives the chart commands; on_warning receives persistence warnings.
    """

    def __init__(self, store, clock=None, width=500, height=300, margin=chart_renderer.DEFAULT_MARGIN,
                 on_render=None, on_warning=None):
        self.store = store
        self.clock = clock or SystemClock()
        self.countdown = CountdownScheduler(store)
        self.width = width
        self.height = height
        self.margin = margin
        self.on_render = on_render
        self.on_warning = on_warning
        self.countdown_text = ""
        self.job = None
        self.closed = False

    # -------------------------------
    # LIFECYCLE
    # -------------------------------
    def start(self, scheduler=None):
        self.store.load()
        if scheduler is not None:
            self.job = scheduler.every(TICK_INTERVAL, self.on_tick)
        self.render()
        self.on_tick()
        return self.job

    def close(self):
        if self.job is not None:
            self.job.cancel()
            self.job = None
        self.closed = True

    # -------------------------------
    # INPUT CALLBACKS
    # -------------------------------
    def on_habit_button(self, position) -> MutationResult:
        if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position < len(HABITS):
            return MutationResult(ok=False, persisted=False)
        result = self.store.increment_habit(self.store.current_day, HABITS[position])
        self._handle(result)
        return result

    def on_day_selected(self, day) -> MutationResult:
        result = self.store.set_current_day(day)
        if result:
            self.render()
        return result

    def on_tick(self):
        if self.closed:
            return None
        countdown = self.countdown.tick(self.clock.now())
        self.countdown_text = countdown.text
        if countdown.reset:
            self._handle(countdown.result)
        return countdown

    # -------------------------------
    # OUTPUTS
    # -------------------------------
    def habit_displays(self):
        record = self.store.current_record()
        for habit in HABITS:
            streak = record[habit]
            glyph, glyph_color = button_glyph(streak)
            yield HabitDisplay(
                habit=habit,
                title=HABIT_TITLES[habit],
                streak=streak,
                text=streak_label(streak),
                color=color_for_streak(streak).hex,
                glyph=glyph,
                glyph_color=glyph_color,
            )

    def chart_commands(self):
        return chart_renderer.render(self.store.current_record(), self.width, self.height, self.margin)

    def render(self):
        commands = self.chart_commands()
        if self.on_render is not None:
            self.on_render(commands)
        return commands

    def _handle(self, result):
        if result is None:
            return
        if result.ok:
            self.render()
        if result.warning:
            logger.warning(result.warning)
            if self.on_warning is not None:
                self.on_warning(result.warning)
