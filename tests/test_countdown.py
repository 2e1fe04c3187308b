import datetime

import pytest

from countdown import CountdownScheduler, format_remaining, next_midnight, remaining
from habits import DAYS, HABITS


def dt(*args):
    return datetime.datetime(*args)


class CountingStore:
    def __init__(self):
        self.resets = 0

    def reset_all(self):
        self.resets += 1


def test_next_midnight_at_exact_midnight_is_the_following_one():
    assert next_midnight(dt(2026, 3, 1, 0, 0, 0)) == dt(2026, 3, 2)


def test_remaining_is_floored():
    assert remaining(dt(2026, 3, 1, 23, 59, 59, 500000)) == datetime.timedelta(0)
    assert remaining(dt(2026, 3, 1, 23, 59, 58, 999999)) == datetime.timedelta(seconds=1)


@pytest.mark.parametrize("seconds,text", [
    (0, "00:00:00"),
    (5, "00:00:05"),
    (3661, "01:01:01"),
    (86400, "24:00:00"),
])
def test_format_remaining(seconds, text):
    assert format_remaining(datetime.timedelta(seconds=seconds)) == text


def test_tick_just_before_midnight_shows_zero_without_reset():
    store = CountingStore()
    countdown = CountdownScheduler(store).tick(dt(2026, 3, 1, 23, 59, 59, 500000))
    assert countdown.text == "00:00:00"
    assert not countdown.reset
    assert store.resets == 0


def test_tick_exactly_at_midnight_resets_and_shows_full_day():
    store = CountingStore()
    countdown = CountdownScheduler(store).tick(dt(2026, 3, 2, 0, 0, 0))
    assert countdown.text == "24:00:00"
    assert countdown.reset
    assert store.resets == 1


def test_crossing_midnight_resets_exactly_once():
    store = CountingStore()
    scheduler = CountdownScheduler(store)
    now = dt(2026, 3, 1, 23, 59, 58)
    for _ in range(10):
        scheduler.tick(now)
        now += datetime.timedelta(milliseconds=400)
    assert store.resets == 1
    assert scheduler.last_reset == dt(2026, 3, 2)


def test_repeated_ticks_in_same_second_after_midnight_do_not_reset_again():
    store = CountingStore()
    scheduler = CountdownScheduler(store)
    scheduler.tick(dt(2026, 3, 2, 0, 0, 0))
    scheduler.tick(dt(2026, 3, 2, 0, 0, 0, 300000))
    scheduler.tick(dt(2026, 3, 2, 0, 0, 0, 900000))
    assert store.resets == 1


def test_lagging_driver_skipping_several_midnights_resets_once():
    store = CountingStore()
    scheduler = CountdownScheduler(store)
    scheduler.tick(dt(2026, 3, 1, 12, 0, 0))
    countdown = scheduler.tick(dt(2026, 3, 4, 8, 30, 0))
    assert countdown.reset
    assert countdown.text == "15:30:00"
    assert store.resets == 1
    assert not scheduler.tick(dt(2026, 3, 4, 8, 30, 1)).reset


def test_tick_resets_a_real_store(store):
    store.increment_habit(2, "read")
    countdown = CountdownScheduler(store).tick(dt(2026, 3, 2, 0, 0, 0))
    assert countdown.result.ok
    assert all(store.get_day_record(d)[h] == 0 for d in DAYS for h in HABITS)
