import math

import pytest

from chart_renderer import Command, bars, habit_x, render, replay, tick_y
from habits import empty_day

WIDTH, HEIGHT, MARGIN = 500, 300, 40


def record(**streaks):
    day = empty_day()
    for key, value in streaks.items():
        day[key.replace("_", "-")] = value
    return day


def lines(commands):
    """Collect (x0, y0, x1, y1, color, width) for every stroked line."""
    out = []
    color = width = None
    start = end = None
    for cmd in commands:
        if cmd.op == "move_to":
            start = cmd.args
        elif cmd.op == "line_to":
            end = cmd.args
        elif cmd.op == "set_stroke_style":
            color = cmd.args[0]
        elif cmd.op == "set_line_width":
            width = cmd.args[0]
        elif cmd.op == "stroke":
            out.append((start[0], start[1], end[0], end[1], color, width))
    return out


def texts(commands):
    return [cmd.args for cmd in commands if cmd.op == "fill_text"]


def test_empty_day_draws_axes_but_no_lines():
    commands = render(empty_day(), WIDTH, HEIGHT, MARGIN)
    assert commands[0] == Command("clear_rect", (0, 0, WIDTH, HEIGHT))
    assert lines(commands) == []


def test_axis_labels_and_ticks():
    commands = render(empty_day(), WIDTH, HEIGHT, MARGIN)
    labels = texts(commands)

    assert ("Streak", 0, 0) in labels
    assert Command("translate", (10, HEIGHT / 2)) in commands
    assert Command("rotate", (-math.pi / 2,)) in commands
    assert ("Habits", WIDTH / 2 - 20, HEIGHT - 10) in labels

    ticks = [args for args in labels if args[1] == 30]
    assert [t[0] for t in ticks] == [str(i) for i in range(1, 11)]
    assert ticks[0][2] == pytest.approx(HEIGHT - MARGIN + 5)
    assert ticks[-1][2] == pytest.approx(MARGIN + 5)

    index_labels = [args for args in labels if args[2] == HEIGHT - 25]
    assert [label[0] for label in index_labels] == ["1", "2", "3", "4", "5"]
    assert [label[1] for label in index_labels] == [habit_x(i, WIDTH, MARGIN) for i in range(5)]


def test_tick_spacing_spans_the_plot_area():
    assert tick_y(1, HEIGHT, MARGIN) == HEIGHT - MARGIN
    assert tick_y(10, HEIGHT, MARGIN) == pytest.approx(MARGIN)
    assert habit_x(0, WIDTH, MARGIN) == MARGIN
    assert habit_x(4, WIDTH, MARGIN) == WIDTH - MARGIN


def test_streak_ten_reaches_the_top_margin():
    (line,) = lines(render(record(read=10), WIDTH, HEIGHT, MARGIN))
    assert line[3] == pytest.approx(MARGIN)
    assert line[1] == HEIGHT - MARGIN


def test_streak_above_ten_is_clamped():
    (line,) = lines(render(record(read=15), WIDTH, HEIGHT, MARGIN))
    assert line[3] == pytest.approx(MARGIN)
    assert line[5] == 5


@pytest.mark.parametrize("streak,color", [(2, "#f44336"), (3, "#ff9800"), (4, "#ff9800"), (7, "#4caf50")])
def test_line_color_follows_streak_band(streak, color):
    (line,) = lines(render(record(exercise=streak), WIDTH, HEIGHT, MARGIN))
    assert line[4] == color


@pytest.mark.parametrize("streak,width", [(1, 1), (4, 4), (5, 5), (9, 5)])
def test_line_width_saturates_at_five(streak, width):
    (line,) = lines(render(record(meditate=streak), WIDTH, HEIGHT, MARGIN))
    assert line[5] == width


def test_lines_sit_on_habit_positions_and_skip_zero():
    day = record(wake_up=1, drink_water=0, exercise=3, read=0, meditate=6)
    drawn = lines(render(day, WIDTH, HEIGHT, MARGIN))
    assert [line[0] for line in drawn] == [habit_x(0, WIDTH, MARGIN), habit_x(2, WIDTH, MARGIN), habit_x(4, WIDTH, MARGIN)]
    assert [bar.habit for bar in bars(day, WIDTH, HEIGHT, MARGIN)] == ["wake-up", "exercise", "meditate"]


def test_streak_one_is_a_zero_length_line_at_the_baseline():
    (line,) = lines(render(record(read=1), WIDTH, HEIGHT, MARGIN))
    assert line[1] == line[3] == HEIGHT - MARGIN


def test_render_does_not_mutate_input():
    day = record(read=12)
    render(day, WIDTH, HEIGHT, MARGIN)
    assert day["read"] == 12


def test_replay_calls_surface_methods_in_order():
    calls = []

    class Recorder:
        def __getattr__(self, name):
            return lambda *args: calls.append((name, args))

    commands = render(record(read=4), WIDTH, HEIGHT, MARGIN)
    replay(commands, Recorder())
    assert calls == [(cmd.op, cmd.args) for cmd in commands]


def test_font_is_only_set_for_the_rotated_title():
    commands = render(empty_day(), WIDTH, HEIGHT, MARGIN)
    ops = [cmd.op for cmd in commands]
    font_at = [i for i, op in enumerate(ops) if op == "set_font"]
    assert len(font_at) == 1
    assert ops.index("save") < font_at[0] < ops.index("restore")
