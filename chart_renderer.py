"""
Streak chart as a list of 2D drawing commands.

render() is pure: it maps one DayRecord to commands and never touches storage.
replay() sends the commands to anything with a canvas-like API (see plotly_surface).
"""
import math
from collections import namedtuple
from dataclasses import dataclass

from habits import HABITS, color_for_streak

DEFAULT_MARGIN = 40
MAX_VISIBLE_STREAK = 10
MAX_LINE_WIDTH = 5

TEXT_COLOR = "#333"
FONT = "14px Arial"

Command = namedtuple("Command", ["op", "args"])


@dataclass(frozen=True)
class Bar:
    habit: str
    x: float
    y_bottom: float
    y_top: float
    color: str
    width: int


def tick_spacing(height, margin):
    return (height - 2 * margin) / 9


def tick_y(value, height, margin):
    """Vertical position of tick label `value` (1 at the bottom, 10 at the top)."""
    return height - margin - (value - 1) * tick_spacing(height, margin)


def habit_x(index, width, margin):
    return margin + index * ((width - 2 * margin) / 4)


def bars(day_record, width, height, margin=DEFAULT_MARGIN):
    out = []
    for i, habit in enumerate(HABITS):
        streak = day_record.get(habit, 0)
        if streak <= 0:
            continue
        out.append(Bar(
            habit=habit,
            x=habit_x(i, width, margin),
            y_bottom=height - margin,
            y_top=tick_y(min(streak, MAX_VISIBLE_STREAK), height, margin),
            color=color_for_streak(streak).hex,
            width=min(streak, MAX_LINE_WIDTH),
        ))
    return out


def render(day_record, width, height, margin=DEFAULT_MARGIN):
    cmds = [Command("clear_rect", (0, 0, width, height))]

    # y axis title, rotated
    cmds += [
        Command("save", ()),
        Command("translate", (10, height / 2)),
        Command("rotate", (-math.pi / 2,)),
        Command("set_fill_style", (TEXT_COLOR,)),
        Command("set_font", (FONT,)),
        Command("fill_text", ("Streak", 0, 0)),
        Command("restore", ()),
    ]

    # labels outside the saved block keep the surface default font
    cmds.append(Command("set_fill_style", (TEXT_COLOR,)))
    for value in range(1, MAX_VISIBLE_STREAK + 1):
        cmds.append(Command("fill_text", (str(value), 30, tick_y(value, height, margin) + 5)))

    cmds.append(Command("fill_text", ("Habits", width / 2 - 20, height - 10)))
    for i, _ in enumerate(HABITS):
        cmds.append(Command("fill_text", (str(i + 1), habit_x(i, width, margin), height - 25)))

    for bar in bars(day_record, width, height, margin):
        cmds += [
            Command("begin_path", ()),
            Command("move_to", (bar.x, bar.y_bottom)),
            Command("line_to", (bar.x, bar.y_top)),
            Command("set_stroke_style", (bar.color,)),
            Command("set_line_width", (bar.width,)),
            Command("stroke", ()),
        ]
    return cmds


def replay(commands, surface):
    for cmd in commands:
        getattr(surface, cmd.op)(*cmd.args)
    return surface
