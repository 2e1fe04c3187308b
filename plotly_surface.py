import math
import re

import plotly.graph_objects as go

FONT_RE = re.compile(r"(?P<size>\d+(?:\.\d+)?)px\s+(?P<family>.+)")


def parse_font(font: str):
    match = FONT_RE.match(font.strip())
    if not match:
        return {"family": font.strip() or "Arial", "size": 10}
    return {"family": match.group("family"), "size": float(match.group("size"))}


class PlotlySurface:
    """
    Canvas-style drawing surface that collects plotly shapes and annotations.

    Coordinates follow the canvas convention (origin top left, y grows downwards);
    the figure reverses its y axis so points land where a canvas would put them.
    """

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.shapes = []
        self.annotations = []
        self.fill_style = "#000"
        self.stroke_style = "#000"
        self.line_width = 1
        self.font = "10px sans-serif"
        self._transform = (0.0, 0.0, 0.0)  # tx, ty, angle
        self._stack = []
        self._path = []

    # -------------------------------
    # TRANSFORM STACK
    # -------------------------------
    def save(self):
        self._stack.append((self._transform, self.fill_style, self.stroke_style, self.line_width, self.font))

    def restore(self):
        if self._stack:
            self._transform, self.fill_style, self.stroke_style, self.line_width, self.font = self._stack.pop()

    def translate(self, dx, dy):
        tx, ty, angle = self._transform
        cos, sin = math.cos(angle), math.sin(angle)
        self._transform = (tx + dx * cos - dy * sin, ty + dx * sin + dy * cos, angle)

    def rotate(self, radians):
        tx, ty, angle = self._transform
        self._transform = (tx, ty, angle + radians)

    def _map(self, x, y):
        tx, ty, angle = self._transform
        cos, sin = math.cos(angle), math.sin(angle)
        return tx + x * cos - y * sin, ty + x * sin + y * cos

    # -------------------------------
    # STYLE
    # -------------------------------
    def set_fill_style(self, color):
        self.fill_style = color

    def set_stroke_style(self, color):
        self.stroke_style = color

    def set_line_width(self, width):
        self.line_width = width

    def set_font(self, font):
        self.font = font

    # -------------------------------
    # DRAWING
    # -------------------------------
    def clear_rect(self, x, y, w, h):
        def inside(px, py):
            return x <= px <= x + w and y <= py <= y + h

        self.shapes = [s for s in self.shapes if not (inside(s["x0"], s["y0"]) and inside(s["x1"], s["y1"]))]
        self.annotations = [a for a in self.annotations if not inside(a["x"], a["y"])]

    def begin_path(self):
        self._path = []

    def move_to(self, x, y):
        self._path.append([self._map(x, y)])

    def line_to(self, x, y):
        if not self._path:
            self._path.append([self._map(x, y)])
            return
        self._path[-1].append(self._map(x, y))

    def stroke(self):
        for sub_path in self._path:
            for (x0, y0), (x1, y1) in zip(sub_path, sub_path[1:]):
                self.shapes.append({
                    "type": "line",
                    "x0": x0, "y0": y0, "x1": x1, "y1": y1,
                    "line": {"color": self.stroke_style, "width": self.line_width},
                })

    def fill_text(self, text, x, y):
        px, py = self._map(x, y)
        self.annotations.append({
            "text": str(text),
            "x": px,
            "y": py,
            "xanchor": "left",
            "yanchor": "bottom",
            "showarrow": False,
            "textangle": math.degrees(self._transform[2]),
            "font": dict(parse_font(self.font), color=self.fill_style),
        })

    def figure(self) -> go.Figure:
        fig = go.Figure()
        fig.update_layout(
            width=self.width,
            height=self.height,
            shapes=self.shapes,
            annotations=self.annotations,
            xaxis=dict(range=[0, self.width], visible=False, showgrid=False),
            yaxis=dict(range=[self.height, 0], visible=False, showgrid=False),
            margin=dict(l=0, r=0, t=0, b=0),
            showlegend=False,
            template="plotly_white",
        )
        return fig
