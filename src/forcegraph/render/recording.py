"""
Headless surface that records draw calls instead of drawing.

Used by tests and for snapshotting what a frame would contain.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from forcegraph.render.surface import Color, FontSpec, RenderSurface


@dataclass(frozen=True)
class DrawCall:
    op: str
    args: tuple[Any, ...]
    fill: Any = None
    stroke: Any = None


class RecordingSurface(RenderSurface):
    """
    Records every call as a DrawCall.

    Text is measured with a fixed average glyph width of ``char_width``
    times the font size.
    """

    def __init__(self, width: float = 600.0, height: float = 400.0, char_width: float = 0.6) -> None:
        self._width = float(width)
        self._height = float(height)
        self.char_width = char_width
        self.calls: list[DrawCall] = []
        self._fill: Color = "black"
        self._stroke: Color = "black"

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def calls_of(self, op: str) -> list[DrawCall]:
        return [call for call in self.calls if call.op == op]

    def reset(self) -> None:
        self.calls.clear()

    # ---- contract ----

    def clear(self, color: Color) -> None:
        self.calls.append(DrawCall("clear", (color,)))

    def set_fill_color(self, color: Color) -> None:
        self._fill = color

    def set_stroke_color(self, color: Color) -> None:
        self._stroke = color

    def fill_circle(self, x: float, y: float, r: float) -> None:
        self.calls.append(DrawCall("fill_circle", (x, y, r), fill=self._fill))

    def stroke_circle(self, x: float, y: float, r: float, width: float) -> None:
        self.calls.append(DrawCall("stroke_circle", (x, y, r, width), stroke=self._stroke))

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, width: float, color: Color) -> None:
        self.calls.append(DrawCall("stroke_line", (x1, y1, x2, y2, width), stroke=color))

    def fill_polygon(self, points: Sequence[tuple[float, float]], color: Color) -> None:
        self.calls.append(DrawCall("fill_polygon", (tuple(points),), fill=color))

    def fill_text(self, text: str, x: float, y: float, font: FontSpec) -> None:
        self.calls.append(DrawCall("fill_text", (text, x, y, font), fill=self._fill))

    def text_width(self, text: str, font: FontSpec) -> float:
        return len(text) * font.size * self.char_width
