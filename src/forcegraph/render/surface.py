"""
Rendering Surface Contract
==========================
The renderer only talks to this abstract surface, so any backend (QPainter,
SVG, a software rasterizer, a call recorder) can display the graph.

Colors are any color specification matplotlib understands ("#3498db",
"white", "#80808080", RGB(A) tuples in 0..1).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence, Union

Color = Union[str, tuple[float, float, float], tuple[float, float, float, float]]


@dataclass(frozen=True)
class FontSpec:
    """Backend-neutral font description. Size is in screen pixels."""
    family: str = "Sans Serif"
    size: float = 10.0
    bold: bool = False


class RenderSurface(ABC):
    """2D drawing target in screen coordinates."""

    @property
    @abstractmethod
    def width(self) -> float:
        ...

    @property
    @abstractmethod
    def height(self) -> float:
        ...

    @abstractmethod
    def clear(self, color: Color) -> None:
        """Fill the whole surface with ``color``."""

    @abstractmethod
    def set_fill_color(self, color: Color) -> None:
        ...

    @abstractmethod
    def set_stroke_color(self, color: Color) -> None:
        ...

    @abstractmethod
    def fill_circle(self, x: float, y: float, r: float) -> None:
        """Filled circle in the current fill color."""

    @abstractmethod
    def stroke_circle(self, x: float, y: float, r: float, width: float) -> None:
        """Circle outline in the current stroke color."""

    @abstractmethod
    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, width: float, color: Color) -> None:
        ...

    @abstractmethod
    def fill_polygon(self, points: Sequence[tuple[float, float]], color: Color) -> None:
        ...

    @abstractmethod
    def fill_text(self, text: str, x: float, y: float, font: FontSpec) -> None:
        """Text centered on (x, y) in the current fill color."""

    @abstractmethod
    def text_width(self, text: str, font: FontSpec) -> float:
        """Advance width of ``text`` in pixels."""
