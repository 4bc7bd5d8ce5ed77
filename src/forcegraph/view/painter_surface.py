"""
QPainter backend of the RenderSurface contract.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Sequence

from matplotlib.colors import to_rgba
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainter, QPen, QPolygonF

from forcegraph.render.surface import Color, FontSpec, RenderSurface


@lru_cache(maxsize=256)
def _qcolor(color: Color) -> QColor:
    r, g, b, a = to_rgba(color)
    return QColor.fromRgbF(r, g, b, a)


@lru_cache(maxsize=64)
def _qfont(font: FontSpec) -> QFont:
    qfont = QFont(font.family)
    qfont.setPixelSize(max(1, round(font.size)))
    qfont.setBold(font.bold)
    return qfont


class QPainterSurface(RenderSurface):
    """
    Draws onto an active QPainter.

    The painter must stay active for as long as the surface is used; the
    caller owns begin()/end().
    """

    def __init__(self, painter: QPainter, width: float, height: float) -> None:
        self.painter = painter
        self._width = float(width)
        self._height = float(height)
        self._fill = _qcolor("black")
        self._stroke = _qcolor("black")

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def clear(self, color: Color) -> None:
        self.painter.fillRect(QRectF(0.0, 0.0, self._width, self._height), _qcolor(color))

    def set_fill_color(self, color: Color) -> None:
        self._fill = _qcolor(color)

    def set_stroke_color(self, color: Color) -> None:
        self._stroke = _qcolor(color)

    def fill_circle(self, x: float, y: float, r: float) -> None:
        self.painter.setPen(Qt.PenStyle.NoPen)
        self.painter.setBrush(QBrush(self._fill))
        self.painter.drawEllipse(QPointF(x, y), r, r)

    def stroke_circle(self, x: float, y: float, r: float, width: float) -> None:
        self.painter.setPen(QPen(self._stroke, width))
        self.painter.setBrush(Qt.BrushStyle.NoBrush)
        self.painter.drawEllipse(QPointF(x, y), r, r)

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, width: float, color: Color) -> None:
        self.painter.setPen(QPen(_qcolor(color), width))
        self.painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))

    def fill_polygon(self, points: Sequence[tuple[float, float]], color: Color) -> None:
        self.painter.setPen(Qt.PenStyle.NoPen)
        self.painter.setBrush(QBrush(_qcolor(color)))
        self.painter.drawPolygon(QPolygonF([QPointF(x, y) for x, y in points]))

    def fill_text(self, text: str, x: float, y: float, font: FontSpec) -> None:
        qfont = _qfont(font)
        metrics = QFontMetricsF(qfont)
        self.painter.setFont(qfont)
        self.painter.setPen(self._fill)
        # center horizontally on x, vertically on the cap height around y
        baseline = y + (metrics.ascent() - metrics.descent()) / 2.0
        self.painter.drawText(QPointF(x - metrics.horizontalAdvance(text) / 2.0, baseline), text)

    def text_width(self, text: str, font: FontSpec) -> float:
        return QFontMetricsF(_qfont(font)).horizontalAdvance(text)
