from __future__ import annotations

import math
from typing import Iterable, Union, TYPE_CHECKING

import numpy as np

from forcegraph.config import (
    DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, MAX_SCALE, MIN_SCALE, STEP_ZOOM
)

if TYPE_CHECKING:
    import numpy.typing as npt

Points = Union[Iterable[tuple[float, float]], "npt.NDArray[np.float64]"]


class ViewportTransform:
    """
    Pan/zoom mapping between world and screen coordinates.

    ``screen = world * scale + offset``. The scale is clamped into
    [min_scale, max_scale] so the mapping is always invertible.
    """

    def __init__(
        self,
        width: float = DEFAULT_CANVAS_WIDTH,
        height: float = DEFAULT_CANVAS_HEIGHT,
        min_scale: float = MIN_SCALE,
        max_scale: float = MAX_SCALE,
    ) -> None:
        if not 0.0 < min_scale <= max_scale:
            raise ValueError(f"Invalid scale range [{min_scale}, {max_scale}].")
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.width = 1.0
        self.height = 1.0
        self.resize(width, height)

        self.offset_x: float = 0.0
        self.offset_y: float = 0.0
        self.scale: float = 1.0

    @property
    def offset(self) -> tuple[float, float]:
        return self.offset_x, self.offset_y

    def resize(self, width: float, height: float) -> None:
        """Set the canvas size in screen pixels."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}.")
        self.width = float(width)
        self.height = float(height)

    # ---- mapping ----

    def world_to_screen(self, x: float, y: float) -> tuple[float, float]:
        return x * self.scale + self.offset_x, y * self.scale + self.offset_y

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        return (sx - self.offset_x) / self.scale, (sy - self.offset_y) / self.scale

    def visible_world_bounds(self) -> tuple[float, float, float, float]:
        """World rectangle (x_min, x_max, y_min, y_max) covered by the canvas."""
        x0, y0 = self.screen_to_world(0.0, 0.0)
        x1, y1 = self.screen_to_world(self.width, self.height)
        return x0, x1, y0, y1

    # ---- zoom ----

    def zoom(self, factor: float) -> None:
        """Multiply the scale by ``factor``, clamped to the allowed range."""
        new_scale = self.scale * factor
        if math.isnan(new_scale):
            return
        self.scale = max(self.min_scale, min(self.max_scale, new_scale))

    def zoom_at_point(self, sx: float, sy: float, factor: float) -> None:
        """Zoom while keeping the world point under (sx, sy) fixed on screen."""
        wx, wy = self.screen_to_world(sx, sy)
        self.zoom(factor)
        self.offset_x = sx - wx * self.scale
        self.offset_y = sy - wy * self.scale

    def zoom_in(self) -> None:
        self.zoom_at_point(self.width / 2.0, self.height / 2.0, STEP_ZOOM)

    def zoom_out(self) -> None:
        self.zoom_at_point(self.width / 2.0, self.height / 2.0, 1.0 / STEP_ZOOM)

    # ---- pan ----

    def pan(self, dx: float, dy: float) -> None:
        self.offset_x += dx
        self.offset_y += dy

    def set_offset(self, x: float, y: float) -> None:
        self.offset_x = x
        self.offset_y = y

    def reset(self) -> None:
        self.scale = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0

    def center_on(self, points: Points) -> None:
        """
        Pan so the center of the bounding box of ``points`` sits in the middle
        of the canvas. The scale is kept; an empty point set is a no-op.
        """
        pts = np.asarray(list(points) if not isinstance(points, np.ndarray) else points, dtype=np.float64)
        if pts.size == 0:
            return
        pts = pts.reshape(-1, 2)
        x_min, y_min = pts.min(axis=0)
        x_max, y_max = pts.max(axis=0)
        cx = (x_min + x_max) / 2.0
        cy = (y_min + y_max) / 2.0
        self.offset_x = self.width / 2.0 - float(cx) * self.scale
        self.offset_y = self.height / 2.0 - float(cy) * self.scale
