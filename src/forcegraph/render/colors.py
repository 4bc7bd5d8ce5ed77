"""Color helpers on top of matplotlib.colors."""
from __future__ import annotations

import numpy as np
from matplotlib.colors import to_hex, to_rgba

from forcegraph.render.surface import Color

SHADE_FACTOR: float = 0.7


def brighter(color: Color, factor: float = SHADE_FACTOR) -> str:
    """Lighten ``color`` by dividing its RGB channels by ``factor``."""
    r, g, b, a = to_rgba(color)
    rgb = np.clip(np.array([r, g, b]) / factor, 0.0, 1.0)
    return to_hex((*rgb, a), keep_alpha=a < 1.0)


def darker(color: Color, factor: float = SHADE_FACTOR) -> str:
    """Darken ``color`` by multiplying its RGB channels by ``factor``."""
    r, g, b, a = to_rgba(color)
    rgb = np.clip(np.array([r, g, b]) * factor, 0.0, 1.0)
    return to_hex((*rgb, a), keep_alpha=a < 1.0)
