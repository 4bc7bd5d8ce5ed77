"""
Configuration & Constants
=========================
This module serves as the central registry for the tunable constants of the
graph viewer.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (repulsion strength, node radius,
   zoom limits, colors) scattered throughout the layout, interaction and
   rendering code.
2. Tuning: The physics and the drawing style are plain frozen dataclasses, so
   a host can build its own variant with `dataclasses.replace(...)`.

Exports:
    LayoutParameters: Physics constants of the force-directed layout.
    RenderStyle: Colors and geometry used by the renderer.
    MIN_SCALE, MAX_SCALE: Zoom clamp of the viewport.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Viewport
MIN_SCALE: float = 0.1
MAX_SCALE: float = 5.0
WHEEL_ZOOM_IN: float = 1.1
WHEEL_ZOOM_OUT: float = 0.9
STEP_ZOOM: float = 1.2  # zoom in/out actions of the host

# Interaction
CLICK_SLOP: float = 4.0  # px the pointer may travel and still count as a click

# Host
TICK_INTERVAL_MS: int = 16
DEFAULT_CANVAS_WIDTH: int = 600
DEFAULT_CANVAS_HEIGHT: int = 400

# Above this many nodes the O(n^2) repulsion pass becomes noticeable
LARGE_GRAPH_WARNING: int = 500


@dataclass(frozen=True)
class LayoutParameters:
    """
    Constants of the force simulation.

    Attributes:
        repulsion_strength: Numerator of the inverse-square repulsion.
        attraction_strength: Spring constant of the zero-rest-length edge springs.
        damping: Velocity decay per tick, must lie in (0, 1).
        min_distance: Lower clamp of the pair distance used for repulsion.
        node_radius: Node radius in world units (hit testing and drawing).
        center_strength: Pull toward the layout center, 0 disables it.
        max_speed: Optional cap of the per-tick node speed.
    """
    repulsion_strength: float = 5000.0
    attraction_strength: float = 0.01
    damping: float = 0.9
    min_distance: float = 50.0
    node_radius: float = 25.0
    center_strength: float = 0.0
    max_speed: Optional[float] = None

    def __post_init__(self) -> None:
        if not 0.0 < self.damping < 1.0:
            raise ValueError(f"Damping must lie in (0, 1), got {self.damping}.")
        if self.min_distance <= 0.0:
            raise ValueError(f"Minimum distance must be positive, got {self.min_distance}.")
        if self.node_radius <= 0.0:
            raise ValueError(f"Node radius must be positive, got {self.node_radius}.")
        if self.repulsion_strength < 0.0 or self.attraction_strength < 0.0 or self.center_strength < 0.0:
            raise ValueError("Force strengths must be non-negative.")
        if self.max_speed is not None and self.max_speed <= 0.0:
            raise ValueError(f"Maximum speed must be positive, got {self.max_speed}.")


@dataclass(frozen=True)
class RenderStyle:
    """Colors and sizes of the rendered graph."""
    background_color: str = "#f8f9fa"
    grid_color: str = "#e8e8e8"
    grid_size: float = 50.0
    show_grid: bool = True

    edge_width: float = 1.5
    arrow_size: float = 8.0

    border_width: float = 2.0
    selection_color: str = "#2c3e50"
    selection_width: float = 3.0
    selection_gap: float = 3.0
    shadow_color: str = "#80808080"
    shadow_offset: float = 3.0

    label_color: str = "#ffffff"
    font_family: str = "Sans Serif"
    font_size: float = 10.0
    font_bold: bool = True
    label_padding: float = 4.0
    ellipsis: str = ".."

    def __post_init__(self) -> None:
        if self.grid_size <= 0.0:
            raise ValueError(f"Grid size must be positive, got {self.grid_size}.")
        if self.font_size <= 0.0:
            raise ValueError(f"Font size must be positive, got {self.font_size}.")
