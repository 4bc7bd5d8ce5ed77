"""
Renderer
========
Stateless draw pass: (GraphModel, ViewportTransform, selection/hover) ->
draw calls on a RenderSurface. Nothing in the model or the viewport is
mutated.

Draw order: background, grid, edges, nodes (so nodes cover edge ends).
"""
from __future__ import annotations

import math
from typing import Optional, TYPE_CHECKING

import numpy as np

from forcegraph.config import LayoutParameters, RenderStyle
from forcegraph.render.colors import brighter, darker
from forcegraph.render.surface import FontSpec

if TYPE_CHECKING:
    from forcegraph.model.graph import GraphEdge, GraphModel, GraphNode
    from forcegraph.render.surface import RenderSurface
    from forcegraph.view.viewport import ViewportTransform

ARROW_HALF_ANGLE: float = math.pi / 6


class Renderer:
    """
    Draws a graph onto a RenderSurface.

    Args:
        parameters: Layout constants, only ``node_radius`` is used.
        style: Colors and sizes.
    """

    def __init__(self, parameters: Optional[LayoutParameters] = None, style: Optional[RenderStyle] = None) -> None:
        self.parameters = parameters if parameters is not None else LayoutParameters()
        self.style = style if style is not None else RenderStyle()

    def draw(
        self,
        surface: RenderSurface,
        model: GraphModel,
        viewport: ViewportTransform,
        selected_node_id: Optional[str] = None,
        hovered_node_id: Optional[str] = None,
    ) -> None:
        surface.clear(self.style.background_color)

        if self.style.show_grid:
            self.draw_grid(surface, viewport)

        for edge in model.edges():
            self._draw_edge(surface, model, viewport, edge)

        for node in model.nodes():
            self._draw_node(
                surface,
                viewport,
                node,
                selected=node.id == selected_node_id,
                hovered=node.id == hovered_node_id,
            )

    def draw_grid(self, surface: RenderSurface, viewport: ViewportTransform) -> None:
        """Screen-space grid whose origin follows the pan offset."""
        period = self.style.grid_size * viewport.scale
        start_x = viewport.offset_x % period
        start_y = viewport.offset_y % period
        width, height = surface.width, surface.height

        for x in np.arange(start_x, width, period):
            surface.stroke_line(float(x), 0.0, float(x), height, 1.0, self.style.grid_color)
        for y in np.arange(start_y, height, period):
            surface.stroke_line(0.0, float(y), width, float(y), 1.0, self.style.grid_color)

    def fit_label(self, surface: RenderSurface, text: str, font: FontSpec, max_width: float) -> str:
        """
        Truncate ``text`` so it fits in ``max_width`` pixels.

        Characters are dropped from the end and the ellipsis marker appended
        until the measured width fits. Returns an empty string if not even
        the marker fits.
        """
        if surface.text_width(text, font) <= max_width:
            return text
        ellipsis = self.style.ellipsis
        for end in range(len(text) - 1, -1, -1):
            candidate = text[:end] + ellipsis
            if surface.text_width(candidate, font) <= max_width:
                return candidate
        return ""

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _draw_edge(self, surface: RenderSurface, model: GraphModel, viewport: ViewportTransform, edge: GraphEdge) -> None:
        source = model.get_node(edge.source_id)
        target = model.get_node(edge.target_id)
        if source is None or target is None:
            return

        x1, y1 = source.position
        x2, y2 = target.position
        dx = x2 - x1
        dy = y2 - y1
        length = math.hypot(dx, dy)
        radius = self.parameters.node_radius
        # touching or overlapping nodes leave no visible edge, degenerate ones included
        if length <= 2.0 * radius:
            return

        # start and end on the node boundaries instead of the centers
        ux = dx / length
        uy = dy / length
        sx1, sy1 = viewport.world_to_screen(x1 + ux * radius, y1 + uy * radius)
        sx2, sy2 = viewport.world_to_screen(x2 - ux * radius, y2 - uy * radius)

        color = edge.type.color
        scale = viewport.scale
        surface.stroke_line(sx1, sy1, sx2, sy2, self.style.edge_width * scale, color)

        arrow = self.style.arrow_size * scale
        angle = math.atan2(dy, dx)
        tip = (sx2, sy2)
        left = (
            sx2 - arrow * math.cos(angle - ARROW_HALF_ANGLE),
            sy2 - arrow * math.sin(angle - ARROW_HALF_ANGLE),
        )
        right = (
            sx2 - arrow * math.cos(angle + ARROW_HALF_ANGLE),
            sy2 - arrow * math.sin(angle + ARROW_HALF_ANGLE),
        )
        surface.fill_polygon([tip, left, right], color)

    def _draw_node(
        self,
        surface: RenderSurface,
        viewport: ViewportTransform,
        node: GraphNode,
        selected: bool,
        hovered: bool,
    ) -> None:
        style = self.style
        scale = viewport.scale
        sx, sy = viewport.world_to_screen(node.x, node.y)
        r = self.parameters.node_radius * scale
        base = node.category.color

        if selected:
            surface.set_stroke_color(style.selection_color)
            surface.stroke_circle(sx, sy, r + style.selection_gap * scale, style.selection_width * scale)

        if hovered:
            offset = style.shadow_offset * scale
            surface.set_fill_color(style.shadow_color)
            surface.fill_circle(sx + offset, sy + offset, r)
            surface.set_fill_color(brighter(base))
        else:
            surface.set_fill_color(base)
        surface.fill_circle(sx, sy, r)

        surface.set_stroke_color(darker(base))
        surface.stroke_circle(sx, sy, r, style.border_width * scale)

        font = FontSpec(style.font_family, style.font_size * scale, style.font_bold)
        max_width = 2.0 * (r - style.label_padding * scale)
        label = self.fit_label(surface, node.label, font, max_width)
        if label:
            surface.set_fill_color(style.label_color)
            surface.fill_text(label, sx, sy, font)
