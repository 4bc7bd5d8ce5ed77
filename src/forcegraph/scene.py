"""
Graph Scene
===========
Wires the model, layout engine, viewport, interaction controller and renderer
together and exposes the host-driven tick.

Why is this file needed?
------------------------
1. Ownership: One object owns the whole viewer state, so hosts (a Qt widget,
   a test, an offscreen exporter) only hold a GraphScene.
2. Cadence: The host calls ``tick()`` at its own frame rate. A tick runs at
   most one layout step (only while running) and then asks for a redraw. No
   frame rate is assumed and skipping ticks is always safe.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from PySide6.QtCore import QObject, Signal

from forcegraph.config import LayoutParameters, RenderStyle
from forcegraph.interaction.controller import InteractionController
from forcegraph.layout.force import ForceLayoutEngine
from forcegraph.model.graph import GraphEdge, GraphModel, GraphNode, NodeRecord
from forcegraph.render.renderer import Renderer
from forcegraph.render.surface import RenderSurface
from forcegraph.view.viewport import ViewportTransform

logger = logging.getLogger(__name__)


class GraphScene(QObject):
    """Central state of one graph view with signals for host sync."""
    redraw_requested = Signal()
    running_changed = Signal(bool)
    node_selected = Signal(str)
    node_double_clicked = Signal(str)

    def __init__(
        self,
        parameters: Optional[LayoutParameters] = None,
        style: Optional[RenderStyle] = None,
        seed: Optional[int] = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.parameters = parameters if parameters is not None else LayoutParameters()

        self.model = GraphModel(seed=seed)
        self.viewport = ViewportTransform()
        self.layout = ForceLayoutEngine(self.model, self.parameters)
        self.renderer = Renderer(self.parameters, style)
        self.controller = InteractionController(
            self.model, self.viewport, self.parameters.node_radius, parent=self
        )
        self._running = False
        self._update_layout_center()

        self.controller.redraw_requested.connect(self.redraw_requested)
        self.controller.node_selected.connect(self.node_selected)
        self.controller.node_double_clicked.connect(self.node_double_clicked)

    # ------------------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    def tick(self) -> None:
        """One host frame: a layout step while running, then a redraw request."""
        if self._running:
            self.layout.step()
        self.redraw_requested.emit()

    def draw(self, surface: RenderSurface) -> None:
        self.renderer.draw(
            surface,
            self.model,
            self.viewport,
            self.controller.selected_node_id,
            self.controller.hovered_node_id,
        )

    def start_layout(self) -> None:
        if self._running:
            return
        self._running = True
        logger.info("Force layout started.")
        self.running_changed.emit(True)

    def stop_layout(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info("Force layout stopped.")
        self.running_changed.emit(False)

    def toggle_layout(self) -> bool:
        if self._running:
            self.stop_layout()
        else:
            self.start_layout()
        return self._running

    # ------------------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------------------

    def set_graph_data(self, nodes: Iterable[NodeRecord], edges: Iterable[GraphEdge]) -> None:
        """Replace the graph; nodes are scattered over the visible area."""
        self.controller.reset()
        self.model.set_data(nodes, edges, self.viewport.visible_world_bounds())
        self.redraw_requested.emit()

    def add_node(self, node: NodeRecord, x: Optional[float] = None, y: Optional[float] = None) -> GraphNode:
        """Add one node, by default in the middle of the visible area."""
        if x is None or y is None:
            cx, cy = self.viewport.screen_to_world(self.viewport.width / 2.0, self.viewport.height / 2.0)
            x = cx if x is None else x
            y = cy if y is None else y
        handle = self.model.add_node(node, x, y)
        self.redraw_requested.emit()
        return handle

    def add_edge(self, edge: GraphEdge) -> None:
        self.model.add_edge(edge)
        self.redraw_requested.emit()

    def clear(self) -> None:
        self.controller.reset()
        self.model.clear()
        self.redraw_requested.emit()

    def node_count(self) -> int:
        return self.model.node_count()

    def edge_count(self) -> int:
        return self.model.edge_count()

    def randomize_layout(self) -> None:
        self.model.randomize_positions(self.viewport.visible_world_bounds())
        self.redraw_requested.emit()

    def highlight_node(self, node_id: Optional[str]) -> None:
        self.controller.select(node_id)

    # ------------------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------------------

    def resize(self, width: float, height: float) -> None:
        self.viewport.resize(width, height)
        self._update_layout_center()
        self.redraw_requested.emit()

    def center_view(self) -> None:
        self.viewport.center_on(self.model.positions)
        self.redraw_requested.emit()

    def reset_view(self) -> None:
        self.viewport.reset()
        self.redraw_requested.emit()

    def zoom_in(self) -> None:
        self.viewport.zoom_in()
        self.redraw_requested.emit()

    def zoom_out(self) -> None:
        self.viewport.zoom_out()
        self.redraw_requested.emit()

    def _update_layout_center(self) -> None:
        # center force pulls toward the middle of the canvas at identity view
        self.layout.center = (self.viewport.width / 2.0, self.viewport.height / 2.0)
