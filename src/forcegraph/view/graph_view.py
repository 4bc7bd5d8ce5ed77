from __future__ import annotations

import logging
from typing import Iterable, Optional

from PySide6.QtCore import QTimer, Qt, Signal, Slot
from PySide6.QtGui import QMouseEvent, QPainter, QPaintEvent, QResizeEvent, QWheelEvent
from PySide6.QtWidgets import QWidget

from forcegraph.config import TICK_INTERVAL_MS
from forcegraph.model.graph import GraphEdge, NodeRecord
from forcegraph.scene import GraphScene
from forcegraph.view.painter_surface import QPainterSurface

logger = logging.getLogger(__name__)


class GraphView(QWidget):
    """
    Qt host of a GraphScene:
      - paints the scene with QPainter,
      - drives the layout tick from a QTimer while the layout runs,
      - forwards primary-button mouse and wheel input to the interaction controller.
    """
    node_selected = Signal(str)
    node_double_clicked = Signal(str)

    def __init__(self, scene: GraphScene | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.scene = scene if scene is not None else GraphScene(parent=self)

        self.setMouseTracking(True)
        self.setMinimumSize(200, 150)

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(TICK_INTERVAL_MS)
        self._tick_timer.timeout.connect(self.scene.tick)

        self.scene.redraw_requested.connect(self.update)
        self.scene.running_changed.connect(self._on_running_changed)
        self.scene.node_selected.connect(self.node_selected)
        self.scene.node_double_clicked.connect(self.node_double_clicked)

        self.scene.resize(max(1, self.width()), max(1, self.height()))

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_graph_data(self, nodes: Iterable[NodeRecord], edges: Iterable[GraphEdge]) -> None:
        self.scene.set_graph_data(nodes, edges)

    @Slot()
    def start_layout(self) -> None:
        self.scene.start_layout()

    @Slot()
    def stop_layout(self) -> None:
        self.scene.stop_layout()

    @Slot()
    def toggle_layout(self) -> None:
        self.scene.toggle_layout()

    @Slot()
    def center_view(self) -> None:
        self.scene.center_view()

    @Slot()
    def reset_view(self) -> None:
        self.scene.reset_view()

    @Slot()
    def zoom_in(self) -> None:
        self.scene.zoom_in()

    @Slot()
    def zoom_out(self) -> None:
        self.scene.zoom_out()

    def highlight_node(self, node_id: Optional[str]) -> None:
        self.scene.highlight_node(node_id)

    def is_layout_running(self) -> bool:
        return self._tick_timer.isActive()

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
            self.scene.draw(QPainterSurface(painter, self.width(), self.height()))
        finally:
            painter.end()

    def resizeEvent(self, event: QResizeEvent) -> None:
        size = event.size()
        self.scene.resize(max(1, size.width()), max(1, size.height()))
        super().resizeEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self.scene.controller.pointer_down(pos.x(), pos.y(), click_count=1)
        event.accept()

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        # Qt sends this instead of the second press of a double click
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseDoubleClickEvent(event)
            return
        pos = event.position()
        self.scene.controller.pointer_down(pos.x(), pos.y(), click_count=2)
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        self.scene.controller.pointer_move(pos.x(), pos.y())
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        self.scene.controller.pointer_up(pos.x(), pos.y())
        event.accept()

    def wheelEvent(self, event: QWheelEvent) -> None:
        delta = event.angleDelta().y()
        if delta == 0:
            # horizontal-only scroll
            event.ignore()
            return
        pos = event.position()
        self.scene.controller.wheel(pos.x(), pos.y(), delta)
        event.accept()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    @Slot(bool)
    def _on_running_changed(self, running: bool) -> None:
        if running:
            self._tick_timer.start()
        else:
            self._tick_timer.stop()
