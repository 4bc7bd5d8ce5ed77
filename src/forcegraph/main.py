"""
Application Initialization
==========================
Builds a demo window around the GraphView and starts the Qt event loop.

The window only hosts the view: keyboard shortcuts drive the layout and the
viewport, the status bar echoes selections. Real hosts feed the view with
the output of their own dependency scanner through ``set_graph_data``.

Shortcuts:
    Space  start/stop the force layout
    C      center the graph
    R      reset zoom and pan
    + / -  zoom in / out
    L      scatter the nodes again
"""
from __future__ import annotations

import logging
import sys

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QStatusBar, QWidget

from forcegraph.application import VISIBLE_APP_NAME, create_app
from forcegraph.logging_config import setup_logging
from forcegraph.model.graph import EdgeType, GraphEdge, NodeRecord
from forcegraph.view.graph_view import GraphView

logger = logging.getLogger(__name__)


def demo_graph() -> tuple[list[NodeRecord], list[GraphEdge]]:
    """A small configuration-file dependency graph."""
    nodes = [
        NodeRecord("skill_base", "skill_base", priority=1),
        NodeRecord("item_templates", "item_templates", priority=1),
        NodeRecord("npc_templates", "npc_templates", priority=2),
        NodeRecord("quest_data", "quest_data", priority=2),
        NodeRecord("drop_lists", "drop_lists", priority=3),
        NodeRecord("spawn_points", "spawn_points", priority=3),
        NodeRecord("client_strings", "client_strings"),
        NodeRecord("client_items", "client_items"),
    ]
    edges = [
        GraphEdge("npc_templates", "skill_base"),
        GraphEdge("quest_data", "npc_templates"),
        GraphEdge("quest_data", "item_templates"),
        GraphEdge("drop_lists", "item_templates"),
        GraphEdge("drop_lists", "npc_templates"),
        GraphEdge("spawn_points", "npc_templates"),
        GraphEdge("client_items", "item_templates"),
        GraphEdge("client_strings", "client_items", EdgeType.REFERENCED),
    ]
    return nodes, edges


class MainWindow(QMainWindow):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1000, 700)

        self.view = GraphView(parent=self)
        self.setCentralWidget(self.view)
        self.setStatusBar(QStatusBar(self))

        self._add_action("Toggle layout", "Space", self.view.toggle_layout)
        self._add_action("Center", "C", self.view.center_view)
        self._add_action("Reset view", "R", self.view.reset_view)
        self._add_action("Zoom in", "+", self.view.zoom_in)
        self._add_action("Zoom out", "-", self.view.zoom_out)
        self._add_action("Scatter nodes", "L", self.view.scene.randomize_layout)

        self.view.node_selected.connect(lambda node_id: self.statusBar().showMessage(f"Selected: {node_id}"))
        self.view.node_double_clicked.connect(lambda node_id: self.statusBar().showMessage(f"Opened: {node_id}"))

    def _add_action(self, text: str, shortcut: str, slot) -> QAction:
        action = QAction(text, self)
        action.setShortcut(QKeySequence(shortcut))
        action.triggered.connect(slot)
        self.addAction(action)
        return action


def main() -> int:
    setup_logging()
    app = create_app()

    window = MainWindow()
    nodes, edges = demo_graph()
    window.view.set_graph_data(nodes, edges)
    window.view.start_layout()
    window.show()

    logger.info("Viewer started.")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
